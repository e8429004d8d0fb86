import pytest

from armenu.services.fuzzy import fuzzy_match


@pytest.mark.parametrize(
    "haystack, needle",
    [
        ("AR Deluxe Burger", "ar"),
        ("AR Deluxe Burger", "Deluxe"),
        ("AR Deluxe Burger", "BURGER"),
        ("Interactive Caesar Salad", "caesar sal"),
        ("gluten", "gluten"),
    ],
)
def test_substring_always_matches(haystack, needle):
    assert fuzzy_match(haystack, needle)


def test_gaps_are_allowed():
    assert fuzzy_match("AR Deluxe Burger", "dlxbgr")
    assert fuzzy_match("b...a...r", "bar")


def test_order_is_preserved():
    assert not fuzzy_match("bar", "rab")
    assert not fuzzy_match("burger", "burgers")


def test_empty_needle_matches_anything():
    assert fuzzy_match("", "")
    assert fuzzy_match("anything", "")
    assert fuzzy_match(None, None)


def test_no_match_when_character_missing():
    assert not fuzzy_match("Caesar Salad", "x")
    assert not fuzzy_match("", "a")
    assert not fuzzy_match(None, "a")


def test_vegan_is_subsequence_of_vegetarian():
    assert fuzzy_match("vegetarian", "vegan")
    assert not fuzzy_match("vegan", "vegetarian")
