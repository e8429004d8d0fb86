from typing import Optional


def fuzzy_match(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Ordered-subsequence match, case-insensitive.

    Every character of ``needle`` has to appear in ``haystack`` in the same
    order, gaps allowed: "bgr" matches "AR Deluxe Burger". An empty needle
    always matches.
    """
    text = (haystack or "").lower()
    pattern = (needle or "").lower()
    if not pattern:
        return True
    
    j = 0
    for char in text:
        if char == pattern[j]:
            j += 1
            if j == len(pattern):
                return True
    return False
