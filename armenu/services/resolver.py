import logging
from typing import Optional

from armenu.core.errors import MissingIdentifier, RestaurantInactive, RestaurantNotFound
from armenu.schemas.restaurant import Restaurant
from armenu.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


class RestaurantResolver:
    """Maps an inbound identifier to a single restaurant.

    Channels are tried in a fixed precedence: explicit id, then QR secret,
    then custom domain. Only the first supplied channel is looked at.
    Blank values count as absent; supplied values are matched exactly.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def lookup(
        self,
        restaurant_id: Optional[str] = None,
        qr_secret: Optional[str] = None,
        domain: Optional[str] = None,
    ) -> Restaurant:
        """Find the restaurant whatever its active flag is."""
        if _present(restaurant_id):
            by, value = "id", restaurant_id
        elif _present(qr_secret):
            by, value = "secret", qr_secret
        elif _present(domain):
            by, value = "domain", domain
        else:
            raise MissingIdentifier()

        restaurant = await self.store.find_restaurant(by, value)
        if restaurant is None:
            logger.info("No restaurant for %s lookup", by)
            raise RestaurantNotFound()
        return restaurant

    async def resolve(
        self,
        restaurant_id: Optional[str] = None,
        qr_secret: Optional[str] = None,
        domain: Optional[str] = None,
    ) -> Restaurant:
        """Find an active restaurant; an existing but disabled one is ``RestaurantInactive``."""
        restaurant = await self.lookup(restaurant_id, qr_secret, domain)
        if not restaurant.is_active:
            logger.info("Restaurant %s is inactive", restaurant.id)
            raise RestaurantInactive()
        return restaurant
