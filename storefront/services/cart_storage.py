# storefront/services/cart_storage.py
from typing import Callable, Protocol

import redis

from storefront.domain.errors import CartStorageError
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_ID_KEY_PREFIX
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartIdStorage(Protocol):
    """
    Jedyny stan trwaly aplikacji - ID koszyka w zdalnym API.
    Blad odczytu/zapisu = CartStorageError.
    """

    def load(self) -> str | None: ...

    def save(self, cart_id: str) -> None: ...


class RedisCartIdStorage:
    """
    -jeden klucz na odwiedzajacego: storefront:cart_id:<visitor>
    -odczyt raz przy budowie sesji, zapis zaraz po utworzeniu koszyka
    -bez TTL, koszyk wygasa po stronie Shopify
    """

    def __init__(self, client: redis.Redis, key: str):
        self.redis = client
        self.key = key

    def load(self) -> str | None:
        try:
            value = self._get()
        except redis.RedisError as e:
            logger.error(f"Failed to load cart id from {self.key}: {e}")
            raise CartStorageError(f"Failed to load cart id: {e}") from e
        logger.info(f"Loaded cart id for {self.key}: {'present' if value else 'none'}")
        return value or None

    def save(self, cart_id: str) -> None:
        logger.info(f"Persist cart id under {self.key}")
        try:
            self._set(cart_id)
        except redis.RedisError as e:
            logger.error(f"Failed to persist cart id under {self.key}: {e}")
            raise CartStorageError(f"Failed to save cart id: {e}") from e

    @redis_retry()
    def _get(self):
        return self.redis.get(self.key)

    @redis_retry()
    def _set(self, cart_id: str):
        self.redis.set(name=self.key, value=cart_id)


def redis_storage_factory(url: str | None = None) -> Callable[[str], RedisCartIdStorage]:
    #jeden klient (pula polaczen) na cala aplikacje
    client = redis.Redis.from_url(url or REDIS_URL, decode_responses=True)

    def factory(visitor_id: str) -> RedisCartIdStorage:
        return RedisCartIdStorage(client, f"{CART_ID_KEY_PREFIX}:{visitor_id}")

    return factory
