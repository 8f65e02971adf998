# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _normalize_store_domain(val: str) -> str:
    v = (val or "").strip()
    #shopify podaje domene czasem z protokolem
    if v.lower().startswith("https://"):
        v = v[8:]
    elif v.lower().startswith("http://"):
        v = v[7:]
    return v.strip().strip("/")


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


SHOPIFY_STORE_DOMAIN = _normalize_store_domain(os.getenv("SHOPIFY_STORE_DOMAIN", ""))
SHOPIFY_STOREFRONT_ACCESS_TOKEN = os.getenv("SHOPIFY_STOREFRONT_ACCESS_TOKEN", "")
SHOPIFY_API_VERSION = os.getenv("SHOPIFY_API_VERSION", "2024-01")

# brak timeoutu domyslnie, zawieszone zapytanie zostaje zawieszone
GATEWAY_TIMEOUT_SECONDS = _optional_float("GATEWAY_TIMEOUT_SECONDS")
GATEWAY_MAX_ATTEMPTS = int(os.getenv("GATEWAY_MAX_ATTEMPTS", 1))

DATABASE_URL = os.getenv("DATABASE_URL", "")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CART_ID_KEY_PREFIX = os.getenv("CART_ID_KEY_PREFIX", "storefront:cart_id")

VISITOR_COOKIE_NAME = os.getenv("VISITOR_COOKIE_NAME", "storefront_visitor")
VISITOR_COOKIE_MAX_AGE = int(os.getenv("VISITOR_COOKIE_MAX_AGE", 365 * 24 * 60 * 60))
SESSION_CACHE_SIZE = int(os.getenv("SESSION_CACHE_SIZE", 1000))

SHOP_PAGE_SIZE = int(os.getenv("SHOP_PAGE_SIZE", 50))
PRODUCTS_PAGE_SIZE = int(os.getenv("PRODUCTS_PAGE_SIZE", 20))
COLLECTIONS_LIMIT = int(os.getenv("COLLECTIONS_LIMIT", 20))

STORE_NAME = os.getenv("STORE_NAME", "Lunelle")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
