# storefront/services/storefront_api.py
from typing import Any, Callable, Dict, List, TypeVar

from pydantic import ValidationError

from storefront.domain import normalize
from storefront.domain.errors import GatewayError, StorefrontError
from storefront.domain.schemas import Cart, Collection, Product, ProductPage
from storefront.services import queries
from storefront.services.storefront_client import StorefrontClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _convert(operation: str, fn: Callable[..., T], *args) -> T:
    try:
        return fn(*args)
    except ValidationError as e:
        logger.error(f"Malformed {operation} payload: {e}")
        raise GatewayError(f"Malformed response from Shopify ({operation})") from e


class StorefrontApi:
    """
    Warstwa dostepu do danych: jedna metoda = jedna operacja zdalna = jeden request.
    Zwraca plaskie rekordy z domain/schemas.py.
    """

    def __init__(self, client: StorefrontClient | None = None):
        self.client = client or StorefrontClient()

    # =====================================================
    # QUERY
    # =====================================================
    def list_products(self, first: int = 20, after: str | None = None, query: str | None = None) -> ProductPage:
        data = self.client.execute(
            "getProducts",
            queries.PRODUCTS_QUERY,
            {"first": first, "after": after, "query": query or None},
        )

        connection = data.get("products")
        if not isinstance(connection, dict):
            raise GatewayError("Malformed response from Shopify (getProducts)")

        page = _convert("getProducts", normalize.to_product_page, connection)
        logger.info(f"Fetched {len(page.products)} products (has_next_page={page.has_next_page})")
        return page

    def get_product(self, handle: str) -> Product | None:
        data = self.client.execute("getProduct", queries.PRODUCT_QUERY, {"handle": handle})

        raw = data.get("product")
        if raw is None:
            return None

        return _convert("getProduct", normalize.to_product, raw)

    def list_collections(self, first: int = 10) -> List[Collection]:
        data = self.client.execute("getCollections", queries.COLLECTIONS_QUERY, {"first": first})

        nodes = normalize.flatten_edges(data.get("collections"))
        return [_convert("getCollections", normalize.to_collection, node) for node in nodes]

    def get_cart(self, cart_id: str) -> Cart | None:
        """
        Jedyny wyjatek od reguly "rzucaj": brak koszyka i blad pobrania to ten sam wynik (None),
        bo wywolujacy w obu przypadkach tworzy nowy koszyk.
        """
        try:
            data = self.client.execute("getCart", queries.CART_QUERY, {"id": cart_id})
            raw = data.get("cart")
            if raw is None:
                return None
            return _convert("getCart", normalize.to_cart, raw)
        except StorefrontError as e:
            logger.warning(f"Cart {cart_id} could not be fetched: {e}")
            return None

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_cart(self) -> Cart:
        data = self.client.execute("cartCreate", queries.CART_CREATE_MUTATION, {"input": {}})
        return self._mutation_cart("cartCreate", data)

    def add_cart_lines(self, cart_id: str, variant_id: str, quantity: int = 1) -> Cart:
        data = self.client.execute(
            "cartLinesAdd",
            queries.CART_LINES_ADD_MUTATION,
            {"cartId": cart_id, "lines": [{"merchandiseId": variant_id, "quantity": quantity}]},
        )
        return self._mutation_cart("cartLinesAdd", data)

    def update_cart_lines(self, cart_id: str, line_id: str, quantity: int) -> Cart:
        data = self.client.execute(
            "cartLinesUpdate",
            queries.CART_LINES_UPDATE_MUTATION,
            {"cartId": cart_id, "lines": [{"id": line_id, "quantity": quantity}]},
        )
        return self._mutation_cart("cartLinesUpdate", data)

    def _mutation_cart(self, operation: str, data: Dict[str, Any]) -> Cart:
        payload = data.get(operation)
        if not isinstance(payload, dict):
            raise GatewayError(f"Malformed response from Shopify ({operation})")

        # userErrors = porazka nawet jesli koszyk przyszedl
        messages = normalize.user_error_messages(payload)
        if messages:
            raise GatewayError(", ".join(messages))

        raw = payload.get("cart")
        if raw is None:
            raise GatewayError(f"Shopify returned no cart ({operation})")

        return _convert(operation, normalize.to_cart, raw)
