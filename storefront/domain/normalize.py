# storefront/domain/normalize.py
"""
Zamiana odpowiedzi GraphQL (connection: edges/node/pageInfo, camelCase)
na plaskie rekordy aplikacji z domain/schemas.py.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from storefront.domain.schemas import (
    Cart,
    CartCost,
    CartLine,
    Collection,
    Image,
    Merchandise,
    Money,
    Product,
    ProductPage,
    ProductSummary,
    SelectedOption,
    Variant,
)

DEFAULT_CURRENCY = "USD"


def flatten_edges(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not connection:
        return []
    edges = connection.get("edges") or []
    return [edge["node"] for edge in edges if edge and edge.get("node") is not None]


def page_info(connection: Optional[Dict[str, Any]]) -> tuple[bool, Optional[str]]:
    info = (connection or {}).get("pageInfo") or {}
    return bool(info.get("hasNextPage")), info.get("endCursor") or None


def to_money(raw: Optional[Dict[str, Any]]) -> Money:
    raw = raw or {}
    return Money(
        amount=raw.get("amount") or "0",
        currency_code=raw.get("currencyCode") or DEFAULT_CURRENCY,
    )


def to_image(raw: Optional[Dict[str, Any]]) -> Optional[Image]:
    if not raw:
        return None
    return Image(
        id=raw.get("id"),
        url=raw.get("url"),
        alt_text=raw.get("altText"),
        width=raw.get("width"),
        height=raw.get("height"),
    )


def to_options(raw: Optional[List[Dict[str, Any]]]) -> List[SelectedOption]:
    return [SelectedOption(name=o.get("name"), value=o.get("value")) for o in raw or []]


def to_variant(raw: Dict[str, Any]) -> Variant:
    return Variant(
        id=raw.get("id"),
        title=raw.get("title"),
        price=to_money(raw.get("price")),
        available_for_sale=bool(raw.get("availableForSale")),
        selected_options=to_options(raw.get("selectedOptions")),
        image=to_image(raw.get("image")),
        sku=raw.get("sku") or None,
        quantity_available=raw.get("quantityAvailable"),
    )


def to_product(raw: Dict[str, Any]) -> Product:
    images = [to_image(node) for node in flatten_edges(raw.get("images"))]
    variants = [to_variant(node) for node in flatten_edges(raw.get("variants"))]

    # cena z pierwszego wariantu, potem priceRange, potem 0 / USD
    fallback = ((raw.get("priceRange") or {}).get("minVariantPrice")) or {}
    if variants:
        price = variants[0].price.amount
        currency = variants[0].price.currency_code
    else:
        price = Decimal(str(fallback.get("amount") or "0"))
        currency = fallback.get("currencyCode") or DEFAULT_CURRENCY

    return Product(
        id=raw.get("id"),
        title=raw.get("title"),
        description=raw.get("description") or "",
        description_html=raw.get("descriptionHtml") or "",
        handle=raw.get("handle"),
        images=[image for image in images if image is not None],
        variants=variants,
        price=price,
        currency_code=currency,
        available_for_sale=bool(raw.get("availableForSale")),
        product_type=raw.get("productType") or None,
        vendor=raw.get("vendor") or None,
        tags=raw.get("tags") or [],
    )


def to_product_page(connection: Optional[Dict[str, Any]]) -> ProductPage:
    has_next_page, end_cursor = page_info(connection)
    return ProductPage(
        products=[to_product(node) for node in flatten_edges(connection)],
        has_next_page=has_next_page,
        end_cursor=end_cursor,
    )


def to_collection(raw: Dict[str, Any]) -> Collection:
    return Collection(
        id=raw.get("id"),
        title=raw.get("title"),
        handle=raw.get("handle"),
        description=raw.get("description") or "",
        image=to_image(raw.get("image")),
    )


def to_cart_line(raw: Dict[str, Any]) -> CartLine:
    merchandise = raw.get("merchandise") or {}
    product = merchandise.get("product") or {}
    product_images = flatten_edges(product.get("images"))

    return CartLine(
        id=raw.get("id"),
        quantity=raw.get("quantity"),
        merchandise=Merchandise(
            id=merchandise.get("id"),
            title=merchandise.get("title"),
            price=to_money(merchandise.get("price")),
            product=ProductSummary(
                id=product.get("id"),
                title=product.get("title"),
                handle=product.get("handle"),
                image=to_image(product_images[0]) if product_images else None,
            ),
            selected_options=to_options(merchandise.get("selectedOptions")),
        ),
        total=to_money(((raw.get("cost") or {}).get("totalAmount"))),
    )


def to_cart(raw: Dict[str, Any]) -> Cart:
    cost = raw.get("cost") or {}
    return Cart(
        id=raw.get("id"),
        checkout_url=raw.get("checkoutUrl") or None,
        total_quantity=raw.get("totalQuantity") or 0,
        cost=CartCost(
            subtotal=to_money(cost.get("subtotalAmount")),
            total=to_money(cost.get("totalAmount")),
        ),
        lines=[to_cart_line(node) for node in flatten_edges(raw.get("lines"))],
    )


def user_error_messages(payload: Dict[str, Any]) -> List[str]:
    return [e.get("message") or "Unknown error" for e in payload.get("userErrors") or []]
