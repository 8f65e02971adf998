# storefront/views/catalog.py
"""
Widoki katalogu: karta produktu, galeria, szczegoly z wyborem wariantu,
sidebar filtrow i strona sklepu. Czyste funkcje: rekordy -> dict dla JSON.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlencode

from storefront.domain.filters import ProductFilters, SortOption, SORT_LABELS, sort_products
from storefront.domain.schemas import Image, Product, Variant
from storefront.views.formatting import breadcrumb, format_money

SOLD_OUT = "Sold Out"
NO_IMAGE = "No image available"
PRICE_RANGE_MIN = 0
PRICE_RANGE_MAX = 1000
PRICE_RANGE_STEP = 10
RELATED_LIMIT = 4


def product_url(handle: str) -> str:
    return f"/shop/{handle}"


def shop_url(filters: ProductFilters | None = None, sort: SortOption = SortOption.NEWEST) -> str:
    params = dict(filters.to_params()) if filters else {}
    if sort != SortOption.NEWEST:
        params["sort"] = sort.value
    return f"/shop?{urlencode(params)}" if params else "/shop"


def image_view(image: Image, alt: str) -> dict:
    return {
        "url": image.url,
        "alt": image.alt_text or alt,
        "width": image.width,
        "height": image.height,
    }


def product_sizes(product: Product) -> List[str]:
    sizes = {
        option.value
        for variant in product.variants
        for option in variant.selected_options
        if option.name.lower() == "size"
    }
    return sorted(sizes)


def product_card(product: Product) -> dict:
    first_image = product.images[0] if product.images else None
    sold_out = not product.available_for_sale

    return {
        "id": product.id,
        "handle": product.handle,
        "title": product.title,
        "href": product_url(product.handle),
        "image": image_view(first_image, product.title) if first_image else None,
        "image_placeholder": None if first_image else NO_IMAGE,
        "price": format_money(product.price, product.currency_code),
        "sold_out": sold_out,
        "badge": SOLD_OUT if sold_out else None,
        "sizes": product_sizes(product),
    }


def gallery(images: List[Image], title: str, selected_index: int = 0) -> dict:
    if not images:
        return {"selected_index": 0, "main": None, "placeholder": NO_IMAGE, "thumbnails": []}

    index = min(max(selected_index, 0), len(images) - 1)
    selected = images[index]

    thumbnails = []
    if len(images) > 1:
        thumbnails = [
            {
                "index": i,
                "url": image.url,
                "alt": image.alt_text or f"{title} thumbnail {i + 1}",
                "selected": i == index,
                "label": f"View image {i + 1} of {len(images)}",
            }
            for i, image in enumerate(images)
        ]

    return {
        "selected_index": index,
        "main": image_view(selected, f"{title} - Image {index + 1}"),
        "placeholder": None,
        "thumbnails": thumbnails,
    }


def variant_options(product: Product) -> "OrderedDict[str, List[str]]":
    """Nazwa opcji -> wartosci w kolejnosci pojawienia sie w wariantach."""
    options: "OrderedDict[str, List[str]]" = OrderedDict()
    for variant in product.variants:
        for option in variant.selected_options:
            values = options.setdefault(option.name, [])
            if option.value not in values:
                values.append(option.value)
    return options


def select_variant(product: Product, current: Optional[Variant], name: str, value: str) -> Optional[Variant]:
    """
    Wariant pasujacy do wszystkich obecnych opcji z podmieniona jedna (name=value).
    Gdy takiego nie ma, zostaje obecny.
    """
    if current is None:
        current = product.variants[0] if product.variants else None
    if current is None:
        return None

    wanted: Dict[str, str] = {o.name: o.value for o in current.selected_options}
    wanted[name] = value

    for variant in product.variants:
        if all(variant.option_value(n) == v for n, v in wanted.items()):
            return variant
    return current


def resolve_variant(
    product: Product,
    variant_id: Optional[str] = None,
    selections: Iterable[tuple[str, str]] = (),
) -> Optional[Variant]:
    current = product.variants[0] if product.variants else None
    if variant_id:
        current = next((v for v in product.variants if v.id == variant_id), current)
    for name, value in selections:
        current = select_variant(product, current, name, value)
    return current


def product_detail(
    product: Product,
    variant: Optional[Variant] = None,
    quantity: int = 1,
    image_index: int = 0,
    related: Optional[List[Product]] = None,
    store_name: str = "",
) -> dict:
    current = variant or (product.variants[0] if product.variants else None)
    quantity = max(1, quantity)

    if current is None:
        # brak wariantow - produkt niedostepny, nie blad
        price = format_money(product.price, product.currency_code)
        add_to_cart = {"enabled": False, "label": "Unavailable", "variant_id": None, "quantity": quantity}
        stock_note = "This item is currently unavailable."
        selected = {}
    else:
        price = format_money(current.price.amount, current.price.currency_code)
        add_to_cart = {
            "enabled": current.available_for_sale,
            "label": "Add to Cart" if current.available_for_sale else SOLD_OUT,
            "variant_id": current.id,
            "quantity": quantity,
        }
        stock_note = None if current.available_for_sale else "This item is currently out of stock."
        selected = {o.name: o.value for o in current.selected_options}

    options = [
        {"name": name, "values": values, "selected": selected.get(name)}
        for name, values in variant_options(product).items()
    ]

    related_cards = [product_card(p) for p in (related or []) if p.id != product.id][:RELATED_LIMIT]

    return {
        "title": f"{product.title} - {store_name}" if store_name else product.title,
        "breadcrumb": breadcrumb(("Home", "/"), ("Shop", "/shop"), (product.title, None)),
        "product": {
            "id": product.id,
            "handle": product.handle,
            "title": product.title,
            "price": price,
            "description": product.description_html or product.description,
            "available": current is not None,
        },
        "gallery": gallery(product.images, product.title, image_index),
        "options": options,
        "variant_id": current.id if current else None,
        "quantity": {"value": quantity, "can_decrease": quantity > 1},
        "add_to_cart": add_to_cart,
        "stock_note": stock_note,
        "related": {"title": "You may also like", "products": related_cards},
    }


def not_found_panel() -> dict:
    return {
        "title": "Product not found",
        "message": "The product you're looking for doesn't exist or has been removed.",
        "action": {"label": "Continue Shopping", "href": "/shop"},
    }


def error_panel(title: str, error: Exception, retry_href: str | None = None) -> dict:
    panel = {"title": title, "message": str(error)}
    if retry_href:
        panel["action"] = {"label": "Try again", "href": retry_href}
    return panel


def filter_sidebar(
    filters: ProductFilters,
    categories: List[str],
    categories_loading: bool = False,
    sort: SortOption = SortOption.NEWEST,
) -> dict:
    category_options = []
    for category in categories:
        active = filters.category == category
        # klik na aktywna kategorie ja wylacza
        toggled = ProductFilters(
            category=None if active else category,
            price_min=filters.price_min,
            price_max=filters.price_max,
        )
        category_options.append(
            {"label": category, "checked": active, "href": shop_url(toggled, sort)}
        )

    return {
        "categories": category_options,
        "categories_loading": categories_loading,
        "categories_empty_text": None if category_options or categories_loading else "No categories available",
        "price": {
            "min": PRICE_RANGE_MIN,
            "max": PRICE_RANGE_MAX,
            "step": PRICE_RANGE_STEP,
            "value": [
                int(filters.price_min) if filters.price_min is not None else PRICE_RANGE_MIN,
                int(filters.price_max) if filters.price_max is not None else PRICE_RANGE_MAX,
            ],
        },
        "has_active_filters": filters.is_active,
        "clear_href": "/shop",
    }


def shop_page(
    products: List[Product],
    filters: ProductFilters,
    sort: SortOption,
    sidebar: dict,
    loading: bool = False,
    error: Exception | None = None,
    has_next_page: bool = False,
    store_name: str = "",
) -> dict:
    # cena filtrowana tez lokalnie - API filtruje po dowolnym wariancie, a karta pokazuje pierwszy
    visible = [p for p in sort_products(products, sort) if filters.matches_price(p)]
    count = len(visible)

    return {
        "title": f"Shop - {store_name}" if store_name else "Shop",
        "breadcrumb": breadcrumb(("Home", "/"), ("Shop", None)),
        "url": shop_url(filters, sort),
        "count_text": f"{count} {'product' if count == 1 else 'products'} found",
        "filters": sidebar,
        "sort": {
            "value": sort.value,
            "options": [{"value": o.value, "label": SORT_LABELS[o]} for o in SortOption],
        },
        "loading": loading,
        "error": error_panel("Error loading products", error, shop_url(filters, sort)) if error else None,
        "products": [] if error else [product_card(p) for p in visible],
        "has_next_page": has_next_page and error is None,
    }
