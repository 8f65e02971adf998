# storefront/views/pages.py
from typing import List

from storefront.domain.schemas import Product
from storefront.views.catalog import product_card
from storefront.views.formatting import breadcrumb

BRAND_VALUES = [
    {"title": "Quality", "description": "Every piece is chosen for materials and finish that last."},
    {"title": "Elegance", "description": "Timeless designs that move from day to evening."},
    {"title": "Sustainability", "description": "Considered sourcing and fewer, better pieces."},
    {"title": "Craftsmanship", "description": "Made with care by people who love what they do."},
]


def newsletter_form(source: str) -> dict:
    return {
        "action": "/newsletter",
        "source": source,
        "label": "Stay in the loop",
        "description": "Subscribe to receive updates on new collections and exclusive offers.",
    }


def home_page(featured: List[Product], loading: bool = False, store_name: str = "") -> dict:
    return {
        "title": store_name or "Home",
        "hero": {"cta": {"label": "Shop Collection", "href": "/shop"}},
        "featured": {
            "loading": loading,
            "products": [product_card(p) for p in featured],
        },
        "about_link": {"label": "Our Story", "href": "/about"},
        "newsletter": newsletter_form("homepage"),
    }


def about_page(products: List[Product], loading: bool = False, store_name: str = "") -> dict:
    return {
        "title": f"About Us - {store_name}" if store_name else "About Us",
        "breadcrumb": breadcrumb(("Home", "/"), ("About", None)),
        "values": BRAND_VALUES,
        "top_products": {
            "loading": loading,
            "products": [product_card(p) for p in products],
        },
        "cta": {"label": "Explore the Collection", "href": "/shop"},
        "newsletter": newsletter_form("footer"),
    }
