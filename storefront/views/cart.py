# storefront/views/cart.py
from storefront.domain.schemas import Cart, CartLine
from storefront.services.cart_session import CartSession
from storefront.views.catalog import product_url
from storefront.views.formatting import breadcrumb, format_money

HIDDEN_OPTION_VALUES = {"default title", "title"}


def variant_label(line: CartLine) -> str:
    # "Default Title" to wariant bez opcji - nie pokazujemy
    parts = []
    for option in line.merchandise.selected_options:
        value = (option.value or "").strip()
        if value and value.lower() not in HIDDEN_OPTION_VALUES:
            parts.append(f"{option.name}: {option.value}")
    return ", ".join(parts)


def cart_line(line: CartLine) -> dict:
    product = line.merchandise.product
    currency = line.total.currency_code

    return {
        "id": line.id,
        "variant_id": line.merchandise.id,
        "title": product.title,
        "href": product_url(product.handle),
        "variant": variant_label(line),
        "image": {
            "url": product.image.url,
            "alt": product.image.alt_text or product.title,
        } if product.image else None,
        "image_placeholder": None if product.image else "No image",
        "quantity": line.quantity,
        "price": format_money(line.merchandise.price.amount, currency),
        "total": format_money(line.total.amount, currency),
        "controls": {
            "can_decrease": line.quantity > 1,
            "decrease_to": line.quantity - 1,
            "increase_to": line.quantity + 1,
            "remove_to": 0,
        },
    }


def header(session: CartSession) -> dict:
    count = session.item_count
    return {
        "cart_count": count,
        "cart_badge": None if count <= 0 else ("9+" if count > 9 else str(count)),
        "cart_href": "/cart",
        "cart_label": f"{count} items in cart" if count else "Shopping cart",
    }


def cart_page(cart: Cart | None, loading: bool = False, store_name: str = "") -> dict:
    lines = cart.lines if cart else []
    page = {
        "title": f"Shopping Cart - {store_name}" if store_name else "Shopping Cart",
        "breadcrumb": breadcrumb(("Home", "/"), ("Cart", None)),
        "heading": "Shopping Cart",
        "loading": loading,
        "items": [cart_line(line) for line in lines],
        "continue_shopping": {"label": "Continue Shopping", "href": "/shop"},
    }

    if not lines:
        page["empty"] = {
            "title": "Your cart is empty",
            "message": "Looks like you haven't added anything to your cart yet.",
            "action": {"label": "Continue Shopping", "href": "/shop"},
        }
        page["summary"] = None
        return page

    currency = cart.cost.total.currency_code
    page["empty"] = None
    page["summary"] = {
        "title": "Order Summary",
        "subtotal": format_money(cart.cost.subtotal.amount, currency),
        "shipping": "Calculated at checkout",
        "total": format_money(cart.cost.total.amount, currency),
        "total_quantity": cart.total_quantity,
        "checkout": {
            "label": "Proceed to Checkout",
            "href": "/cart/checkout",
            "enabled": bool(cart.checkout_url),
        },
        "note": "Shipping will be calculated at checkout",
    }
    return page
