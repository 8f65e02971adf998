#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import RedirectResponse

from storefront.api.deps import get_visitor_session
from storefront.domain.schemas import AddItemIn, Cart, CartCountOut, UpdateItemIn
from storefront.services.cart_session import CartState
from storefront.services.visitor_session import VisitorSession
from storefront.utils.settings import STORE_NAME
from storefront.views.cart import cart_page, header
from storefront.views.formatting import toast

router = APIRouter(prefix="/cart", tags=["cart"])


def _render(session: VisitorSession) -> dict:
    cart = session.cart
    page = cart_page(cart.cart, loading=cart.loading, store_name=STORE_NAME)
    page["header"] = header(cart)
    page["error"] = str(cart.error) if cart.state == CartState.ERROR and cart.error else None
    return page


def _product_title(cart: Cart, variant_id: str) -> str | None:
    for line in cart.lines:
        if line.merchandise.id == variant_id:
            return line.merchandise.product.title
    return None


@router.get("")
def get_cart(session: VisitorSession = Depends(get_visitor_session)):
    return _render(session)


@router.get("/count", response_model=CartCountOut)
def get_cart_count(session: VisitorSession = Depends(get_visitor_session)):
    h = header(session.cart)
    return CartCountOut(item_count=h["cart_count"], badge=h["cart_badge"])


@router.post("/items")
def add_item(
    payload: AddItemIn,
    response: Response,
    session: VisitorSession = Depends(get_visitor_session),
):
    try:
        cart = session.cart.add_item(payload.variant_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if cart is None:
        response.status_code = 400
        return {
            "toast": toast("error", "Failed to add to cart", "Please try again."),
            "cart": _render(session),
        }

    title = _product_title(cart, payload.variant_id) or "Item"
    return {
        "toast": toast("success", "Added to cart", f"{title} has been added to your cart."),
        "cart": _render(session),
    }


@router.patch("/items/{line_id:path}")
def update_item(
    line_id: str,
    payload: UpdateItemIn,
    response: Response,
    session: VisitorSession = Depends(get_visitor_session),
):
    try:
        cart = session.cart.update_item(line_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if cart is None:
        response.status_code = 400
        return {
            "toast": toast("error", "Failed to update cart", "Please try again."),
            "cart": _render(session),
        }

    return {"toast": None, "cart": _render(session)}


@router.delete("/items/{line_id:path}")
def remove_item(
    line_id: str,
    response: Response,
    session: VisitorSession = Depends(get_visitor_session),
):
    # usuniecie = ustawienie ilosci na 0
    cart = session.cart.remove_item(line_id)

    if cart is None:
        response.status_code = 400
        return {
            "toast": toast("error", "Failed to remove item", "Please try again."),
            "cart": _render(session),
        }

    return {"toast": None, "cart": _render(session)}


@router.post("/refresh")
def refresh_cart(session: VisitorSession = Depends(get_visitor_session)):
    session.cart.refresh()
    return _render(session)


@router.get("/checkout")
def checkout(session: VisitorSession = Depends(get_visitor_session)):
    cart = session.cart.cart

    if cart is None or not cart.lines:
        raise HTTPException(status_code=400, detail="Your cart is empty")

    if not cart.checkout_url:
        raise HTTPException(status_code=409, detail="Checkout is not available")

    return RedirectResponse(cart.checkout_url, status_code=303)
