# storefront/api/deps.py
import re
import uuid

from fastapi import Depends, Request, Response

from storefront.services.storefront_api import StorefrontApi
from storefront.services.visitor_session import SessionRegistry, VisitorSession
from storefront.utils.settings import VISITOR_COOKIE_NAME, VISITOR_COOKIE_MAX_AGE

_VISITOR_ID = re.compile(r"^[A-Za-z0-9_-]{8,64}$")


def get_storefront_api() -> StorefrontApi:
    return StorefrontApi()


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_visitor_session(
    request: Request,
    response: Response,
    registry: SessionRegistry = Depends(get_session_registry),
) -> VisitorSession:
    """
    Cookie odwiedzajacego -> jego wspolna sesja (koszyk).
    Pierwsze uzycie sesji = "mount" koszyka: odczyt/utworzenie koszyka w Shopify.
    """
    visitor_id = request.cookies.get(VISITOR_COOKIE_NAME)

    if not visitor_id or not _VISITOR_ID.match(visitor_id):
        visitor_id = uuid.uuid4().hex
        response.set_cookie(
            VISITOR_COOKIE_NAME,
            visitor_id,
            max_age=VISITOR_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )

    session = registry.get(visitor_id)
    session.cart.ensure_initialized()
    return session
