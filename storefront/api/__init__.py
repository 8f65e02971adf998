# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.routers import carts, health, newsletter, pages, products
from storefront.services.cart_storage import redis_storage_factory
from storefront.services.storefront_api import StorefrontApi
from storefront.services.visitor_session import SessionRegistry


def create_app(registry: SessionRegistry | None = None) -> FastAPI:
    app = FastAPI(title="Storefront", version="1.0.0")

    # jedna instancja na cale zycie aplikacji - wspolny koszyk dla wszystkich ekranow
    if registry is None:
        registry = SessionRegistry(api=StorefrontApi(), storage_factory=redis_storage_factory())
    app.state.sessions = registry

    app.include_router(health.router)
    app.include_router(pages.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(newsletter.router)
    return app
