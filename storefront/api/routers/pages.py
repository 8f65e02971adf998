# storefront/api/routers/pages.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_storefront_api, get_visitor_session
from storefront.domain.filters import ProductFilters
from storefront.services.storefront_api import StorefrontApi
from storefront.services.stores import ProductListStore
from storefront.services.visitor_session import VisitorSession
from storefront.utils.settings import STORE_NAME
from storefront.utils.logging import get_logger
from storefront.views.cart import header
from storefront.views.pages import about_page, home_page

logger = get_logger(__name__)

router = APIRouter(tags=["pages"])

FEATURED_COUNT = 3
ABOUT_PRODUCTS_COUNT = 5


def _top_products(api: StorefrontApi, count: int) -> ProductListStore:
    store = ProductListStore(api, page_size=count)
    store.set_filters(ProductFilters())
    # strona renderuje sie bez produktow
    if store.error is not None:
        logger.warning(f"Error fetching top products: {store.error}")
    return store


@router.get("/")
def home(
    session: VisitorSession = Depends(get_visitor_session),
    api: StorefrontApi = Depends(get_storefront_api),
):
    store = _top_products(api, FEATURED_COUNT)
    page = home_page(store.items, loading=store.loading, store_name=STORE_NAME)
    page["header"] = header(session.cart)
    return page


@router.get("/about")
def about(
    session: VisitorSession = Depends(get_visitor_session),
    api: StorefrontApi = Depends(get_storefront_api),
):
    store = _top_products(api, ABOUT_PRODUCTS_COUNT)
    page = about_page(store.items, loading=store.loading, store_name=STORE_NAME)
    page["header"] = header(session.cart)
    return page
