# storefront/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from storefront.api.deps import get_storefront_api, get_visitor_session
from storefront.domain.errors import StorefrontError
from storefront.domain.filters import ProductFilters, SortOption, parse_sort
from storefront.services.storefront_api import StorefrontApi
from storefront.services.stores import CollectionListStore, ProductStore
from storefront.services.visitor_session import VisitorSession
from storefront.utils.settings import COLLECTIONS_LIMIT, STORE_NAME
from storefront.utils.logging import get_logger
from storefront.views import catalog
from storefront.views.cart import header

logger = get_logger(__name__)

router = APIRouter(tags=["shop"])

RELATED_FETCH_COUNT = 8


def _parse_selections(raw: List[str]) -> List[tuple[str, str]]:
    selections = []
    for item in raw:
        name, sep, value = item.partition(":")
        if not sep or not name or not value:
            raise ValueError(f"Niepoprawna opcja: {item} (oczekiwano Name:Value)")
        selections.append((name, value))
    return selections


def _render_shop(session: VisitorSession, api: StorefrontApi, sort: SortOption) -> dict:
    collections = CollectionListStore(api, first=COLLECTIONS_LIMIT)
    collections.load()

    store = session.products
    sidebar = catalog.filter_sidebar(
        store.filters,
        collections.categories,
        categories_loading=collections.loading,
        sort=sort,
    )
    page = catalog.shop_page(
        store.items,
        store.filters,
        sort,
        sidebar,
        loading=store.loading,
        error=store.error,
        has_next_page=store.has_next_page,
        store_name=STORE_NAME,
    )
    page["header"] = header(session.cart)
    return page


@router.get("/collections")
def list_collections(api: StorefrontApi = Depends(get_storefront_api)):
    store = CollectionListStore(api, first=COLLECTIONS_LIMIT)
    store.load()
    return {
        "collections": [c.model_dump(mode="json") for c in store.collections],
        "error": str(store.error) if store.error else None,
    }


@router.get("/shop")
def shop(
    category: Optional[str] = Query(None),
    price_min: Optional[str] = Query(None),
    price_max: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    session: VisitorSession = Depends(get_visitor_session),
    api: StorefrontApi = Depends(get_storefront_api),
):
    try:
        filters = ProductFilters.from_params(
            {"category": category, "price_min": price_min, "price_max": price_max, "q": q}
        )
        sort_option = parse_sort(sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # wejscie na strone = mount, zawsze swiezy fetch
    session.products.set_filters(filters)
    return _render_shop(session, api, sort_option)


@router.post("/shop/more")
def shop_load_more(
    sort: Optional[str] = Query(None),
    session: VisitorSession = Depends(get_visitor_session),
    api: StorefrontApi = Depends(get_storefront_api),
):
    try:
        sort_option = parse_sort(sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session.products.load_more()
    return _render_shop(session, api, sort_option)


@router.post("/shop/refetch")
def shop_refetch(
    sort: Optional[str] = Query(None),
    session: VisitorSession = Depends(get_visitor_session),
    api: StorefrontApi = Depends(get_storefront_api),
):
    try:
        sort_option = parse_sort(sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session.products.refetch()
    return _render_shop(session, api, sort_option)


@router.get("/shop/{handle}")
def product_detail(
    handle: str,
    response: Response,
    variant: Optional[str] = Query(None),
    option: List[str] = Query([]),
    image: int = Query(0, ge=0),
    quantity: int = Query(1, ge=1),
    session: VisitorSession = Depends(get_visitor_session),
    api: StorefrontApi = Depends(get_storefront_api),
):
    try:
        selections = _parse_selections(option)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    store = ProductStore(api)
    store.load(handle)

    if store.error is not None:
        return {
            "header": header(session.cart),
            "error": catalog.error_panel("Error loading product", store.error, catalog.product_url(handle)),
        }

    if store.product is None:
        response.status_code = 404
        return {"header": header(session.cart), "not_found": catalog.not_found_panel()}

    product = store.product

    # "you may also like" - blad nie psuje strony
    try:
        related = api.list_products(first=RELATED_FETCH_COUNT).products
    except StorefrontError as e:
        logger.warning(f"Error fetching related products: {e}")
        related = []

    page = catalog.product_detail(
        product,
        variant=catalog.resolve_variant(product, variant, selections),
        quantity=quantity,
        image_index=image,
        related=related,
        store_name=STORE_NAME,
    )
    page["header"] = header(session.cart)
    return page
