# storefront/services/stores.py
"""
Store'y danych - odpowiednik hookow z frontu.
Kazdy trzyma wynik + loading/error i lapie StorefrontError na swojej granicy,
wiec do warstwy widokow nie dociera zaden wyjatek z API.
"""
import threading
from typing import List

from storefront.domain.errors import StorefrontError
from storefront.domain.filters import ProductFilters
from storefront.domain.schemas import Collection, Product
from storefront.services.storefront_api import StorefrontApi
from storefront.utils.logging import get_logger
from storefront.utils.settings import PRODUCTS_PAGE_SIZE

logger = get_logger(__name__)


class RemoteStore:
    """Wspolny stan: loading, error i numer sekwencyjny ostatniego requestu."""

    def __init__(self, api: StorefrontApi):
        self.api = api
        self.loading = False
        self.error: StorefrontError | None = None
        self._seq = 0
        self._lock = threading.Lock()

    def _begin(self) -> int:
        with self._lock:
            self._seq += 1
            self.loading = True
            self.error = None
            return self._seq

    def _is_current(self, seq: int) -> bool:
        # odpowiedz na starszy request jest odrzucana
        return seq == self._seq


class ProductListStore(RemoteStore):
    def __init__(self, api: StorefrontApi, page_size: int = PRODUCTS_PAGE_SIZE):
        super().__init__(api)
        self.page_size = page_size
        self.filters = ProductFilters()
        self.items: List[Product] = []
        self.has_next_page = False
        self.end_cursor: str | None = None

    def set_filters(self, filters: ProductFilters) -> None:
        """Mount albo zmiana filtrow - nowy fetch, lista jest zastepowana."""
        self.filters = filters
        self._fetch(append=False)

    def load_more(self) -> None:
        if not self.has_next_page or self.loading:
            return
        self._fetch(append=True)

    def refetch(self) -> None:
        self.end_cursor = None
        self._fetch(append=False)

    def _fetch(self, append: bool) -> None:
        seq = self._begin()
        after = self.end_cursor if append else None

        try:
            page = self.api.list_products(
                first=self.page_size,
                after=after,
                query=self.filters.to_query(),
            )
        except StorefrontError as e:
            with self._lock:
                if not self._is_current(seq):
                    logger.info(f"Discarding stale products error (request {seq})")
                    return
                logger.warning(f"Error fetching products: {e}")
                self.error = e
                self.items = []
                self.has_next_page = False
                self.end_cursor = None
                self.loading = False
            return

        with self._lock:
            if not self._is_current(seq):
                logger.info(f"Discarding stale products response (request {seq})")
                return
            self.items = self.items + page.products if append else page.products
            self.has_next_page = page.has_next_page
            self.end_cursor = page.end_cursor
            self.loading = False


class ProductStore(RemoteStore):
    def __init__(self, api: StorefrontApi):
        super().__init__(api)
        self.handle: str | None = None
        self.product: Product | None = None

    @property
    def not_found(self) -> bool:
        return not self.loading and self.error is None and self.product is None

    def load(self, handle: str | None) -> None:
        self.handle = handle
        if not handle:
            self.loading = False
            return

        seq = self._begin()
        try:
            product = self.api.get_product(handle)
        except StorefrontError as e:
            with self._lock:
                if self._is_current(seq):
                    logger.warning(f"Error fetching product {handle}: {e}")
                    self.error = e
                    self.product = None
                    self.loading = False
            return

        with self._lock:
            if self._is_current(seq):
                self.product = product
                self.loading = False

    def refetch(self) -> None:
        self.load(self.handle)


class CollectionListStore(RemoteStore):
    def __init__(self, api: StorefrontApi, first: int = 10):
        super().__init__(api)
        self.first = first
        self.collections: List[Collection] = []

    @property
    def categories(self) -> List[str]:
        return [collection.title for collection in self.collections]

    def load(self) -> None:
        seq = self._begin()
        try:
            collections = self.api.list_collections(self.first)
        except StorefrontError as e:
            with self._lock:
                if self._is_current(seq):
                    logger.warning(f"Error fetching collections: {e}")
                    self.error = e
                    self.collections = []
                    self.loading = False
            return

        with self._lock:
            if self._is_current(seq):
                self.collections = collections
                self.loading = False

    def refetch(self) -> None:
        self.load()
