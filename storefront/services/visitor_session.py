# storefront/services/visitor_session.py
import threading
from collections import OrderedDict
from typing import Callable

from storefront.services.cart_session import CartSession
from storefront.services.cart_storage import CartIdStorage
from storefront.services.storefront_api import StorefrontApi
from storefront.services.stores import ProductListStore
from storefront.utils.settings import SESSION_CACHE_SIZE, SHOP_PAGE_SIZE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class VisitorSession:
    """
    Stan jednego odwiedzajacego, wspolny dla wszystkich ekranow:
    jeden CartSession (licznik w headerze i mutacje widza ten sam obiekt)
    i lista produktow sklepu (paginacja "load more").
    """

    def __init__(self, visitor_id: str, api: StorefrontApi, storage: CartIdStorage, page_size: int = SHOP_PAGE_SIZE):
        self.visitor_id = visitor_id
        self.cart = CartSession(api, storage)
        self.products = ProductListStore(api, page_size=page_size)


class SessionRegistry:
    """
    Tworzona raz na cala aplikacje (app.state). Dla danego visitor_id zawsze zwraca
    ten sam VisitorSession. LRU - wyrzucony odwiedzajacy odtwarza sie z ID koszyka w redisie.
    """

    def __init__(
        self,
        api: StorefrontApi,
        storage_factory: Callable[[str], CartIdStorage],
        max_sessions: int = SESSION_CACHE_SIZE,
        page_size: int = SHOP_PAGE_SIZE,
    ):
        self.api = api
        self.storage_factory = storage_factory
        self.max_sessions = max_sessions
        self.page_size = page_size
        self._sessions: "OrderedDict[str, VisitorSession]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def _cached(self, visitor_id: str) -> VisitorSession | None:
        session = self._sessions.get(visitor_id)
        if session is not None:
            self._sessions.move_to_end(visitor_id)
        return session

    def get(self, visitor_id: str) -> VisitorSession:
        with self._lock:
            session = self._cached(visitor_id)
        if session is not None:
            return session

        # odczyt ID koszyka (redis) poza lockiem
        built = VisitorSession(
            visitor_id,
            self.api,
            self.storage_factory(visitor_id),
            page_size=self.page_size,
        )

        with self._lock:
            # rownolegly pierwszy request mogl juz wstawic sesje - wygrywa pierwsza
            session = self._cached(visitor_id)
            if session is not None:
                return session

            self._sessions[visitor_id] = built
            logger.info(f"New visitor session {visitor_id}")

            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info(f"Evicted visitor session {evicted}")

            return built
