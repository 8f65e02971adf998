# storefront/services/cart_session.py
import threading
from enum import Enum

from storefront.domain.errors import CartNotInitializedError, CartStorageError, StorefrontError
from storefront.domain.schemas import Cart
from storefront.services.cart_storage import CartIdStorage
from storefront.services.storefront_api import StorefrontApi
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartState(str, Enum):
    NO_ID = "no-id"
    CREATING = "creating"
    READY = "ready"
    ERROR = "error"


class CartSession:
    """
    Wlasciciel lokalnego ID koszyka w Shopify.

    no-id -> creating -> ready, kazda udana odpowiedz (fetch albo mutacja) podmienia
    caly rekord koszyka, nieudane utworzenie -> error (koszyk zostaje jaki byl).
    Mutacje nie sa serializowane - wygrywa odpowiedz, ktora przyjdzie ostatnia.
    """

    def __init__(self, api: StorefrontApi, storage: CartIdStorage):
        self.api = api
        self.storage = storage
        self.cart_id: str | None = self._load_cart_id()
        self.cart: Cart | None = None
        self.state = CartState.NO_ID
        self.loading = True
        self.error: StorefrontError | None = None
        self._initialized = False
        self._init_lock = threading.Lock()

    def _load_cart_id(self) -> str | None:
        # niedostepny storage = brak zapisanego ID, koszyk powstanie od nowa
        try:
            return self.storage.load()
        except CartStorageError as e:
            logger.warning(f"Stored cart id unavailable, starting without one: {e}")
            return None

    @property
    def item_count(self) -> int:
        return self.cart.total_quantity if self.cart else 0

    @property
    def checkout_url(self) -> str | None:
        return self.cart.checkout_url if self.cart else None

    # =====================================================
    # QUERY
    # =====================================================
    def ensure_initialized(self) -> None:
        # pierwszy "mount" tylko raz, nawet przy dwoch rownoleglych requestach
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return
            self.initialize()
            self._initialized = True

    def initialize(self) -> None:
        self.loading = True
        self.error = None
        try:
            if self.cart_id:
                cart = self.api.get_cart(self.cart_id)
                if cart is not None:
                    self._replace(cart)
                    return
                logger.info(f"Stored cart {self.cart_id} no longer resolves, creating a new one")
            self._create()
        finally:
            self.loading = False

    def refresh(self) -> None:
        if self.cart_id:
            self.initialize()

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_item(self, variant_id: str, quantity: int = 1) -> Cart | None:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        if not self.cart_id:
            # najpierw utworz koszyk - bez kompensacji gdy dodanie sie nie uda
            if self._create() is None:
                return None

        try:
            self.error = None
            cart = self.api.add_cart_lines(self.cart_id, variant_id, quantity)
        except StorefrontError as e:
            logger.warning(f"Failed to add {variant_id} to cart {self.cart_id}: {e}")
            self.error = e
            return None

        logger.info(f"Added {quantity} x {variant_id} to cart {cart.id}")
        self._replace(cart)
        return cart

    def update_item(self, line_id: str, quantity: int) -> Cart | None:
        if quantity < 0:
            raise ValueError("Quantity cannot be negative")

        if not self.cart_id:
            self.error = CartNotInitializedError("Cart not initialized")
            return None

        try:
            self.error = None
            cart = self.api.update_cart_lines(self.cart_id, line_id, quantity)
        except StorefrontError as e:
            logger.warning(f"Failed to update line {line_id} in cart {self.cart_id}: {e}")
            self.error = e
            return None

        logger.info(f"Line {line_id} in cart {cart.id} set to {quantity}")
        self._replace(cart)
        return cart

    def remove_item(self, line_id: str) -> Cart | None:
        return self.update_item(line_id, 0)

    def _create(self) -> Cart | None:
        self.state = CartState.CREATING
        try:
            cart = self.api.create_cart()
        except StorefrontError as e:
            logger.error(f"Failed to create cart: {e}")
            self.state = CartState.ERROR
            self.error = e
            return None

        try:
            self.storage.save(cart.id)
        except CartStorageError as e:
            # koszyk przyjmujemy dopiero po zapisaniu jego ID
            logger.error(f"Created cart {cart.id} but could not persist its id: {e}")
            self.state = CartState.ERROR
            self.error = e
            return None

        self.cart_id = cart.id
        logger.info(f"Created cart {cart.id}")
        self._replace(cart)
        return cart

    def _replace(self, cart: Cart) -> None:
        self.cart = cart
        self.state = CartState.READY
