# tests/test_visitor_session.py
from storefront.services.visitor_session import SessionRegistry


def test_same_visitor_gets_same_session(registry):
    first = registry.get("visitor-aaaa")
    second = registry.get("visitor-aaaa")

    assert first is second
    assert first.cart is second.cart
    assert len(registry) == 1


def test_visitors_have_separate_carts(registry, storage_factory):
    a = registry.get("visitor-aaaa")
    b = registry.get("visitor-bbbb")
    a.cart.ensure_initialized()
    b.cart.ensure_initialized()

    assert a.cart.cart_id != b.cart.cart_id
    assert storage_factory.storages["visitor-aaaa"].cart_id == a.cart.cart_id
    assert storage_factory.storages["visitor-bbbb"].cart_id == b.cart.cart_id


def test_evicted_visitor_restores_cart_from_storage(fake_api, storage_factory):
    registry = SessionRegistry(api=fake_api, storage_factory=storage_factory, max_sessions=1)
    first = registry.get("visitor-aaaa")
    first.cart.add_item("gid://shopify/ProductVariant/silk-dress-1", 1)

    registry.get("visitor-bbbb")
    restored = registry.get("visitor-aaaa")
    restored.cart.ensure_initialized()

    assert restored is not first
    assert len(registry) == 1
    assert restored.cart.cart_id == first.cart.cart_id
    assert restored.cart.item_count == 1


def test_registry_page_size_reaches_product_store(registry):
    assert registry.get("visitor-aaaa").products.page_size == 2


class _CallbackStorage:
    """Storage wywolujacy callback przy odczycie (jak wolny redis)."""

    def __init__(self, on_load):
        self.on_load = on_load
        self.cart_id = None

    def load(self):
        self.on_load()
        return self.cart_id

    def save(self, cart_id):
        self.cart_id = cart_id


def test_cart_id_is_loaded_outside_registry_lock(fake_api):
    held = []
    registry = SessionRegistry(
        api=fake_api,
        storage_factory=lambda visitor_id: _CallbackStorage(lambda: held.append(registry._lock.locked())),
    )

    registry.get("visitor-aaaa")

    assert held == [False]


def test_concurrent_first_requests_share_one_session(fake_api):
    inner = []
    arrived = []

    def load_while_other_request_arrives():
        # drugi request tego samego goscia w trakcie odczytu z redisa
        if not arrived:
            arrived.append(True)
            inner.append(registry.get("visitor-aaaa"))

    registry = SessionRegistry(
        api=fake_api,
        storage_factory=lambda visitor_id: _CallbackStorage(load_while_other_request_arrives),
    )

    outer = registry.get("visitor-aaaa")

    assert outer is inner[0]
    assert len(registry) == 1
    assert registry.get("visitor-aaaa") is outer
