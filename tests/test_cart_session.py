# tests/test_cart_session.py
import pytest

from storefront.domain.errors import CartNotInitializedError, CartStorageError, GatewayError
from storefront.services.cart_session import CartSession, CartState
from tests.fakes import BrokenCartIdStorage, MemoryCartIdStorage

SILK = "gid://shopify/ProductVariant/silk-dress-1"
SHIRT = "gid://shopify/ProductVariant/linen-shirt-1"


def test_new_session_starts_without_cart(fake_api, storage):
    session = CartSession(fake_api, storage)

    assert session.state == CartState.NO_ID
    assert session.loading is True
    assert session.cart is None
    assert session.item_count == 0
    assert session.checkout_url is None


def test_initialize_without_stored_id_creates_and_persists(fake_api, storage):
    session = CartSession(fake_api, storage)

    session.initialize()

    assert session.state == CartState.READY
    assert session.loading is False
    assert session.cart.total_quantity == 0
    assert storage.cart_id == session.cart_id == session.cart.id
    assert fake_api.count("create_cart") == 1


def test_initialize_with_valid_stored_id_reuses_cart(fake_api):
    existing = fake_api.create_cart()
    fake_api.add_cart_lines(existing.id, SILK, 1)
    storage = MemoryCartIdStorage(existing.id)
    session = CartSession(fake_api, storage)

    session.initialize()

    assert session.state == CartState.READY
    assert session.cart.id == existing.id
    assert session.item_count == 1
    assert fake_api.count("create_cart") == 1
    assert storage.saves == []


def test_stale_stored_id_is_replaced(fake_api):
    storage = MemoryCartIdStorage("gid://shopify/Cart/expired")
    session = CartSession(fake_api, storage)

    session.initialize()

    assert session.state == CartState.READY
    assert session.cart_id != "gid://shopify/Cart/expired"
    assert storage.cart_id == session.cart_id
    assert storage.saves == [session.cart_id]


def test_failed_create_moves_to_error(fake_api, storage):
    fake_api.fail["create_cart"] = GatewayError("Failed to fetch data from Shopify: down")
    session = CartSession(fake_api, storage)

    session.initialize()

    assert session.state == CartState.ERROR
    assert session.cart is None
    assert session.loading is False
    assert str(session.error).startswith("Failed to fetch data")
    assert storage.cart_id is None


def test_ensure_initialized_runs_once(fake_api, storage):
    session = CartSession(fake_api, storage)

    session.ensure_initialized()
    session.ensure_initialized()

    assert fake_api.count("create_cart") == 1


def test_add_item_replaces_cart(fake_api, storage):
    session = CartSession(fake_api, storage)
    session.initialize()

    cart = session.add_item(SILK, 2)

    assert cart is session.cart
    assert session.item_count == 2
    assert session.cart.lines[0].merchandise.product.title == "Silk Dress"


def test_add_item_without_cart_creates_first(fake_api, storage):
    session = CartSession(fake_api, storage)

    cart = session.add_item(SHIRT)

    assert cart.total_quantity == 1
    assert storage.cart_id == cart.id
    assert session.state == CartState.READY


def test_add_item_rejects_non_positive_quantity(fake_api, storage):
    session = CartSession(fake_api, storage)

    with pytest.raises(ValueError):
        session.add_item(SILK, 0)


def test_add_item_when_create_fails(fake_api, storage):
    fake_api.fail["create_cart"] = GatewayError("down")
    session = CartSession(fake_api, storage)

    assert session.add_item(SILK) is None
    assert session.state == CartState.ERROR
    assert fake_api.count("add_cart_lines") == 0


def test_user_errors_leave_cart_unchanged(fake_api, storage):
    session = CartSession(fake_api, storage)
    session.initialize()
    session.add_item(SILK, 1)
    before = session.cart

    fake_api.user_errors["add_cart_lines"] = ["Variant is sold out"]
    result = session.add_item(SHIRT, 1)

    assert result is None
    assert session.cart is before
    assert session.item_count == 1
    assert str(session.error) == "Variant is sold out"
    # blad mutacji nie zmienia stanu na error
    assert session.state == CartState.READY


def test_update_then_remove_round_trip(fake_api, storage):
    session = CartSession(fake_api, storage)
    session.initialize()
    cart = session.add_item(SILK, 2)
    line_id = cart.lines[0].id

    session.update_item(line_id, 3)
    assert session.item_count == 3

    cart = session.update_item(line_id, 0)
    assert cart.total_quantity == 0
    assert cart.lines == []


def test_remove_item_is_update_to_zero(fake_api, storage):
    session = CartSession(fake_api, storage)
    cart = session.add_item(SILK, 1)

    session.remove_item(cart.lines[0].id)

    assert fake_api.calls[-1] == ("update_cart_lines", cart.id, cart.lines[0].id, 0)
    assert session.item_count == 0


def test_update_without_cart_reports_not_initialized(fake_api, storage):
    session = CartSession(fake_api, storage)

    assert session.update_item("line-1", 2) is None
    assert isinstance(session.error, CartNotInitializedError)
    assert str(session.error) == "Cart not initialized"
    assert fake_api.count("update_cart_lines") == 0


def test_update_rejects_negative_quantity(fake_api, storage):
    session = CartSession(fake_api, storage)

    with pytest.raises(ValueError):
        session.update_item("line-1", -1)


def test_successful_mutation_clears_previous_error(fake_api, storage):
    session = CartSession(fake_api, storage)
    session.initialize()
    fake_api.user_errors["add_cart_lines"] = ["nope"]
    session.add_item(SILK)

    fake_api.user_errors.clear()
    session.add_item(SILK)

    assert session.error is None
    assert session.item_count == 1


def test_refresh_refetches_existing_cart(fake_api, storage):
    session = CartSession(fake_api, storage)
    cart = session.add_item(SILK)
    # zmiana po stronie Shopify (np. inna karta przegladarki)
    fake_api.add_cart_lines(cart.id, SHIRT, 1)

    session.refresh()

    assert session.item_count == 2


def test_refresh_without_id_does_nothing(fake_api, storage):
    session = CartSession(fake_api, storage)

    session.refresh()

    assert fake_api.calls == []


def test_unreadable_storage_starts_without_stored_id(fake_api):
    storage = BrokenCartIdStorage(load_fails=True, save_fails=False)

    session = CartSession(fake_api, storage)
    session.initialize()

    assert fake_api.count("get_cart") == 0
    assert session.state == CartState.READY
    assert storage.cart_id == session.cart_id


def test_failed_save_after_create_moves_to_error(fake_api):
    session = CartSession(fake_api, BrokenCartIdStorage(load_fails=False, save_fails=True))

    session.initialize()

    assert fake_api.count("create_cart") == 1
    assert session.state == CartState.ERROR
    assert isinstance(session.error, CartStorageError)
    assert session.cart is None
    assert session.cart_id is None
    assert session.loading is False


def test_add_item_when_cart_id_cannot_be_saved(fake_api):
    session = CartSession(fake_api, BrokenCartIdStorage())

    assert session.add_item(SILK) is None
    assert session.state == CartState.ERROR
    assert fake_api.count("add_cart_lines") == 0
