# tests/test_normalize.py
from decimal import Decimal

from storefront.domain import normalize


def _product_node(**overrides):
    node = {
        "id": "gid://shopify/Product/1",
        "title": "Silk Dress",
        "description": "Flowing silk",
        "descriptionHtml": "<p>Flowing silk</p>",
        "handle": "silk-dress",
        "availableForSale": True,
        "productType": "Dresses",
        "images": {"edges": [{"node": {"id": "img-1", "url": "https://cdn/1.jpg", "altText": None}}]},
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/ProductVariant/1",
                        "title": "S",
                        "price": {"amount": "120.0", "currencyCode": "EUR"},
                        "availableForSale": True,
                        "selectedOptions": [{"name": "Size", "value": "S"}],
                    }
                }
            ]
        },
        "priceRange": {"minVariantPrice": {"amount": "99.0", "currencyCode": "USD"}},
    }
    node.update(overrides)
    return node


def test_flatten_edges_handles_missing_connection():
    assert normalize.flatten_edges(None) == []
    assert normalize.flatten_edges({}) == []
    assert normalize.flatten_edges({"edges": [{"node": {"id": 1}}, {"node": None}]}) == [{"id": 1}]


def test_page_info_defaults():
    assert normalize.page_info(None) == (False, None)
    assert normalize.page_info({"pageInfo": {"hasNextPage": True, "endCursor": "abc"}}) == (True, "abc")


def test_product_price_comes_from_first_variant():
    product = normalize.to_product(_product_node())

    assert product.price == Decimal("120.0")
    assert product.currency_code == "EUR"
    assert product.images[0].url == "https://cdn/1.jpg"
    assert product.variants[0].option_value("Size") == "S"
    assert product.product_type == "Dresses"


def test_product_without_variants_falls_back_to_price_range():
    product = normalize.to_product(_product_node(variants={"edges": []}))

    assert product.variants == []
    assert product.price == Decimal("99.0")
    assert product.currency_code == "USD"


def test_product_without_any_price_defaults_to_zero_usd():
    product = normalize.to_product(_product_node(variants=None, priceRange=None))

    assert product.price == Decimal("0")
    assert product.currency_code == "USD"


def test_product_page_keeps_pagination():
    page = normalize.to_product_page(
        {
            "edges": [{"node": _product_node()}],
            "pageInfo": {"hasNextPage": True, "endCursor": "cursor-1"},
        }
    )

    assert len(page.products) == 1
    assert page.has_next_page is True
    assert page.end_cursor == "cursor-1"


def test_cart_lines_use_first_product_image():
    cart = normalize.to_cart(
        {
            "id": "gid://shopify/Cart/1",
            "checkoutUrl": "https://shop/checkout/1",
            "totalQuantity": 2,
            "cost": {
                "subtotalAmount": {"amount": "40.0", "currencyCode": "USD"},
                "totalAmount": {"amount": "40.0", "currencyCode": "USD"},
            },
            "lines": {
                "edges": [
                    {
                        "node": {
                            "id": "line-1",
                            "quantity": 2,
                            "merchandise": {
                                "id": "gid://shopify/ProductVariant/1",
                                "title": "M / White",
                                "price": {"amount": "20.0", "currencyCode": "USD"},
                                "selectedOptions": [{"name": "Size", "value": "M"}],
                                "product": {
                                    "id": "gid://shopify/Product/1",
                                    "title": "Cotton Tee",
                                    "handle": "cotton-tee",
                                    "images": {
                                        "edges": [
                                            {"node": {"url": "https://cdn/a.jpg"}},
                                            {"node": {"url": "https://cdn/b.jpg"}},
                                        ]
                                    },
                                },
                            },
                            "cost": {"totalAmount": {"amount": "40.0", "currencyCode": "USD"}},
                        }
                    }
                ]
            },
        }
    )

    assert cart.total_quantity == 2
    assert cart.checkout_url == "https://shop/checkout/1"
    line = cart.lines[0]
    assert line.merchandise.product.image.url == "https://cdn/a.jpg"
    assert line.total.amount == Decimal("40.0")


def test_empty_cart_has_zero_quantity():
    cart = normalize.to_cart({"id": "gid://shopify/Cart/2", "lines": {"edges": []}})

    assert cart.total_quantity == 0
    assert cart.lines == []
    assert cart.cost.total.amount == Decimal("0")


def test_user_error_messages():
    payload = {"userErrors": [{"field": ["lines"], "message": "Variant is sold out"}, {"message": None}]}

    assert normalize.user_error_messages(payload) == ["Variant is sold out", "Unknown error"]
    assert normalize.user_error_messages({"userErrors": []}) == []
