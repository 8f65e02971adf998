# tests/test_filters.py
from decimal import Decimal

import pytest

from storefront.domain.filters import (
    ProductFilters,
    SortOption,
    parse_price,
    parse_sort,
    sort_products,
)
from tests.fakes import make_product


def test_no_filters_means_no_query():
    assert ProductFilters().to_query() is None
    assert ProductFilters().is_active is False


def test_category_and_price_are_joined_with_and():
    filters = ProductFilters(category="Dresses", price_min=Decimal("50.00"), price_max=Decimal("200"))

    assert filters.to_query() == "product_type:Dresses AND variants.price:>=50 AND variants.price:<=200"


def test_category_with_space_is_quoted():
    assert ProductFilters(category="Evening Wear").to_query() == 'product_type:"Evening Wear"'


def test_zero_price_bound_is_kept():
    assert ProductFilters(price_min=Decimal("0")).to_query() == "variants.price:>=0"


def test_fractional_price_is_not_rounded():
    assert ProductFilters(price_max=Decimal("19.99")).to_query() == "variants.price:<=19.99"


def test_raw_query_overrides_structured_filters():
    filters = ProductFilters(query="title:silk", category="Dresses", price_min=Decimal("10"))

    assert filters.to_query() == "title:silk"


def test_price_bounds_are_inclusive():
    filters = ProductFilters(price_min=Decimal("50"), price_max=Decimal("50"))

    assert filters.matches_price(make_product("a", price="50.00"))
    assert not filters.matches_price(make_product("b", price="49.99"))
    assert not filters.matches_price(make_product("c", price="50.01"))


def test_params_round_trip_through_url():
    filters = ProductFilters(category="Tops", price_min=Decimal("10"), price_max=Decimal("90.5"))

    assert ProductFilters.from_params(filters.to_params()) == filters


@pytest.mark.parametrize("raw", ["abc", "-1", "NaN", "Infinity"])
def test_parse_price_rejects_invalid(raw):
    with pytest.raises(ValueError):
        parse_price(raw)


def test_parse_price_empty_is_none():
    assert parse_price(None) is None
    assert parse_price("") is None
    assert parse_price("25") == Decimal("25")


def test_parse_sort():
    assert parse_sort(None) == SortOption.NEWEST
    assert parse_sort("price-high") == SortOption.PRICE_HIGH
    with pytest.raises(ValueError):
        parse_sort("random")


def test_sort_products():
    products = [
        make_product("b", "Beta", price="30"),
        make_product("a", "alpha", price="10"),
        make_product("c", "Gamma", price="20"),
    ]

    assert [p.handle for p in sort_products(products, SortOption.NEWEST)] == ["b", "a", "c"]
    assert [p.handle for p in sort_products(products, SortOption.PRICE_LOW)] == ["a", "c", "b"]
    assert [p.handle for p in sort_products(products, SortOption.PRICE_HIGH)] == ["b", "c", "a"]
    assert [p.handle for p in sort_products(products, SortOption.NAME)] == ["a", "b", "c"]
