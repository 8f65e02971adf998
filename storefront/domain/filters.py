# storefront/domain/filters.py
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, List, Mapping, Optional

from storefront.domain.schemas import Product


class SortOption(str, Enum):
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NAME = "name"


SORT_LABELS = {
    SortOption.NEWEST: "Newest",
    SortOption.PRICE_LOW: "Price: Low to High",
    SortOption.PRICE_HIGH: "Price: High to Low",
    SortOption.NAME: "Name: A to Z",
}


def _quote(value: str) -> str:
    if any(ch.isspace() for ch in value):
        return '"' + value.replace('"', '\\"') + '"'
    return value


def _format_number(value: Decimal) -> str:
    # 50 a nie 50.00 - tak jak w query stringu Shopify
    return format(value.normalize(), "f") if value == value.to_integral() else format(value, "f")


@dataclass(frozen=True)
class ProductFilters:
    """
    Filtry listy produktow.
    query (surowy string) ma pierwszenstwo - jesli jest, reszta nie trafia do zapytania.
    """

    query: Optional[str] = None
    category: Optional[str] = None
    price_min: Optional[Decimal] = None
    price_max: Optional[Decimal] = None

    def to_query(self) -> Optional[str]:
        if self.query is not None:
            return self.query or None

        parts: List[str] = []
        if self.category:
            parts.append(f"product_type:{_quote(self.category)}")
        if self.price_min is not None:
            parts.append(f"variants.price:>={_format_number(self.price_min)}")
        if self.price_max is not None:
            parts.append(f"variants.price:<={_format_number(self.price_max)}")

        return " AND ".join(parts) if parts else None

    def matches_price(self, product: Product) -> bool:
        # granice wlacznie
        if self.price_min is not None and product.price < self.price_min:
            return False
        if self.price_max is not None and product.price > self.price_max:
            return False
        return True

    @property
    def is_active(self) -> bool:
        return bool(self.query or self.category or self.price_min is not None or self.price_max is not None)

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.query:
            params["q"] = self.query
        if self.category:
            params["category"] = self.category
        if self.price_min is not None:
            params["price_min"] = _format_number(self.price_min)
        if self.price_max is not None:
            params["price_max"] = _format_number(self.price_max)
        return params

    @classmethod
    def from_params(cls, params: Mapping[str, Optional[str]]) -> "ProductFilters":
        return cls(
            query=params.get("q") or None,
            category=params.get("category") or None,
            price_min=parse_price(params.get("price_min")),
            price_max=parse_price(params.get("price_max")),
        )


def parse_price(raw) -> Optional[Decimal]:
    if raw is None or raw == "":
        return None
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise ValueError(f"Niepoprawna cena: {raw}")
    if not value.is_finite() or value < 0:
        raise ValueError(f"Niepoprawna cena: {raw}")
    return value


def parse_sort(raw: Optional[str]) -> SortOption:
    if not raw:
        return SortOption.NEWEST
    try:
        return SortOption(raw)
    except ValueError:
        raise ValueError(f"Nieznane sortowanie: {raw}")


def sort_products(products: List[Product], option: SortOption) -> List[Product]:
    if option == SortOption.PRICE_LOW:
        return sorted(products, key=lambda p: p.price)
    if option == SortOption.PRICE_HIGH:
        return sorted(products, key=lambda p: p.price, reverse=True)
    if option == SortOption.NAME:
        return sorted(products, key=lambda p: p.title.casefold())
    # newest = kolejnosc z API
    return list(products)
