# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from uuid import UUID


class Money(BaseModel):
    amount: Decimal
    currency_code: str = "USD"


class Image(BaseModel):
    id: Optional[str] = None
    url: str
    alt_text: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class SelectedOption(BaseModel):
    name: str
    value: str


class Variant(BaseModel):
    """Konkretna konfiguracja produktu (np. Size=M) z wlasna cena i stanem."""

    id: str
    title: str
    price: Money
    available_for_sale: bool = False
    selected_options: List[SelectedOption] = Field(default_factory=list)
    image: Optional[Image] = None
    sku: Optional[str] = None
    quantity_available: Optional[int] = None

    def option_value(self, name: str) -> Optional[str]:
        for option in self.selected_options:
            if option.name == name:
                return option.value
        return None


class Product(BaseModel):
    """Splaszczony produkt - cena i waluta z pierwszego wariantu albo z priceRange."""

    id: str
    title: str
    description: str = ""
    description_html: str = ""
    handle: str
    images: List[Image] = Field(default_factory=list)
    variants: List[Variant] = Field(default_factory=list)
    price: Decimal = Decimal("0")
    currency_code: str = "USD"
    available_for_sale: bool = False
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ProductPage(BaseModel):
    products: List[Product]
    has_next_page: bool = False
    end_cursor: Optional[str] = None


class Collection(BaseModel):
    id: str
    title: str
    handle: str
    description: str = ""
    image: Optional[Image] = None


class ProductSummary(BaseModel):
    id: str
    title: str
    handle: str
    image: Optional[Image] = None


class Merchandise(BaseModel):
    """Snapshot wariantu w linii koszyka."""

    id: str
    title: str
    price: Money
    product: ProductSummary
    selected_options: List[SelectedOption] = Field(default_factory=list)


class CartLine(BaseModel):
    id: str
    quantity: int
    merchandise: Merchandise
    total: Money


class CartCost(BaseModel):
    subtotal: Money
    total: Money


class Cart(BaseModel):
    id: str
    checkout_url: Optional[str] = None
    total_quantity: int = 0
    cost: CartCost
    lines: List[CartLine] = Field(default_factory=list)


class AddItemIn(BaseModel):
    """Schema dla dodawania wariantu do koszyka."""

    variant_id: str = Field(..., min_length=1, description="ID wariantu produktu")
    quantity: int = Field(1, gt=0, description="Ilosc (musi byc > 0)")


class UpdateItemIn(BaseModel):
    """Schema dla zmiany ilosci linii - 0 usuwa linie."""

    quantity: int = Field(..., ge=0, description="Nowa ilosc (0 usuwa linie)")


class SubscribeIn(BaseModel):
    """Schema dla zapisu do newslettera."""

    email: EmailStr
    source: Optional[str] = Field(None, max_length=50, description="Np. 'homepage' albo 'footer'")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class SubscriberRead(BaseModel):
    id: UUID
    email: str
    created_at: datetime
    subscribed_at: datetime
    unsubscribed_at: datetime | None = None
    source: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ToastOut(BaseModel):
    kind: str
    title: str
    description: str | None = None


class CartCountOut(BaseModel):
    item_count: int
    badge: str | None = None
