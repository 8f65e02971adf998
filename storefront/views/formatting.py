# storefront/views/formatting.py
from decimal import Decimal, ROUND_HALF_UP

from storefront.domain.schemas import ToastOut

# symbole jak w Intl.NumberFormat("en-US", style="currency")
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "INR": "₹",
}

ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW"}


def format_money(amount, currency_code: str | None = "USD") -> str:
    code = (currency_code or "USD").upper()
    places = Decimal("1") if code in ZERO_DECIMAL_CURRENCIES else Decimal("0.01")
    value = Decimal(str(amount or "0")).quantize(places, rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    number = f"{abs(value):,}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{number}"
    return f"{sign}{code} {number}"


def toast(kind: str, title: str, description: str | None = None) -> dict:
    return ToastOut(kind=kind, title=title, description=description).model_dump()


def breadcrumb(*items: tuple[str, str | None]) -> list:
    return [{"label": label, "href": href} for label, href in items]
