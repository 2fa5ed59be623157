"""Currency labels and Decimal rounding helpers.

Currency is a display label only; amounts are never converted.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

CENT = Decimal("0.01")
TENTH = Decimal("0.1")
MINUTES_PER_HOUR = Decimal("60")

CURRENCIES: Dict[str, Dict[str, str]] = {
    "USD": {"code": "USD", "symbol": "$", "name": "US Dollar", "locale": "en-US"},
    "EUR": {"code": "EUR", "symbol": "€", "name": "Euro", "locale": "en-EU"},
    "DKK": {"code": "DKK", "symbol": "kr", "name": "Danish Krone", "locale": "da-DK"},
}
DEFAULT_CURRENCY = "USD"


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_km(value) -> Decimal:
    return to_decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP)


def minutes_to_hours(minutes: int | None) -> Decimal:
    return Decimal(minutes or 0) / MINUTES_PER_HOUR


def get_currency_symbol(currency: str = DEFAULT_CURRENCY) -> str:
    return CURRENCIES.get(currency, CURRENCIES[DEFAULT_CURRENCY])["symbol"]


def format_currency(amount, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount for display; DKK puts the symbol after the number."""
    symbol = get_currency_symbol(currency)
    formatted = f"{quantize_money(amount):.2f}"
    if currency == "DKK":
        return f"{formatted} {symbol}"
    return f"{symbol}{formatted}"


def currency_options() -> List[Dict[str, str]]:
    return [
        {"value": info["code"], "label": f"{info['name']} ({info['symbol']})"}
        for info in CURRENCIES.values()
    ]
