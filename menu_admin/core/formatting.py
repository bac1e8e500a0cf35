"""Display-only helpers for menu items."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from menu_admin.config import get_settings


def format_number_id(amount: float | int | Decimal) -> str:
    """Group with '.' and use ',' for decimals, keeping at most three fraction digits."""
    value = Decimal(str(amount)).quantize(Decimal("0.001"), rounding=ROUND_HALF_EVEN)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):f}".partition(".")
    grouped = f"{int(whole):,}".replace(",", ".")
    fraction = fraction.rstrip("0")
    return f"{sign}{grouped},{fraction}" if fraction else f"{sign}{grouped}"


def format_price(amount: float | int | Decimal, symbol: str | None = None) -> str:
    """Render a price like 'Rp 25.000'."""
    if symbol is None:
        symbol = get_settings().currency_symbol
    return f"{symbol} {format_number_id(amount)}"
