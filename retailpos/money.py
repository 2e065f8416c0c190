"""
Integer-safe money helpers.

VND has no fractional unit, so every derived amount is rounded half-up to a whole
number. Values typed by an operator are coerced rather than rejected; the
`ensure_*` variants are for callers that bypass the coercing API.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Optional

from retailpos.config import get_config
from retailpos.errors import InvalidDiscountError, InvalidQuantityError

# Quick-cash denominations offered next to the exact total
CASH_STEPS = (1_000, 5_000, 10_000, 20_000, 50_000, 100_000, 200_000)


def to_decimal(x: Any) -> Optional[Decimal]:
    """Parse numbers and numeric strings; None for anything non-numeric or non-finite."""
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, Decimal):
        value = x
    elif isinstance(x, (int, float)):
        if isinstance(x, float) and not math.isfinite(x):
            return None
        value = Decimal(str(x))
    elif isinstance(x, str):
        text = x.strip()
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not value.is_finite():
        return None
    return value


def round_half_up(x: Any) -> int:
    """Round to the nearest integer, halves away from zero. Non-numeric input gives 0."""
    value = to_decimal(x)
    if value is None:
        return 0
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(n: int, separator: Optional[str] = None) -> str:
    """Group thousands with the locale separator, e.g. 21600 -> '21.600'."""
    if separator is None:
        separator = get_config().thousands_separator
    amount = round_half_up(n)
    grouped = f"{abs(amount):,}".replace(",", separator)
    return f"-{grouped}" if amount < 0 else grouped


def clamp_percent(x: Any) -> float:
    """Clamp to [0, 100]; non-numeric input (None, '', 'abc', NaN) becomes 0."""
    value = to_decimal(x)
    if value is None:
        return 0.0
    return float(min(Decimal(100), max(Decimal(0), value)))


def coerce_amount(x: Any) -> int:
    """Whole, non-negative amount; non-numeric input becomes 0."""
    return max(0, round_half_up(x))


def ensure_percent(x: Any) -> float:
    value = to_decimal(x)
    if value is None or value < 0 or value > 100:
        raise InvalidDiscountError(f"Discount percent must be within [0, 100], got {x!r}")
    return float(value)


def ensure_quantity(q: Any) -> int:
    if isinstance(q, bool):
        raise InvalidQuantityError(f"Quantity must be a whole number, got {q!r}")
    value = to_decimal(q)
    if value is None or value != value.to_integral_value():
        raise InvalidQuantityError(f"Quantity must be a whole number, got {q!r}")
    quantity = int(value)
    if quantity < 1:
        raise InvalidQuantityError(f"Quantity must be at least 1, got {q!r}")
    return quantity


def apply_percent(amount: int, percent: Any) -> int:
    """round(amount * percent / 100)."""
    return round_half_up(Decimal(amount) * Decimal(str(clamp_percent(percent))) / 100)


def discounted_total(quantity: int, unit_price: int, discount_percent: Any) -> int:
    """round(quantity * unit_price * (1 - discount_percent / 100))."""
    factor = 1 - Decimal(str(clamp_percent(discount_percent))) / 100
    return round_half_up(Decimal(quantity) * Decimal(unit_price) * factor)


def suggest_cash_amounts(total: int, limit: int = 6) -> List[int]:
    """Exact total plus the total rounded up to common banknote steps."""
    total = coerce_amount(total)
    candidates = [total] + [-(-total // step) * step for step in CASH_STEPS]
    suggestions: List[int] = []
    for amount in candidates:
        if amount >= total and amount not in suggestions:
            suggestions.append(amount)
    return suggestions[:limit]
