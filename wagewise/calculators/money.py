"""Money helpers shared by the calculators."""

from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

_PENNY = Decimal("0.01")


def round2(amount: Decimal) -> Decimal:
    """Round to pence, halves toward positive infinity.

    Positive halves round up and negative halves round toward zero, so
    -1.005 becomes -1.00.
    """
    with localcontext() as ctx:
        # Room for every integer digit plus pence, however large the amount.
        ctx.prec = max(28, amount.adjusted() + 4)
        if amount < 0:
            return -(-amount).quantize(_PENNY, rounding=ROUND_HALF_DOWN)
        return amount.quantize(_PENNY, rounding=ROUND_HALF_UP)


def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    return min(max(value, lower), upper)


def parse_money(raw: Any) -> Decimal | None:
    """Parse a user-entered amount, returning None when it is absent or not a number.

    Commas are read as a decimal separator, so "12,5" is 12.5.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if isinstance(raw, int | float):
        raw = str(raw)
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None
    try:
        value = Decimal(text.replace(",", "."))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def format_gbp(amount: Decimal | float) -> str:
    """Format an amount as pounds sterling, e.g. £1,234.56."""
    value = round2(Decimal(str(amount)))
    if value < 0:
        return f"-£{-value:,.2f}"
    return f"£{abs(value):,.2f}"
