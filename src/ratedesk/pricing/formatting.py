"""Display formatting for currency and impression counts."""

from decimal import ROUND_HALF_UP, Decimal

_WHOLE = Decimal("1")
_ONE_PLACE = Decimal("0.1")


def format_currency(value: Decimal | float | int) -> str:
    """Format a value as whole US dollars, e.g. ``$1,235``.

    Rounds half-up to zero decimal places and never abbreviates.

    Args:
        value: The amount in dollars.

    Returns:
        The formatted string, with a leading minus sign for negatives.
    """
    amount = Decimal(str(value)).quantize(_WHOLE, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def format_compact_number(value: Decimal | float | int) -> str:
    """Abbreviate a count: ``1.5M`` at a million and up, ``250K`` at a thousand.

    Millions keep one decimal place, thousands none; smaller values are
    printed as whole numbers.

    Args:
        value: The count to format.

    Returns:
        The abbreviated string.
    """
    number = Decimal(str(value))
    if number >= 1_000_000:
        millions = (number / Decimal("1000000")).quantize(_ONE_PLACE, rounding=ROUND_HALF_UP)
        return f"{millions}M"
    if number >= 1_000:
        thousands = (number / Decimal("1000")).quantize(_WHOLE, rounding=ROUND_HALF_UP)
        return f"{thousands}K"
    return f"{number.quantize(_WHOLE, rounding=ROUND_HALF_UP)}"
