"""Compact count formatting for likes, views and followers."""

from decimal import ROUND_HALF_UP, Decimal

THOUSANDS_THRESHOLD = 1000
THOUSANDS_SUFFIX = "K"

_ONE_DECIMAL = Decimal("0.1")


def to_string_with_thousands(value: int) -> str:
    """Abbreviate counts of a thousand or more with a "K" suffix.

    The quotient is rounded half-up to one decimal digit and always printed
    with "." as the separator. Counts below the threshold (including
    negative ones) are returned unchanged.

    Args:
        value: Count to format

    Returns:
        Formatted count

    Examples:
        >>> to_string_with_thousands(999)
        '999'

        >>> to_string_with_thousands(1234)
        '1.2K'

        >>> to_string_with_thousands(12099)
        '12.1K'
    """
    if value < THOUSANDS_THRESHOLD:
        return str(value)

    thousands = (Decimal(value) / THOUSANDS_THRESHOLD).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return f"{thousands}{THOUSANDS_SUFFIX}"
