"""Whole-string character class checks.

All three checks are ASCII only and accept the empty string.
"""

import re

DIGITS_PATTERN = re.compile(r"[0-9]*")
ALPHABETIC_PATTERN = re.compile(r"[a-zA-Z]*")
ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]*")


def is_digit_only(value: str) -> bool:
    """Check that every character is a decimal digit 0-9."""
    return DIGITS_PATTERN.fullmatch(value) is not None


def is_alphabetic_only(value: str) -> bool:
    """Check that every character is an ASCII letter."""
    return ALPHABETIC_PATTERN.fullmatch(value) is not None


def is_alphanumeric_only(value: str) -> bool:
    """Check that every character is an ASCII letter or digit.

    Examples:
        >>> is_alphanumeric_only("abc123")
        True

        >>> is_alphanumeric_only("abc 123")
        False
    """
    return ALPHANUMERIC_PATTERN.fullmatch(value) is not None
