"""Formatting, parsing and conversion helpers."""

from ui_extensions.utils.count_format import to_string_with_thousands
from ui_extensions.utils.dates import (
    DEFAULT_DATE_PATTERN,
    DatePatternError,
    to_date,
    to_string_format,
)
from ui_extensions.utils.text import (
    is_alphabetic_only,
    is_alphanumeric_only,
    is_digit_only,
)
from ui_extensions.utils.time_format import to_displayable_time_string
from ui_extensions.utils.units import dp_to_px, px_to_dp

__all__ = [
    # Number formatting
    "to_displayable_time_string",
    "to_string_with_thousands",
    # String classifiers
    "is_digit_only",
    "is_alphabetic_only",
    "is_alphanumeric_only",
    # Dates
    "DEFAULT_DATE_PATTERN",
    "DatePatternError",
    "to_date",
    "to_string_format",
    # Units
    "px_to_dp",
    "dp_to_px",
]
