"""Extension helpers for mobile GUI code.

Formatting, unit conversion, date handling and lifecycle-scoped event
collection.
"""

from ui_extensions.models import LifecycleEvent, LifecycleState
from ui_extensions.services import (
    BroadcastStream,
    CollectorEffect,
    DensityProvider,
    Lifecycle,
    LifecycleError,
    StaticDensityProvider,
    collect_with_lifecycle,
    repeat_on_lifecycle,
)
from ui_extensions.utils import (
    DEFAULT_DATE_PATTERN,
    DatePatternError,
    dp_to_px,
    is_alphabetic_only,
    is_alphanumeric_only,
    is_digit_only,
    px_to_dp,
    to_date,
    to_displayable_time_string,
    to_string_format,
    to_string_with_thousands,
)

__version__ = "0.1.0"

__all__ = [
    "BroadcastStream",
    "CollectorEffect",
    "DEFAULT_DATE_PATTERN",
    "DatePatternError",
    "DensityProvider",
    "Lifecycle",
    "LifecycleError",
    "LifecycleEvent",
    "LifecycleState",
    "StaticDensityProvider",
    "collect_with_lifecycle",
    "dp_to_px",
    "is_alphabetic_only",
    "is_alphanumeric_only",
    "is_digit_only",
    "px_to_dp",
    "repeat_on_lifecycle",
    "to_date",
    "to_displayable_time_string",
    "to_string_format",
    "to_string_with_thousands",
]
