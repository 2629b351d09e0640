"""Playback/elapsed time formatting.

Converts a duration in milliseconds to a clock string such as "01:01"
or "1:01:01".
"""

# Milliseconds in common time units
MILLIS_PER_SECOND = 1000
MILLIS_PER_MINUTE = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE

ZERO_TIME = "00:00"


def to_displayable_time_string(millis: int) -> str:
    """Convert milliseconds to H:MM:SS, or MM:SS when under one hour.

    Hours are not padded and not wrapped at 24. Durations of zero or less
    render as "00:00".

    Args:
        millis: Duration in milliseconds

    Returns:
        Clock string

    Examples:
        >>> to_displayable_time_string(61_000)
        '01:01'

        >>> to_displayable_time_string(3_661_000)
        '1:01:01'

        >>> to_displayable_time_string(-5)
        '00:00'
    """
    if millis <= 0:
        return ZERO_TIME

    millis = int(millis)
    hours = millis // MILLIS_PER_HOUR
    minutes = (millis // MILLIS_PER_MINUTE) % 60
    seconds = (millis // MILLIS_PER_SECOND) % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
