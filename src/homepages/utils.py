# ABOUTME: Small coercion helpers for request and store values.
# ABOUTME: absint mirrors the host's "absolute integer" sanitizer used for ids and page numbers.

from typing import Any


def absint(value: Any) -> int:
    """Coerce a value to a non-negative integer.

    Anything that cannot be read as an integer becomes ``0``.

    Examples:
        >>> absint("12")
        12
        >>> absint("-3")
        3
        >>> absint(None)
        0
    """
    if isinstance(value, bool):
        return int(value)
    try:
        return abs(int(value))
    except (TypeError, ValueError):
        pass
    try:
        return abs(int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0
