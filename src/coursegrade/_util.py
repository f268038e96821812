"""Private helper utilities."""

import math
import typing


def is_missing(x) -> bool:
    """True if `x` is `None` or a float NaN."""
    if x is None:
        return True
    try:
        return math.isnan(x)
    except TypeError:
        return False


def optional_float(x) -> typing.Optional[float]:
    """Convert a number to a float, mapping `None` and NaN to `None`."""
    if is_missing(x):
        return None
    return float(x)
