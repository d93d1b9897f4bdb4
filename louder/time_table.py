"""Step-wise rounding of millisecond values for time axis controls."""

import math

# threshold -> step, checked from the largest threshold downwards
_STEPS = (
    (500.0, 50.0),
    (200.0, 20.0),
    (100.0, 10.0),
    (50.0, 5.0),
    (20.0, 2.0),
    (10.0, 1.0),
    (5.0, 0.5),
    (2.0, 0.2),
    (1.0, 0.1),
    (0.0, 0.1),
)


def _round(ms: float, to_lower: bool) -> float:
    ms = ms - 0.05 if to_lower else ms + 0.05
    for threshold, step in _STEPS:
        if not to_lower and ms >= threshold:
            return math.floor((ms + step) / step) * step
        if to_lower and ms > threshold:
            return math.ceil((ms - step) / step) * step
    return 0.0


def lower(ms: float) -> float:
    """Next smaller step value below ms."""
    return _round(ms, True)


def upper(ms: float) -> float:
    """Next larger step value above ms."""
    return _round(ms, False)