"""Fast approximations to sine/cosine and square root."""

from __future__ import annotations

import math
import struct

import numpy as np

K_PI = math.pi
K_PI_2 = math.pi / 2


def fastest_sincos(r: float) -> tuple[float, float]:
    """Crude sine/cosine pair; r must be in 0..pi."""
    c = 0.70710678118654752440
    v = (2 - 4 * c) * r * r + c
    if r < K_PI_2:
        return v + r, v - r
    return r + v, r - v


def _wrap(x: float) -> float:
    if x < -K_PI:
        return x + 2 * K_PI
    if x > K_PI:
        return x - 2 * K_PI
    return x


def _parabola(x: float) -> float:
    if x < 0:
        return 1.27323954 * x + 0.405284735 * x * x
    return 1.27323954 * x - 0.405284735 * x * x


def _refine(s: float) -> float:
    if s < 0:
        return 0.225 * (s * -s - s) + s
    return 0.225 * (s * s - s) + s


def _cos_arg(x: float) -> float:
    x += K_PI_2
    return x - 2 * K_PI if x > K_PI else x


def faster_sincos(x: float) -> tuple[float, float]:
    """Low precision sine/cosine pair."""
    x = _wrap(x)
    return _parabola(x), _parabola(_cos_arg(x))


def fast_sincos(x: float) -> tuple[float, float]:
    """Higher precision sine/cosine pair."""
    x = _wrap(x)
    return _refine(_parabola(x)), _refine(_parabola(_cos_arg(x)))


def fast_sqrt1(x: float) -> float:
    """Square root by halving the exponent of a double."""
    (i,) = struct.unpack("<q", struct.pack("<d", x))
    i = ((1 << 61) + (i >> 1) - (1 << 51)) & 0xFFFFFFFFFFFFFFFF
    return struct.unpack("<d", struct.pack("<Q", i))[0]


def fast_sqrt1f(x: float) -> float:
    """Single precision variant of fast_sqrt1."""
    (i,) = struct.unpack("<i", struct.pack("<f", x))
    i = ((1 << 29) + (i >> 1) - (1 << 22)) & 0xFFFFFFFF
    return struct.unpack("<f", struct.pack("<I", i))[0]


def fast_sqrt2(x: float) -> float:
    v = fast_sqrt1(x)
    return 0.5 * (v + x / v)


def fast_sqrt2f(x: float) -> float:
    xf = np.float32(x)
    v = np.float32(fast_sqrt1f(x))
    return float(np.float32(0.5) * (v + xf / v))


def fast_sqrt3(x: float) -> float:
    v = fast_sqrt1(x)
    v = v + x / v
    return 0.25 * v + x / v


def fast_sqrt3f(x: float) -> float:
    xf = np.float32(x)
    v = np.float32(fast_sqrt1f(x))
    v = v + xf / v
    return float(np.float32(0.25) * v + xf / v)