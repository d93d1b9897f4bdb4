"""Real-to-complex and complex-to-real discrete Fourier transforms."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def fft(samples: Sequence[float]) -> np.ndarray:
    """Forward transform of a real signal.

    The result has as many entries as the input. The first ``n // 2 + 1``
    hold the non-redundant half of the spectrum; the rest are zero.
    """
    data = np.asarray(samples, dtype=float)
    n = len(data)
    out = np.zeros(n, dtype=complex)
    if n == 0:
        return out
    half = np.fft.rfft(data)
    out[: len(half)] = half
    return out


def ifft(spectrum: Sequence[complex]) -> np.ndarray:
    """Unnormalised inverse transform back to a real signal.

    The length of ``spectrum`` is the length of the signal; only its first
    ``n // 2 + 1`` entries are read. The output is scaled by ``n``, so that
    ``ifft(fft(x))`` equals ``len(x) * x``.
    """
    data = np.asarray(spectrum, dtype=complex)
    n = len(data)
    if n == 0:
        return np.zeros(0, dtype=float)
    return np.fft.irfft(data[: n // 2 + 1], n) * n