"""Biquad audio filters (RBJ cookbook, 48 kHz) and their frequency responses."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from collections.abc import Sequence

import numpy as np

SAMPLE_RATE = 48000.0


class FilterType(enum.IntEnum):
    INVALID = 0
    PEAK = 1
    LOW_PASS = 2
    HIGH_PASS = 3
    LOW_SHELF = 4
    HIGH_SHELF = 5
    ALL_PASS = 6
    LOUDNESS = 64


@dataclass
class BiQuad:
    b0: float = 0.0
    b1: float = 0.0
    b2: float = 0.0
    a1: float = 0.0
    a2: float = 0.0


@dataclass
class AudioFilter:
    """A single biquad, or for LOUDNESS a cascade of three biquads."""

    filter_type: FilterType = FilterType.INVALID
    f: float = 0.0
    g: float = 0.0
    q: float = 0.0
    biquad: BiQuad = field(init=False, default_factory=BiQuad)
    filters: list[AudioFilter] = field(init=False, default_factory=list)

    def __init__(self, filter_type: FilterType = FilterType.INVALID, f: float = 0.0,
                 g: float = 0.0, q: float = 0.0):
        self.filter_type = FilterType(filter_type)
        self.f, self.g, self.q = f, g, q
        self.filters = []
        self.biquad = self._design()

    def _design(self) -> BiQuad:
        t = self.filter_type
        if t is FilterType.INVALID:
            return BiQuad(1.0, 0.0, 0.0, 0.0, 0.0)
        if t is FilterType.LOUDNESS:
            g = self.g
            self.filters = [
                AudioFilter(FilterType.PEAK, 35.5, g * 0.3, 0.537),
                AudioFilter(FilterType.PEAK, 100.0, g * 0.225, 0.25),
                AudioFilter(FilterType.HIGH_SHELF, 10000.0, g * 0.225, 0.78),
            ]
            return BiQuad()

        w0 = 2.0 * math.pi * self.f / SAMPLE_RATE
        cos_w0 = math.cos(w0)
        alpha = math.sin(w0) * 0.5 / self.q
        if t is FilterType.PEAK:
            a = 10 ** (self.g / 40.0)
            alpha1, alpha2 = alpha * a, alpha / a
            a0 = 1.0 + alpha2
            b1 = (-2.0 * cos_w0) / a0
            return BiQuad((1.0 + alpha1) / a0, b1, (1.0 - alpha1) / a0, b1, (1.0 - alpha2) / a0)
        if t is FilterType.LOW_PASS:
            a0 = 1.0 + alpha
            b1 = (1.0 - cos_w0) / a0
            return BiQuad(b1 * 0.5, b1, b1 * 0.5, (-2.0 * cos_w0) / a0, (1.0 - alpha) / a0)
        if t is FilterType.HIGH_PASS:
            a0 = 1.0 + alpha
            b1 = -(1.0 + cos_w0) / a0
            return BiQuad(b1 * -0.5, b1, b1 * -0.5, (-2.0 * cos_w0) / a0, (1.0 - alpha) / a0)
        if t is FilterType.LOW_SHELF:
            a = 10 ** (self.g / 40.0)
            alpha2 = 2 * math.sqrt(a) * alpha
            a0 = (a + 1) + (a - 1) * cos_w0 + alpha2
            return BiQuad(
                (a * ((a + 1) - (a - 1) * cos_w0 + alpha2)) / a0,
                (2 * a * ((a - 1) - (a + 1) * cos_w0)) / a0,
                (a * ((a + 1) - (a - 1) * cos_w0 - alpha2)) / a0,
                (-2 * ((a - 1) + (a + 1) * cos_w0)) / a0,
                ((a + 1) + (a - 1) * cos_w0 - alpha2) / a0,
            )
        if t is FilterType.HIGH_SHELF:
            a = 10 ** (self.g / 40.0)
            alpha2 = 2 * math.sqrt(a) * alpha
            a0 = (a + 1) - (a - 1) * cos_w0 + alpha2
            return BiQuad(
                (a * ((a + 1) + (a - 1) * cos_w0 + alpha2)) / a0,
                (-2 * a * ((a - 1) + (a + 1) * cos_w0)) / a0,
                (a * ((a + 1) + (a - 1) * cos_w0 - alpha2)) / a0,
                (2 * ((a - 1) - (a + 1) * cos_w0)) / a0,
                ((a + 1) - (a - 1) * cos_w0 - alpha2) / a0,
            )
        # ALL_PASS
        a0 = 1 + alpha
        b0 = (1 - alpha) / a0
        b1 = (-2 * cos_w0) / a0
        return BiQuad(b0, b1, 1.0, b1, b0)

    def response(self, frequencies: Sequence[float], cascades: int = 1) -> np.ndarray:
        """Complex response at each frequency, raised to the number of cascades."""
        fs = np.asarray(frequencies, dtype=float)
        if self.filters:
            out = np.ones(len(fs), dtype=complex)
            for sub in self.filters:
                out *= sub.response(fs, 1)
            return out
        bq = self.biquad
        z = np.exp(1j * 2.0 * np.pi * fs / SAMPLE_RATE)
        res = (bq.b0 + (bq.b1 + bq.b2 * z) * z) / (1.0 + (bq.a1 + bq.a2 * z) * z)
        if cascades != 1:
            res = res ** cascades
        return res