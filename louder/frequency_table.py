"""Fractional octave band frequency tables and response interpolation."""

from __future__ import annotations

import math
from bisect import bisect_left, bisect_right
from collections.abc import Mapping

# Mantissas of one decade of the 1/24th octave (Renard R80) series.
_DECADE: tuple[int, ...] = (
    100, 103, 106, 109, 112, 115, 118, 122, 125, 128, 132, 136, 140, 145, 150, 155,
    160, 165, 170, 175, 180, 185, 190, 195, 200, 206, 212, 218, 224, 230, 236, 243,
    250, 258, 265, 272, 280, 290, 300, 307, 315, 325, 335, 345, 355, 365, 375, 387,
    400, 412, 425, 437, 450, 462, 475, 487, 500, 515, 530, 545, 560, 575, 600, 615,
    630, 650, 670, 690, 710, 730, 750, 775, 800, 825, 850, 875, 900, 925, 950, 975,
)

# 272 bands from 12.5 Hz up to 30.7 kHz.
FREQUENCY_TABLE: tuple[float, ...] = (
    tuple(m / 10 for m in _DECADE[8:])
    + tuple(float(m) for m in _DECADE)
    + tuple(m * 10.0 for m in _DECADE)
    + tuple(m * 100.0 for m in _DECADE[:40])
)


def _at(index: int) -> float:
    if not 0 <= index < len(FREQUENCY_TABLE):
        raise IndexError(f"frequency band {index} out of range")
    return FREQUENCY_TABLE[index]


class FrequencyTable:
    """Frequencies of (fractional) octave bands between f_min and f_max."""

    def __init__(self, octave_fraction: int = 24, f_min: float = 20.0, f_max: float = 20000.0):
        self.octave_fraction = octave_fraction
        self._stride = round(24.0 / octave_fraction)
        self._begin = self._octave_band(f_min)
        self._end = self._octave_band(f_max)
        self._frequencies: list[float] | None = None

    def frequencies(self) -> list[float]:
        """Centre frequencies of all bands in range."""
        if self._frequencies is None:
            stop = min(self._end + 1, len(FREQUENCY_TABLE))
            self._frequencies = list(FREQUENCY_TABLE[self._begin:stop:self._stride])
        return self._frequencies

    def interpolate(self, response: Mapping[float, float], shift_to_zero: bool = True) -> list[float]:
        """Resample a frequency->value mapping onto this table's bands."""
        if not response:
            return []
        keys = sorted(response)
        values = [response[k] for k in keys]
        count = len(keys)
        out: list[float] = []
        for band in range(self._begin, self._end + 1, self._stride):
            lo = bisect_left(keys, self._lower_frequency(band))
            hi = bisect_right(keys, self._upper_frequency(band))
            inside = hi - lo
            centre = FREQUENCY_TABLE[band]

            if inside > 1:
                # Several points fall into this band: average them.
                out.append(sum(values[lo:hi]) / inside)
            elif inside < 1 and lo == 0:
                out.append(values[lo])
            elif inside < 1 and hi == count:
                out.append(values[hi - 1])
            elif keys[lo] == centre or lo == 0 or hi == count:
                out.append(values[lo])
            else:
                out.append(self._log_interpolate(keys, values, centre))

        if shift_to_zero:
            peak = max(-144.0, *out)
            out = [value - peak for value in out]
        return out

    @staticmethod
    def _log_interpolate(keys: list[float], values: list[float], x: float) -> float:
        below = bisect_left(keys, x) - 1
        above = bisect_right(keys, x)
        log_x = math.log(x)
        log_lo = math.log(keys[below])
        log_hi = math.log(keys[above])
        weighted = values[below] * (log_hi - log_x) + values[above] * (log_x - log_lo)
        return weighted / (log_hi - log_lo)

    def _octave_band(self, f: float) -> int:
        size = len(FREQUENCY_TABLE)
        index = next((i for i, value in enumerate(FREQUENCY_TABLE) if value >= f), size)
        while index < size - self._stride and FREQUENCY_TABLE[index + self._stride] < f:
            index += self._stride
        if index + self._stride >= size:
            boundary = _at(index)
        else:
            boundary = math.sqrt(FREQUENCY_TABLE[index] * FREQUENCY_TABLE[index + self._stride])
        return index if f <= boundary else index + 1

    def _lower_frequency(self, band: int) -> float:
        return math.sqrt(_at(band) * _at(band - self._stride)) * 0.995

    def _upper_frequency(self, band: int) -> float:
        return math.sqrt(_at(band) * _at(band + self._stride)) * 1.005