"""Two-way crossover designer: low pass, high pass and their sum."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from louder.audio_filter import AudioFilter, FilterType
from louder.charts import ChartModel, ChartType, Signal, XYSeries
from louder.frequency_table import FrequencyTable
from louder.ui_util import f_to_str, f_to_unit


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _db(response: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore"):
        return 20 * np.log10(np.abs(response))


class CrossoverModel(ChartModel):
    """Computes low pass, high pass and summed responses from handle positions."""

    def __init__(self) -> None:
        super().__init__(ChartType.FREQUENCY_RESPONSE)
        self.fr_changed = Signal()
        self._frequencies: list[float] = FrequencyTable().frequencies()

        self.low_pass_f = 0
        self.low_pass_q_db = -3.0
        self.low_pass_g = 0.0
        self.low_pass_order = 0
        self.high_pass_f = 0
        self.high_pass_q_db = -3.0
        self.high_pass_g = 0.0
        self.high_pass_order = 0
        self.inverted = True

        self.sum_max = -144.0
        self.sum_min = 144.0

        self._low_pass_response: np.ndarray | None = None
        self._high_pass_response: np.ndarray | None = None
        self._fr: list[float] = []
        self._low_pass_series: XYSeries | None = None
        self._high_pass_series: XYSeries | None = None
        self._sum_series: XYSeries | None = None

    @property
    def fr(self) -> list[float]:
        return list(self._fr)

    def _frequency(self, index: int) -> float:
        if not 0 <= index < len(self._frequencies):
            raise IndexError(f"frequency index {index} out of range")
        return self._frequencies[index]

    def low_pass_frequency_readout(self) -> str:
        return f_to_str(self._frequency(self.low_pass_f))

    def low_pass_frequency_unit_readout(self) -> str:
        return f_to_unit(self._frequency(self.low_pass_f))

    def low_pass_q(self) -> float:
        return 10 ** (self.low_pass_q_db / 20.0)

    def high_pass_frequency_readout(self) -> str:
        return f_to_str(self._frequency(self.high_pass_f))

    def high_pass_frequency_unit_readout(self) -> str:
        return f_to_unit(self._frequency(self.high_pass_f))

    def high_pass_q(self) -> float:
        return 10 ** (self.high_pass_q_db / 20.0)

    def ripple(self) -> str:
        value = abs(self.sum_max - self.sum_min)
        return f"{value:.1f}" if value < 10.0 else f"{value:.0f}"

    def set_handles(self, series: XYSeries | None) -> None:
        super().set_handles(series)
        handles = self.handles
        if handles is None:
            raise ValueError("crossover needs a handle series")
        lp_x, lp_y = handles.at(0)
        hp_x, hp_y = handles.at(1)
        self.low_pass_f = int(lp_x)
        self.low_pass_q_db = lp_y
        self.high_pass_f = int(hp_x)
        self.high_pass_q_db = hp_y

    def set_low_pass_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._low_pass_series = series
            self._compute_low_pass_response()

    def set_high_pass_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._high_pass_series = series
            self._compute_high_pass_response()

    def set_sum_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._sum_series = series
            self._compute_sum_response()
            self.range_changed.emit()

    def _update_low_pass(self) -> None:
        self._compute_low_pass_response()
        self._compute_sum_response()
        self.range_changed.emit()

    def _update_high_pass(self) -> None:
        self._compute_high_pass_response()
        self._compute_sum_response()
        self.range_changed.emit()

    def _set_gain_handle(self, index: int, gain: float) -> None:
        handles = self.handles
        if handles is not None:
            handles.replace_point(index, handles.at(index)[0], gain)

    def move_handle(self, index: int, x: float, y: float) -> None:
        x_index = _round_half_away(x)
        y_index = _round_half_away(y * 5.0) / 5.0

        if index == 0 and (self.low_pass_f != x_index or self.low_pass_q_db != y_index):
            self.low_pass_f = x_index
            self.low_pass_q_db = y_index - self.low_pass_g
            self._update_low_pass()
        elif index == 1 and (self.high_pass_f != x_index or self.high_pass_q_db != y_index):
            self.high_pass_f = x_index
            self.high_pass_q_db = y_index - self.high_pass_g
            self._update_high_pass()
        elif index == 2 and self.low_pass_g != y_index:
            self.low_pass_g = y_index
            self._set_gain_handle(index, self.low_pass_g)
            self._update_low_pass()
        elif index == 3 and self.high_pass_g != y_index:
            self.high_pass_g = y_index
            self._set_gain_handle(index, self.high_pass_g)
            self._update_high_pass()

    def step_param(self, index: int, x: float, y: float) -> None:
        if index == 0:
            self.low_pass_f = int(self.low_pass_f + x)
            self.low_pass_q_db += y
            self._update_low_pass()
        elif index == 1:
            self.high_pass_f = int(self.high_pass_f + x)
            self.high_pass_q_db += y
            self._update_high_pass()
        elif index == 2:
            self.low_pass_g += y
            self._set_gain_handle(index, self.low_pass_g)
            self._update_low_pass()
        elif index == 3:
            self.high_pass_g += y
            self._set_gain_handle(index, self.high_pass_g)
            self._update_high_pass()

    def set_order(self, index: int, order_index: int) -> None:
        if index == 0:
            self.low_pass_order = order_index
            self._update_low_pass()
        elif index == 1:
            self.high_pass_order = order_index
            self._update_high_pass()

    def invert(self, inverted: bool) -> None:
        self.inverted = bool(inverted)
        self._compute_sum_response()
        self.range_changed.emit()

    def y_min(self) -> float:
        return -18.0

    def y_max(self) -> float:
        return 6.0

    def _points(self, values: Sequence[float]) -> list[tuple[float, float]]:
        return list(zip(self._frequencies, values))

    def _compute_low_pass_response(self) -> None:
        handles = self.handles
        if handles is None:
            return
        handles.replace_point(0, self.low_pass_f, self.low_pass_q_db + self.low_pass_g)
        lp = AudioFilter(FilterType.LOW_PASS, self._frequency(self.low_pass_f), 0.0, self.low_pass_q())
        self._low_pass_response = lp.response(self._frequencies, self.low_pass_order + 1)
        if self._low_pass_series is not None:
            self._low_pass_series.replace(
                self._points(_db(self._low_pass_response) + self.low_pass_g))

    def _compute_high_pass_response(self) -> None:
        handles = self.handles
        if handles is None:
            return
        handles.replace_point(1, self.high_pass_f, self.high_pass_q_db + self.high_pass_g)
        hp = AudioFilter(FilterType.HIGH_PASS, self._frequency(self.high_pass_f), 0.0, self.high_pass_q())
        self._high_pass_response = hp.response(self._frequencies, self.high_pass_order + 1)
        if self._high_pass_series is not None:
            self._high_pass_series.replace(
                self._points(_db(self._high_pass_response) + self.high_pass_g))

    def _compute_sum_response(self) -> None:
        if self._sum_series is None:
            return
        lp, hp = self._low_pass_response, self._high_pass_response
        if lp is None or hp is None:
            return
        sign = -1.0 if self.inverted else 1.0
        self._fr = _db(lp + sign * hp).tolist()
        self.sum_max = max([-144.0, *self._fr])
        self.sum_min = min([144.0, *self._fr])

        lp_factor = 10 ** (self.low_pass_g / 20.0)
        hp_factor = 10 ** (self.high_pass_g / 20.0)
        self._sum_series.replace(
            self._points(_db(lp * lp_factor + sign * hp * hp_factor)))
        self.fr_changed.emit(list(self._fr))