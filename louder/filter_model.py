"""A single equalizer filter with its editing strategy and response curve."""

from __future__ import annotations

from typing import Any

import numpy as np

from louder.audio_filter import AudioFilter, FilterType
from louder.charts import Signal, XYSeries
from louder.frequency_table import FrequencyTable
from louder.strategies import (
    AbstractStrategy,
    LowHighPassStrategy,
    NoneStrategy,
    PeakingStrategy,
    ShelvingStrategy,
)


class FilterModel:
    """One equalizer band; parameters are indices into the 1/24 octave table."""

    def __init__(self, eq: Any, filter_type: FilterType, f: int, q: float, g: float,
                 response: XYSeries) -> None:
        self._eq = eq
        self._filter_type = FilterType(filter_type)
        self.f_index = int(f)
        self.q_index = float(q)
        self.gain = float(g)
        self._response = response
        self._frequencies: list[float] = FrequencyTable().frequencies()

        self.values_changed = Signal()
        self.name_changed = Signal()

        self._low_high_pass = LowHighPassStrategy(eq, self)
        self._none = NoneStrategy(eq, self)
        self._peaking = PeakingStrategy(eq, self)
        self._shelving = ShelvingStrategy(eq, self)
        self._strategy: AbstractStrategy = self._none

    def type(self) -> int:
        return int(self._filter_type)

    def set_type(self, filter_type: int) -> None:
        """Switch the filter type and activate the matching strategy."""
        new_type = FilterType(filter_type)
        if new_type is self._filter_type:
            return
        self._filter_type = new_type
        previous = self._strategy
        if new_type is FilterType.PEAK:
            self._strategy = self._peaking
        elif new_type in (FilterType.LOW_PASS, FilterType.HIGH_PASS):
            self._strategy = self._low_high_pass
        elif new_type in (FilterType.LOW_SHELF, FilterType.HIGH_SHELF):
            self._strategy = self._shelving
        else:
            self._strategy = self._none
        self._strategy.init(previous)
        self.values_changed.emit()
        self.compute_response()

    def f_as_string(self) -> str:
        from louder.ui_util import f_to_str
        return f_to_str(self.f())

    def f_unit(self) -> str:
        from louder.ui_util import f_to_unit
        return f_to_unit(self.f())

    def f(self) -> float:
        if not 0 <= self.f_index < len(self._frequencies):
            raise IndexError(f"frequency index {self.f_index} out of range")
        return self._frequencies[self.f_index]

    def q(self) -> float:
        return self._strategy.q()

    def g(self) -> float:
        return self.gain

    def is_frequency_available(self) -> bool:
        return self._strategy.is_frequency_available()

    def is_q_available(self) -> bool:
        return self._strategy.is_q_available()

    def is_gain_available(self) -> bool:
        return self._strategy.is_gain_available()

    def response(self) -> XYSeries:
        return self._response

    def on_main_handle_moved(self, x: int, y: float) -> None:
        self._strategy.on_main_handle_moved(x, y)
        self.values_changed.emit()
        self.compute_response()

    def on_left_handle_moved(self, q_index: float) -> None:
        self.set_q(abs(self.f_index - q_index))

    def on_right_handle_moved(self, q_index: float) -> None:
        self.set_q(abs(self.f_index - q_index))

    def set_q(self, q: float) -> None:
        if q != self.q_index:
            self.q_index = q
            self.values_changed.emit()
            self.compute_response()

    def step_f(self, delta: int) -> None:
        self.f_index = max(0, min(self.f_index + int(delta), len(self._frequencies) - 1))
        self.values_changed.emit()
        self.compute_response()

    def step_q(self, delta: float) -> None:
        self._strategy.step_q(delta)
        self.values_changed.emit()
        self.compute_response()

    def step_g(self, delta: float) -> None:
        self.gain += delta
        self.values_changed.emit()
        self.compute_response()

    def compute_response(self) -> None:
        """Recompute the magnitude response in dB and refresh the equalizer sum."""
        self._strategy.update_handles()
        audio_filter = AudioFilter(self._filter_type, self.f(), self.gain, self.q())
        response = audio_filter.response(self._frequencies, 1)
        with np.errstate(divide="ignore", invalid="ignore"):
            magnitude = 20 * np.log10(np.abs(response))
        self._response.replace(zip(self._frequencies, magnitude.tolist()))
        self._eq.compute_filter_sum()