"""Parametric equalizer: a set of filters fitted against a measured response."""

from __future__ import annotations

import math
import time
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

from louder.audio_filter import AudioFilter, FilterType
from louder.charts import ChartModel, ChartType, Signal, XYSeries
from louder.filter_model import FilterModel
from louder.frequency_table import FrequencyTable
from louder.target import TargetModel

# Bands of the 1/24 octave table per third-octave range step.
_BANDS_PER_RANGE_STEP = 8


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _fixed(value: float, digits: int) -> str:
    quantum = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def _frequency_readout(f: float) -> str:
    if f > 3500.0:
        return _fixed(f / 1000.0, 0) + " kHz"
    if f > 900.0:
        return _fixed(f / 1000.0, 1) + " kHz"
    return _fixed(f, 0) + " Hz"


def _ys(series: XYSeries) -> list[float]:
    return [y for _, y in series]


class EqualizerModel(ChartModel):
    """Manages equalizer filters, their summed response and the filtered measurement."""

    def __init__(self, target_model: TargetModel) -> None:
        super().__init__(ChartType.FREQUENCY_RESPONSE)
        self.filters_changed = Signal()
        self.status_message = Signal()
        self._target_model = target_model
        self._frequencies: list[float] = FrequencyTable().frequencies()
        self._range_table: list[float] = FrequencyTable(3, 20.0).frequencies()
        self._range: tuple[int, int] = (3, 28)

        self.sum_max = -144.0
        self.sum_min = 144.0
        self.last_optimize_ms: int | None = None

        self._filter_sum_series: XYSeries | None = None
        self._target_series: XYSeries | None = None
        self._filtered_response_series: XYSeries | None = None
        self._filters: list[FilterModel] = []

        self._measured: list[float] | None = None
        self._filter_sum: list[float] | None = None
        self._target_fr: list[float] | None = None
        self._level: int | None = None

        target_model.subscribe_fr(self._on_target_fr)

    @property
    def frequencies(self) -> list[float]:
        """Third-octave frequencies addressed by the range sliders."""
        return list(self._range_table)

    # Reactive inputs

    def set_measured_response(self, response: Sequence[float]) -> None:
        """Provide the calibrated measured response on the 1/24 octave table."""
        values = [float(v) for v in response]
        if len(values) != len(self._frequencies):
            raise ValueError(
                f"measured response needs {len(self._frequencies)} values, got {len(values)}")
        self._measured = values
        self._update_filtered_measurement()

    def _publish_filter_sum(self, total: list[float]) -> None:
        self._filter_sum = total
        if self._filter_sum_series is not None:
            self._filter_sum_series.replace(zip(self._frequencies, total))
        self._update_filtered_measurement()

    def _update_filtered_measurement(self) -> None:
        if self._measured is None or self._filter_sum is None:
            return
        filtered = [m + s for m, s in zip(self._measured, self._filter_sum, strict=True)]
        if self._filtered_response_series is not None:
            self._filtered_response_series.replace(zip(self._frequencies, filtered))

    def _on_target_fr(self, fr: list[float]) -> None:
        self._target_fr = list(fr)
        self._update_target()

    def _update_target(self) -> None:
        if self._target_fr is None or self._level is None:
            return
        level = self._level
        target = [value + level for value in self._target_fr]
        if self._target_series is not None:
            self._target_series.replace(zip(self._frequencies, target))

    # Frequency range

    def min_frequency_slider(self) -> float:
        return float(self._range[0])

    def max_frequency_slider(self) -> float:
        return float(self._range[1])

    def set_min_frequency_slider(self, value: float) -> None:
        first = int(min(value, float(len(self._range_table) - 2)))
        second = self._range[1]
        if second <= first:
            second = first + 1
        self._range = (first, second)
        self.range_changed.emit()

    def set_max_frequency_slider(self, value: float) -> None:
        second = int(max(value, 1.0))
        first = self._range[0]
        if first >= second:
            first = second - 1
        self._range = (first, second)
        self.range_changed.emit()

    def min_frequency_readout(self) -> str:
        return _frequency_readout(self._range_table[self._range[0]])

    def max_frequency_readout(self) -> str:
        return _frequency_readout(self._range_table[self._range[1]])

    def _range_indices(self) -> range:
        first, second = self._range
        return range(first * _BANDS_PER_RANGE_STEP, second * _BANDS_PER_RANGE_STEP)

    # Filters

    def filters(self) -> list[FilterModel]:
        return list(self._filters)

    def filter_count(self) -> int:
        return len(self._filters)

    def filter(self, index: int) -> FilterModel:
        if not 0 <= index < len(self._filters):
            raise IndexError(f"filter {index} out of range")
        return self._filters[index]

    def set_filter_sum_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._filter_sum_series = series
            self.compute_filter_sum()
            self.range_changed.emit()

    def set_target_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._target_series = series
            self.compute_filter_sum()
            self.range_changed.emit()

    def set_filtered_measurement_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._filtered_response_series = series
            self.compute_filter_sum()
            self.range_changed.emit()

    def add_filter(self, response: XYSeries | None = None) -> FilterModel:
        """Add a peaking filter placed at the largest overshoot, if any."""
        handles = self.handles
        if handles is None:
            raise ValueError("equalizer has no handle series")
        if response is None:
            response = XYSeries()

        f, g, q = 120, -3.0, 3.0
        overshoot = self._find_max_overshoot()
        if overshoot is not None:
            f, g = overshoot
            q = self._find_q(f, g)

        handles.append(f, g)
        handles.append(f - q, g / 2)
        handles.append(f + q, g / 2)
        model = FilterModel(self, FilterType.INVALID, f, q, g, response)
        self._filters.append(model)
        model.set_type(FilterType.PEAK)

        self.filters_changed.emit()
        self.compute_filter_sum()
        return model

    def remove_filter(self, index: int) -> None:
        self.filter(index)
        handles = self.handles
        if handles is None:
            raise ValueError("equalizer has no handle series")
        handles.remove_points(index * 3, 3)
        del self._filters[index]
        self.filters_changed.emit()
        self.compute_filter_sum()

    def set_type(self, index: int, filter_type: int) -> None:
        self.filter(index).set_type(filter_type)
        self.compute_filter_sum()

    def step_f(self, index: int, delta: int) -> None:
        self.filter(index).step_f(delta)
        self.compute_filter_sum()

    def step_q(self, index: int, delta: float) -> None:
        self.filter(index).step_q(delta)
        self.compute_filter_sum()

    def step_g(self, index: int, delta: float) -> None:
        self.filter(index).step_g(delta)
        self.compute_filter_sum()

    def set_level(self, value: int) -> None:
        self._level = value
        self._update_target()

    def y_min(self) -> float:
        return -36.0

    def y_max(self) -> float:
        return 12.0

    # Handles

    def move_handle(self, index: int, x: float, y: float) -> None:
        if index % 3 == 1:
            self._move_left_handle(index, x)
            return
        if index % 3 == 2:
            self._move_right_handle(index, x)
            return
        model = self.filter(index // 3)
        x_index = int(_round_half_away(x))
        y_index = _round_half_away(y * 5.0) / 5.0
        model.on_main_handle_moved(x_index, y_index)
        self.compute_filter_sum()

    def _move_left_handle(self, index: int, x: float) -> None:
        model = self.filter(index // 3)
        model.on_left_handle_moved(_round_half_away(x * 2.0) / 2.0)
        self.compute_filter_sum()

    def _move_right_handle(self, index: int, x: float) -> None:
        model = self.filter(index // 3)
        model.on_right_handle_moved(_round_half_away(x * 2.0) / 2.0)
        self.compute_filter_sum()

    # Computation

    def compute_filter_sum(self) -> None:
        """Sum all filter responses in dB and publish the result."""
        if self._filter_sum_series is None:
            return
        n = len(self._frequencies)
        total = np.zeros(n)
        for model in self._filters:
            ys = _ys(model.response())
            if len(ys) != n:
                raise IndexError(f"filter response has {len(ys)} points, expected {n}")
            total += np.asarray(ys)
        values = total.tolist()
        self._publish_filter_sum(values)
        self.sum_max = max([-144.0, *values])
        self.sum_min = min([144.0, *values])
        self.range_changed.emit()

    def _find_max_overshoot(self) -> tuple[int, float] | None:
        filtered, target = self._filtered_response_series, self._target_series
        if filtered is None or len(filtered) == 0 or target is None or len(target) == 0:
            return None
        f_max, g_max = 0, 0.0
        for i in self._range_indices():
            g = _round_half_away((filtered.at(i)[1] - target.at(i)[1]) * 5.0) / 5.0
            if g_max < g:
                f_max, g_max = i, g
        if f_max != 0 and g_max != 0.0:
            return f_max, -g_max
        return None

    def _find_q(self, f: int, g: float) -> float:
        min_deviation = math.inf
        for i in range(1, 81):
            deviation = self._deviation_with_filter(f, g, i)
            if deviation <= min_deviation:
                min_deviation = deviation
            else:
                return float(max(i - 1, 1))
        return 80.0

    def _series_pair(self) -> tuple[XYSeries, XYSeries]:
        filtered, target = self._filtered_response_series, self._target_series
        if filtered is None or target is None:
            raise ValueError("equalizer needs filtered measurement and target series")
        return filtered, target

    def _deviation_with_filter(self, f: int, g: float, q: int) -> float:
        filtered, target = self._series_pair()
        pow2n = 2 ** (q / 12.0)
        q_factor = math.sqrt(pow2n) / (pow2n - 1)
        peak = AudioFilter(FilterType.PEAK, self._frequencies[f], g, q_factor)
        response = peak.response(self._frequencies, 1)
        with np.errstate(divide="ignore"):
            gains = 20 * np.log10(np.abs(response))
        return sum(
            abs(filtered.at(j)[1] - target.at(j)[1] + gains[j]) for j in self._range_indices())

    def _deviation(self) -> float:
        filtered, target = self._series_pair()
        return sum(abs(filtered.at(j)[1] - target.at(j)[1]) for j in self._range_indices())

    def optimize(self) -> None:
        """Search the neighbourhood of each filter for parameters closest to the target."""
        start = time.perf_counter()
        for model in self._filters:
            min_deviation = math.inf
            min_q = max(1, int(model.q_index) - 2)
            max_q = min(80, int(model.q_index) + 2)
            min_f = max(8, model.f_index - 2)
            max_f = min(248, model.f_index + 2)
            min_g = model.gain - 0.4
            max_g = model.gain + 0.401

            best_f, best_q, best_g = 0, 0, 0.0
            for f in range(min_f, max_f + 1):
                for q in range(min_q, max_q + 1):
                    g = min_g
                    while g <= max_g:
                        model.f_index = f
                        model.q_index = q
                        model.gain = g
                        model.compute_response()
                        self.compute_filter_sum()
                        deviation = self._deviation()
                        if deviation < min_deviation:
                            min_deviation = deviation
                            best_f, best_q, best_g = f, q, g
                        g += 0.2

            model.f_index = best_f
            model.q_index = best_q
            model.gain = best_g
            model.compute_response()
            model.values_changed.emit()

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        self.last_optimize_ms = elapsed_ms
        self.status_message.emit(f"Optimize took {elapsed_ms} ms", 3000)
        self.filters_changed.emit()
        self.compute_filter_sum()