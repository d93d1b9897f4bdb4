"""Target curve editor: loudness compensation and its summed response."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from louder.audio_filter import AudioFilter, FilterType
from louder.charts import ChartModel, ChartType, Signal, XYSeries
from louder.frequency_table import FrequencyTable

FrCallback = Callable[[list[float]], object]


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _db(response: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore"):
        return 20 * np.log10(np.abs(response))


class TargetModel(ChartModel):
    """Builds the target frequency response from loudness and harman settings."""

    LOUDNESS_MAX = 20.0

    def __init__(self) -> None:
        super().__init__(ChartType.FREQUENCY_RESPONSE)
        self.values_changed = Signal()
        self.fr_changed = Signal()
        self._frequencies: list[float] = FrequencyTable().frequencies()

        self._loudness = 0.0
        self.harman = 0.0
        self.sum_max = -144.0
        self.sum_min = 144.0

        self._loudness_response: np.ndarray | None = None
        self._harman_response: np.ndarray | None = None
        self._loudness_series: XYSeries | None = None
        self._harman_series: XYSeries | None = None
        self._sum_series: XYSeries | None = None
        self._fr_subscribers: list[FrCallback] = []

    def loudness(self) -> float:
        """Loudness compensation in phon."""
        return self._loudness * 2.0

    def subscribe_fr(self, callback: FrCallback) -> Callable[[], None]:
        """Call callback with every new target response; returns an unsubscriber."""
        self._fr_subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._fr_subscribers:
                self._fr_subscribers.remove(callback)

        return unsubscribe

    def _clamp_loudness(self) -> None:
        self._loudness = min(max(self._loudness, 0.0), self.LOUDNESS_MAX)

    def _set_handle_y(self, index: int, y: float) -> None:
        handles = self.handles
        if handles is None:
            raise ValueError("target model has no handle series")
        handles.replace_point(index, handles.at(index)[0], y)

    def move_handle(self, index: int, x: float, y: float) -> None:
        y_index = _round_half_away(y * 4.0) / 4.0
        if index == 0 and self._loudness != y_index:
            self._loudness = y_index
            self._clamp_loudness()
            self._set_handle_y(index, self._loudness)
            self._compute_loudness_response()
            self._compute_sum_response()
            self.values_changed.emit()
        elif index == 1 and self.harman != y_index:
            self.harman = y_index
            self._set_handle_y(index, self.harman)
            self._compute_harman_response()
            self._compute_sum_response()
            self.values_changed.emit()

    def step_param(self, index: int, x: float, y: float) -> None:
        if index == 0:
            self._loudness += y
            self._clamp_loudness()
            self._set_handle_y(index, self._loudness)
            self._compute_loudness_response()
            self._compute_sum_response()
            self.values_changed.emit()
        elif index == 1:
            self.harman += y
            self._set_handle_y(index, self.harman)
            self._compute_harman_response()
            self._compute_sum_response()
            self.values_changed.emit()

    def set_loudness(self, phon: int) -> None:
        self._loudness = phon / 2.0
        self._compute_loudness_response()
        self._compute_sum_response()
        self.values_changed.emit()

    def set_loudness_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._loudness_series = series
            self._compute_loudness_response()

    def set_harman_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._harman_series = series
            self._compute_harman_response()

    def set_sum_series(self, series: XYSeries | None) -> None:
        if series is not None:
            self._sum_series = series
            self._compute_sum_response()
            self.values_changed.emit()

    def y_min(self) -> float:
        return -6.0

    def y_max(self) -> float:
        return 24.0

    def _compute_loudness_response(self) -> None:
        if self.handles is None:
            return
        loudness = AudioFilter(FilterType.LOUDNESS, 0.0, self._loudness * 2.0, 0.0)
        self._loudness_response = loudness.response(self._frequencies, 1)
        if self._loudness_series is not None:
            self._loudness_series.replace(
                zip(self._frequencies, _db(self._loudness_response).tolist()))

    def _compute_harman_response(self) -> None:
        if self.handles is None:
            return
        harman = AudioFilter(FilterType.LOUDNESS, 0.0, self.harman, 0.0)
        self._harman_response = harman.response(self._frequencies, 1)
        if self._harman_series is not None:
            self._harman_series.replace(
                zip(self._frequencies, _db(self._harman_response).tolist()))

    def _compute_sum_response(self) -> None:
        if self._sum_series is None or self._loudness_response is None:
            return
        fr = _db(self._loudness_response).tolist()
        for callback in list(self._fr_subscribers):
            callback(list(fr))
        self._sum_series.replace(zip(self._frequencies, fr))
        self.sum_max = max([-144.0, *fr])
        self.sum_min = min([144.0, *fr])
        self.fr_changed.emit(list(fr))