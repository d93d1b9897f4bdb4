"""Editing strategies that map equalizer handle movements onto filter parameters."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from louder.audio_filter import FilterType

if TYPE_CHECKING:
    from louder.filter_model import FilterModel

# Position used to move a handle out of the visible chart area.
HIDDEN_X = -99
HIDDEN_Y = 99.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _octave_q(q_index: float) -> float:
    """Q factor of a bandwidth of q_index twenty-fourths of an octave... in semitone steps."""
    pow2n = 2 ** (q_index / 12.0)
    if pow2n == 1.0:
        return math.inf
    return math.sqrt(pow2n) / (pow2n - 1)


class AbstractStrategy(ABC):
    """Common base: access to the edited filter and its three chart handles."""

    _frequency_available = True
    _q_available = True
    _gain_available = True

    def __init__(self, eq: Any, filter_model: FilterModel) -> None:
        self._eq = eq
        self._filter = filter_model

    # Handle positions in the equalizer's handle series: three per filter.
    def _base_index(self) -> int:
        for position, candidate in enumerate(self._eq.filters()):
            if candidate is self._filter:
                return position * 3
        raise ValueError("filter is not part of the equalizer")

    def _move_main_handle(self, x: float, y: float) -> None:
        self._eq.handles.replace_point(self._base_index(), int(x), y)

    def _move_left_handle(self, x: float, y: float) -> None:
        self._eq.handles.replace_point(self._base_index() + 1, x, y)

    def _move_right_handle(self, x: float, y: float) -> None:
        self._eq.handles.replace_point(self._base_index() + 2, x, y)

    @property
    def _type(self) -> FilterType:
        return FilterType(self._filter.type())

    @abstractmethod
    def init(self, previous: Any) -> None:
        """Called each time this strategy becomes active."""

    def on_main_handle_moved(self, f_index: int, y: float) -> None:
        """React to the main handle; y is gain for peaking filters, else the Q index."""

    def on_left_handle_moved(self, q_index: float) -> None:
        """React to the left handle."""

    def on_right_handle_moved(self, q_index: float) -> None:
        """React to the right handle."""

    @abstractmethod
    def q(self) -> float:
        """Current Q factor."""

    @abstractmethod
    def step_q(self, delta: float) -> None:
        """Increment or decrement Q by delta."""

    def is_frequency_available(self) -> bool:
        return self._frequency_available

    def is_q_available(self) -> bool:
        return self._q_available

    def is_gain_available(self) -> bool:
        return self._gain_available

    @abstractmethod
    def update_handles(self) -> None:
        """Place the filter's handles according to frequency, gain and Q."""


class LowHighPassStrategy(AbstractStrategy):
    """Low and high pass: main handle sets frequency and Q in dB; no gain."""

    _gain_available = False

    def init(self, previous: Any) -> None:
        self._filter.q_index = _clamp(self._filter.q_index, -36.0, 12.0)
        self._move_left_handle(HIDDEN_X, HIDDEN_Y)
        self._move_right_handle(HIDDEN_X, HIDDEN_Y)
        self.update_handles()

    def on_main_handle_moved(self, f_index: int, y: float) -> None:
        if self._filter.f_index != f_index or self._filter.q_index != y:
            self._filter.f_index = f_index
            self._filter.q_index = y

    def q(self) -> float:
        return 10 ** (self._filter.q_index / 20.0)

    def step_q(self, delta: float) -> None:
        self._filter.q_index -= delta

    def update_handles(self) -> None:
        self._move_main_handle(self._filter.f_index, self._filter.q_index)


class NoneStrategy(AbstractStrategy):
    """No editable parameters; all handles are hidden."""

    _frequency_available = False
    _q_available = False
    _gain_available = False

    def __init__(self, eq: Any, filter_model: FilterModel) -> None:
        super().__init__(eq, filter_model)
        self._prev_q = math.nan

    def init(self, previous: Any) -> None:
        self._move_main_handle(HIDDEN_X, HIDDEN_Y)
        self._move_left_handle(HIDDEN_X, HIDDEN_Y)
        self._move_right_handle(HIDDEN_X, HIDDEN_Y)
        self._prev_q = previous.q()

    def q(self) -> float:
        # Shown for display only: the Q of the previous filter type.
        return self._prev_q

    def step_q(self, delta: float) -> None:
        pass

    def update_handles(self) -> None:
        pass


class PeakingStrategy(AbstractStrategy):
    """Peaking filter: main handle sets frequency and gain, side handles bandwidth."""

    def init(self, previous: Any) -> None:
        self._filter.gain = _clamp(self._filter.gain, -36.0, 12.0)
        self._filter.q_index = _clamp(self._filter.q_index, 1.0, 120.0)
        self.update_handles()

    def on_main_handle_moved(self, f_index: int, y: float) -> None:
        if self._filter.f_index != f_index or self._filter.gain != y:
            self._filter.f_index = f_index
            self._filter.gain = y

    def q(self) -> float:
        return _octave_q(self._filter.q_index)

    def step_q(self, delta: float) -> None:
        self._filter.q_index += delta

    def update_handles(self) -> None:
        f_index, q_index, gain = self._filter.f_index, self._filter.q_index, self._filter.gain
        self._move_main_handle(f_index, gain)
        self._move_left_handle(f_index - q_index, gain / 2)
        self._move_right_handle(f_index + q_index, gain / 2)


class ShelvingStrategy(AbstractStrategy):
    """Shelving filter: main handle sits at half the shelf gain."""

    def init(self, previous: Any) -> None:
        self._filter.q_index = _clamp(self._filter.q_index, 1.0, 120.0)
        self.update_handles()

    def on_main_handle_moved(self, f_index: int, y: float) -> None:
        gain = y * 2.0
        if self._filter.f_index != f_index or self._filter.gain != gain:
            self._filter.f_index = f_index
            self._filter.gain = gain

    def q(self) -> float:
        return _octave_q(self._filter.q_index)

    def step_q(self, delta: float) -> None:
        self._filter.q_index += delta

    def update_handles(self) -> None:
        f_index, q_index, gain = self._filter.f_index, self._filter.q_index, self._filter.gain
        self._move_main_handle(f_index, gain / 2.0)
        if self._type is FilterType.LOW_SHELF:
            self._move_left_handle(f_index - q_index, gain)
            self._move_right_handle(f_index + q_index, 0.0)
        else:
            self._move_left_handle(f_index - q_index, 0.0)
            self._move_right_handle(f_index + q_index, gain)