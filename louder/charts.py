"""Chart axis ranges, data series and the base chart model."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Iterable, Iterator

from louder.frequency_table import FrequencyTable


class Calibration(enum.IntEnum):
    NONE = 0
    CAL_0 = 1
    CAL_90 = 2


class Signal:
    """A minimal notification hook: connected callables are called on emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., object]] = []

    def connect(self, slot: Callable[..., object]) -> None:
        self._slots.append(slot)

    def emit(self, *args: object) -> None:
        for slot in list(self._slots):
            slot(*args)


class XYSeries:
    """An ordered list of (x, y) points."""

    def __init__(self, points: Iterable[tuple[float, float]] = ()) -> None:
        self._points: list[tuple[float, float]] = [(float(x), float(y)) for x, y in points]

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._points):
            raise IndexError(f"point {index} out of range")

    def append(self, x: float, y: float) -> None:
        self._points.append((float(x), float(y)))

    def replace(self, points: Iterable[tuple[float, float]]) -> None:
        self._points = [(float(x), float(y)) for x, y in points]

    def replace_point(self, index: int, x: float, y: float) -> None:
        self._check(index)
        self._points[index] = (float(x), float(y))

    def at(self, index: int) -> tuple[float, float]:
        self._check(index)
        return self._points[index]

    def remove_points(self, index: int, count: int) -> None:
        if count < 0 or index < 0 or index + count > len(self._points):
            raise IndexError(f"cannot remove {count} points at {index}")
        del self._points[index:index + count]

    def clear(self) -> None:
        self._points.clear()

    @property
    def points(self) -> list[tuple[float, float]]:
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(list(self._points))


class AbstractChart:
    """Axis range of a chart; zooming and panning do nothing by default."""

    def __init__(self) -> None:
        self.x_min = 0.0
        self.x_max = 0.0
        self.y_min = -1.0
        self.y_max = 1.0
        self.tick_interval = 10

    def reset(self) -> None:
        pass

    def zoom(self, factor: float) -> None:
        pass

    def pan(self, amount: float) -> None:
        pass


class LinChart(AbstractChart):
    """Linear time axis in milliseconds, bounded to -200..800."""

    LOWER_BOUND = -200.0
    UPPER_BOUND = 800.0

    def __init__(self) -> None:
        super().__init__()
        self.x_min = self.LOWER_BOUND
        self.x_max = self.UPPER_BOUND
        self.y_min = -1.05
        self.y_max = 1.05
        self.tick_interval = 100

    def zoom(self, factor: float) -> None:
        span = self.x_max - self.x_min
        if factor > 1.0 and span <= 50.0:
            return
        if factor < 1.0 and span >= 1000.0:
            return
        self.x_min /= factor
        self.x_max /= factor
        interval = int(math.floor((self.x_max - self.x_min) / 50.0) * 5.0)
        self.tick_interval = max(interval, 5)

    def pan(self, amount: float) -> None:
        distance = self.x_max - self.x_min
        self.x_min = max(self.x_min + amount * distance, self.LOWER_BOUND)
        self.x_max = min(self.x_max + amount * distance, self.UPPER_BOUND)
        if distance != self.x_max - self.x_min:
            if amount >= 0.0:
                self.x_min = self.x_max - distance
            else:
                self.x_max = self.x_min + distance


class LogChart(AbstractChart):
    """Logarithmic frequency axis stepping along third-octave bands."""

    def __init__(self) -> None:
        super().__init__()
        self.x_min = 20.0
        self.x_max = 20000.0
        self.y_min = -36.0
        self.y_max = 6.0
        self.tick_interval = 10
        self._frequencies = FrequencyTable(3).frequencies()
        if len(self._frequencies) != 31:
            raise RuntimeError("third-octave table must hold 31 bands")
        self._min_index = 0
        self._max_index = len(self._frequencies) - 1

    def _update_range(self) -> None:
        self.x_min = self._frequencies[self._min_index]
        self.x_max = self._frequencies[self._max_index]

    def zoom(self, factor: float) -> None:
        distance = self._max_index - self._min_index
        if factor > 1.0 and distance <= 2:
            return
        if factor < 1.0 and distance >= len(self._frequencies):
            return
        shift = -1 if factor < 1.0 else 1
        self._min_index = max(0, self._min_index + shift)
        self._max_index = min(len(self._frequencies) - 1, self._max_index - shift)
        self._update_range()

    def pan(self, amount: float) -> None:
        distance = self._max_index - self._min_index
        shift = 1 if amount >= 0.0 else -1
        self._min_index = max(0, self._min_index + shift)
        self._max_index = min(len(self._frequencies) - 1, self._max_index + shift)
        if distance != self._max_index - self._min_index:
            if amount >= 0.0:
                self._min_index = self._max_index - distance
            else:
                self._max_index = self._min_index + distance
        self._update_range()


class ChartType(enum.IntEnum):
    IMPULSE_RESPONSE = 0
    FREQUENCY_RESPONSE = 1


class ChartModel:
    """Holds one chart per type and exposes the active chart's range."""

    def __init__(self, chart_type: ChartType = ChartType.IMPULSE_RESPONSE) -> None:
        self.range_changed = Signal()
        self._charts: dict[ChartType, AbstractChart] = {
            ChartType.IMPULSE_RESPONSE: LinChart(),
            ChartType.FREQUENCY_RESPONSE: LogChart(),
        }
        self._type = ChartType(chart_type)
        self._handles: XYSeries | None = None

    @property
    def chart_type(self) -> ChartType:
        return self._type

    @chart_type.setter
    def chart_type(self, value: ChartType) -> None:
        self._type = ChartType(value)
        self.range_changed.emit()

    @property
    def handles(self) -> XYSeries | None:
        return self._handles

    def zoom(self, factor: float) -> None:
        self._charts[self._type].zoom(factor)
        self.range_changed.emit()

    def pan(self, amount: float) -> None:
        self._charts[self._type].pan(amount)
        self.range_changed.emit()

    def set_handles(self, series: XYSeries | None) -> None:
        if series is not None:
            self._handles = series

    def move_handle(self, index: int, x: float, y: float) -> None:
        pass

    def x_min(self) -> float:
        return self._charts[self._type].x_min

    def x_max(self) -> float:
        return self._charts[self._type].x_max

    def y_min(self) -> float:
        return self._charts[self._type].y_min

    def y_max(self) -> float:
        return self._charts[self._type].y_max

    def tick_interval(self) -> int:
        return self._charts[self._type].tick_interval