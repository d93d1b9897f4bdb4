import math

import pytest

from louder.audio_filter import FilterType
from louder.charts import XYSeries
from louder.filter_model import FilterModel
from louder.frequency_table import FrequencyTable
from louder.ui_util import f_to_str, f_to_unit


class FakeEqualizer:
    def __init__(self):
        self.handles = XYSeries()
        self._filters = []
        self.sum_calls = 0

    def filters(self):
        return list(self._filters)

    def compute_filter_sum(self):
        self.sum_calls += 1

    def register(self, model):
        self.handles.append(model.f_index, model.gain)
        self.handles.append(model.f_index - model.q_index, model.gain / 2)
        self.handles.append(model.f_index + model.q_index, model.gain / 2)
        self._filters.append(model)
        return model


@pytest.fixture
def eq():
    return FakeEqualizer()


def counter(model):
    calls = []
    model.values_changed.connect(lambda: calls.append(1))
    return calls


def test_type_follows_set_type(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    assert model.type() == int(FilterType.PEAK)
    model.set_type(int(FilterType.HIGH_SHELF))
    assert model.type() == int(FilterType.HIGH_SHELF)


def test_set_same_type_does_nothing(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    calls = counter(model)
    before = eq.sum_calls
    model.set_type(FilterType.PEAK)
    assert calls == []
    assert eq.sum_calls == before


def test_response_covers_frequency_table(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    frequencies = FrequencyTable().frequencies()
    assert len(model.response()) == 241
    assert [p[0] for p in model.response()] == frequencies
    assert eq.sum_calls >= 1


def test_peak_response_reaches_gain_at_centre(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -6.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    _, centre = model.response().at(120)
    assert centre == pytest.approx(-6.0, abs=1e-6)
    assert min(y for _, y in model.response()) == pytest.approx(-6.0, abs=1e-6)


def test_zero_gain_peak_is_flat(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, 0.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    assert all(abs(y) < 1e-9 for _, y in model.response())


def test_low_pass_attenuates_highs(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, -3.0, 0.0, XYSeries()))
    model.set_type(FilterType.LOW_PASS)
    low = model.response().at(0)[1]
    high = model.response().at(240)[1]
    assert abs(low) < 0.1
    assert high < -20.0


def test_frequency_readouts(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    expected = FrequencyTable().frequencies()[120]
    assert model.f() == expected
    assert model.f_as_string() == f_to_str(expected)
    assert model.f_unit() == f_to_unit(expected)


def test_step_f_clamps(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    model.step_f(-500)
    assert model.f_index == 0
    model.step_f(1000)
    assert model.f_index == 240
    model.step_f(-5)
    assert model.f_index == 235


def test_step_g_and_g(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    calls = counter(model)
    model.step_g(1.5)
    assert model.g() == -1.5
    assert calls == [1]


def test_step_q_uses_strategy(eq):
    peak = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    peak.set_type(FilterType.PEAK)
    peak.step_q(2.0)
    assert peak.q_index == 5.0
    low = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    low.set_type(FilterType.LOW_PASS)
    low.step_q(2.0)
    assert low.q_index == 1.0


def test_side_handles_set_q(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    model.on_left_handle_moved(110.0)
    assert model.q_index == 10.0
    model.on_right_handle_moved(124.5)
    assert model.q_index == 4.5
    assert eq.handles.at(2) == (124.5, -1.5)


def test_set_q_unchanged_does_not_emit(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    calls = counter(model)
    model.set_q(3.0)
    assert calls == []
    model.set_q(4.0)
    assert calls == [1]


def test_main_handle_moves_peak(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    model.on_main_handle_moved(80, -2.0)
    assert (model.f_index, model.g()) == (80, -2.0)
    assert eq.handles.at(0) == (80.0, -2.0)
    assert model.response().at(80)[1] == pytest.approx(-2.0, abs=1e-6)


def test_availability_follows_type(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.LOW_PASS)
    assert model.is_frequency_available() and model.is_q_available()
    assert not model.is_gain_available()
    model.set_type(FilterType.INVALID)
    assert not model.is_frequency_available()


def test_invalid_filter_is_flat(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    model.set_type(FilterType.INVALID)
    assert all(y == 0.0 for _, y in model.response())
    assert not math.isnan(model.q())


def test_unknown_type_raises(eq):
    model = eq.register(FilterModel(eq, FilterType.INVALID, 120, 3.0, -3.0, XYSeries()))
    model.set_type(FilterType.PEAK)
    with pytest.raises(ValueError):
        model.set_type(42)