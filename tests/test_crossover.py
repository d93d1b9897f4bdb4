import pytest

from louder.charts import XYSeries
from louder.crossover import CrossoverModel
from louder.frequency_table import FrequencyTable
from louder.ui_util import f_to_str, f_to_unit


def _wired_model():
    model = CrossoverModel()
    handles = XYSeries([(120, -3.0), (120, -3.0), (0, 0.0), (0, 0.0)])
    lp, hp, total = XYSeries(), XYSeries(), XYSeries()
    model.set_handles(handles)
    model.set_low_pass_series(lp)
    model.set_high_pass_series(hp)
    model.set_sum_series(total)
    return model, handles, lp, hp, total


def test_initial_readouts():
    model = CrossoverModel()
    first = FrequencyTable().frequencies()[0]
    assert model.low_pass_frequency_readout() == f_to_str(first)
    assert model.high_pass_frequency_unit_readout() == f_to_unit(first)
    assert model.low_pass_q() == pytest.approx(0.70795, abs=1e-5)
    assert model.high_pass_q() == model.low_pass_q()


def test_y_range():
    model = CrossoverModel()
    assert (model.y_min(), model.y_max()) == (-18.0, 6.0)


def test_set_handles_requires_series():
    model = CrossoverModel()
    with pytest.raises(ValueError):
        model.set_handles(None)


def test_series_cover_whole_table():
    model, _, lp, hp, total = _wired_model()
    n = len(FrequencyTable().frequencies())
    assert len(lp) == n
    assert len(hp) == n
    assert len(total) == n
    assert len(model.fr) == n


def test_low_pass_passes_lows_high_pass_blocks_them():
    _, _, lp, hp, _ = _wired_model()
    assert lp.at(0)[1] == pytest.approx(0.0, abs=0.1)
    assert hp.at(0)[1] < -40.0
    assert lp.at(len(lp) - 1)[1] < -30.0


def test_sum_extremes_match_ripple():
    model, *_ = _wired_model()
    assert model.sum_min <= model.sum_max
    assert max(model.fr) == model.sum_max
    assert float(model.ripple()) == pytest.approx(abs(model.sum_max - model.sum_min), abs=0.5)


def test_move_main_handle_rounds_and_updates():
    model, handles, *_ = _wired_model()
    model.move_handle(0, 100.4, -2.93)
    assert model.low_pass_f == 100
    assert handles.at(0) == (100.0, model.low_pass_q_db + model.low_pass_g)
    freqs = FrequencyTable().frequencies()
    assert model.low_pass_frequency_readout() == f_to_str(freqs[100])


def test_move_gain_handle_shifts_low_pass_curve():
    model, handles, lp, _, _ = _wired_model()
    before = lp.at(0)[1]
    model.move_handle(2, 0, 1.0)
    assert model.low_pass_g == 1.0
    assert handles.at(2) == (0.0, 1.0)
    assert lp.at(0)[1] == pytest.approx(before + 1.0)


def test_step_param_changes_frequency_and_q():
    model, handles, *_ = _wired_model()
    model.step_param(1, 2, 0.5)
    assert model.high_pass_f == 122
    assert model.high_pass_q_db == pytest.approx(-2.5)
    assert handles.at(1) == (122.0, pytest.approx(-2.5))


def test_higher_order_is_steeper():
    model, _, lp, _, _ = _wired_model()
    before = lp.at(len(lp) - 1)[1]
    model.set_order(0, 1)
    assert model.low_pass_order == 1
    assert lp.at(len(lp) - 1)[1] < before


def test_invert_changes_sum_and_emits():
    model, _, _, _, total = _wired_model()
    emitted = []
    model.fr_changed.connect(emitted.append)
    before = total.points
    model.invert(False)
    assert model.inverted is False
    assert len(emitted) == 1
    assert emitted[0] == model.fr
    assert total.points != before
    assert any(a[1] != b[1] for a, b in zip(before, total.points))


def test_range_changed_on_move():
    model, *_ = _wired_model()
    calls = []
    model.range_changed.connect(lambda: calls.append(1))
    model.move_handle(1, 90, -3.0)
    assert calls == [1]
    assert model.high_pass_f == 90