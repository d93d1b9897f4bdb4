import pytest

from louder.charts import XYSeries
from louder.target import TargetModel


@pytest.fixture
def target():
    model = TargetModel()
    model.set_handles(XYSeries([(0.0, 0.0), (1.0, 0.0)]))
    return model


def test_axis_limits():
    model = TargetModel()
    assert model.y_min() == -6.0
    assert model.y_max() == 24.0


def test_set_loudness_reports_phon(target):
    target.set_loudness(10)
    assert target.loudness() == 10.0


def test_sum_series_and_subscribers_receive_response(target):
    received = []
    target.subscribe_fr(received.append)
    sum_series = XYSeries()
    target.set_sum_series(sum_series)
    target.set_loudness(0)
    assert len(received) == 1
    assert len(received[0]) == len(sum_series) == 241
    assert [y for _, y in sum_series] == pytest.approx(received[0])


def test_zero_loudness_is_flat(target):
    received = []
    target.subscribe_fr(received.append)
    sum_series = XYSeries()
    target.set_sum_series(sum_series)
    target.set_loudness(0)
    assert received[-1] == pytest.approx([0.0] * 241, abs=1e-9)
    assert [y for _, y in sum_series] == pytest.approx([0.0] * 241, abs=1e-9)
    assert target.sum_max == pytest.approx(0.0, abs=1e-9)
    assert target.sum_min == pytest.approx(0.0, abs=1e-9)


def test_loudness_boosts_low_frequencies(target):
    received = []
    target.subscribe_fr(received.append)
    target.set_sum_series(XYSeries())
    target.set_loudness(20)
    assert received[-1][0] > 0.0
    assert target.sum_max == max(received[-1])
    assert target.sum_min == min(received[-1])
    assert target.sum_max >= target.sum_min


def test_unsubscribe_stops_notifications(target):
    received = []
    unsubscribe = target.subscribe_fr(received.append)
    unsubscribe()
    target.set_sum_series(XYSeries())
    target.set_loudness(4)
    assert received == []


def test_no_notification_without_sum_series(target):
    received = []
    target.subscribe_fr(received.append)
    target.set_loudness(4)
    assert received == []


def test_move_handle_clamps_loudness(target):
    target.move_handle(0, 0.0, 30.0)
    assert target.loudness() == 40.0
    assert target.handles.at(0) == (0.0, 20.0)


def test_move_handle_rounds_to_quarter(target):
    target.move_handle(0, 0.0, 1.1)
    assert target.loudness() == 2.0


def test_step_param_clamps_at_zero(target):
    target.step_param(0, 0.0, -5.0)
    assert target.loudness() == 0.0
    assert target.handles.at(0)[1] == 0.0


def test_step_param_harman_updates_series(target):
    harman = XYSeries()
    target.set_harman_series(harman)
    target.step_param(1, 0.0, 3.0)
    assert target.harman == 3.0
    assert len(harman) == 241
    assert target.handles.at(1) == (1.0, 3.0)


def test_loudness_series_filled(target):
    series = XYSeries()
    target.set_loudness_series(series)
    assert len(series) == 241


def test_move_handle_without_handles_raises():
    model = TargetModel()
    with pytest.raises(ValueError):
        model.move_handle(0, 0.0, 2.0)


def test_values_changed_emitted(target):
    calls = []
    target.values_changed.connect(lambda: calls.append(True))
    target.set_loudness(2)
    assert calls == [True]