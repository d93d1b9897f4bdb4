import pytest

from louder.time_table import lower, upper


@pytest.mark.parametrize("ms, expected", [
    (550, 600), (549, 550), (500, 550), (499, 500), (480, 500), (479, 480),
    (199, 200), (200, 220), (201, 220), (5.5, 6.0), (0.0, 0.1), (0.1, 0.2),
])
def test_upper(ms, expected):
    assert upper(ms) == pytest.approx(expected)


@pytest.mark.parametrize("ms, expected", [
    (199, 190), (200, 190), (201, 200), (10, 9.5), (5.5, 5.0),
])
def test_lower(ms, expected):
    assert lower(ms) == pytest.approx(expected)


def test_approximate_values():
    assert lower(5.0) == pytest.approx(4.8)
    assert upper(1.0) == pytest.approx(1.1)
    assert upper(0.9) == pytest.approx(1.0)
    assert lower(1.0) == pytest.approx(0.9)
    assert lower(0.9) == pytest.approx(0.8)
    assert lower(0.2) == pytest.approx(0.1)


def test_lower_bottoms_out_at_zero():
    assert lower(0.1) == 0.0
    assert lower(0.0) == 0.0