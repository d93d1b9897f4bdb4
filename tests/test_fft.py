import numpy as np
import pytest

from louder.fft import fft, ifft


def test_impulse_has_flat_spectrum_and_zero_tail():
    out = fft([1.0, 0.0, 0.0, 0.0])
    assert len(out) == 4
    assert np.allclose(out[:3], 1.0)
    assert out[3] == 0


def test_constant_signal_puts_everything_in_dc():
    signal = [2.0] * 8
    out = fft(signal)
    assert out[0] == pytest.approx(sum(signal))
    assert np.allclose(out[1:], 0.0)


def test_first_half_matches_full_transform():
    rng = np.random.default_rng(1)
    signal = rng.standard_normal(16)
    out = fft(signal)
    assert np.allclose(out[:9], np.fft.fft(signal)[:9])


@pytest.mark.parametrize("n", [4, 5, 16, 33])
def test_round_trip_is_scaled_by_length(n):
    rng = np.random.default_rng(n)
    signal = rng.standard_normal(n)
    back = ifft(fft(signal))
    assert len(back) == n
    assert np.allclose(back, signal * n)


def test_empty_input_gives_empty_output():
    assert len(fft([])) == 0
    assert len(ifft([])) == 0