"""Unit tests for noise synthesis and impedance analysis."""

import numpy as np
import pytest
from scipy import fft as scipy_fft

from radixfft.analysis import impedance, power_spectrum
from radixfft.dsp.fft import UnsupportedLengthError
from radixfft.stimulus import create_noise


class TestCreateNoise:
    """Tests for create_noise()."""

    def test_length_and_statistics(self):
        v = create_noise(duration_s=1.0, sample_rate=2000, f0=10, f1=200, sigma=0.5, seed=1)

        assert v.shape == (2000,)
        assert np.std(v) == pytest.approx(0.5, rel=1e-9)
        assert abs(np.mean(v)) < 1e-12

    def test_odd_sample_count_made_even(self):
        v = create_noise(duration_s=1.0, sample_rate=1001, f0=0, f1=400, sigma=1.0, seed=3)
        assert v.shape == (1000,)

    def test_truncated_from_good_fft_length(self):
        """1002 samples are cut from a length-1024 transform."""
        v = create_noise(duration_s=1.0, sample_rate=1002, f0=0, f1=500, sigma=1.0, seed=5)
        assert v.shape == (1002,)
        assert np.std(v) == pytest.approx(1.0, rel=1e-9)

    def test_spectrum_is_band_limited(self):
        # 1000 samples of a 1 s stimulus: bin i is i Hz
        v = create_noise(duration_s=1.0, sample_rate=1000, f0=50, f1=100, sigma=1.0, seed=7)
        power = np.abs(scipy_fft.rfft(v)) ** 2
        in_band = power[50:101].sum()
        assert in_band / power.sum() > 0.999999

    def test_seed_is_reproducible(self):
        a = create_noise(1.0, 1000, 0, 300, 1.0, seed=11)
        b = create_noise(1.0, 1000, 0, 300, 1.0, seed=11)
        c = create_noise(1.0, 1000, 0, 300, 1.0, seed=12)

        np.testing.assert_array_equal(a, b)
        assert not np.allclose(a, c)

    def test_added_tone(self):
        base = create_noise(1.0, 1000, 100, 200, 1.0, seed=2)
        toned = create_noise(1.0, 1000, 100, 200, 1.0, seed=2, tone_hz=10, tone_amp=3.0)
        t = np.arange(1000) / 1000
        np.testing.assert_allclose(toned - base, 3.0 * np.sin(2 * np.pi * 10 * t), atol=1e-12)

    def test_empty_band_rejected(self):
        with pytest.raises(ValueError, match="no spectral content"):
            create_noise(1.0, 1000, 600, 700, 1.0, seed=0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"duration_s": 0.0},
            {"sample_rate": -1.0},
            {"sigma": 0.0},
            {"f0": 200.0, "f1": 100.0},
        ],
    )
    def test_invalid_arguments(self, kwargs):
        params = {"duration_s": 1.0, "sample_rate": 1000.0, "f0": 0.0, "f1": 100.0, "sigma": 1.0}
        params.update(kwargs)
        with pytest.raises(ValueError):
            create_noise(**params)


class TestImpedance:
    """Tests for impedance() and power_spectrum()."""

    def test_power_spectrum(self, rng):
        x = rng.standard_normal(120)
        np.testing.assert_allclose(power_spectrum(x), np.abs(scipy_fft.fft(x)) ** 2, rtol=1e-9)

    def test_scaled_response(self, rng):
        stim = rng.standard_normal(500)
        z = impedance(stim, 3.0 * stim)
        np.testing.assert_allclose(z, 9.0, rtol=1e-9)

    def test_longer_response_truncated(self, rng):
        stim = rng.standard_normal(100)
        resp = np.concatenate([2.0 * stim, rng.standard_normal(50)])
        np.testing.assert_allclose(impedance(stim, resp), 4.0, rtol=1e-9)

    def test_empty_bins_are_nan(self):
        stim = np.array([1.0, -1.0, 1.0, -1.0])  # power only in bin 2
        z = impedance(stim, 2.0 * stim)
        assert z[2] == pytest.approx(4.0)
        assert np.all(np.isnan(z[[0, 1, 3]]))

    def test_silent_stimulus(self, rng):
        z = impedance(np.zeros(8), rng.standard_normal(8))
        assert np.all(np.isnan(z))

    def test_short_response_rejected(self):
        with pytest.raises(ValueError):
            impedance(np.ones(10), np.ones(9))

    def test_unsupported_length(self):
        with pytest.raises(UnsupportedLengthError):
            impedance(np.ones(41), np.ones(41))
