"""Unit tests for spectrum backend implementations."""

import logging

import numpy as np
import pytest

from radixfft.dsp.fft import (
    FFTResult,
    MixedRadixFFTBackend,
    ScipyFFTBackend,
    UnsupportedLengthError,
    available_backends,
    get_backend,
)
from radixfft.dsp.fft.base import FFTBackend as FFTBackendBase


class TestFFTResult:
    """Tests for FFTResult dataclass."""

    def test_fft_result_creation(self):
        power_db = np.zeros(1000)
        freqs = np.linspace(-24000, 24000, 1000)

        result = FFTResult(power_db=power_db, freqs=freqs, bin_hz=48.0)

        assert result.power_db.shape == (1000,)
        assert result.freqs.shape == (1000,)
        assert result.bin_hz == 48.0


class TestMixedRadixBackend:
    """Tests for the mixed-radix backend."""

    def test_initialization(self):
        backend = MixedRadixFFTBackend(fft_size=2000)

        assert backend.fft_size == 2000
        assert backend.name == "mixedradix"
        assert backend.plan.factors == (2, 10, 10, 10)
        assert "factors=(2, 10, 10, 10)" in repr(backend)

    def test_unsupported_size(self):
        with pytest.raises(UnsupportedLengthError):
            MixedRadixFFTBackend(fft_size=41 * 8)

    def test_window_creation(self):
        """Hann window starts and ends at zero and peaks in the middle."""
        backend = MixedRadixFFTBackend(fft_size=1001)

        window = backend.window
        assert window.shape == (1001,)
        assert window[0] < 0.01
        assert window[-1] < 0.01
        assert window[500] > 0.99

    def test_execute_tone(self):
        backend = MixedRadixFFTBackend(fft_size=2000)
        sample_rate = 48000
        t = np.arange(2000) / sample_rate
        freq = 1200  # exactly on bin 50
        iq = np.exp(2j * np.pi * freq * t)

        result = backend.execute(iq, sample_rate)

        assert isinstance(result, FFTResult)
        assert result.power_db.shape == (2000,)
        assert result.bin_hz == pytest.approx(24.0)
        peak_freq = result.freqs[np.argmax(result.power_db)]
        assert abs(peak_freq - freq) < result.bin_hz

    def test_execute_with_insufficient_samples(self):
        backend = MixedRadixFFTBackend(fft_size=1000)
        result = backend.execute(np.zeros(100, dtype=np.complex128), 48000)

        assert result.power_db.shape == (1000,)
        assert np.all(result.power_db == 0)

    def test_real_samples(self):
        backend = MixedRadixFFTBackend(fft_size=500)
        samples = np.cos(2 * np.pi * 50 * np.arange(500) / 500)
        result = backend.execute(samples, 500)

        peak_freqs = sorted(abs(result.freqs[np.argsort(result.power_db)[-2:]]))
        assert peak_freqs == pytest.approx([50.0, 50.0])


class TestBackendEquivalence:
    """The mixed-radix backend reproduces scipy's spectrum."""

    @pytest.mark.parametrize("fft_size", [360, 1000, 1024, 2187])
    @pytest.mark.parametrize("twiddle_mode", ["recurrence", "direct"])
    def test_matches_scipy(self, fft_size, twiddle_mode, rng):
        iq = rng.standard_normal(fft_size) + 1j * rng.standard_normal(fft_size)

        ours = MixedRadixFFTBackend(fft_size=fft_size, twiddle_mode=twiddle_mode).execute(iq, 48000)
        ref = ScipyFFTBackend(fft_size=fft_size).execute(iq, 48000)

        np.testing.assert_allclose(ours.freqs, ref.freqs)
        np.testing.assert_allclose(ours.power_db, ref.power_db, atol=1e-6)


class TestBackendRegistry:
    """Tests for the backend registry."""

    def test_get_backend_auto_prefers_mixedradix(self):
        backend = get_backend("auto", fft_size=1000)

        assert isinstance(backend, FFTBackendBase)
        assert backend.name == "mixedradix"

    def test_get_backend_auto_falls_back_for_large_primes(self, caplog):
        with caplog.at_level(logging.WARNING):
            backend = get_backend("auto", fft_size=41 * 4)

        assert isinstance(backend, ScipyFFTBackend)
        assert "mixedradix" in caplog.text

    def test_get_backend_scipy(self):
        backend = get_backend("scipy", fft_size=4096)

        assert isinstance(backend, ScipyFFTBackend)
        assert backend.fft_size == 4096

    def test_get_backend_kwargs(self):
        backend = get_backend("mixedradix", fft_size=64, twiddle_mode="direct")

        assert isinstance(backend, MixedRadixFFTBackend)
        assert backend.plan.twiddle_mode == "direct"

    def test_available_backends(self):
        backends = available_backends()

        assert "scipy" in backends
        assert "mixedradix" in backends

    def test_get_backend_fallback(self):
        backend = get_backend("nonexistent_backend")

        assert backend.name == "scipy"
        assert backend.fft_size == 2048
