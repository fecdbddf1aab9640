"""Band-limited noise stimulus synthesis.

The noise is built in the frequency domain: every bin inside the requested
band gets unit magnitude and a uniformly random phase, the spectrum is made
conjugate-symmetric and transformed to a real time series, which is then
scaled to the requested standard deviation. The transform length is
rounded up to a 5-smooth size so the FFT stays on its fast kernels.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from radixfft.dsp.fft import good_size_not_smaller, transform
from radixfft.typing import NDArrayFloat
from radixfft.validation import validate_band, validate_positive

logger = logging.getLogger(__name__)


def _check(result: tuple[bool, str]) -> None:
    ok, reason = result
    if not ok:
        raise ValueError(reason)


def create_noise(
    duration_s: float,
    sample_rate: float,
    f0: float,
    f1: float,
    sigma: float,
    seed: int | None = None,
    tone_hz: float = 0.0,
    tone_phase: float = 0.0,
    tone_amp: float = 0.0,
) -> NDArrayFloat:
    """Create a noise stimulus with a flat spectrum between f0 and f1.

    Args:
        duration_s: Stimulus duration in seconds
        sample_rate: Sample rate in Hz
        f0: Lower band edge in Hz
        f1: Upper band edge in Hz
        sigma: Standard deviation of the noise part
        seed: Seed for the phase generator (None for fresh entropy)
        tone_hz: Frequency of an optional sine added on top
        tone_phase: Phase of the sine in radians
        tone_amp: Amplitude of the sine (0 disables it)

    Returns:
        float64 array of floor(duration_s * sample_rate) samples, rounded
        down to an even count (at least 1)
    """
    _check(validate_positive(duration_s, "duration_s"))
    _check(validate_positive(sample_rate, "sample_rate"))
    _check(validate_positive(sigma, "sigma"))
    _check(validate_band(f0, f1))

    dt = 1.0 / sample_rate
    n_final = max(int(math.floor(duration_s * sample_rate)), 1)
    if n_final % 2 != 0 and n_final > 1:
        n_final -= 1

    n = good_size_not_smaller(n_final)
    half = n // 2
    logger.debug(f"create_noise: n_final={n_final} fft_size={n}")

    rng = np.random.default_rng(seed)
    bins = np.arange(1, half)
    freqs = bins / duration_s
    in_band = (freqs >= f0) & (freqs <= f1)
    phases = rng.uniform(0.0, 2.0 * np.pi, size=bins.size)

    spec_re = np.zeros(n, dtype=np.float64)
    spec_im = np.zeros(n, dtype=np.float64)
    spec_re[bins] = np.where(in_band, np.cos(phases), 0.0)
    spec_im[bins] = np.where(in_band, np.sin(phases), 0.0)
    # Conjugate mirror keeps the time series real
    spec_re[n - bins] = spec_re[bins]
    spec_im[n - bins] = -spec_im[bins]

    y_re, _ = transform(n, spec_re, spec_im)
    v = y_re[:n_final]

    mean = float(np.mean(v))
    var = float(np.mean(v * v)) - mean * mean
    if var <= 0.0:
        raise ValueError(f"no spectral content between {f0} and {f1} Hz for duration {duration_s} s")

    t = np.arange(n_final) * dt
    return sigma / math.sqrt(var) * (v - mean) + tone_amp * np.sin(2.0 * np.pi * tone_hz * t + tone_phase)
