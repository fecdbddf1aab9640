"""SciPy spectrum backend.

Uses scipy.fft; serves as the reference the mixed-radix engine is checked
against and as the fallback for lengths the engine cannot handle.
"""

from __future__ import annotations

import numpy as np
from radixfft.typing import NDArrayComplex
from scipy.fft import fft, fftfreq, fftshift

from .base import FFTBackend, FFTResult
from .registry import register


@register("scipy")
class ScipyFFTBackend(FFTBackend):
    """Spectrum backend using scipy.fft. Accepts any fft_size."""

    def execute(self, samples: NDArrayComplex, sample_rate: float) -> FFTResult:
        if samples.size < self.fft_size:
            return self.empty_result(sample_rate)

        windowed = samples[: self.fft_size] * self.window
        spectrum = fftshift(fft(windowed))
        freqs = fftshift(fftfreq(self.fft_size, 1.0 / sample_rate))

        return FFTResult(
            power_db=self.to_power_db(spectrum),
            freqs=np.asarray(freqs, dtype=np.float64),
            bin_hz=sample_rate / self.fft_size,
        )

    @property
    def name(self) -> str:
        return "scipy"
