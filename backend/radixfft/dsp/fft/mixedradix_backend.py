"""Spectrum backend on top of the mixed-radix engine."""

from __future__ import annotations

import logging

import numpy as np
from radixfft.typing import NDArrayComplex, TwiddleMode
from scipy.fft import fftfreq, fftshift

from .base import FFTBackend, FFTResult
from .engine import TransformPlan, plan_transform
from .registry import register

logger = logging.getLogger(__name__)


@register("mixedradix")
class MixedRadixFFTBackend(FFTBackend):
    """Spectrum backend using radixfft's own mixed-radix FFT.

    The transform plan is built once in the constructor and reused for
    every execute() call.

    Raises:
        UnsupportedLengthError: If fft_size has a prime factor above 37
    """

    def __init__(self, fft_size: int = 2048, twiddle_mode: TwiddleMode = "recurrence"):
        super().__init__(fft_size)
        self.plan: TransformPlan = plan_transform(fft_size, twiddle_mode)
        logger.debug(f"Mixed-radix backend ready: {self.plan}")

    def execute(self, samples: NDArrayComplex, sample_rate: float) -> FFTResult:
        if samples.size < self.fft_size:
            return self.empty_result(sample_rate)

        windowed = samples[: self.fft_size] * self.window
        y_re, y_im = self.plan.execute(windowed.real, np.imag(windowed))
        spectrum = fftshift(y_re + 1j * y_im)
        freqs = fftshift(fftfreq(self.fft_size, 1.0 / sample_rate))

        return FFTResult(
            power_db=self.to_power_db(spectrum),
            freqs=np.asarray(freqs, dtype=np.float64),
            bin_hz=sample_rate / self.fft_size,
        )

    @property
    def name(self) -> str:
        return "mixedradix"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(fft_size={self.fft_size}, "
            f"factors={self.plan.factors}, twiddle_mode={self.plan.twiddle_mode!r})"
        )
