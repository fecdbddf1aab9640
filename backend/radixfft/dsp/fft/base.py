"""Base classes for spectrum backends.

This module defines the abstract interface for spectrum backends, letting
the mixed-radix engine and scipy.fft be swapped behind one API.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from radixfft.typing import NDArrayComplex, NDArrayFloat
from scipy.signal import get_window


@dataclass
class FFTResult:
    """Result from a spectrum computation.

    Attributes:
        power_db: Power spectrum in dB (fftshifted, 0 Hz at center)
        freqs: Frequency array in Hz (fftshifted)
        bin_hz: Hz per bin
    """

    power_db: NDArrayFloat
    freqs: NDArrayFloat
    bin_hz: float


class FFTBackend(ABC):
    """Abstract base class for spectrum backends.

    Backends handle:
    - Windowing (Hann by default)
    - Forward transform of the first fft_size samples
    - Magnitude and dB conversion
    - FFT shift (0 Hz at center)
    """

    def __init__(self, fft_size: int = 2048):
        """Initialize the backend.

        Args:
            fft_size: Transform size in samples (5-smooth sizes are fastest)
        """
        self.fft_size = fft_size
        self._window: NDArrayFloat | None = None

    @property
    def window(self) -> NDArrayFloat:
        """Get cached Hann window."""
        if self._window is None or len(self._window) != self.fft_size:
            self._window = get_window("hann", self.fft_size, fftbins=False).astype(np.float64)
        return self._window

    def empty_result(self, sample_rate: float) -> FFTResult:
        """Result returned when fewer than fft_size samples are supplied."""
        return FFTResult(
            power_db=np.zeros(self.fft_size, dtype=np.float64),
            freqs=np.zeros(self.fft_size, dtype=np.float64),
            bin_hz=sample_rate / self.fft_size,
        )

    @staticmethod
    def to_power_db(spectrum: NDArrayComplex) -> NDArrayFloat:
        return 20.0 * np.log10(np.abs(spectrum) + 1e-12)

    @abstractmethod
    def execute(self, samples: NDArrayComplex, sample_rate: float) -> FFTResult:
        """Compute the power spectrum of the first fft_size samples.

        Args:
            samples: Real or complex samples (at least fft_size)
            sample_rate: Sample rate in Hz

        Returns:
            FFTResult with power_db, freqs, and bin_hz
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend identifier (e.g., 'mixedradix', 'scipy')."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fft_size={self.fft_size})"
