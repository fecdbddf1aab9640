"""Frequency-domain analysis built on the mixed-radix engine."""

from __future__ import annotations

import logging

import numpy as np
from radixfft.dsp.fft import transform
from radixfft.typing import NDArrayFloat

logger = logging.getLogger(__name__)


def power_spectrum(samples: NDArrayFloat) -> NDArrayFloat:
    """Squared magnitude of the DFT of a real sequence."""
    samples = np.asarray(samples, dtype=np.float64)
    y_re, y_im = transform(samples.size, samples, np.zeros_like(samples))
    return y_re * y_re + y_im * y_im


def impedance(stimulus: NDArrayFloat, response: NDArrayFloat) -> NDArrayFloat:
    """Bin-wise |FFT(response)|^2 / |FFT(stimulus)|^2.

    Only the first len(stimulus) samples of the response are used. Bins in
    which the stimulus carries no power come out as nan.

    Raises:
        ValueError: If the response is shorter than the stimulus
        UnsupportedLengthError: If len(stimulus) is not an admissible length
    """
    stimulus = np.asarray(stimulus, dtype=np.float64)
    response = np.asarray(response, dtype=np.float64)
    n = stimulus.size
    if response.size < n:
        raise ValueError(f"response has {response.size} samples, stimulus has {n}")

    p_in = power_spectrum(stimulus)
    p_out = power_spectrum(response[:n])

    z = np.full(n, np.nan)
    np.divide(p_out, p_in, out=z, where=p_in > 0.0)
    logger.debug(f"impedance over {n} bins, {int(np.count_nonzero(p_in == 0.0))} empty")
    return z
