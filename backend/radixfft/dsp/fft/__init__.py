"""Mixed-radix FFT engine and spectrum backends.

The engine transforms any length whose largest prime factor is at most 37,
with dedicated kernels for radices 2, 3, 4, 5, 8 and 10. The size search
helpers pick nearby lengths built from 2, 3 and 5 only, which keep the
engine on its fastest paths.

Usage:
    from radixfft.dsp.fft import transform, good_size_not_smaller

    n = good_size_not_smaller(len(samples))
    y_re, y_im = transform(n, x_re, x_im)

    # Spectrum backends
    backend = get_backend("auto", fft_size=2000)
    result = backend.execute(iq_samples, sample_rate)
"""

from .base import FFTBackend, FFTResult
from .engine import TransformPlan, fft, ifft, plan_transform, reference_dft, transform
from .factorize import (
    MAX_PRIME_FACTOR,
    StageDescriptor,
    UnsupportedLengthError,
    factorize,
    is_supported_length,
    plan_stages,
)
from .mixedradix_backend import MixedRadixFFTBackend
from .registry import available_backends, get_backend
from .scipy_backend import ScipyFFTBackend
from .sizes import (
    NICE_SIZES,
    find_good_size,
    good_size,
    good_size_not_larger,
    good_size_not_smaller,
    is_nice_size,
)

__all__ = [
    "FFTBackend",
    "FFTResult",
    "MAX_PRIME_FACTOR",
    "MixedRadixFFTBackend",
    "NICE_SIZES",
    "ScipyFFTBackend",
    "StageDescriptor",
    "TransformPlan",
    "UnsupportedLengthError",
    "available_backends",
    "factorize",
    "fft",
    "find_good_size",
    "get_backend",
    "good_size",
    "good_size_not_larger",
    "good_size_not_smaller",
    "ifft",
    "is_nice_size",
    "is_supported_length",
    "plan_stages",
    "plan_transform",
    "reference_dft",
    "transform",
]
