"""Mixed-radix FFT with 5-smooth size search.

The engine lives in radixfft.dsp.fft; the names most callers need are
re-exported here.
"""

from radixfft.dsp.fft import (
    UnsupportedLengthError,
    fft,
    good_size,
    good_size_not_larger,
    good_size_not_smaller,
    ifft,
    plan_transform,
    transform,
)

__all__ = [
    "UnsupportedLengthError",
    "__version__",
    "fft",
    "good_size",
    "good_size_not_larger",
    "good_size_not_smaller",
    "ifft",
    "plan_transform",
    "transform",
]

__version__ = "0.1.0"
