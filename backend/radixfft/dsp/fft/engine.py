"""Mixed-radix FFT engine.

Pipeline for a length N:

1. factorize N into execution-order radices
2. derive sofar/actual/remain for every stage
3. reorder the input by the mixed-radix digit reversal into a fresh buffer
4. run one butterfly stage per radix over that buffer, in place

The result is the forward DFT in natural order,
y[k] = sum x[m] * exp(-2*pi*i*k*m/N).

A TransformPlan holds everything from steps 1-3 that does not depend on
the data. It is immutable, so one plan can be shared freely; each
execute() call allocates its own working buffers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from radixfft.typing import NDArrayComplex, NDArrayFloat, NDArrayInt, SplitComplex, TwiddleMode
from radixfft.validation import validate_finite_array, validate_length, validate_sample_buffer

from .factorize import StageDescriptor, factorize, plan_stages
from .kernels import Kernel, kernel_for
from .permute import digit_reversal_indices, permute
from .twiddle import apply_stage, check_twiddle_mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TransformPlan:
    """Precomputed, data-independent state for one transform length."""

    n: int
    factors: tuple[int, ...]
    stages: tuple[StageDescriptor, ...]
    permutation: NDArrayInt
    kernels: tuple[Kernel, ...]
    twiddle_mode: TwiddleMode = "recurrence"

    def execute(self, x_re: NDArrayFloat, x_im: NDArrayFloat) -> SplitComplex:
        """Transform one sequence.

        Args:
            x_re: Real parts, length n (not modified)
            x_im: Imaginary parts, length n (not modified)

        Returns:
            (y_re, y_im) freshly allocated float64 arrays in natural order
        """
        x_re = np.asarray(x_re)
        x_im = np.asarray(x_im)
        for name, values in (("x_re", x_re), ("x_im", x_im)):
            ok, reason = validate_sample_buffer(values, self.n, name)
            if not ok:
                raise ValueError(reason)
            if not validate_finite_array(values):
                raise ValueError(f"{name} contains NaN or infinite values")

        y_re, y_im = permute(self.permutation, x_re, x_im)
        for stage, kernel in zip(self.stages, self.kernels):
            apply_stage(y_re, y_im, stage, kernel, self.twiddle_mode)
        return y_re, y_im

    def __repr__(self) -> str:
        return f"TransformPlan(n={self.n}, factors={self.factors}, twiddle_mode={self.twiddle_mode!r})"


def plan_transform(n: int, twiddle_mode: TwiddleMode = "recurrence") -> TransformPlan:
    """Build the plan for length n.

    Raises:
        UnsupportedLengthError: If n has a prime factor above 37
        ValueError: If n < 1 or the twiddle mode is unknown
    """
    ok, reason = validate_length(n)
    if not ok:
        raise ValueError(reason)
    mode = check_twiddle_mode(twiddle_mode)

    factors = factorize(n)
    stages = plan_stages(n, factors)
    permutation = digit_reversal_indices(n, factors, tuple(s.remain for s in stages))
    # One kernel per stage, chosen up front
    kernels = tuple(kernel_for(radix, mode) for radix in factors)

    plan = TransformPlan(
        n=int(n),
        factors=factors,
        stages=stages,
        permutation=permutation,
        kernels=kernels,
        twiddle_mode=mode,
    )
    logger.debug(f"Planned {plan}")
    return plan


def transform(
    n: int,
    x_re: NDArrayFloat,
    x_im: NDArrayFloat,
    twiddle_mode: TwiddleMode = "recurrence",
) -> SplitComplex:
    """Forward DFT of the complex sequence (x_re, x_im) of length n."""
    return plan_transform(n, twiddle_mode).execute(x_re, x_im)


def fft(x: NDArrayComplex, twiddle_mode: TwiddleMode = "recurrence") -> NDArrayComplex:
    """Forward DFT of a 1-D complex (or real) array."""
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"fft expects a 1-D array, got shape {x.shape}")
    y_re, y_im = transform(x.shape[0], x.real, np.imag(x), twiddle_mode)
    return y_re + 1j * y_im


def ifft(y: NDArrayComplex, twiddle_mode: TwiddleMode = "recurrence") -> NDArrayComplex:
    """Inverse DFT, computed as conj(fft(conj(y))) / n."""
    y = np.asarray(y)
    if y.ndim != 1:
        raise ValueError(f"ifft expects a 1-D array, got shape {y.shape}")
    n = y.shape[0]
    x_re, x_im = transform(n, y.real, -np.imag(y), twiddle_mode)
    return (x_re - 1j * x_im) / n


def reference_dft(x: NDArrayComplex) -> NDArrayComplex:
    """Brute-force O(n^2) DFT, for accuracy checks only."""
    x = np.asarray(x, dtype=np.complex128)
    n = x.shape[0]
    k = np.arange(n)
    # k*m mod n keeps the angles small for large n
    phase = np.outer(k, k) % n
    return np.exp(-2j * np.pi * phase / n) @ x
