"""Mixed-radix digit-reversal permutation.

Bit reversal generalised to mixed radices. Output slots are counted with
an odometer whose least significant digit belongs to the first stage;
digit i runs over 0..factors[i]-1 and is weighted by remain[i] when
forming the source index. Once the input is reordered this way every
stage can work on contiguous strided blocks in place and the last stage
leaves the result in natural order.

Carry rule: when digit i wraps to zero it has contributed
factors[i] * remain[i] == remain[i-1] to the source index, so that amount
is taken back and remain[i+1] is added for the digit it carries into.
"""

from __future__ import annotations

import numpy as np
from radixfft.typing import NDArrayFloat, NDArrayInt, SplitComplex


def digit_reversal_indices(
    n: int,
    factors: tuple[int, ...],
    remains: tuple[int, ...],
) -> NDArrayInt:
    """Build the source index for every output slot.

    Args:
        n: Transform length
        factors: Execution-order radices
        remains: remain value of each stage (same length as factors)

    Returns:
        Integer array p with y[i] = x[p[i]]
    """
    count = len(factors)
    # weights[0] is remain before the first stage (n), weights[count+1] pads the top carry
    weights = (n, *remains, 0)
    digits = [0] * count

    indices = np.empty(n, dtype=np.intp)
    source = 0
    for slot in range(n - 1):
        indices[slot] = source

        stage = 0
        digits[stage] += 1
        source += weights[stage + 1]
        while digits[stage] >= factors[stage]:
            digits[stage] = 0
            source += weights[stage + 2] - weights[stage]
            stage += 1
            digits[stage] += 1

    # Last element is always a fixed point
    indices[n - 1] = n - 1
    return indices


def permute(indices: NDArrayInt, x_re: NDArrayFloat, x_im: NDArrayFloat) -> SplitComplex:
    """Copy x into fresh buffers in digit-reversed order."""
    y_re = np.asarray(x_re, dtype=np.float64)[indices]
    y_im = np.asarray(x_im, dtype=np.float64)[indices]
    return y_re, y_im
