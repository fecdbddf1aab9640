"""Short DFT kernels used by the butterfly stages.

Each kernel transforms one block of `radix` complex values given as two
sequences (real parts, imaginary parts). Operands may be Python floats or
numpy arrays; with arrays a single call transforms a whole batch of blocks
at once, which is how the stage driver uses them.

Radices 2, 3, 4, 5, 8 and 10 have hand-reduced kernels (Nussbaumer style
short DFTs with a minimum of real multiplications). Any other radix, in
practice a prime up to MAX_PRIME_FACTOR, goes through OddKernel, which
exploits conjugate symmetry to halve the multiplication count of a direct
evaluation.

Sign convention: forward transform, y[k] = sum x[m] * exp(-2*pi*i*k*m/r).
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Callable

from radixfft.typing import TwiddleMode

logger = logging.getLogger(__name__)

# Radix 3
C3_1 = math.cos(2 * math.pi / 3) - 1.0  # -1.5
C3_2 = math.sin(2 * math.pi / 3)

# Radix 5
U5 = 2 * math.pi / 5
C5_1 = (math.cos(U5) + math.cos(2 * U5)) / 2 - 1.0
C5_2 = (math.cos(U5) - math.cos(2 * U5)) / 2
C5_3 = -math.sin(U5)
C5_4 = -(math.sin(U5) + math.sin(2 * U5))
C5_5 = math.sin(U5) - math.sin(2 * U5)

# Radix 8
C8 = 1.0 / math.sqrt(2.0)

Operands = Sequence[Any]
Block = tuple[list[Any], list[Any]]


class Kernel(ABC):
    """A length-`radix` DFT."""

    radix: int = 0

    @abstractmethod
    def __call__(self, re: Operands, im: Operands) -> Block:
        """Transform one block (or a batch of blocks).

        Args:
            re: `radix` real parts
            im: `radix` imaginary parts

        Returns:
            (re, im) lists of the transformed block
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(radix={self.radix})"


_KERNELS: dict[int, type[Kernel]] = {}


def register(radix: int) -> Callable[[type[Kernel]], type[Kernel]]:
    """Decorator registering a specialised kernel for one radix."""

    def decorator(cls: type[Kernel]) -> type[Kernel]:
        cls.radix = radix
        _KERNELS[radix] = cls
        return cls

    return decorator


def specialized_radices() -> tuple[int, ...]:
    return tuple(sorted(_KERNELS))


def _fft4(ar: Operands, ai: Operands) -> Block:
    t1_re = ar[0] + ar[2]
    t1_im = ai[0] + ai[2]
    t2_re = ar[1] + ar[3]
    t2_im = ai[1] + ai[3]

    m2_re = ar[0] - ar[2]
    m2_im = ai[0] - ai[2]
    m3_re = ai[1] - ai[3]
    m3_im = ar[3] - ar[1]

    return (
        [t1_re + t2_re, m2_re + m3_re, t1_re - t2_re, m2_re - m3_re],
        [t1_im + t2_im, m2_im + m3_im, t1_im - t2_im, m2_im - m3_im],
    )


def _fft5(ar: Operands, ai: Operands) -> Block:
    t1_re = ar[1] + ar[4]
    t1_im = ai[1] + ai[4]
    t2_re = ar[2] + ar[3]
    t2_im = ai[2] + ai[3]
    t3_re = ar[1] - ar[4]
    t3_im = ai[1] - ai[4]
    t4_re = ar[3] - ar[2]
    t4_im = ai[3] - ai[2]
    t5_re = t1_re + t2_re
    t5_im = t1_im + t2_im

    y0_re = ar[0] + t5_re
    y0_im = ai[0] + t5_im

    m1_re = C5_1 * t5_re
    m1_im = C5_1 * t5_im
    m2_re = C5_2 * (t1_re - t2_re)
    m2_im = C5_2 * (t1_im - t2_im)
    m3_re = -C5_3 * (t3_im + t4_im)
    m3_im = C5_3 * (t3_re + t4_re)
    m4_re = -C5_4 * t4_im
    m4_im = C5_4 * t4_re
    m5_re = -C5_5 * t3_im
    m5_im = C5_5 * t3_re

    s3_re = m3_re - m4_re
    s3_im = m3_im - m4_im
    s5_re = m3_re + m5_re
    s5_im = m3_im + m5_im
    s1_re = y0_re + m1_re
    s1_im = y0_im + m1_im
    s2_re = s1_re + m2_re
    s2_im = s1_im + m2_im
    s4_re = s1_re - m2_re
    s4_im = s1_im - m2_im

    return (
        [y0_re, s2_re + s3_re, s4_re + s5_re, s4_re - s5_re, s2_re - s3_re],
        [y0_im, s2_im + s3_im, s4_im + s5_im, s4_im - s5_im, s2_im - s3_im],
    )


@register(2)
class Radix2Kernel(Kernel):
    def __call__(self, re: Operands, im: Operands) -> Block:
        return [re[0] + re[1], re[0] - re[1]], [im[0] + im[1], im[0] - im[1]]


@register(3)
class Radix3Kernel(Kernel):
    def __call__(self, re: Operands, im: Operands) -> Block:
        t1_re = re[1] + re[2]
        t1_im = im[1] + im[2]
        y0_re = re[0] + t1_re
        y0_im = im[0] + t1_im

        m1_re = C3_1 * t1_re
        m1_im = C3_1 * t1_im
        m2_re = C3_2 * (im[1] - im[2])
        m2_im = C3_2 * (re[2] - re[1])

        s1_re = y0_re + m1_re
        s1_im = y0_im + m1_im
        return (
            [y0_re, s1_re + m2_re, s1_re - m2_re],
            [y0_im, s1_im + m2_im, s1_im - m2_im],
        )


@register(4)
class Radix4Kernel(Kernel):
    """Pure add/sub butterfly."""

    def __call__(self, re: Operands, im: Operands) -> Block:
        return _fft4(re, im)


@register(5)
class Radix5Kernel(Kernel):
    def __call__(self, re: Operands, im: Operands) -> Block:
        return _fft5(re, im)


@register(8)
class Radix8Kernel(Kernel):
    """Two radix-4 transforms on the even and odd samples.

    The odd half is rotated by 1, (1-i)/sqrt2, -i and -(1+i)/sqrt2 before the
    final add/sub combine.
    """

    def __call__(self, re: Operands, im: Operands) -> Block:
        a_re, a_im = _fft4(re[0::2], im[0::2])
        b_re, b_im = _fft4(re[1::2], im[1::2])

        b1_re = C8 * (b_re[1] + b_im[1])
        b1_im = C8 * (b_im[1] - b_re[1])
        b2_re = b_im[2]
        b2_im = -b_re[2]
        b3_re = C8 * (b_im[3] - b_re[3])
        b3_im = -C8 * (b_re[3] + b_im[3])

        b_re = [b_re[0], b1_re, b2_re, b3_re]
        b_im = [b_im[0], b1_im, b2_im, b3_im]

        out_re = [a_re[k] + b_re[k] for k in range(4)] + [a_re[k] - b_re[k] for k in range(4)]
        out_im = [a_im[k] + b_im[k] for k in range(4)] + [a_im[k] - b_im[k] for k in range(4)]
        return out_re, out_im


# Prime factor split of 10 = 2 * 5 (input order for the two radix-5 halves)
_PFA10_A = (0, 2, 4, 6, 8)
_PFA10_B = (5, 7, 9, 1, 3)
# Output slots of a[k] + b[k] and a[k] - b[k]
_PFA10_SUM = (0, 6, 2, 8, 4)
_PFA10_DIFF = (5, 1, 7, 3, 9)


@register(10)
class Radix10Kernel(Kernel):
    """Prime factor algorithm: two radix-5 transforms, no twiddles."""

    def __call__(self, re: Operands, im: Operands) -> Block:
        a_re, a_im = _fft5([re[i] for i in _PFA10_A], [im[i] for i in _PFA10_A])
        b_re, b_im = _fft5([re[i] for i in _PFA10_B], [im[i] for i in _PFA10_B])

        out_re: list[Any] = [None] * 10
        out_im: list[Any] = [None] * 10
        for k in range(5):
            out_re[_PFA10_SUM[k]] = a_re[k] + b_re[k]
            out_im[_PFA10_SUM[k]] = a_im[k] + b_im[k]
            out_re[_PFA10_DIFF[k]] = a_re[k] - b_re[k]
            out_im[_PFA10_DIFF[k]] = a_im[k] - b_im[k]
        return out_re, out_im


class OddKernel(Kernel):
    """General kernel for an odd radix, O(radix^2) with halved multiplies.

    Pairs z[j] and z[radix-j] are folded into a symmetric part v and an
    antisymmetric part w; outputs j and radix-j then share every product
    with the trig table.
    """

    def __init__(self, radix: int, trig: tuple[Sequence[float], Sequence[float]]):
        if radix < 1 or radix % 2 == 0:
            raise ValueError(f"OddKernel needs an odd radix, got {radix}")
        self.radix = radix
        self.trig_re, self.trig_im = trig

    def __call__(self, re: Operands, im: Operands) -> Block:
        n = self.radix
        half = (n + 1) // 2
        trig_re = self.trig_re
        trig_im = self.trig_im

        v_re = [None] + [re[j] + re[n - j] for j in range(1, half)]
        v_im = [None] + [im[j] - im[n - j] for j in range(1, half)]
        w_re = [None] + [re[j] - re[n - j] for j in range(1, half)]
        w_im = [None] + [im[j] + im[n - j] for j in range(1, half)]

        out_re: list[Any] = [re[0]] * n
        out_im: list[Any] = [im[0]] * n
        for j in range(1, half):
            lo_re = hi_re = re[0]
            lo_im = hi_im = im[0]
            k = j
            for i in range(1, half):
                rere = trig_re[k] * v_re[i]
                imim = trig_im[k] * v_im[i]
                reim = trig_re[k] * w_im[i]
                imre = trig_im[k] * w_re[i]

                hi_re = hi_re + (rere + imim)
                hi_im = hi_im + (reim - imre)
                lo_re = lo_re + (rere - imim)
                lo_im = lo_im + (reim + imre)

                k += j
                if k >= n:
                    k -= n
            out_re[j] = lo_re
            out_im[j] = lo_im
            out_re[n - j] = hi_re
            out_im[n - j] = hi_im

        dc_re = re[0]
        dc_im = im[0]
        for j in range(1, half):
            dc_re = dc_re + v_re[j]
            dc_im = dc_im + w_im[j]
        out_re[0] = dc_re
        out_im[0] = dc_im
        return out_re, out_im


def kernel_for(radix: int, twiddle_mode: TwiddleMode = "recurrence") -> Kernel:
    """Pick the kernel for one stage.

    Specialised radices get their closed-form kernel; anything else gets an
    OddKernel with a trig table built in `twiddle_mode`.
    """
    cls = _KERNELS.get(radix)
    if cls is not None:
        return cls()

    from .twiddle import trig_table

    logger.debug(f"Using general odd kernel for radix {radix} ({twiddle_mode} trig table)")
    return OddKernel(radix, trig_table(radix, twiddle_mode))
