"""Twiddle tables and the per-stage butterfly driver.

Roots of unity can be produced two ways:

- "recurrence": start from exp(-2*pi*i/m) and reach every further power by
  one complex multiplication. Cheap, but rounding error accumulates along
  the chain.
- "direct": every root is computed from cos/sin of its own angle.

Both are accurate to well below 1e-9 for the lengths this engine targets;
recurrence is the default.
"""

from __future__ import annotations

import logging

import numpy as np
from radixfft.typing import NDArrayFloat, SplitComplex, TwiddleMode

from .factorize import StageDescriptor
from .kernels import Kernel

logger = logging.getLogger(__name__)

TWIDDLE_MODES: tuple[TwiddleMode, ...] = ("recurrence", "direct")


def check_twiddle_mode(mode: str) -> TwiddleMode:
    if mode not in TWIDDLE_MODES:
        raise ValueError(f"Unknown twiddle mode {mode!r}, expected one of {TWIDDLE_MODES}")
    return mode  # type: ignore[return-value]


def _powers(root: complex, count: int, mode: TwiddleMode, period: int) -> NDArrayFloat:
    """Return root**0 .. root**(count-1) as a complex array.

    `root` must equal exp(-2*pi*i/period); direct mode ignores it and
    evaluates each angle on its own.
    """
    if mode == "direct":
        angle = -2.0 * np.pi * np.arange(count) / period
        return np.cos(angle) + 1j * np.sin(angle)

    out = np.empty(count, dtype=np.complex128)
    out[0] = 1.0
    if count > 1:
        out[1:] = np.cumprod(np.full(count - 1, root, dtype=np.complex128))
    return out


def _root(period: int) -> complex:
    omega = 2.0 * np.pi / period
    return complex(np.cos(omega), -np.sin(omega))


def trig_table(radix: int, mode: TwiddleMode = "recurrence") -> SplitComplex:
    """Powers of exp(-2*pi*i/radix), used by the general odd kernel."""
    table = _powers(_root(radix), radix, check_twiddle_mode(mode), radix)
    return table.real.copy(), table.imag.copy()


def twiddle_table(sofar: int, radix: int, mode: TwiddleMode = "recurrence") -> SplitComplex:
    """Twiddle factors for every (block element k, data offset d) of a stage.

    Entry [k, d] is exp(-2*pi*i*k*d/(sofar*radix)). In recurrence mode the
    per-offset rotation is advanced by one multiplication per d and its
    powers along k by one multiplication per k.

    Returns:
        (re, im) arrays of shape (radix, sofar)
    """
    mode = check_twiddle_mode(mode)
    period = sofar * radix

    if mode == "direct":
        k = np.arange(radix)[:, np.newaxis]
        d = np.arange(sofar)[np.newaxis, :]
        angle = -2.0 * np.pi * (k * d) / period
        return np.cos(angle), np.sin(angle)

    rotation = _powers(_root(period), sofar, mode, period)
    table = np.empty((radix, sofar), dtype=np.complex128)
    table[0] = 1.0
    if radix > 1:
        table[1:] = np.cumprod(np.broadcast_to(rotation, (radix - 1, sofar)), axis=0)
    return table.real.copy(), table.imag.copy()


def apply_stage(
    y_re: NDArrayFloat,
    y_im: NDArrayFloat,
    stage: StageDescriptor,
    kernel: Kernel,
    mode: TwiddleMode = "recurrence",
) -> None:
    """Run one butterfly stage over the working buffer in place.

    The buffer is viewed as (remain, radix, sofar): block element k of group
    g at data offset d lives at g*sofar*radix + k*sofar + d. Every block is
    gathered, twiddled (offset 0 and first stages are left alone), passed
    through the kernel and scattered back to the same addresses.
    """
    sofar, radix, remain = stage.sofar, stage.actual, stage.remain
    if kernel.radix != radix:
        raise ValueError(f"kernel radix {kernel.radix} does not match stage radix {radix}")
    # reshape must give views, otherwise the scatter below is lost
    if not (y_re.flags.c_contiguous and y_im.flags.c_contiguous):
        raise ValueError("working buffers must be C-contiguous")

    view_re = y_re.reshape(remain, radix, sofar)
    view_im = y_im.reshape(remain, radix, sofar)

    z_re = [view_re[:, k, :].copy() for k in range(radix)]
    z_im = [view_im[:, k, :].copy() for k in range(radix)]

    if sofar > 1:
        tw_re, tw_im = twiddle_table(sofar, radix, mode)
        for k in range(1, radix):
            zr = z_re[k]
            zi = z_im[k]
            z_re[k] = tw_re[k] * zr - tw_im[k] * zi
            z_im[k] = tw_re[k] * zi + tw_im[k] * zr

    out_re, out_im = kernel(z_re, z_im)

    for k in range(radix):
        view_re[:, k, :] = out_re[k]
        view_im[:, k, :] = out_im[k]
