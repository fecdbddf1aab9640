from __future__ import annotations

import math
from typing import Any

import numpy as np

# Largest length accepted by the CLI and config loader
FFT_LENGTH_MAX = 1 << 31


def validate_finite_array(values: np.ndarray) -> bool:
    return bool(np.isfinite(values).all())


def validate_length(n: Any, max_value: int = FFT_LENGTH_MAX) -> tuple[bool, str]:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        return False, f"length must be an integer, got {type(n).__name__}"
    if n < 1:
        return False, f"length {n} must be >= 1"
    if n > max_value:
        return False, f"length {n} exceeds {max_value}"
    return True, ""


def validate_sample_buffer(values: np.ndarray, n: int, name: str) -> tuple[bool, str]:
    if values.ndim != 1:
        return False, f"{name} must be 1-D, got shape {values.shape}"
    if values.shape[0] != n:
        return False, f"{name} has {values.shape[0]} samples, expected {n}"
    if np.iscomplexobj(values):
        return False, f"{name} must be real-valued"
    return True, ""


def validate_band(f0: float, f1: float) -> tuple[bool, str]:
    if not (math.isfinite(f0) and math.isfinite(f1)):
        return False, "band edges must be finite"
    if f0 < 0 or f1 < f0:
        return False, f"invalid band {f0:.3f}-{f1:.3f} Hz"
    return True, ""


def validate_positive(value: float, name: str) -> tuple[bool, str]:
    if not math.isfinite(value) or value <= 0:
        return False, f"{name} must be a positive finite number, got {value}"
    return True, ""
