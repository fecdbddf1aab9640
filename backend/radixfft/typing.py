from __future__ import annotations

from typing import Any, Literal, TypeAlias

import numpy as np
import numpy.typing as npt

NDArrayFloat: TypeAlias = npt.NDArray[np.floating[Any]]
NDArrayComplex: TypeAlias = npt.NDArray[np.complexfloating[Any, Any]]
NDArrayInt: TypeAlias = npt.NDArray[np.integer[Any]]

# Real and imaginary halves of a complex sequence
SplitComplex: TypeAlias = tuple[NDArrayFloat, NDArrayFloat]

TwiddleMode: TypeAlias = Literal["recurrence", "direct"]
SizePolicy: TypeAlias = Literal["nearest", "not_larger", "not_smaller"]
