"""Transform length factorization and stage planning.

A length N is split into an ordered list of radices. The fast radices
(10, 8, 5, 4, 3, 2) are pulled out first, largest first; whatever is left
is broken into primes by trial division. Every factor must stay at or
below MAX_PRIME_FACTOR, otherwise the length is rejected with
UnsupportedLengthError so the caller can retry with a length from
radixfft.dsp.fft.sizes.

Execution order is the reverse of discovery order: primes found by trial
division run first, the preferred composite radices run last.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_PRIME_FACTOR = 37

# Descending preference; 10 first because its kernel needs no twiddles
PREFERRED_RADICES: tuple[int, ...] = (10, 8, 5, 4, 3, 2)


class UnsupportedLengthError(ValueError):
    """Raised when a transform length has a prime factor above MAX_PRIME_FACTOR."""

    def __init__(self, length: int, factor: int):
        self.length = length
        self.factor = factor
        super().__init__(
            f"FFT length {length} has prime factor {factor} "
            f"(largest supported is {MAX_PRIME_FACTOR})"
        )


@dataclass(frozen=True)
class StageDescriptor:
    """Geometry of one butterfly stage.

    Attributes:
        sofar: Product of the radices of all earlier stages
        actual: Radix handled by this stage
        remain: Product of the radices of all later stages
    """

    sofar: int
    actual: int
    remain: int

    @property
    def length(self) -> int:
        return self.sofar * self.actual * self.remain


def _check_length(n: int) -> int:
    n = operator.index(n)
    if n < 1:
        raise ValueError(f"FFT length must be >= 1, got {n}")
    return n


def _discover_factors(n: int) -> list[int]:
    """Return factors of n in discovery order (no bound check)."""
    if n == 1:
        return [1]

    found: list[int] = []
    i = 0
    while n > 1 and i < len(PREFERRED_RADICES):
        radix = PREFERRED_RADICES[i]
        if n % radix == 0:
            n //= radix
            found.append(radix)
        else:
            i += 1

    # 8*2 costs more than 4*4
    if found and found[-1] == 2:
        for pos in range(len(found) - 2, -1, -1):
            if found[pos] == 8:
                found[pos] = 4
                found[-1] = 4
                break

    if n > 1:
        k = 2
        while k * k <= n:
            while n % k == 0:
                n //= k
                found.append(k)
            k += 1
        if n > 1:
            found.append(n)

    return found


def factorize(n: int) -> tuple[int, ...]:
    """Factor a transform length into execution-order radices.

    Args:
        n: Transform length (>= 1)

    Returns:
        Tuple of radices whose product is n

    Raises:
        UnsupportedLengthError: If any factor exceeds MAX_PRIME_FACTOR
        ValueError: If n < 1
    """
    n = _check_length(n)
    found = _discover_factors(n)

    largest = max(found)
    if largest > MAX_PRIME_FACTOR:
        raise UnsupportedLengthError(n, largest)

    factors = tuple(reversed(found))
    logger.debug(f"factorize({n}) -> {factors}")
    return factors


def is_supported_length(n: int) -> bool:
    """Check whether n can be transformed without raising."""
    try:
        factorize(n)
    except ValueError:
        return False
    return True


def plan_stages(n: int, factors: tuple[int, ...]) -> tuple[StageDescriptor, ...]:
    """Derive per-stage strides from an execution-order factor list.

    sofar[0] = 1 and remain[0] = n / factors[0]; each later stage multiplies
    sofar by the previous radix and divides remain by its own.
    """
    stages: list[StageDescriptor] = []
    sofar = 1
    remain = n
    for radix in factors:
        if remain % radix != 0:
            raise ValueError(f"factors {factors} do not divide length {n}")
        remain //= radix
        stages.append(StageDescriptor(sofar=sofar, actual=radix, remain=remain))
        sofar *= radix

    if sofar != n:
        raise ValueError(f"factors {factors} multiply to {sofar}, not {n}")
    return tuple(stages)
