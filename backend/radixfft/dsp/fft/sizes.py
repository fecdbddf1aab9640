"""Search for transform lengths that factor into 2, 3 and 5 only.

Such 5-smooth lengths keep the engine on its fastest kernels. Requests up
to NICE_SIZES_MAX are answered from a precomputed ascending table; larger
ones strip their 2/3/5 content and round the leftover to a power of two.
"""

from __future__ import annotations

import bisect
import logging
import operator

from radixfft.typing import SizePolicy

logger = logging.getLogger(__name__)

NICE_SIZES_MAX = 10**10


def _build_nice_sizes(limit: int) -> tuple[int, ...]:
    sizes = []
    p2 = 1
    while p2 <= limit:
        p23 = p2
        while p23 <= limit:
            p235 = p23
            while p235 <= limit:
                sizes.append(p235)
                p235 *= 5
            p23 *= 3
        p2 *= 2
    return tuple(sorted(sizes))


# All 2^a * 3^b * 5^c <= NICE_SIZES_MAX, ascending. Read-only.
NICE_SIZES: tuple[int, ...] = _build_nice_sizes(NICE_SIZES_MAX)

SIZE_POLICIES: tuple[SizePolicy, ...] = ("nearest", "not_larger", "not_smaller")


def is_nice_size(n: int) -> bool:
    """True when n >= 1 has no prime factors other than 2, 3 and 5."""
    n = operator.index(n)
    if n < 1:
        return False
    for p in (2, 3, 5):
        while n % p == 0:
            n //= p
    return n == 1


def _table_bracket(n: int) -> tuple[int, int]:
    """Return (lower, upper) table entries with lower <= n <= upper."""
    i = bisect.bisect_left(NICE_SIZES, n)
    upper = NICE_SIZES[i]
    if upper == n:
        return n, n
    return NICE_SIZES[i - 1], upper


def _overflow_bracket(n: int) -> tuple[int, int]:
    """Bracket n beyond the table by rounding its non-smooth part to powers of two."""
    k = n
    smooth = 1
    for p in (2, 3, 5):
        while k % p == 0:
            k //= p
            smooth *= p
    if k == 1:
        return n, n

    p2 = 1
    while p2 < k:
        p2 *= 2
    return (p2 // 2) * smooth, p2 * smooth


def _bracket(n: int) -> tuple[int, int]:
    if n <= NICE_SIZES_MAX:
        return _table_bracket(n)
    return _overflow_bracket(n)


def good_size(n: int) -> int:
    """Nearest 5-smooth length to n (ties go to the larger one)."""
    n = operator.index(n)
    if n <= 1:
        return 1
    lower, upper = _bracket(n)
    return lower if (n - lower) < (upper - n) else upper


def good_size_not_larger(n: int) -> int:
    """Largest 5-smooth length <= n."""
    n = operator.index(n)
    if n <= 1:
        return 1
    return _bracket(n)[0]


def good_size_not_smaller(n: int) -> int:
    """Smallest 5-smooth length >= n."""
    n = operator.index(n)
    if n <= 1:
        return 1
    return _bracket(n)[1]


def find_good_size(n: int, policy: SizePolicy = "nearest") -> int:
    """Dispatch to one of the three searches by policy name."""
    if policy == "nearest":
        result = good_size(n)
    elif policy == "not_larger":
        result = good_size_not_larger(n)
    elif policy == "not_smaller":
        result = good_size_not_smaller(n)
    else:
        raise ValueError(f"Unknown size policy {policy!r}, expected one of {SIZE_POLICIES}")
    logger.debug(f"good size for {n} ({policy}): {result}")
    return result
