"""Arithmetic executors for the compute endpoint.

All functions are pure and operate on already validated input.
"""

from math import isqrt

from .exceptions import LcmOverflowError
from .validation import MAX_SAFE_INTEGER


def fibonacci(n: int) -> list[int]:
    """Return the first ``n`` Fibonacci numbers, starting ``0, 1, 1, 2``."""
    sequence = []
    a, b = 0, 1
    for _ in range(n):
        sequence.append(a)
        a, b = b, a + b
    return sequence


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    for divisor in range(3, isqrt(n) + 1, 2):
        if n % divisor == 0:
            return False
    return True


def filter_primes(values: list[int]) -> list[int]:
    """Keep prime values in their original order, duplicates included."""
    return [value for value in values if is_prime(value)]


def gcd(a: int, b: int) -> int:
    """Euclidean GCD of the absolute values; ``gcd(a, 0) == |a|``."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def checked_lcm(a: int, b: int) -> int | None:
    """LCM of two non-zero integers, or None if it leaves the safe range."""
    result = abs(a * b) // gcd(a, b)
    if result > MAX_SAFE_INTEGER:
        return None
    return result


def lcm_of(values: list[int]) -> int:
    """LCM of a non-empty list, left-to-right.

    Any zero makes the result 0.

    Raises:
        LcmOverflowError: If an intermediate result exceeds the safe range.
    """
    if any(value == 0 for value in values):
        return 0
    result = abs(values[0])
    for value in values[1:]:
        step = checked_lcm(result, value)
        if step is None:
            raise LcmOverflowError()
        result = step
    return result


def hcf_of(values: list[int]) -> int:
    """HCF of a non-empty list, left-to-right."""
    result = abs(values[0])
    for value in values[1:]:
        result = gcd(result, value)
    return result
