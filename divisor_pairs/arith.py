"""
Integer primitives.

Responsibility: exact integer arithmetic only. No floats, no arrays.
This file must not know about sieves or the matching count.
"""

from math import isqrt


def divisor_count(n: int) -> int:
    """
    Count the positive divisors of n by trial division.

    Divisors above sqrt(n) mirror the ones below it, so each divisor
    i <= isqrt(n) counts twice unless i * i == n.

    Parameters
    ----------
    n : int
        Integer >= 1.

    Returns
    -------
    int
        d(n).
    """
    if n < 1:
        raise ValueError(f"divisor_count is defined for n >= 1, got {n}")
    if n == 1:
        return 1

    count = 2  # 1 and n
    for i in range(2, isqrt(n) + 1):
        if n % i == 0:
            if i != n // i:
                count += 2
            else:
                count += 1
    return count


def find_exponent(n: int, factor: int) -> int:
    """
    Return how many times factor divides n.

    Parameters
    ----------
    n : int
        Integer >= 1.
    factor : int
        Integer >= 2.

    Returns
    -------
    int
        Largest e with factor**e dividing n.
    """
    if n < 1 or factor < 2:
        raise ValueError(f"find_exponent needs n >= 1 and factor >= 2, got n={n}, factor={factor}")

    exponent = 0
    while n % factor == 0:
        n //= factor
        exponent += 1
    return exponent


def ilog(n: int, base: int) -> int:
    """
    Largest i such that base**i <= n, by repeated multiplication.

    Float logarithms are off by one at exact powers (math.log(243, 3) is
    4.999...), which would drop the top exponent level of a sieve.

    Parameters
    ----------
    n : int
        Integer >= 1.
    base : int
        Integer >= 2.

    Returns
    -------
    int
        floor(log_base(n)).
    """
    if n < 1 or base < 2:
        raise ValueError(f"ilog needs n >= 1 and base >= 2, got n={n}, base={base}")

    exponent = 0
    power = base
    while power <= n:
        power *= base
        exponent += 1
    return exponent
