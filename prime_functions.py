"""
Prime and divisor utilities on Python integers.

Kept free of any rational-number dependency because BigRational reduces
itself through prime_factorize().
"""

from typing import List


def is_prime(n: int) -> bool:
    """Trial-division primality test."""
    if n <= 1:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    i = 3
    while i * i <= n:
        if n % i == 0:
            return False
        i += 2
    return True


def prime_factorize(n: int) -> List[int]:
    """
    Return the prime factors of n with multiplicity, smallest first.

    Trial division up to sqrt(n). Values n <= 1 have no factors.

    Example:
        >>> prime_factorize(360)
        [2, 2, 2, 3, 3, 5]
    """
    if n <= 1:
        return []

    factors = []
    while n % 2 == 0:
        factors.append(2)
        n //= 2

    i = 3
    while i * i <= n:
        while n % i == 0:
            factors.append(i)
            n //= i
        i += 2

    if n > 1:
        factors.append(n)
    return factors


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of two nonnegative integers (Euclid)."""
    if a < b:
        a, b = b, a
    if b == 0:
        return a
    while a % b != 0:
        a, b = b, a % b
    return b


def phi(n: int) -> int:
    """Euler's totient: the count of 1 <= m <= n coprime to n."""
    if n <= 0:
        return 0
    result = 1
    last = 1
    for p in prime_factorize(n):
        if p > last:
            last = p
            result *= p - 1
        else:
            result *= p
    return result


def moebius(n: int) -> int:
    """
    The Moebius function mu(n).

    0 if n is not squarefree (or n <= 0), otherwise (-1) to the number of
    prime divisors.
    """
    if n <= 0:
        return 0
    factors = prime_factorize(n)
    for i in range(len(factors) - 1):
        if factors[i] == factors[i + 1]:
            return 0
    return 1 - 2 * (len(factors) % 2)


def divisors(n: int) -> List[int]:
    """Positive divisors of n in increasing order."""
    if n <= 0:
        return []
    small = []
    large = []
    i = 1
    while i * i <= n:
        if n % i == 0:
            small.append(i)
            if i * i != n:
                large.append(n // i)
        i += 1
    return small + large[::-1]
