"""
Integer and Combinatorics Engine

Exact integer utilities used by every other module: binomial and multinomial
coefficients (as BigRational), digit helpers, partition counting through the
pentagonal-number recurrence, and the partition enumerators that drive the
basis changes:

- all_partitions(n):            every partition of n, in the fixed order
                                (n), (n-1,1), (n-2,2), (n-2,1,1), ...
- all_partition_lists(values):  one partition of each entry, in every combination
- k_partitions(n, k, min_part): partitions of n into exactly k parts >= min_part
- partition_to_num_cycles(p):   [4, 2, 1, 1] -> [2, 1, 0, 1]

All enumerators are iterative generators; recursion depth never depends on
the size of the input.

Prime utilities live in prime_functions and are re-exported here.
"""

import itertools
import math
from typing import Iterator, List, Sequence, Tuple

from sympy.combinatorics import Permutation

from big_rational import BigRational
from prime_functions import divisors, gcd, is_prime, moebius, phi, prime_factorize
from series_errors import DomainError

__all__ = [
    'is_prime', 'prime_factorize', 'gcd', 'phi', 'moebius', 'divisors',
    'isqrt', 'sqrt_digits', 'is_square', 'factorial', 'choose', 'multinomial_coef',
    'kth_digit', 'nth_binary_digit', 'digits', 'digits_to_int', 'binary_digits',
    'decimal_to_string', 'pentagonal', 'iter_partition_counts', 'partitions',
    'prime_partitions', 'all_partitions', 'all_partition_lists', 'k_partitions',
    'partition_to_num_cycles', 'num_cycles_to_partition', 'permutations',
    'permutation_sign',
]


# --------------------------------------------------------------------------
# Roots, factorials, coefficients
# --------------------------------------------------------------------------
def isqrt(n: int) -> int:
    """Floor of the square root of n. Raises DomainError for negative n."""
    if n < 0:
        raise DomainError(f"square root of a negative integer ({n})")
    return math.isqrt(n)


def sqrt_digits(n: int, count: int) -> List[int]:
    """
    Return the decimal digits of sqrt(n) in the BigRational.to_decimal layout.

    The first entry is the place of the leading digit, followed by `count`
    digits (truncated, not rounded).

    Example:
        >>> sqrt_digits(2, 4)
        [0, 1, 4, 1, 4]
    """
    if n < 0:
        raise DomainError(f"square root of a negative integer ({n})")
    if count < 0:
        raise DomainError(f"digit count must be nonnegative (got {count})")
    if n == 0:
        return [0] + [0] * count

    int_digits = len(str(math.isqrt(n)))
    extra = max(0, count - int_digits)
    root = str(math.isqrt(n * 10 ** (2 * extra)))
    return [int_digits - 1] + [int(c) for c in root[:count]]


def is_square(n: int) -> bool:
    if n < 0:
        return False
    r = math.isqrt(n)
    return r * r == n


def factorial(n: int) -> int:
    if n < 0:
        raise DomainError(f"factorial of a negative integer ({n})")
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def choose(n: int, k: int) -> BigRational:
    """
    Binomial coefficient n choose k as an exact rational.

    Out-of-range queries (negative arguments or k > n) are zero, not errors.
    """
    if n < 0 or k < 0 or n < k:
        return BigRational(0)

    num = 1
    for a in range(n, n - k, -1):
        num *= a
    denom = 1
    for a in range(1, k + 1):
        denom *= a
    return BigRational(num, denom)


def multinomial_coef(n: int, ks: Sequence[int]) -> BigRational:
    """
    Return n! / (ks[0]! ks[1]! ...).

    Zero when n is negative, any entry is negative, or sum(ks) exceeds n.
    A shortfall sum(ks) < n is allowed (the rest is not divided out).
    """
    if n < 0:
        return BigRational(0)
    if any(k < 0 for k in ks):
        return BigRational(0)
    if n < sum(ks):
        return BigRational(0)

    num = factorial(n)
    denom = 1
    for k in ks:
        denom *= factorial(k)
    return BigRational(num, denom)


# --------------------------------------------------------------------------
# Digits
# --------------------------------------------------------------------------
def kth_digit(n: int, k: int) -> int:
    """The k-th decimal digit of n (k = 1 is the ones digit); 0 past the end."""
    if n < 0 or k <= 0:
        raise DomainError(f"kth_digit needs n >= 0 and k >= 1 (got n={n}, k={k})")
    return (n // 10 ** (k - 1)) % 10


def nth_binary_digit(n: int, k: int) -> int:
    """The k-th binary digit of n (k = 1 is the lowest bit); 0 past the end."""
    if n < 0 or k <= 0:
        raise DomainError(f"nth_binary_digit needs n >= 0 and k >= 1 (got n={n}, k={k})")
    return (n >> (k - 1)) & 1


def digits(n: int) -> List[int]:
    """Decimal digits of n, ones digit first."""
    size = len(str(abs(n)))
    return [kth_digit(n, i) for i in range(1, size + 1)]


def digits_to_int(ds: Sequence[int]) -> int:
    """Inverse of digits(): ones digit first."""
    return sum(d * 10 ** i for i, d in enumerate(ds))


def binary_digits(n: int) -> List[int]:
    """Binary digits of n, lowest bit first."""
    size = max(1, n.bit_length())
    return [nth_binary_digit(n, i) for i in range(1, size + 1)]


def decimal_to_string(digit_list: Sequence[int]) -> str:
    """
    Render a [place, d_1, d_2, ...] digit list (see BigRational.to_decimal).

    Examples:
        [-3, 4, 5, 6]       -> '0.00456'
        [1, 7, 8, 4, 3, 2]  -> '78.432'
        [2, 1, 2]           -> '120'
    """
    if len(digit_list) < 2:
        raise ValueError("digit list needs a place and at least one digit")

    place = digit_list[0]
    ds = [abs(d) for d in digit_list[1:]]
    sign = '-' if digit_list[1] < 0 else ''

    if place < 0:
        return sign + '0.' + '0' * (-place - 1) + ''.join(str(d) for d in ds)

    int_len = place + 1
    if len(ds) <= int_len:
        return sign + ''.join(str(d) for d in ds) + '0' * (int_len - len(ds))
    head = ''.join(str(d) for d in ds[:int_len])
    tail = ''.join(str(d) for d in ds[int_len:])
    return f"{sign}{head}.{tail}"


# --------------------------------------------------------------------------
# Partition counting
# --------------------------------------------------------------------------
def pentagonal(k: int) -> int:
    """
    The k-th generalized pentagonal number m(3m-1)/2 for m = 1, -1, 2, -2, ...

    pentagonal(1) = 1, pentagonal(2) = 2, pentagonal(3) = 5, pentagonal(4) = 7.
    """
    if k <= 0:
        return 0
    m = (k + 1) // 2 if k % 2 == 1 else -(k // 2)
    return m * (3 * m - 1) // 2


def iter_partition_counts() -> Iterator[int]:
    """
    Yield p(0), p(1), p(2), ... from Euler's pentagonal-number recurrence.

    p(n) = p(n-1) + p(n-2) - p(n-5) - p(n-7) + p(n-12) + p(n-15) - ...
    with signs in blocks of two.
    """
    values = [1]
    yield 1
    pents = [1]
    while True:
        if pents[-1] < len(values):
            pents.append(pentagonal(len(pents) + 1))

        total = 0
        for j, k in enumerate(pents):
            if k > len(values):
                break
            if j % 4 in (0, 1):
                total += values[len(values) - k]
            else:
                total -= values[len(values) - k]

        values.append(total)
        yield total


def partitions(n: int) -> int:
    """Number of partitions of n (0 for negative n)."""
    if n < 0:
        return 0
    for i, count in enumerate(iter_partition_counts()):
        if i == n:
            return count
    return 0  # unreachable, the generator is infinite


def prime_partitions(n: int) -> int:
    """Number of partitions of n into prime parts (0 for n <= 1)."""
    if n <= 1:
        return 0
    ways = [1] + [0] * n
    for p in range(2, n + 1):
        if not is_prime(p):
            continue
        for total in range(p, n + 1):
            ways[total] += ways[total - p]
    return ways[n]


# --------------------------------------------------------------------------
# Partition enumeration
# --------------------------------------------------------------------------
def all_partitions(n: int) -> Iterator[List[int]]:
    """
    Yield every partition of n as a nonincreasing list.

    Order: (n), (n-1, 1), (n-2, 2), (n-2, 1, 1), ... -- each prefix is made as
    large as possible first. n == 0 yields [0]; negative n yields nothing.
    Nothing but the current partition is held in memory.

    Example:
        >>> list(all_partitions(4))
        [[4], [3, 1], [2, 2], [2, 1, 1], [1, 1, 1, 1]]
    """
    if n < 0:
        return
    if n == 0:
        yield [0]
        return

    vals = [n]
    total = n
    while vals[0] > 0:
        k = min(n - total, vals[-1])
        if k > 0:
            vals.append(k)
            total += k
            continue

        if total == n:
            yield list(vals)

        vals[-1] -= 1
        total -= 1
        for j in range(len(vals) - 1, 0, -1):
            if vals[j] > 0:
                break
            total -= vals[j]
            vals.pop(j)
            vals[j - 1] -= 1
            total -= 1


def all_partition_lists(values: Sequence[int]) -> Iterator[List[List[int]]]:
    """
    Yield every way of choosing one partition of each entry of `values`.

    Each result is a list with one partition per entry, in the same order as
    `values`. Nothing is yielded for an empty sequence or if any entry is
    negative (it has no partitions).
    """
    if len(values) == 0 or any(v < 0 for v in values):
        return
    choices = [list(all_partitions(v)) for v in values]
    for combo in itertools.product(*choices):
        yield [list(part) for part in combo]


def k_partitions(n: int, k: int, min_part: int = 1) -> Iterator[List[int]]:
    """
    Yield every partition of n into exactly k parts, each at least min_part.

    Parts are listed in nonincreasing order; partitions come out with the
    smallest part increasing, e.g. k_partitions(6, 2) gives [5, 1], [4, 2],
    [3, 3]. Driven by an explicit stack.
    """
    if k < 1:
        return

    stack: List[Tuple[int, int, int, List[int]]] = [(n, k, min_part, [])]
    while stack:
        remaining, parts, low, tail = stack.pop()
        if parts == 1:
            if remaining >= low:
                yield [remaining] + tail
            continue
        # push in reverse so the smallest next part is expanded first
        for i in range(remaining // parts, low - 1, -1):
            stack.append((remaining - i, parts - 1, i, [i] + tail))


def partition_to_num_cycles(part: Sequence[int]) -> List[int]:
    """
    Convert a nonincreasing partition to its cycle-count vector.

    Entry i - 1 counts the parts equal to i: [4, 2, 1, 1] -> [2, 1, 0, 1].
    The empty partition (or [0]) maps to [0].
    """
    if len(part) == 0 or part[0] == 0:
        return [0]

    cycles = [0] * part[0]
    for value in part:
        if value > 0:
            cycles[value - 1] += 1
    return cycles


def num_cycles_to_partition(cycles: Sequence[int]) -> List[int]:
    """Inverse of partition_to_num_cycles: [2, 1, 0, 1] -> [4, 2, 1, 1]."""
    part = []
    for i in range(len(cycles) - 1, -1, -1):
        part.extend([i + 1] * cycles[i])
    return part


# --------------------------------------------------------------------------
# Permutations
# --------------------------------------------------------------------------
def permutations(n: int) -> Iterator[Tuple[int, ...]]:
    """All permutations of 0..n-1 as tuples, identity first."""
    return itertools.permutations(range(n))


def permutation_sign(perm: Sequence[int]) -> int:
    """Sign (+1 or -1) of a permutation of 0..n-1 given in one-line notation."""
    if len(perm) <= 1:
        return 1
    return Permutation(list(perm)).signature()
