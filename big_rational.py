"""
Exact rational numbers over Python's arbitrary-precision integers.

BigRational values are immutable and always kept in canonical form:
lowest terms, positive denominator, and denominator 1 for zero. Reduction
divides out the prime factors shared by numerator and denominator, walking
the sorted factor list produced by prime_functions.prime_factorize().

Usage Example:
--------------
    >>> from big_rational import BigRational
    >>> x = BigRational(6, -8)
    >>> x
    BigRational(-3, 4)
    >>> x + 1
    BigRational(1, 4)
    >>> str(BigRational(10, 5))
    '2'
"""

from typing import List, Union

import sympy as sp

from prime_functions import prime_factorize
from series_errors import DomainError


class BigRational:
    """
    A fraction a/b with a, b integers, b > 0, gcd(|a|, b) = 1.

    Arithmetic accepts other BigRationals or plain ints on either side and
    always returns a new BigRational. Comparisons use cross multiplication.
    """

    __slots__ = ('_a', '_b')

    def __init__(self, numerator: Union[int, "BigRational"] = 0, denominator: int = 1):
        """
        Args:
            numerator: Integer numerator (or a BigRational to copy)
            denominator: Nonzero integer denominator

        Raises:
            DomainError: If the denominator is zero
            TypeError: If either argument is not an integer
        """
        if isinstance(numerator, BigRational):
            if denominator != 1:
                raise TypeError("denominator must be 1 when copying a BigRational")
            self._a = numerator._a
            self._b = numerator._b
            return
        if isinstance(numerator, bool) or not isinstance(numerator, int):
            raise TypeError(f"numerator must be an int, got {type(numerator).__name__}")
        if isinstance(denominator, bool) or not isinstance(denominator, int):
            raise TypeError(f"denominator must be an int, got {type(denominator).__name__}")
        if denominator == 0:
            raise DomainError("BigRational denominator cannot be zero")

        if denominator < 0:
            numerator = -numerator
            denominator = -denominator
        if numerator == 0:
            denominator = 1

        self._a, self._b = self._reduce(numerator, denominator)

    @staticmethod
    def _reduce(a: int, b: int):
        """Divide out every prime that appears in both factorizations."""
        if b == 1:
            return a, b
        for p in prime_factorize(b):
            # the denominator's factor list is sorted, so repeated primes are
            # matched against the numerator one multiplicity at a time
            if a % p == 0:
                a //= p
                b //= p
        return a, b

    # ------------------------------------------------------------------ access
    @property
    def numerator(self) -> int:
        return self._a

    @property
    def denominator(self) -> int:
        return self._b

    @classmethod
    def from_sympy(cls, value) -> "BigRational":
        """Build from a sympy Rational/Integer (or anything sympify accepts)."""
        r = sp.Rational(value)
        return cls(int(r.p), int(r.q))

    def to_sympy(self) -> sp.Rational:
        return sp.Rational(self._a, self._b)

    def is_integer(self) -> bool:
        return self._b == 1

    # -------------------------------------------------------------- arithmetic
    @staticmethod
    def _coerce(other):
        if isinstance(other, BigRational):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return BigRational(other)
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return BigRational(self._a * other._b + self._b * other._a, self._b * other._b)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return BigRational(self._a * other._b - self._b * other._a, self._b * other._b)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return BigRational(self._a * other._a, self._b * other._b)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        if other._a == 0:
            raise DomainError("division of a BigRational by zero")
        return BigRational(self._a * other._b, self._b * other._a)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other / self

    def __neg__(self):
        return BigRational(-self._a, self._b)

    def __pos__(self):
        return self

    def __abs__(self):
        return BigRational(abs(self._a), self._b)

    # ------------------------------------------------------------- comparisons
    def __eq__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._a * other._b == other._a * self._b

    def __lt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._a * other._b < other._a * self._b

    def __le__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._a * other._b <= other._a * self._b

    def __gt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._a * other._b > other._a * self._b

    def __ge__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._a * other._b >= other._a * self._b

    def __hash__(self):
        # canonical form makes (a, b) a value key; integers hash like ints
        if self._b == 1:
            return hash(self._a)
        return hash((self._a, self._b))

    def __bool__(self):
        return self._a != 0

    # ----------------------------------------------------------------- display
    def __str__(self):
        if self._b == 1:
            return f"{self._a}"
        return f"{self._a}/{self._b}"

    def __repr__(self):
        return f"BigRational({self._a}, {self._b})"

    def to_decimal(self, n: int) -> List[int]:
        """
        Return the decimal expansion of this fraction to n digits.

        The first entry is the place of the leading digit: .0045623 gives -3
        (the leading digit is 4*10^-3) and 78.432 gives 1. The next n entries
        are the digits; the first of them carries the sign of the fraction.

        Args:
            n: Number of digits to produce

        Returns:
            [leading place, d_1, ..., d_n]

        Raises:
            DomainError: If n is negative
        """
        if n < 0:
            raise DomainError(f"digit count must be nonnegative (got {n})")
        if self._a == 0:
            return [0] + [0] * n

        r = abs(self._a)
        b = self._b
        place = 0
        offset = 1
        if r < b:
            while r * offset < b:
                offset *= 10
                place -= 1
        else:
            while b * offset * 10 <= r:
                offset *= 10
                place += 1

        digit_list = [place]
        if place < 0:
            r = offset * r
        else:
            b = offset * b

        for _ in range(n):
            q = r // b
            r -= b * q
            digit_list.append(q)
            r *= 10

        if self._a < 0 and n > 0:
            digit_list[1] = -digit_list[1]
        return digit_list
