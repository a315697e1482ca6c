"""
Symmetric Function Algebra (monomial basis)

Elements of the ring of symmetric functions over the rationals are stored as
sparse maps from a monomial index to a BigRational coefficient. The index is a
fixed enumeration of all integer partitions shared by every element created
through the same SymmetricFunctionAlgebra:

    index 0            -> ()             (the constant monomial)
    index 1            -> (1,)
    index 2, 3         -> (2,), (1, 1)
    index 4, 5, 6      -> (3,), (2, 1), (1, 1, 1)
    ...

Partitions are listed size by size, each size in all_partitions() order.
Within a size, every coarsening of a partition comes before it, so the
highest-index term of p_λ (or of any product of choose terms) is the monomial
m_λ itself. The choose-basis conversion relies on this.

Usage Example:
--------------
    from symmetric_polynomial import SymmetricFunctionAlgebra

    alg = SymmetricFunctionAlgebra()
    e2 = alg.elementary(2)                 # m[1,1]
    p1 = alg.power(1)                      # m[1]
    print(p1 * p1 - 2 * e2)                # m[2]
    print(alg.choose(alg.power_prime(2), 2))
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from sympy.utilities.iterables import multiset_permutations

from big_rational import BigRational
from integer_functions import all_partitions, divisors, factorial, moebius
from series_errors import DomainError

logger = logging.getLogger(__name__)

Partition = Tuple[int, ...]
Scalar = Union[int, BigRational]


def _canonical_partition(partition: Iterable[int]) -> Partition:
    parts = [int(p) for p in partition]
    if any(p < 0 for p in parts):
        raise ValueError(f"partition entries must be nonnegative (got {list(parts)})")
    return tuple(sorted((p for p in parts if p != 0), reverse=True))


def _orbit_size(vector: Sequence[int]) -> int:
    """Number of distinct rearrangements of `vector`."""
    counts: Dict[int, int] = {}
    for v in vector:
        counts[v] = counts.get(v, 0) + 1
    size = factorial(len(vector))
    for c in counts.values():
        size //= factorial(c)
    return size


class MonomialIndex:
    """
    Bijection between monomial positions and partitions.

    The table is extended lazily, one partition size at a time, whenever a
    partition or position beyond the current table is requested. Positions
    never change once assigned.
    """

    def __init__(self):
        self._partitions: List[Partition] = [()]
        self._positions: Dict[Partition, int] = {(): 0}
        self._max_size = 0

    def _extend_to(self, size: int) -> None:
        while self._max_size < size:
            self._max_size += 1
            for part in all_partitions(self._max_size):
                key = tuple(part)
                self._positions[key] = len(self._partitions)
                self._partitions.append(key)
            logger.debug("monomial index extended to size %d (%d partitions)",
                         self._max_size, len(self._partitions))

    def find(self, partition: Iterable[int]) -> int:
        """
        Return the position of a partition (FindMonomialIndex).

        Zero entries are ignored and the parts may be given in any order.
        """
        key = _canonical_partition(partition)
        if key not in self._positions:
            self._extend_to(sum(key))
        return self._positions[key]

    def __getitem__(self, index: int) -> Partition:
        if index < 0:
            raise IndexError(f"monomial index must be nonnegative (got {index})")
        while index >= len(self._partitions):
            self._extend_to(self._max_size + 1)
        return self._partitions[index]

    def __len__(self) -> int:
        return len(self._partitions)

    @property
    def max_size(self) -> int:
        """Largest partition size currently tabulated."""
        return self._max_size


class SymmetricFunctionAlgebra:
    """
    Factory and shared state for SymmetricPolynomial elements.

    Holds the monomial index table and a cache of monomial products
    m_λ * m_μ, both keyed by partition content. Elements from different
    algebras cannot be combined.
    """

    def __init__(self, index: Optional[MonomialIndex] = None):
        self.index = index if index is not None else MonomialIndex()
        self._product_cache: Dict[Tuple[Partition, Partition], Dict[Partition, int]] = {}
        self._choose_cache: Dict[Tuple[int, int], "SymmetricPolynomial"] = {}
        self._product_hits = 0
        self._product_misses = 0

    # ------------------------------------------------------------- generators
    def zero(self) -> "SymmetricPolynomial":
        return SymmetricPolynomial(self)

    def one(self) -> "SymmetricPolynomial":
        return self.constant(1)

    def constant(self, c: Scalar) -> "SymmetricPolynomial":
        return SymmetricPolynomial(self, {0: BigRational(c)})

    def monomial(self, partition: Iterable[int], c: Scalar = 1) -> "SymmetricPolynomial":
        """c * m_partition"""
        return SymmetricPolynomial(self, {self.index.find(partition): BigRational(c)})

    def elementary(self, n: int) -> "SymmetricPolynomial":
        """The elementary symmetric function e_n = m_(1^n); e_0 = 1."""
        if n < 0:
            raise ValueError(f"elementary symmetric function needs n >= 0 (got {n})")
        return self.monomial([1] * n)

    def power(self, k: int) -> "SymmetricPolynomial":
        """The power sum p_k = m_(k)."""
        if k < 1:
            raise ValueError(f"power sum needs k >= 1 (got {k})")
        return self.monomial([k])

    def power_prime(self, k: int) -> "SymmetricPolynomial":
        """
        The modified power sum p'_k = (1/k) Σ_{d | k} μ(k/d) p_d.

        Evaluated on the eigenvalues of a permutation matrix it counts the
        k-cycles of the permutation.
        """
        if k < 1:
            raise ValueError(f"modified power sum needs k >= 1 (got {k})")
        coefficients = {}
        for d in divisors(k):
            mu = moebius(k // d)
            if mu != 0:
                coefficients[self.index.find([d])] = BigRational(mu, k)
        return SymmetricPolynomial(self, coefficients)

    def choose(self, f: "SymmetricPolynomial", j: int) -> "SymmetricPolynomial":
        """
        The symmetric-function binomial (f choose j) = f (f-1) ... (f-j+1) / j!.

        Raises:
            DomainError: If j is negative
        """
        if j < 0:
            raise DomainError(f"choose needs j >= 0 (got {j})")
        result = self.one()
        for i in range(j):
            result = result * (f - i)
        return result * BigRational(1, factorial(j))

    def choose_power_prime(self, k: int, j: int) -> "SymmetricPolynomial":
        """(p'_k choose j), cached per (k, j) since the basis changes reuse it heavily."""
        key = (k, j)
        cached = self._choose_cache.get(key)
        if cached is None:
            cached = self.choose(self.power_prime(k), j)
            self._choose_cache[key] = cached
        return cached

    # --------------------------------------------------------------- products
    def monomial_product(self, lam: Partition, mu: Partition) -> Dict[Partition, int]:
        """
        Expand m_lam * m_mu in the monomial basis.

        With L = len(lam) + len(mu) variables, lam is fixed in one arrangement
        and every distinct arrangement of mu is added to it; the tally of each
        sorted sum ν is rescaled by |orbit(lam)| / |orbit(ν)|.

        Returns:
            Dictionary mapping ν -> integer coefficient of m_ν
        """
        key = (lam, mu) if lam <= mu else (mu, lam)
        cached = self._product_cache.get(key)
        if cached is not None:
            self._product_hits += 1
            return cached
        self._product_misses += 1

        lam, mu = key
        if not lam:
            result = {mu: 1}
        elif not mu:
            result = {lam: 1}
        else:
            alpha = list(lam) + [0] * len(mu)
            tallies: Dict[Partition, int] = {}
            for beta in multiset_permutations(list(mu) + [0] * len(lam)):
                nu = tuple(sorted((a + b for a, b in zip(alpha, beta) if a + b != 0), reverse=True))
                tallies[nu] = tallies.get(nu, 0) + 1

            width = len(alpha)
            lam_orbit = _orbit_size(alpha)
            result = {}
            for nu, count in tallies.items():
                nu_orbit = _orbit_size(list(nu) + [0] * (width - len(nu)))
                result[nu] = lam_orbit * count // nu_orbit

        self._product_cache[key] = result
        return result

    def get_cache_statistics(self) -> Dict[str, int]:
        return {
            'monomial_index_size': len(self.index),
            'monomial_index_max_degree': self.index.max_size,
            'monomial_products': len(self._product_cache),
            'monomial_product_hits': self._product_hits,
            'monomial_product_misses': self._product_misses,
            'choose_power_prime_terms': len(self._choose_cache),
        }

    def clear_cache(self) -> None:
        """Drop cached monomial products and choose terms. The index table is
        kept, since live elements refer to its positions."""
        self._product_cache = {}
        self._choose_cache = {}
        self._product_hits = 0
        self._product_misses = 0


class SymmetricPolynomial:
    """
    A symmetric function as a sparse combination of monomials m_λ.

    Coefficients are keyed by monomial index (see MonomialIndex); zero
    coefficients are never stored, so the zero element has no terms.
    """

    def __init__(self, algebra: SymmetricFunctionAlgebra,
                 coefficients: Optional[Dict[int, Scalar]] = None):
        self.algebra = algebra
        self._coefficients: Dict[int, BigRational] = {}
        if coefficients:
            for i, c in coefficients.items():
                c = BigRational(c)
                if c != 0:
                    self._coefficients[i] = c

    # ------------------------------------------------------------------ access
    @property
    def coefs(self) -> List[BigRational]:
        """Dense coefficient list up to the highest nonzero index ([] for zero)."""
        if not self._coefficients:
            return []
        top = max(self._coefficients)
        return [self._coefficients.get(i, BigRational(0)) for i in range(top + 1)]

    def items(self) -> List[Tuple[int, BigRational]]:
        """(index, coefficient) pairs in increasing index order."""
        return sorted(self._coefficients.items())

    def terms(self) -> List[Tuple[Partition, BigRational]]:
        """(partition, coefficient) pairs in increasing index order."""
        return [(self.algebra.index[i], c) for i, c in self.items()]

    def coefficient(self, partition: Iterable[int]) -> BigRational:
        return self._coefficients.get(self.algebra.index.find(partition), BigRational(0))

    def leading_index(self) -> int:
        """Highest monomial index with a nonzero coefficient (-1 for zero)."""
        return max(self._coefficients) if self._coefficients else -1

    def leading_coefficient(self) -> BigRational:
        if not self._coefficients:
            return BigRational(0)
        return self._coefficients[self.leading_index()]

    def degree(self) -> int:
        """Largest partition size present (-1 for zero)."""
        if not self._coefficients:
            return -1
        return max(sum(self.algebra.index[i]) for i in self._coefficients)

    def is_zero(self) -> bool:
        return not self._coefficients

    def is_constant(self) -> bool:
        return all(i == 0 for i in self._coefficients)

    # -------------------------------------------------------------- arithmetic
    def _coerce(self, other) -> Optional["SymmetricPolynomial"]:
        if isinstance(other, SymmetricPolynomial):
            if other.algebra is not self.algebra:
                raise ValueError("cannot combine symmetric polynomials from different algebras")
            return other
        if isinstance(other, BigRational) or (isinstance(other, int) and not isinstance(other, bool)):
            return self.algebra.constant(other)
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        result = dict(self._coefficients)
        for i, c in other._coefficients.items():
            result[i] = result.get(i, BigRational(0)) + c
        return SymmetricPolynomial(self.algebra, result)

    __radd__ = __add__

    def __neg__(self):
        return SymmetricPolynomial(self.algebra, {i: -c for i, c in self._coefficients.items()})

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + (-self)

    def __mul__(self, other):
        if isinstance(other, BigRational) or (isinstance(other, int) and not isinstance(other, bool)):
            return SymmetricPolynomial(self.algebra, {i: c * other for i, c in self._coefficients.items()})
        other = self._coerce(other)
        if other is None:
            return NotImplemented

        index = self.algebra.index
        result: Dict[int, BigRational] = {}
        for i, a in self._coefficients.items():
            lam = index[i]
            for j, b in other._coefficients.items():
                ab = a * b
                for nu, count in self.algebra.monomial_product(lam, index[j]).items():
                    k = index.find(nu)
                    result[k] = result.get(k, BigRational(0)) + ab * count
        return SymmetricPolynomial(self.algebra, result)

    __rmul__ = __mul__

    def __eq__(self, other):
        if isinstance(other, SymmetricPolynomial) and other.algebra is not self.algebra:
            return NotImplemented
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._coefficients == other._coefficients

    __hash__ = None

    # ----------------------------------------------------------------- display
    def __str__(self):
        if not self._coefficients:
            return "0"
        pieces = []
        for partition, c in reversed(self.terms()):
            if not partition:
                pieces.append(str(c))
            elif c == 1:
                pieces.append(f"m{list(partition)}")
            else:
                pieces.append(f"{c}*m{list(partition)}")
        return " + ".join(pieces)

    def __repr__(self):
        return f"SymmetricPolynomial({self})"
