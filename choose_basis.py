"""
Choose-Basis Conversion

Symmetric functions can be written as linear combinations of products

    (p'_{k_1} choose j_1) (p'_{k_2} choose j_2) ... (p'_{k_n} choose j_n)

with distinct k_i, where p'_k is the modified power sum (the number of
k-cycles). This module converts between that basis and the monomial basis,
and substitutes each product by a Laurent series in q^{-1}:

    (p'_k choose j)  ->  (M_k(q) choose j) * (q^{-k} / (1 + q^{-k}))^j

where M_k(q) = (1/k) Σ_{d|k} μ(k/d) q^d is the Moebius sum (the number of
monic irreducible polynomials of degree k over F_q). The whole sum is scaled
by (1 - q^{-1}) and truncated below a requested degree.

Usage Example:
--------------
    from symmetric_polynomial import SymmetricFunctionAlgebra
    from choose_basis import symmetric_in_choose_basis, symm_poly_to_poly

    alg = SymmetricFunctionAlgebra()
    expr = symmetric_in_choose_basis(alg.elementary(1) - 1)
    print(expr)                               # -1 + 1 * (p'_1 C 1)
    print(symm_poly_to_poly(alg.elementary(1) - 1, -6).to_rev_string())
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import sympy as sp

from big_rational import BigRational
from integer_functions import (choose, divisors, factorial, k_partitions, moebius, multinomial_coef,
                               partition_to_num_cycles)
from laurent_polynomial import LaurentPolynomial, q
from symmetric_polynomial import SymmetricFunctionAlgebra, SymmetricPolynomial

logger = logging.getLogger(__name__)

ChoosePair = Tuple[int, int]
ChooseTerm = Tuple[ChoosePair, ...]


class ChooseBasisExpression:
    """
    A sum of coefficient * Π (p'_k choose j) terms.

    Each term is a tuple of (k, j) pairs; the empty tuple is the constant
    term. Terms are kept exactly as produced and never combined, so two
    expressions can differ as data while being equal as functions. Compare
    them by evaluating on cycle types (see evaluate()) or by converting back
    with choose_basis_to_symmetric().
    """

    def __init__(self, terms: Optional[Iterable[Sequence[ChoosePair]]] = None,
                 coefficients: Optional[Iterable[Union[int, BigRational]]] = None):
        self.terms: List[ChooseTerm] = []
        self.coefficients: List[BigRational] = []
        terms = list(terms) if terms is not None else []
        coefficients = list(coefficients) if coefficients is not None else []
        if len(terms) != len(coefficients):
            raise ValueError(
                f"terms and coefficients must have the same length "
                f"(got {len(terms)} and {len(coefficients)})"
            )
        for term, coef in zip(terms, coefficients):
            self.append(term, coef)

    def append(self, term: Sequence[ChoosePair], coefficient: Union[int, BigRational]) -> None:
        pairs = tuple((int(k), int(j)) for k, j in term)
        self.terms.append(pairs)
        self.coefficients.append(BigRational(coefficient))

    def extend(self, other: "ChooseBasisExpression", scale: Union[int, BigRational] = 1) -> None:
        """Append every term of `other`, with coefficients multiplied by `scale`."""
        for term, coef in other:
            self.terms.append(term)
            self.coefficients.append(coef * scale)

    def scaled(self, scale: Union[int, BigRational]) -> "ChooseBasisExpression":
        result = ChooseBasisExpression()
        result.extend(self, scale)
        return result

    def __iter__(self) -> Iterator[Tuple[ChooseTerm, BigRational]]:
        return iter(zip(self.terms, self.coefficients))

    def __len__(self) -> int:
        return len(self.terms)

    def __add__(self, other: "ChooseBasisExpression") -> "ChooseBasisExpression":
        if not isinstance(other, ChooseBasisExpression):
            return NotImplemented
        result = ChooseBasisExpression()
        result.extend(self)
        result.extend(other)
        return result

    def evaluate(self, cycles: Sequence[int]) -> BigRational:
        """
        Evaluate on a cycle-count vector: Σ coef Π C(cycles[k-1], j).

        cycles[i] is the number of (i+1)-cycles; missing entries count as 0.
        """
        total = BigRational(0)
        for term, coef in self:
            value = coef
            for k, j in term:
                if k == 0:
                    continue
                count = cycles[k - 1] if k <= len(cycles) else 0
                value = value * choose(count, j)
                if value == 0:
                    break
            total = total + value
        return total

    @staticmethod
    def _term_to_string(term: ChooseTerm, coef: BigRational) -> str:
        s = str(coef)
        for k, j in term:
            s += f" * (p'_{k} C {j})"
        return s

    def __str__(self):
        """Terms from last to first, joined by ' + ' (LinComboToString)."""
        if not self.terms:
            return "0"
        return " + ".join(self._term_to_string(t, c) for t, c in reversed(list(self)))

    def __repr__(self):
        return f"ChooseBasisExpression({len(self)} terms)"


# --------------------------------------------------------------------------
# Monomial basis <-> choose basis
# --------------------------------------------------------------------------
def _group_partition(partition: Sequence[int]) -> ChooseTerm:
    """(5, 2, 2, 1) -> ((5, 1), (2, 2), (1, 1)): one pair per distinct part."""
    pairs: List[ChoosePair] = []
    for part in partition:
        if pairs and pairs[-1][0] == part:
            pairs[-1] = (part, pairs[-1][1] + 1)
        else:
            pairs.append((part, 1))
    return tuple(pairs)


def _choose_product(algebra: SymmetricFunctionAlgebra, term: ChooseTerm) -> SymmetricPolynomial:
    prod = algebra.one()
    for k, j in term:
        prod = prod * algebra.choose_power_prime(k, j)
    return prod


def symmetric_in_choose_basis(p: SymmetricPolynomial) -> ChooseBasisExpression:
    """
    Express a symmetric polynomial in the (p'_k choose j) product basis.

    The highest-index monomial m_λ of the remainder is cancelled by the choose
    product built from λ (equal parts grouped into one (k, multiplicity)
    pair), scaled to match its leading coefficient. Each step removes the
    current leading index, so the loop ends with the constant term. The zero
    polynomial gives an empty expression.

    Args:
        p: Symmetric polynomial to convert

    Returns:
        ChooseBasisExpression whose terms appear in the order they were cancelled

    Raises:
        RuntimeError: If a choose product does not lead with the monomial it
                      was built from (corrupted monomial ordering)
    """
    algebra = p.algebra
    expression = ChooseBasisExpression()
    remainder = p

    while not remainder.is_zero():
        top = remainder.leading_index()
        if top == 0:
            expression.append((), remainder.leading_coefficient())
            break

        term = _group_partition(algebra.index[top])
        prod = _choose_product(algebra, term)
        if prod.leading_index() != top:
            raise RuntimeError(
                f"choose product {term} leads with index {prod.leading_index()}, expected {top}"
            )

        coef = remainder.leading_coefficient() / prod.leading_coefficient()
        expression.append(term, coef)
        remainder = remainder - prod * coef

    logger.debug("converted symmetric polynomial to %d choose terms", len(expression))
    return expression


def choose_basis_to_symmetric(expression: ChooseBasisExpression,
                              algebra: SymmetricFunctionAlgebra) -> SymmetricPolynomial:
    """Multiply out every term; the inverse of symmetric_in_choose_basis()."""
    total = algebra.zero()
    for term, coef in expression:
        total = total + _choose_product(algebra, term) * coef
    return total


# --------------------------------------------------------------------------
# Choose basis -> Laurent series
# --------------------------------------------------------------------------
def moebius_sum(k: int) -> sp.Poly:
    """
    M_k(q) = (1/k) Σ_{d | k} μ(k/d) q^d as a Poly over QQ.

    M_1 = q, M_2 = (q^2 - q)/2, M_3 = (q^3 - q)/3, ...
    """
    if k < 1:
        raise ValueError(f"Moebius sum needs k >= 1 (got {k})")
    expr = sp.Add(*[sp.Rational(moebius(k // d), k) * q ** d for d in divisors(k)])
    return sp.Poly(expr, q, domain=sp.QQ)


def polynomial_choose(f: sp.Poly, j: int) -> sp.Poly:
    """The polynomial binomial f (f-1) ... (f-j+1) / j!."""
    if j < 0:
        raise ValueError(f"choose needs j >= 0 (got {j})")
    result = sp.Poly(1, *f.gens, domain=sp.QQ)
    for i in range(j):
        result = result * (f - i)
    return result.mul_ground(sp.Rational(1, factorial(j)))


def power_series_coefficients(k: int, j: int, depth: int) -> LaurentPolynomial:
    """
    Truncation of (q^{-k} - q^{-2k} + q^{-3k} - ...)^j to exponents -k*l, l <= depth.

    The coefficient of q^{-kl} sums over the partitions of l into exactly j
    parts: each contributes the number of orderings of its parts (a
    multinomial coefficient of its cycle type) times (-1) per even part.
    """
    if j == 0:
        return LaurentPolynomial.constant(1)
    if depth < j:
        return LaurentPolynomial()

    coefs = [BigRational(0)] * (k * (depth - j) + 1)
    for l in range(j, depth + 1):
        total = BigRational(0)
        for part in k_partitions(l, j):
            sign = -1 if sum(1 for v in part if v % 2 == 0) % 2 else 1
            total = total + multinomial_coef(j, partition_to_num_cycles(part)) * sign
        coefs[k * (depth - l)] = total
    return LaurentPolynomial(-k * depth, coefs)


def _choose_moebius_polynomial(k: int, j: int, cache: Optional[Dict]) -> LaurentPolynomial:
    key = ('choose', k, j)
    if cache is not None and key in cache:
        return cache[key]
    result = LaurentPolynomial.from_poly(polynomial_choose(moebius_sum(k), j))
    if cache is not None:
        cache[key] = result
    return result


def _series(k: int, j: int, depth: int, cache: Optional[Dict]) -> LaurentPolynomial:
    key = ('series', k, j, depth)
    if cache is not None and key in cache:
        return cache[key]
    result = power_series_coefficients(k, j, depth)
    if cache is not None:
        cache[key] = result
    return result


def _mult_by_power_series(poly: LaurentPolynomial, k: int, j: int, min_degree: int,
                          cache: Optional[Dict]) -> LaurentPolynomial:
    """
    poly * (q^{-k} / (1 + q^{-k}))^j, correct in every degree >= min_degree.

    Every factor of the series has nonpositive degree, so terms of poly
    below min_degree can be dropped first, and only the series terms that
    can still land at or above min_degree are generated.
    """
    poly = poly.round_to_nth_degree(min_degree)
    if poly.is_zero():
        return poly
    depth = (poly.degree() - min_degree) // k
    series = _series(k, j, depth, cache)
    return (poly * series).round_to_nth_degree(min_degree)


def cyclic_polynomial_basis_to_polynomial(expression: ChooseBasisExpression, min_degree: int,
                                          series_cache: Optional[Dict] = None) -> LaurentPolynomial:
    """
    Substitute every (p'_k choose j) product by its Laurent series and sum.

    Each term becomes coef * Π (M_k(q) choose j) * (1 - q^{-1}) followed by
    the power-series factors (q^{-k}/(1+q^{-k}))^j, multiplied in one pair
    at a time so that the depth still needed shrinks as the product grows.

    Args:
        expression: Choose-basis expression
        min_degree: Lowest degree kept. Coefficients of q^e for e >= min_degree
                    are exact; everything below is discarded.
        series_cache: Optional dict reused across calls for the Moebius-sum
                      binomials and truncated power series

    Returns:
        LaurentPolynomial with lead >= min_degree (unless it is zero)
    """
    scale = LaurentPolynomial(-1, [-1, 1])  # 1 - q^{-1}
    output = LaurentPolynomial()

    for term, coef in expression:
        pairs = [(k, j) for k, j in term if k != 0]
        next_term = LaurentPolynomial.constant(coef)
        for k, j in pairs:
            next_term = next_term * _choose_moebius_polynomial(k, j, series_cache)
        next_term = next_term * scale

        for k, j in pairs:
            if next_term.is_zero():
                break
            next_term = _mult_by_power_series(next_term, k, j, min_degree, series_cache)

        output = output + next_term

    return output.round_to_nth_degree(min_degree)


def symm_poly_to_poly(poly: SymmetricPolynomial, min_degree: int = -10,
                      series_cache: Optional[Dict] = None) -> LaurentPolynomial:
    """Convert a symmetric polynomial to its truncated Laurent series."""
    return cyclic_polynomial_basis_to_polynomial(symmetric_in_choose_basis(poly), min_degree, series_cache)
