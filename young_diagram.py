"""
Young Diagram -> Choose Basis

A Young diagram (k_1, k_2, ..., k_r) here stands for the family of irreducible
S_N representations (N - |k|, k_1, ..., k_r), N -> infinity. Their characters
are eventually polynomials in the cycle counts, and this module produces that
character polynomial in the (p'_k choose j) basis.

The expansion follows the Frobenius formula with the first (infinite) row left
out: the Vandermonde determinant is expanded over permutations of 0..r, each
permutation shifts the row lengths to adjusted lengths l, and every way of
partitioning l[0], l[1], ... into cycles contributes one choose term weighted
by multinomial coefficients.

Usage Example:
--------------
    from symmetric_polynomial import SymmetricFunctionAlgebra
    from young_diagram import young_diagram_to_choose, YoungDiagramCache

    alg = SymmetricFunctionAlgebra()
    cache = YoungDiagramCache()
    expr = young_diagram_to_choose([2, 1], alg, cache)
    print(expr.evaluate([3, 1]))   # character of (2, 2, 1) on cycle type 1^3 2^1
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from big_rational import BigRational
from choose_basis import ChooseBasisExpression, symmetric_in_choose_basis
from integer_functions import (all_partition_lists, multinomial_coef, partition_to_num_cycles,
                               permutation_sign, permutations)
from series_errors import YoungDiagramShapeError
from symmetric_polynomial import SymmetricFunctionAlgebra, SymmetricPolynomial

logger = logging.getLogger(__name__)


def validate_young_diagram(rows: Sequence[int]) -> List[int]:
    """
    Check that rows is a nonincreasing sequence of positive integers.

    Returns:
        The rows as a new list

    Raises:
        YoungDiagramShapeError: On a non-positive entry or an increasing step
    """
    rows = list(rows)
    for i, value in enumerate(rows):
        if value <= 0:
            raise YoungDiagramShapeError(
                f"Young diagram rows must be positive (row {i} is {value} in {rows})"
            )
        if i > 0 and value > rows[i - 1]:
            raise YoungDiagramShapeError(
                f"Young diagram rows must be nonincreasing (row {i} is {value} after {rows[i - 1]})"
            )
    return rows


def wedge_to_symmetric_polynomial(n: int, algebra: SymmetricFunctionAlgebra) -> SymmetricPolynomial:
    """e_n - e_{n-1} + e_{n-2} - ... ± 1, the character of the n-th wedge power of the standard rep."""
    if n < 0:
        raise ValueError(f"wedge power needs n >= 0 (got {n})")
    p = algebra.zero()
    pm1 = 1
    for i in range(n, 0, -1):
        p = p + algebra.elementary(i) * pm1
        pm1 = -pm1
    return p + pm1


class YoungDiagramCache:
    """
    Memo table for the unsigned expansion of one set of adjusted row lengths.

    Keys are tuple(l); values are lists of (term, coefficient) pairs. The sign
    of the Vandermonde term is applied by the caller on every use, so a value
    can be shared between permutations of opposite parity.
    """

    def __init__(self):
        self._table: Dict[Tuple[int, ...], List[Tuple[tuple, BigRational]]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: Tuple[int, ...]) -> Optional[List[Tuple[tuple, BigRational]]]:
        value = self._table.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: Tuple[int, ...], value: List[Tuple[tuple, BigRational]]) -> None:
        self._table.setdefault(key, value)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key) -> bool:
        return key in self._table

    def clear(self) -> None:
        self._table = {}
        self.hits = 0
        self.misses = 0


def _expand_adjusted_lengths(l: Sequence[int]) -> List[Tuple[tuple, BigRational]]:
    """Unsigned choose terms for one tuple of adjusted row lengths."""
    terms = []
    for parts in all_partition_lists(l):
        cycles = [partition_to_num_cycles(part) for part in parts]
        maxterm = max(part[0] for part in parts)
        for cycle in cycles:
            cycle.extend([0] * (maxterm - len(cycle)))

        pairs = []
        coef = BigRational(1)
        for i in range(maxterm):
            ith_terms = [cycle[i] for cycle in cycles]
            total = sum(ith_terms)
            if total == 0:
                continue
            pairs.append((i + 1, total))
            coef = coef * multinomial_coef(total, ith_terms)
        terms.append((tuple(pairs), coef))
    return terms


def young_diagram_to_choose_general(rows: Sequence[int], cache: Optional[YoungDiagramCache] = None,
                                    memoized: bool = True) -> ChooseBasisExpression:
    """
    Character polynomial of the diagram family by the Vandermonde expansion alone.

    Args:
        rows: Young diagram without its first row
        cache: Memo table for adjusted row lengths. A private table is used
               when omitted.
        memoized: If False the cache is neither read nor written

    Returns:
        ChooseBasisExpression (terms are not combined)

    Raises:
        YoungDiagramShapeError: For malformed diagrams
    """
    rows = validate_young_diagram(rows)
    result = ChooseBasisExpression()
    r = len(rows)
    if r == 0:
        # the trivial representation
        result.append((), 1)
        return result

    if cache is None:
        cache = YoungDiagramCache()

    # Π_{i<j} (x_i - x_j) in the Frobenius formula is Π_{i<j} (x_j - x_i) for
    # the Vandermonde determinant up to this sign
    sgn_change = 1 if (r * (r + 1) // 2) % 2 == 0 else -1

    for perm in permutations(r + 1):
        sign = permutation_sign(perm) * sgn_change
        l = tuple(rows[i] - perm[i + 1] + (r - 1 - i) for i in range(r))
        if any(v < 0 for v in l):
            continue

        expansion = cache.get(l) if memoized else None
        if expansion is None:
            expansion = _expand_adjusted_lengths(l)
            if memoized:
                cache.put(l, expansion)

        for term, coef in expansion:
            result.append(term, coef * sign)

    logger.debug("Young diagram %s expanded to %d choose terms", rows, len(result))
    return result


def young_diagram_to_choose(rows: Sequence[int], algebra: SymmetricFunctionAlgebra,
                            cache: Optional[YoungDiagramCache] = None,
                            memoized: bool = True) -> ChooseBasisExpression:
    """
    Character polynomial of the family (N - |rows|, rows...) in the choose basis.

    All-ones diagrams (1^n) are the wedge powers of the standard representation
    and are converted from wedge_to_symmetric_polynomial() directly; every
    other diagram goes through young_diagram_to_choose_general().

    Raises:
        YoungDiagramShapeError: For malformed diagrams
    """
    rows = validate_young_diagram(rows)
    if all(v == 1 for v in rows):
        return symmetric_in_choose_basis(wedge_to_symmetric_polynomial(len(rows), algebra))
    return young_diagram_to_choose_general(rows, cache, memoized)
