"""
Reference character formulas for the symmetric group.

frobenius_formula() evaluates an irreducible character directly from the
Frobenius formula and is slow; it is the oracle the choose-basis expansions
are checked against. choose_form_to_character() evaluates a choose-basis
character polynomial on a cycle type.

Cycle types are given as cycle-count vectors: cycles[i] is the number of
(i+1)-cycles, so [5] is the identity of S_5 and [2, 0, 1] is a 3-cycle in S_5.
"""

import logging
from typing import Optional, Sequence

from big_rational import BigRational
from choose_basis import ChooseBasisExpression
from integer_functions import permutation_sign, permutations
from series_errors import YoungDiagramShapeError
from symmetric_polynomial import SymmetricFunctionAlgebra

logger = logging.getLogger(__name__)


def frobenius_formula(tableau: Sequence[int], cycles: Sequence[int],
                      algebra: Optional[SymmetricFunctionAlgebra] = None) -> BigRational:
    """
    Character of the irreducible representation `tableau` on the class `cycles`.

    χ = Σ_σ sgn(σ) [x^{l - s_σ}] Π_k p_k^{cycles[k-1]}, where l_i = λ_i + r - 1 - i
    and s_σ is the exponent vector of the Vandermonde term for σ. Only
    nonnegative exponent vectors contribute; the coefficient of x^α in a
    symmetric function is its coefficient on m_{sort(α)}.

    Args:
        tableau: Full Young diagram (all rows, first row included)
        cycles: Cycle-count vector
        algebra: Symmetric function algebra for the power-sum product.
                 A fresh one is used when omitted.

    Returns:
        The character value (an integer, as a BigRational)

    Raises:
        YoungDiagramShapeError: If tableau is not a nonincreasing positive sequence
        ValueError: If the tableau and cycle type sizes differ

    Example:
        >>> frobenius_formula([3, 2], [3, 1])
        BigRational(1, 1)
    """
    tableau = list(tableau)
    for i, value in enumerate(tableau):
        if value <= 0 or (i > 0 and value > tableau[i - 1]):
            raise YoungDiagramShapeError(f"not a Young diagram: {tableau}")
    size = sum((i + 1) * c for i, c in enumerate(cycles))
    if size != sum(tableau):
        raise ValueError(
            f"cycle type of size {size} does not match tableau {tableau} of size {sum(tableau)}"
        )

    if algebra is None:
        algebra = SymmetricFunctionAlgebra()

    prod = algebra.one()
    for i, count in enumerate(cycles):
        for _ in range(count):
            prod = prod * algebra.power(i + 1)

    r = len(tableau)
    l = [tableau[i] + r - 1 - i for i in range(r)]

    result = BigRational(0)
    for perm in permutations(r):
        exponents = [l[i] - (r - 1 - perm[i]) for i in range(r)]
        if any(e < 0 for e in exponents):
            continue
        coef = prod.coefficient(exponents)
        if coef != 0:
            result = result + coef * permutation_sign(perm)

    logger.debug("frobenius_formula(%s, %s) = %s", tableau, list(cycles), result)
    return result


def choose_form_to_character(expression: ChooseBasisExpression, cycles: Sequence[int]) -> BigRational:
    """
    Evaluate a choose-basis character polynomial on a cycle-count vector.

    Σ coef Π C(cycles[k-1], j); cycle counts past the end of `cycles` are 0.
    `cycles` is not modified.
    """
    return expression.evaluate(cycles)
