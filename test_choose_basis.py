"""
Tests for the choose-basis conversions and the Laurent series substitution
"""

import pytest
import sympy as sp

from big_rational import BigRational
from choose_basis import (ChooseBasisExpression, choose_basis_to_symmetric,
                          cyclic_polynomial_basis_to_polynomial, moebius_sum, polynomial_choose,
                          power_series_coefficients, symm_poly_to_poly, symmetric_in_choose_basis)
from integer_functions import all_partitions, partition_to_num_cycles
from laurent_polynomial import LaurentPolynomial, q
from symmetric_polynomial import SymmetricFunctionAlgebra
from young_diagram import wedge_to_symmetric_polynomial


@pytest.fixture
def alg():
    return SymmetricFunctionAlgebra()


class TestChooseBasisExpression:
    """Container behaviour, evaluation and display"""

    def test_str(self, alg):
        expr = symmetric_in_choose_basis(alg.elementary(1) - 1)
        assert str(expr) == "-1 + 1 * (p'_1 C 1)"

    def test_empty(self):
        expr = ChooseBasisExpression()
        assert len(expr) == 0
        assert str(expr) == "0"
        assert expr.evaluate([3]) == 0

    def test_mismatched_lengths(self):
        with pytest.raises(ValueError, match="same length"):
            ChooseBasisExpression([((1, 1),)], [1, 2])

    def test_evaluate(self):
        # (c1 choose 2) + c2 - c1
        expr = ChooseBasisExpression([((1, 2),), ((2, 1),), ((1, 1),)], [1, 1, -1])
        assert expr.evaluate([4, 1]) == 6 + 1 - 4
        assert expr.evaluate([4]) == 6 - 4

    def test_evaluate_does_not_modify_cycles(self):
        expr = ChooseBasisExpression([((3, 1),)], [1])
        cycles = [1]
        assert expr.evaluate(cycles) == 0
        assert cycles == [1]

    def test_scaled_and_add(self):
        expr = ChooseBasisExpression([((1, 1),), ()], [1, -1])
        doubled = expr.scaled(2)
        assert doubled.coefficients == [BigRational(2), BigRational(-2)]
        assert len(expr + doubled) == 4
        assert (expr + doubled).evaluate([5]) == 12


class TestSymmetricToChoose:
    """Greedy conversion into the choose basis and back"""

    def test_zero(self, alg):
        assert len(symmetric_in_choose_basis(alg.zero())) == 0

    def test_constant(self, alg):
        expr = symmetric_in_choose_basis(alg.constant(7))
        assert expr.terms == [()]
        assert expr.coefficients == [BigRational(7)]

    def test_leading_partition_grouped(self, alg):
        expr = symmetric_in_choose_basis(alg.monomial([2, 2, 1]))
        assert expr.terms[0] == ((2, 2), (1, 1))

    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_round_trip_wedge(self, alg, n):
        p = wedge_to_symmetric_polynomial(n, alg)
        assert choose_basis_to_symmetric(symmetric_in_choose_basis(p), alg) == p

    def test_round_trip_mixed(self, alg):
        p = alg.monomial([2, 1]) * 3 + alg.monomial([3]) * BigRational(1, 2) + alg.power(1) - 2
        assert choose_basis_to_symmetric(symmetric_in_choose_basis(p), alg) == p

    def test_standard_character(self, alg):
        # e1 - 1 counts fixed points minus one
        expr = symmetric_in_choose_basis(alg.elementary(1) - 1)
        for part in all_partitions(5):
            cycles = partition_to_num_cycles(part)
            assert expr.evaluate(cycles) == cycles[0] - 1


class TestMoebiusPolynomials:
    """Moebius sums and polynomial binomials"""

    def test_moebius_sum(self):
        assert moebius_sum(1) == sp.Poly(q, q, domain=sp.QQ)
        assert sp.expand(moebius_sum(2).as_expr() - (q ** 2 - q) / 2) == 0
        assert sp.expand(moebius_sum(4).as_expr() - (q ** 4 - q ** 2) / 4) == 0

    def test_moebius_sum_rejects_zero(self):
        with pytest.raises(ValueError, match="k >= 1"):
            moebius_sum(0)

    def test_polynomial_choose(self):
        f = sp.Poly(q, q, domain=sp.QQ)
        assert sp.expand(polynomial_choose(f, 2).as_expr() - q * (q - 1) / 2) == 0
        assert polynomial_choose(f, 0).as_expr() == 1

    def test_polynomial_choose_first_factor_is_f(self):
        f = moebius_sum(2)
        assert polynomial_choose(f, 1) == f

    @pytest.mark.parametrize("k", [1, 2, 3])
    @pytest.mark.parametrize("j", [1, 2, 3])
    def test_moebius_choose_at_integer_q(self, k, j):
        f = moebius_sum(k)
        m = f.eval(5)
        assert polynomial_choose(f, j).eval(5) == sp.binomial(m, j)


class TestPowerSeries:
    """Truncated powers of q^{-k} / (1 + q^{-k})"""

    def test_single_factor(self):
        assert power_series_coefficients(1, 1, 4) == LaurentPolynomial(-4, [-1, 1, -1, 1])

    def test_square(self):
        # q^{-2} (1 - 2x + 3x^2 - ...) with x = q^{-1}
        assert power_series_coefficients(1, 2, 4) == LaurentPolynomial(-4, [3, -2, 1])

    def test_spacing(self):
        assert power_series_coefficients(2, 1, 3) == LaurentPolynomial(-6, [1, 0, -1, 0, 1])

    def test_degenerate(self):
        assert power_series_coefficients(3, 0, 5) == LaurentPolynomial.constant(1)
        assert power_series_coefficients(1, 3, 2).is_zero()


class TestLaurentSeries:
    """End-to-end conversion into truncated Laurent series"""

    def test_standard_representation_series(self, alg):
        result = symm_poly_to_poly(wedge_to_symmetric_polynomial(1, alg), -6)
        assert result == LaurentPolynomial(-6, [2, -2, 2, -2, 2, -1])

    def test_constant_series(self):
        expr = ChooseBasisExpression([()], [1])
        assert cyclic_polynomial_basis_to_polynomial(expr, -4) == LaurentPolynomial(-1, [-1, 1])

    def test_zero_pairs_ignored(self):
        plain = ChooseBasisExpression([((1, 1),)], [1])
        padded = ChooseBasisExpression([((0, 3), (1, 1))], [1])
        assert cyclic_polynomial_basis_to_polynomial(plain, -5) == \
            cyclic_polynomial_basis_to_polynomial(padded, -5)

    def test_truncation_is_consistent(self, alg):
        p = wedge_to_symmetric_polynomial(2, alg)
        deep = symm_poly_to_poly(p, -9)
        shallow = symm_poly_to_poly(p, -4)
        assert deep.round_to_nth_degree(-4) == shallow
        assert shallow.lead >= -4

    def test_series_cache_reused(self, alg):
        p = wedge_to_symmetric_polynomial(2, alg)
        cache = {}
        first = symm_poly_to_poly(p, -6, cache)
        assert len(cache) > 0
        size = len(cache)
        assert symm_poly_to_poly(p, -6, cache) == first
        assert len(cache) == size
        assert symm_poly_to_poly(p, -6) == first
