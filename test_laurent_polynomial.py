"""
Tests for LaurentPolynomial
"""

import pytest
import sympy as sp

from big_rational import BigRational
from laurent_polynomial import LaurentPolynomial, q


@pytest.fixture
def sample():
    """q^{-3} + q^{-1} - 2 - 2q"""
    return LaurentPolynomial(-3, [1, 0, 1, -2, -2])


class TestNormalization:
    """Construction strips zeros and fixes the lead"""

    def test_strips_padding(self, sample):
        p = LaurentPolynomial(-4, [0, 1, 0, 1, -2, -2, 0])
        assert p == sample
        assert p.lead == -3
        assert p.degree() == 1

    def test_zero(self):
        p = LaurentPolynomial(5, [0, 0])
        assert p.is_zero()
        assert p.lead == 0
        assert p.coefs == (BigRational(0),)
        assert LaurentPolynomial() == LaurentPolynomial.zero()

    def test_indexing(self, sample):
        assert sample[-3] == 1
        assert sample[-2] == 0
        assert sample[1] == -2
        assert sample[10] == 0
        assert sample[-10] == 0


class TestArithmetic:
    """Addition, subtraction, and convolution"""

    def test_product(self):
        a = LaurentPolynomial(-1, [1, 1])    # 1 + q^{-1}
        b = LaurentPolynomial(-1, [-1, 1])   # 1 - q^{-1}
        assert a * b == LaurentPolynomial(-2, [-1, 0, 1])

    def test_cancellation_renormalizes(self, sample):
        assert (sample - sample).is_zero()
        diff = sample - LaurentPolynomial.monomial(-3)
        assert diff.lead == -1

    def test_scalars(self, sample):
        assert (sample * 2)[1] == -4
        assert (sample * BigRational(1, 2))[-3] == BigRational(1, 2)
        assert (sample + 2)[0] == 0
        assert (1 - LaurentPolynomial.monomial(-1)) == LaurentPolynomial(-1, [-1, 1])


class TestTruncation:
    """round_to_nth_degree and the n-term windows"""

    def test_round_to_nth_degree(self, sample):
        assert sample.round_to_nth_degree(-1) == LaurentPolynomial(-1, [1, -2, -2])
        assert sample.round_to_nth_degree(-5) == sample
        assert sample.round_to_nth_degree(5).is_zero()

    def test_round_is_idempotent(self, sample):
        for n in range(-5, 3):
            once = sample.round_to_nth_degree(n)
            assert once.round_to_nth_degree(n) == once

    def test_round_does_not_mutate(self, sample):
        sample.round_to_nth_degree(0)
        assert sample.lead == -3

    def test_leading_and_first_terms(self, sample):
        assert sample.leading_n_terms(2) == LaurentPolynomial(0, [-2, -2])
        assert sample.first_n_terms(2) == LaurentPolynomial.monomial(-3)
        assert sample.leading_n_terms(-1).is_zero()
        assert sample.first_n_terms(10) == sample

    def test_monic(self):
        assert LaurentPolynomial(0, [2, 4]).monic() == LaurentPolynomial(0, [BigRational(1, 2), 1])


class TestDisplay:
    """String renderings and sympy conversion"""

    def test_str(self):
        p = LaurentPolynomial(-1, [-1, 0, 2])
        assert str(p) == "-1*q^-1 + 2*q^1"
        assert str(LaurentPolynomial()) == "0"

    def test_rev_string(self):
        p = LaurentPolynomial(-1, [-1, 0, 2])
        assert p.to_rev_string() == "2*q^1 - q^-1"
        assert p.to_rev_string(latex=True) == "2q^{1} - q^{-1}"

    def test_rev_string_constant_term(self):
        p = LaurentPolynomial(-2, [3, 0, -1])
        assert p.to_rev_string() == "-1 + 3*q^-2"

    def test_from_sympy(self):
        p = LaurentPolynomial.from_sympy(q ** -2 + 3 * q - sp.Rational(1, 2))
        assert p == LaurentPolynomial(-2, [1, 0, BigRational(-1, 2), 3])

    def test_from_sympy_rejects_fractional_powers(self):
        with pytest.raises(ValueError, match="integer power"):
            LaurentPolynomial.from_sympy(sp.sqrt(q))

    def test_from_poly(self):
        p = LaurentPolynomial.from_poly(sp.Poly(q ** 2 - q, q, domain=sp.QQ))
        assert p == LaurentPolynomial(1, [-1, 1])

    def test_to_sympy(self, sample):
        expected = q ** -3 + q ** -1 - 2 - 2 * q
        assert sp.simplify(sample.to_sympy() - expected) == 0
