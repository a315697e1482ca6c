"""
Tests for the integer and combinatorics engine
"""

import pytest

from big_rational import BigRational
from integer_functions import (all_partition_lists, all_partitions, binary_digits, choose,
                               decimal_to_string, digits, digits_to_int, divisors, factorial, gcd,
                               is_prime, is_square, isqrt, k_partitions, kth_digit, moebius,
                               multinomial_coef, num_cycles_to_partition, partition_to_num_cycles,
                               partitions, pentagonal, permutation_sign, permutations, phi,
                               prime_factorize, prime_partitions, sqrt_digits)
from series_errors import DomainError


class TestPrimes:
    """Primes, factorization and arithmetic functions"""

    def test_prime_factorize(self):
        assert prime_factorize(360) == [2, 2, 2, 3, 3, 5]
        assert prime_factorize(97) == [97]
        assert prime_factorize(1) == []
        assert prime_factorize(0) == []

    def test_is_prime(self):
        assert [n for n in range(20) if is_prime(n)] == [2, 3, 5, 7, 11, 13, 17, 19]

    def test_moebius(self):
        assert [moebius(n) for n in range(1, 11)] == [1, -1, -1, 0, -1, 1, -1, 0, 0, 1]
        assert moebius(0) == 0
        assert moebius(-3) == 0

    def test_phi_gcd_divisors(self):
        assert phi(9) == 6
        assert phi(12) == 4
        assert gcd(12, 18) == 6
        assert gcd(0, 5) == 5
        assert divisors(12) == [1, 2, 3, 4, 6, 12]


class TestCoefficients:
    """Roots, factorials, binomial and multinomial coefficients"""

    def test_isqrt(self):
        assert isqrt(17) == 4
        assert is_square(16)
        assert not is_square(15)
        with pytest.raises(DomainError, match="negative"):
            isqrt(-1)

    def test_sqrt_digits(self):
        assert sqrt_digits(2, 4) == [0, 1, 4, 1, 4]
        assert sqrt_digits(10000, 3) == [2, 1, 0, 0]

    def test_factorial(self):
        assert factorial(0) == 1
        assert factorial(5) == 120
        with pytest.raises(DomainError):
            factorial(-1)

    def test_choose(self):
        assert choose(5, 2) == 10
        assert isinstance(choose(5, 2), BigRational)
        assert choose(2, 5) == 0
        assert choose(-1, 0) == 0

    def test_multinomial(self):
        assert multinomial_coef(4, [2, 1, 1]) == 12
        assert multinomial_coef(3, [2, 2]) == 0
        assert multinomial_coef(3, [1, -1]) == 0


class TestDigits:
    """Decimal and binary digit helpers"""

    def test_kth_digit(self):
        assert kth_digit(1234, 1) == 4
        assert kth_digit(1234, 4) == 1
        assert kth_digit(1234, 5) == 0
        with pytest.raises(DomainError):
            kth_digit(1234, 0)

    def test_digits_round_trip(self):
        assert digits(1234) == [4, 3, 2, 1]
        assert digits_to_int([4, 3, 2, 1]) == 1234

    def test_binary_digits(self):
        assert binary_digits(6) == [0, 1, 1]
        assert binary_digits(0) == [0]
        with pytest.raises(DomainError):
            binary_digits(-2)

    def test_decimal_to_string(self):
        assert decimal_to_string([-3, 4, 5, 6]) == '0.00456'
        assert decimal_to_string([1, 7, 8, 4, 3, 2]) == '78.432'
        assert decimal_to_string([2, 1, 2]) == '120'
        assert decimal_to_string([-1, -5, 0]) == '-0.50'
        with pytest.raises(ValueError, match="at least one digit"):
            decimal_to_string([3])


class TestPartitionCounting:
    """Pentagonal recurrence and prime partitions"""

    def test_pentagonal(self):
        assert [pentagonal(k) for k in range(1, 7)] == [1, 2, 5, 7, 12, 15]

    def test_partitions(self):
        assert [partitions(n) for n in range(10)] == [1, 1, 2, 3, 5, 7, 11, 15, 22, 30]
        assert partitions(-1) == 0

    def test_counts_match_enumeration(self):
        for n in range(1, 12):
            assert partitions(n) == len(list(all_partitions(n)))

    def test_prime_partitions(self):
        assert prime_partitions(10) == 5
        assert prime_partitions(1) == 0


class TestPartitionEnumeration:
    """Partition enumerators and cycle-type conversions"""

    def test_all_partitions_order(self):
        assert list(all_partitions(5)) == [
            [5], [4, 1], [3, 2], [3, 1, 1], [2, 2, 1], [2, 1, 1, 1], [1, 1, 1, 1, 1]
        ]

    def test_all_partitions_edge_cases(self):
        assert list(all_partitions(0)) == [[0]]
        assert list(all_partitions(-2)) == []

    def test_all_partition_lists(self):
        assert list(all_partition_lists([1, 2])) == [[[1], [2]], [[1], [1, 1]]]
        assert list(all_partition_lists([])) == []
        assert list(all_partition_lists([2, -1])) == []
        assert list(all_partition_lists([0, 1])) == [[[0], [1]]]

    def test_k_partitions(self):
        assert list(k_partitions(6, 2)) == [[5, 1], [4, 2], [3, 3]]
        assert list(k_partitions(6, 2, min_part=2)) == [[4, 2], [3, 3]]
        assert list(k_partitions(3, 0)) == []
        assert list(k_partitions(2, 3)) == []

    def test_k_partitions_are_nonincreasing(self):
        for part in k_partitions(12, 4):
            assert len(part) == 4
            assert sum(part) == 12
            assert part == sorted(part, reverse=True)
        assert len(list(k_partitions(12, 4))) == 15

    def test_cycle_conversions(self):
        assert partition_to_num_cycles([4, 2, 1, 1]) == [2, 1, 0, 1]
        assert partition_to_num_cycles([]) == [0]
        assert partition_to_num_cycles([0]) == [0]
        assert num_cycles_to_partition([2, 1, 0, 1]) == [4, 2, 1, 1]


class TestPermutations:
    """Permutation enumeration and sign"""

    def test_permutations(self):
        perms = list(permutations(3))
        assert len(perms) == 6
        assert perms[0] == (0, 1, 2)

    def test_permutation_sign(self):
        assert permutation_sign((0, 1, 2)) == 1
        assert permutation_sign((1, 0, 2)) == -1
        assert permutation_sign((1, 2, 0)) == 1
        assert permutation_sign((0,)) == 1
        assert sum(permutation_sign(p) for p in permutations(4)) == 0
