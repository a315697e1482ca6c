"""
Laurent polynomials in q with exact rational coefficients.

A LaurentPolynomial stores a contiguous window of coefficients together with
`lead`, the exponent of the first stored entry. For instance

    q^{-3} + q^{-1} - 2 - 2q   is stored as   coefs = (1, 0, 1, -2, -2), lead = -3

Every instance is normalized on construction: leading and trailing zero
entries are stripped and `lead` adjusted. The zero polynomial is the single
entry 0 with lead 0.

The type is also used for truncated windows of formal power series in
q^{-1}; round_to_nth_degree() is the truncation primitive and it is the
caller's job to only truncate where the discarded terms cannot influence the
degrees it keeps.
"""

from typing import Iterable, Optional, Tuple, Union

import sympy as sp

from big_rational import BigRational

Scalar = Union[int, BigRational]

q = sp.Symbol('q')


class LaurentPolynomial:
    """Immutable Laurent polynomial with BigRational coefficients."""

    __slots__ = ('_lead', '_coefs')

    def __init__(self, lead: int = 0, coefs: Optional[Iterable[Scalar]] = None):
        """
        Args:
            lead: Exponent of the first entry of `coefs`
            coefs: Coefficients of q^lead, q^{lead+1}, ... (ints or BigRationals).
                   None or empty gives the zero polynomial.
        """
        values = [BigRational(c) for c in coefs] if coefs is not None else []

        end = len(values)
        while end > 0 and values[end - 1] == 0:
            end -= 1
        start = 0
        while start < end and values[start] == 0:
            start += 1

        if start == end:
            self._lead = 0
            self._coefs: Tuple[BigRational, ...] = (BigRational(0),)
        else:
            self._lead = lead + start
            self._coefs = tuple(values[start:end])

    # ------------------------------------------------------------ constructors
    @classmethod
    def zero(cls) -> "LaurentPolynomial":
        return cls()

    @classmethod
    def constant(cls, c: Scalar) -> "LaurentPolynomial":
        return cls(0, [c])

    @classmethod
    def monomial(cls, degree: int, c: Scalar = 1) -> "LaurentPolynomial":
        """c * q^degree"""
        return cls(degree, [c])

    @classmethod
    def from_poly(cls, poly: sp.Poly) -> "LaurentPolynomial":
        """Convert a univariate sympy Poly with rational coefficients."""
        if len(poly.gens) != 1:
            raise ValueError(f"expected a univariate Poly, got generators {poly.gens}")
        if poly.is_zero:
            return cls()
        coefs = [BigRational.from_sympy(c) for c in reversed(poly.all_coeffs())]
        return cls(0, coefs)

    @classmethod
    def from_sympy(cls, expr, symbol: sp.Symbol = q) -> "LaurentPolynomial":
        """
        Convert a sympy expression that is a finite Laurent polynomial in `symbol`.

        Raises:
            ValueError: If a term has a non-integer exponent or a non-rational
                        coefficient
        """
        if isinstance(expr, sp.Poly):
            return cls.from_poly(expr)

        expanded = sp.expand(sp.sympify(expr))
        by_degree = {}
        for term in sp.Add.make_args(expanded):
            coeff, exp = term.as_coeff_exponent(symbol)
            if not coeff.is_Rational or not exp.is_Integer:
                raise ValueError(f"term {term} is not a rational multiple of an integer power of {symbol}")
            by_degree[int(exp)] = by_degree.get(int(exp), BigRational(0)) + BigRational.from_sympy(coeff)

        if not by_degree:
            return cls()
        low = min(by_degree)
        high = max(by_degree)
        return cls(low, [by_degree.get(e, 0) for e in range(low, high + 1)])

    # ------------------------------------------------------------------ access
    @property
    def lead(self) -> int:
        """Least degree of a stored term."""
        return self._lead

    @property
    def coefs(self) -> Tuple[BigRational, ...]:
        return self._coefs

    def degree(self) -> int:
        """Highest degree of a stored term."""
        return len(self._coefs) - 1 + self._lead

    def __getitem__(self, exponent: int) -> BigRational:
        if exponent < self._lead or exponent > self.degree():
            return BigRational(0)
        return self._coefs[exponent - self._lead]

    def is_zero(self) -> bool:
        return len(self._coefs) == 1 and self._coefs[0] == 0

    # -------------------------------------------------------------- arithmetic
    @staticmethod
    def _coerce(other):
        if isinstance(other, LaurentPolynomial):
            return other
        if isinstance(other, BigRational) or (isinstance(other, int) and not isinstance(other, bool)):
            return LaurentPolynomial.constant(other)
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        lead = min(self._lead, other._lead)
        top = max(self.degree(), other.degree())
        coefs = [self[e] + other[e] for e in range(lead, top + 1)]
        return LaurentPolynomial(lead, coefs)

    __radd__ = __add__

    def __neg__(self):
        return LaurentPolynomial(self._lead, [-c for c in self._coefs])

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
            return LaurentPolynomial(self._lead, [c * other for c in self._coefs])
        if not isinstance(other, LaurentPolynomial):
            return NotImplemented

        coefs = [BigRational(0)] * (len(self._coefs) + len(other._coefs) - 1)
        for i, a in enumerate(self._coefs):
            if a == 0:
                continue
            for j, b in enumerate(other._coefs):
                if b == 0:
                    continue
                coefs[i + j] = coefs[i + j] + a * b
        return LaurentPolynomial(self._lead + other._lead, coefs)

    __rmul__ = __mul__

    def __eq__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._lead == other._lead and self._coefs == other._coefs

    def __hash__(self):
        return hash((self._lead, self._coefs))

    # -------------------------------------------------------------- truncation
    def round_to_nth_degree(self, n: int) -> "LaurentPolynomial":
        """Return this polynomial with every term q^k, k < n, removed."""
        if self._lead >= n:
            return self
        return LaurentPolynomial(n, self._coefs[n - self._lead:])

    def leading_n_terms(self, n: int) -> "LaurentPolynomial":
        """Keep only the n highest-degree stored entries."""
        n = max(n, 0)
        if n >= len(self._coefs):
            return self
        drop = len(self._coefs) - n
        return LaurentPolynomial(self._lead + drop, self._coefs[drop:])

    def first_n_terms(self, n: int) -> "LaurentPolynomial":
        """Keep only the n lowest-degree stored entries."""
        n = max(n, 0)
        if n >= len(self._coefs):
            return self
        return LaurentPolynomial(self._lead, self._coefs[:n])

    def monic(self) -> "LaurentPolynomial":
        """Scale so that the highest-degree coefficient is 1."""
        top = self._coefs[-1]
        return LaurentPolynomial(self._lead, [c / top for c in self._coefs])

    # ----------------------------------------------------------------- display
    def _term_to_string(self, i: int, c: BigRational, latex: bool) -> str:
        exponent = self._lead + i
        if exponent == 0:
            return str(c)
        power = f"q^{{{exponent}}}" if latex else f"q^{exponent}"
        if c == 1:
            return power
        if latex:
            return f"{c}{power}"
        return f"{c}*{power}"

    def __str__(self):
        terms = [self._term_to_string(i, c, False) for i, c in enumerate(self._coefs) if c != 0]
        if not terms:
            return "0"
        return " + ".join(terms)

    def __repr__(self):
        return f"LaurentPolynomial({self._lead}, [{', '.join(str(c) for c in self._coefs)}])"

    def to_rev_string(self, latex: bool = False) -> str:
        """
        Render highest degree first with sign-aware joining, e.g.
        '-1*q^-1 + 2*q^-2 - 2*q^-3'. With latex=True exponents are braced.
        """
        output = ""
        first = True
        for i in range(len(self._coefs) - 1, -1, -1):
            c = self._coefs[i]
            if c == 0:
                continue
            if first:
                output += self._term_to_string(i, c, latex)
                first = False
                continue
            output += " + " if c > 0 else " - "
            output += self._term_to_string(i, abs(c), latex)
        return output if output else "0"

    def to_sympy(self, symbol: sp.Symbol = q):
        return sp.Add(*[c.to_sympy() * symbol ** (self._lead + i) for i, c in enumerate(self._coefs)])
