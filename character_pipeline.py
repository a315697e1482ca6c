"""
Character Pipeline

CharacterPipeline ties the pieces together: it owns the symmetric function
algebra (monomial index and product cache), the Young-diagram expansion cache
and the Laurent series cache, and exposes the end-to-end conversions

    Young diagram -> choose basis -> Laurent series in q^{-1}
    wedge power   -> symmetric polynomial -> Laurent series in q^{-1}

with per-operation timing statistics and a printable performance report.

Usage Example:
--------------
    from character_pipeline import CharacterPipeline

    pipeline = CharacterPipeline(min_degree=-8)
    print(pipeline.young_to_poly([2, 1]).to_rev_string())
    print(pipeline.wedge_powers(2).to_rev_string(latex=True))
    pipeline.print_performance_report()
"""

import functools
import logging
import time
from typing import Dict, Optional, Sequence

from big_rational import BigRational
from choose_basis import ChooseBasisExpression, cyclic_polynomial_basis_to_polynomial, symm_poly_to_poly
from laurent_polynomial import LaurentPolynomial
from rep_theory import frobenius_formula
from symmetric_polynomial import SymmetricFunctionAlgebra, SymmetricPolynomial
from young_diagram import (YoungDiagramCache, validate_young_diagram, wedge_to_symmetric_polynomial,
                           young_diagram_to_choose)

logger = logging.getLogger(__name__)


def _timed(name):
    """Record wall time, slowest call and slow-call count of a pipeline stage under `name`."""
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            start = time.perf_counter()
            try:
                return method(self, *args, **kwargs)
            finally:
                elapsed = time.perf_counter() - start
                self._timing_stats[name] += elapsed
                self._timing_counts[name] += 1
                self._timing_max[name] = max(self._timing_max[name], elapsed)
                if elapsed > self.slow_call_threshold:
                    self._slow_calls[name] += 1
                    if self.show_performance_warnings:
                        logger.warning("%s took %.2fs (threshold %.2fs)", name, elapsed, self.slow_call_threshold)
        return wrapper
    return decorator


class CharacterPipeline:
    """
    Stable characters of Young diagram families as truncated Laurent series.
    """

    def __init__(self, min_degree: int = -10, memoized: bool = True,
                 show_performance_warnings: bool = False, slow_call_threshold: float = 5.0):
        """
        Initialize the pipeline.

        Args:
            min_degree: Default lowest degree kept in Laurent series output
            memoized: If True, Young diagram expansions are cached by adjusted
                      row lengths
            show_performance_warnings: If True, log a warning whenever a call
                                       takes longer than slow_call_threshold
            slow_call_threshold: Seconds before a call counts as slow
        """
        if min_degree > 0:
            raise ValueError(f"min_degree must be <= 0 (got {min_degree})")
        if slow_call_threshold < 0:
            raise ValueError(f"slow_call_threshold must be nonnegative (got {slow_call_threshold})")

        self.min_degree = min_degree
        self.memoized = memoized
        self.show_performance_warnings = show_performance_warnings
        self.slow_call_threshold = slow_call_threshold

        self.algebra = SymmetricFunctionAlgebra()
        self.young_cache = YoungDiagramCache()
        self._series_cache: Dict = {}

        # Performance timing statistics
        self._timing_stats = {
            'young_diagram_to_choose': 0.0,
            'symm_poly_to_poly': 0.0,
            'cyclic_polynomial_basis_to_polynomial': 0.0,
            'frobenius_formula': 0.0,
        }
        self._timing_counts = {key: 0 for key in self._timing_stats}
        self._timing_max = {key: 0.0 for key in self._timing_stats}
        self._slow_calls = {key: 0 for key in self._timing_stats}

    def _resolve_min_degree(self, min_degree: Optional[int]) -> int:
        return self.min_degree if min_degree is None else min_degree

    # ------------------------------------------------------------ conversions
    def wedge_to_symmetric_polynomial(self, n: int) -> SymmetricPolynomial:
        return wedge_to_symmetric_polynomial(n, self.algebra)

    @_timed('young_diagram_to_choose')
    def young_diagram_to_choose(self, rows: Sequence[int]) -> ChooseBasisExpression:
        return young_diagram_to_choose(rows, self.algebra, self.young_cache, self.memoized)

    @_timed('symm_poly_to_poly')
    def symm_poly_to_poly(self, poly: SymmetricPolynomial,
                          min_degree: Optional[int] = None) -> LaurentPolynomial:
        return symm_poly_to_poly(poly, self._resolve_min_degree(min_degree), self._series_cache)

    @_timed('cyclic_polynomial_basis_to_polynomial')
    def cyclic_polynomial_basis_to_polynomial(self, expression: ChooseBasisExpression,
                                              min_degree: Optional[int] = None) -> LaurentPolynomial:
        return cyclic_polynomial_basis_to_polynomial(expression, self._resolve_min_degree(min_degree),
                                                     self._series_cache)

    def wedge_powers(self, k: int, min_degree: Optional[int] = None) -> LaurentPolynomial:
        """Series for the k-th wedge power of the standard representation."""
        return self.symm_poly_to_poly(self.wedge_to_symmetric_polynomial(k), min_degree)

    def young_to_poly(self, rows: Sequence[int], min_degree: Optional[int] = None) -> LaurentPolynomial:
        """
        Series for the family (N - |rows|, rows...).

        Raises:
            YoungDiagramShapeError: For malformed diagrams
        """
        rows = validate_young_diagram(rows)
        if all(v == 1 for v in rows):
            return self.wedge_powers(len(rows), min_degree)
        return self.cyclic_polynomial_basis_to_polynomial(self.young_diagram_to_choose(rows), min_degree)

    @_timed('frobenius_formula')
    def frobenius_formula(self, tableau: Sequence[int], cycles: Sequence[int]) -> BigRational:
        return frobenius_formula(tableau, cycles, self.algebra)

    # ------------------------------------------------------------- statistics
    def get_cache_statistics(self) -> Dict[str, int]:
        """
        Get statistics about cached computations.

        Returns:
            Dictionary with the algebra's cache statistics plus:
            - young_expansions: Number of cached adjusted-length expansions
            - young_hits / young_misses: Lookups into that cache
            - series_entries: Number of cached Moebius binomials and power series
        """
        stats = dict(self.algebra.get_cache_statistics())
        stats.update({
            'young_expansions': len(self.young_cache),
            'young_hits': self.young_cache.hits,
            'young_misses': self.young_cache.misses,
            'series_entries': len(self._series_cache),
        })
        return stats

    def get_timing_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Wall time spent in each timed pipeline stage.

        Stages are the Young diagram expansion, the two series conversions and
        the Frobenius oracle. Each maps to total_time, call_count, avg_time,
        max_time (slowest single call) and slow_calls (calls that took longer
        than slow_call_threshold, whether or not warnings are enabled).
        """
        return {
            stage: {
                'total_time': total,
                'call_count': self._timing_counts[stage],
                'avg_time': total / self._timing_counts[stage] if self._timing_counts[stage] else 0.0,
                'max_time': self._timing_max[stage],
                'slow_calls': self._slow_calls[stage],
            }
            for stage, total in self._timing_stats.items()
        }

    def reset_timing_statistics(self):
        """Zero the per-stage timings; cached results are untouched."""
        for stage in self._timing_stats:
            self._timing_stats[stage] = 0.0
            self._timing_max[stage] = 0.0
            self._timing_counts[stage] = 0
            self._slow_calls[stage] = 0

    def print_performance_report(self):
        """Print a formatted performance report with timing and cache statistics."""
        print("\n" + "=" * 60)
        print("PERFORMANCE REPORT")
        print("=" * 60)

        print("\nCache Statistics:")
        print("-" * 60)
        cache_stats = self.get_cache_statistics()
        print(f"  Monomial index size:        {cache_stats['monomial_index_size']}")
        print(f"  Monomial products cached:   {cache_stats['monomial_products']}"
              f" ({cache_stats['monomial_product_hits']} hits, {cache_stats['monomial_product_misses']} misses)")
        print(f"  Choose terms cached:        {cache_stats['choose_power_prime_terms']}")
        print(f"  Young expansions cached:    {cache_stats['young_expansions']}"
              f" ({cache_stats['young_hits']} hits, {cache_stats['young_misses']} misses)")
        print(f"  Series entries cached:      {cache_stats['series_entries']}")

        print("\nTiming Statistics:")
        print("-" * 60)
        timing_stats = self.get_timing_statistics()
        print(f"{'Stage':<40} {'Calls':<7} {'Total (s)':<11} {'Max (s)':<11} {'Slow':<5}")
        print("-" * 60)
        for op, stats in sorted(timing_stats.items(), key=lambda x: x[1]['total_time'], reverse=True):
            if stats['call_count'] > 0:
                print(f"{op:<40} {stats['call_count']:<7} {stats['total_time']:<11.4f} "
                      f"{stats['max_time']:<11.4f} {stats['slow_calls']:<5}")

        print("=" * 60 + "\n")

    def clear_cache(self):
        """
        Clear all cached computations.

        The monomial index table is kept (live polynomials refer to its
        positions); everything else is recomputed on demand.
        """
        self.algebra.clear_cache()
        self.young_cache.clear()
        self._series_cache = {}
