"""
Error types shared by the exact-arithmetic and character modules.

Both derive from ValueError so callers that already guard against bad
arguments with ``except ValueError`` keep working.
"""


class DomainError(ValueError):
    """Raised when an argument lies outside the domain of an exact operation
    (zero denominator, division by zero, negative square root, ...)."""


class YoungDiagramShapeError(ValueError):
    """Raised for row-length sequences that are not Young diagrams."""
