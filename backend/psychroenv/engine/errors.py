"""
Error types raised by the psychrometric engine.

All of them subclass ValueError so callers (and the API layer) can keep
treating bad numeric input as a 422-style problem.
"""


class PsychrometricError(ValueError):
    """Base class for engine errors."""


class DomainError(PsychrometricError):
    """Input outside the domain of a formula, e.g. log(0) at RH = 0%."""


class ConvergenceError(PsychrometricError):
    """A temperature root-find had no bracketed root or did not converge."""
