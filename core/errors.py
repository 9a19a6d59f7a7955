# core/errors.py


class SolveError(Exception):
    """Raised when the symbolic engine cannot handle an expression."""
