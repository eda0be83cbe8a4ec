# exceptions.py

__all__ = ["PreconditionViolation"]


class PreconditionViolation(ValueError):
    """
    Raised when an input does not satisfy a documented precondition: too few
    samples or nodes, non-finite values, mismatched lengths, a non-positive
    resolution, or a degenerate interpolation grid.

    Subclasses ValueError so callers validating inputs the usual way keep
    working.
    """
