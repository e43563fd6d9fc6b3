"""Exceptions raised by the relief geometry kernel."""


class ReliefError(Exception):
    """Base exception for relief-related errors."""


class GeometryError(ReliefError, ValueError):
    """Raised for degenerate geometry (empty paths, zero length, malformed profiles)."""


class BadInputError(ReliefError, ValueError):
    """Raised when arguments are inconsistent (misaligned splits, indices out of range)."""


BadInput = BadInputError
