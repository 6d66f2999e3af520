""" Shared exception classes for vectors and matrices. """


class GeometryError(Exception):
    """Top level geometry exception."""


class SingularMatrixError(GeometryError, ZeroDivisionError):
    """Matrix could not be inverted because its determinant (or one of its
    scale factors) is exactly zero."""


class ImmutableViolationError(GeometryError, AttributeError):
    """A mutating call was made on a frozen vector or a locked matrix."""


class DegenerateNormalizationError(GeometryError, ZeroDivisionError):
    """Cannot normalize a zero-magnitude vector."""


class UnknownClassificationError(GeometryError, ValueError):
    """Matrix type tag is not a member of MatrixType."""
