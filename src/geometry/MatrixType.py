from enum import Enum


class MatrixType(Enum):
    """Structural classification of a Matrix3.

    Every tag except OTHER is a guarantee about the entries that the fast
    paths in Matrix3 rely on. Adding a member means re-checking inversion,
    multiplication and transposition.
    """
    OTHER = 0
    IDENTITY = 1
    TRANSLATION = 2
    SCALING = 3
    AFFINE = 4

    def is_affine(self) -> bool:
        """True when the tag alone guarantees a (0, 0, 1) bottom row."""
        return self is not MatrixType.OTHER
