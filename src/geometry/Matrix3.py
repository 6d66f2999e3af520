""" Module defining the type-tagged Matrix3 class used for 2D affine and
general 3x3 transformations. """
from __future__ import annotations

import logging
import math
from typing import ClassVar, Optional, Tuple, Union

import numpy as np

from geometry.Freezable import Freezable
from geometry.GeometryConstants import ROTATE_PARALLEL_EPSILON
from geometry.GeometryErrors import SingularMatrixError, UnknownClassificationError
from geometry.MatrixType import MatrixType
from geometry.Vector2 import Vector2
from geometry.Vector3 import Vector3

logger = logging.getLogger(__name__)

# Nine row-major entries followed by the type tag
MatrixValues = Tuple[float, float, float, float, float, float, float, float, float, MatrixType]


class Matrix3(Freezable):
    """3x3 matrix carrying a MatrixType tag.

    Entries are stored column-major in a numpy float64 array but are always
    addressed by (row, column). Points are column vectors [x, y, 1]^T, so
    `a.times_matrix(b)` applies `b` first, then `a`.

    The tag is trusted by multiplication and inversion to pick a cheaper
    formula, so a non-OTHER tag must always describe the entries exactly.
    Every operation comes in a value-returning form (`inverted`,
    `times_matrix`, `times_vector2`, ...) and an in-place form (`invert`,
    `multiply_matrix`, `multiply_vector2`, ...). A locked matrix rejects the
    in-place forms with ImmutableViolationError.
    """

    __slots__ = ("entries", "type", "frozen")

    IDENTITY: ClassVar["Matrix3"]
    X_REFLECTION: ClassVar["Matrix3"]
    Y_REFLECTION: ClassVar["Matrix3"]

    def __init__(self,
                 v00: float = 1.0, v01: float = 0.0, v02: float = 0.0,
                 v10: float = 0.0, v11: float = 1.0, v12: float = 0.0,
                 v20: float = 0.0, v21: float = 0.0, v22: float = 1.0,
                 matrix_type: Optional[MatrixType] = None):
        self.frozen = False
        self.entries = np.empty(9, dtype=float)
        self.row_major(v00, v01, v02, v10, v11, v12, v20, v21, v22, matrix_type)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def identity() -> "Matrix3":
        return Matrix3(1, 0, 0,
                       0, 1, 0,
                       0, 0, 1, MatrixType.IDENTITY)

    @staticmethod
    def translation(x: float, y: float) -> "Matrix3":
        return Matrix3(1, 0, x,
                       0, 1, y,
                       0, 0, 1, MatrixType.TRANSLATION)

    @staticmethod
    def translation_from_vector(v: Vector2) -> "Matrix3":
        return Matrix3.translation(v.x, v.y)

    @staticmethod
    def scaling(x: float, y: Optional[float] = None) -> "Matrix3":
        # one parameter scales both axes
        if y is None:
            y = x
        return Matrix3(x, 0, 0,
                       0, y, 0,
                       0, 0, 1, MatrixType.SCALING)

    scale = scaling

    @staticmethod
    def rotation_axis_angle(axis: Vector3, angle: float) -> "Matrix3":
        """Rodrigues rotation by `angle` radians around a unit `axis`."""
        c = math.cos(angle)
        s = math.sin(angle)
        C = 1 - c
        x, y, z = axis.x, axis.y, axis.z
        return Matrix3(x * x * C + c, x * y * C - z * s, x * z * C + y * s,
                       y * x * C + z * s, y * y * C + c, y * z * C - x * s,
                       z * x * C - y * s, z * y * C + x * s, z * z * C + c,
                       MatrixType.OTHER)

    @staticmethod
    def rotation_x(angle: float) -> "Matrix3":
        c = math.cos(angle)
        s = math.sin(angle)
        return Matrix3(1, 0, 0,
                       0, c, -s,
                       0, s, c, MatrixType.OTHER)

    @staticmethod
    def rotation_y(angle: float) -> "Matrix3":
        c = math.cos(angle)
        s = math.sin(angle)
        return Matrix3(c, 0, s,
                       0, 1, 0,
                       -s, 0, c, MatrixType.OTHER)

    @staticmethod
    def rotation_z(angle: float) -> "Matrix3":
        c = math.cos(angle)
        s = math.sin(angle)
        return Matrix3(c, -s, 0,
                       s, c, 0,
                       0, 0, 1, MatrixType.AFFINE)

    # standard 2D rotation
    rotation_2 = rotation_z

    @staticmethod
    def from_affine_coefficients(a: float, b: float, c: float, d: float, e: float, f: float) -> "Matrix3":
        """Build from the 2x3 (a b c d e f) form laid out as [[a c e], [b d f], [0 0 1]]."""
        return Matrix3(a, c, e,
                       b, d, f,
                       0, 0, 1, MatrixType.AFFINE)

    @staticmethod
    def from_numpy(m, matrix_type: Optional[MatrixType] = None) -> "Matrix3":
        arr = np.array(m, dtype=float).reshape(3, 3)
        return Matrix3(*arr.ravel().tolist(), matrix_type)

    @staticmethod
    def rotate_a_to_b(a: Vector3, b: Vector3) -> "Matrix3":
        """Shortest-arc rotation taking direction `a` onto direction `b`.

        Both inputs are normalized first. Follows Moller & Hughes, "Efficiently
        building a matrix to rotate one vector to another" (1999).
        """
        start = a.normalized()
        end = b.normalized()

        v = start.cross(end)
        e = start.dot(end)
        f = -e if e < 0 else e

        if f > 1.0 - ROTATE_PARALLEL_EPSILON:
            # "from" and "to" nearly parallel: reflect through the axis least
            # aligned with start
            x = Vector3(abs(start.x), abs(start.y), abs(start.z))
            if x.x < x.y:
                x = Vector3.X_UNIT if x.x < x.z else Vector3.Z_UNIT
            else:
                x = Vector3.Y_UNIT if x.y < x.z else Vector3.Z_UNIT

            u = x.minus(start)
            v = x.minus(end)

            c1 = 2.0 / u.dot(u)
            c2 = 2.0 / v.dot(v)
            c3 = c1 * c2 * u.dot(v)

            def term(i: float, j: float, ui: float, uj: float) -> float:
                return -c1 * ui * uj - c2 * i * j + c3 * i * uj

            return Matrix3.IDENTITY.plus(Matrix3(
                term(v.x, v.x, u.x, u.x), term(v.x, v.y, u.x, u.y), term(v.x, v.z, u.x, u.z),
                term(v.y, v.x, u.y, u.x), term(v.y, v.y, u.y, u.y), term(v.y, v.z, u.y, u.z),
                term(v.z, v.x, u.z, u.x), term(v.z, v.y, u.z, u.y), term(v.z, v.z, u.z, u.z),
            ))

        h = 1.0 / (1.0 + e)
        hvx = h * v.x
        hvz = h * v.z
        hvxy = hvx * v.y
        hvxz = hvx * v.z
        hvyz = hvz * v.y
        return Matrix3(e + hvx * v.x, hvxy - v.z, hvxz + v.y,
                       hvxy + v.z, e + h * v.y * v.y, hvyz - v.x,
                       hvxz - v.y, hvyz + v.x, e + hvz * v.z)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def m00(self) -> float: return float(self.entries[0])
    @property
    def m01(self) -> float: return float(self.entries[3])
    @property
    def m02(self) -> float: return float(self.entries[6])
    @property
    def m10(self) -> float: return float(self.entries[1])
    @property
    def m11(self) -> float: return float(self.entries[4])
    @property
    def m12(self) -> float: return float(self.entries[7])
    @property
    def m20(self) -> float: return float(self.entries[2])
    @property
    def m21(self) -> float: return float(self.entries[5])
    @property
    def m22(self) -> float: return float(self.entries[8])

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        if not (0 <= row < 3 and 0 <= col < 3):
            raise IndexError(f"Matrix3 index out of range: {key!r}")
        return float(self.entries[col * 3 + row])

    def _values(self) -> Tuple[float, ...]:
        """Row-major entries as plain floats."""
        e = self.entries.tolist()
        return (e[0], e[3], e[6],
                e[1], e[4], e[7],
                e[2], e[5], e[8])

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    def is_affine(self) -> bool:
        return self.type is MatrixType.AFFINE or (self.m20 == 0 and self.m21 == 0 and self.m22 == 1)

    @property
    def determinant(self) -> float:
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._values()
        return (m00 * m11 * m22 + m01 * m12 * m20 + m02 * m10 * m21
                - m02 * m11 * m20 - m01 * m10 * m22 - m00 * m12 * m21)

    @property
    def translation_component(self) -> Vector2:
        return Vector2(self.m02, self.m12)

    @property
    def scale_vector(self) -> Vector2:
        """Lengths of the transformed unit axes, measured from the transformed origin."""
        origin = self.times_vector2(Vector2.ZERO)
        return Vector2(
            self.times_vector2(Vector2.X_UNIT).minus(origin).magnitude(),
            self.times_vector2(Vector2.Y_UNIT).minus(origin).magnitude(),
        )

    @property
    def rotation(self) -> float:
        """2D rotation angle in radians, between -pi and pi."""
        v = self.times_vector2(Vector2.X_UNIT).minus(self.times_vector2(Vector2.ZERO))
        return math.atan2(v.y, v.x)

    # ------------------------------------------------------------------
    # Output adapters
    # ------------------------------------------------------------------

    def to_numpy(self) -> np.ndarray:
        """Row-major 3x3 copy of the entries."""
        return self.entries.reshape(3, 3, order="F").copy()

    def to_matrix4(self) -> np.ndarray:
        m4 = np.identity(4, dtype=float)
        m4[:3, :3] = self.to_numpy()
        return m4

    def to_affine_coefficients(self) -> Tuple[float, float, float, float, float, float]:
        """(a, b, c, d, e, f) for the top two rows, as used by SVG and canvas APIs."""
        m00, m01, m02, m10, m11, m12 = self._values()[:6]
        return (m00, m10, m01, m11, m02, m12)

    def __str__(self) -> str:
        v = self._values()
        return "\n".join(" ".join(repr(x) for x in v[r * 3:r * 3 + 3]) for r in range(3))

    def __repr__(self) -> str:
        args = ", ".join(repr(x) for x in self._values())
        return f"Matrix3({args}, {self.type})"

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def equals(self, m: "Matrix3") -> bool:
        """Exact entry-wise equality; the type tag is not compared."""
        return bool(np.array_equal(self.entries, m.entries))

    def equals_epsilon(self, m: "Matrix3", epsilon: float) -> bool:
        return bool(np.all(np.abs(self.entries - m.entries) < epsilon))

    def __eq__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # mutable

    # ------------------------------------------------------------------
    # Tag dispatch
    # ------------------------------------------------------------------

    def _product(self, m: "Matrix3") -> MatrixValues:
        """Entries and tag of self * m, for operands that are not IDENTITY."""
        a00, a01, a02, a10, a11, a12, a20, a21, a22 = self._values()
        b00, b01, b02, b10, b11, b12, b20, b21, b22 = m._values()

        # two matrices of the same type keep that type
        if self.type is m.type:
            if self.type is MatrixType.TRANSLATION:
                return (1, 0, a02 + b02,
                        0, 1, a12 + b12,
                        0, 0, 1, MatrixType.TRANSLATION)
            if self.type is MatrixType.SCALING:
                return (a00 * b00, 0, 0,
                        0, a11 * b11, 0,
                        0, 0, 1, MatrixType.SCALING)

        # anything but OTHER is affine, and so is the product
        if self.type.is_affine() and m.type.is_affine():
            return (a00 * b00 + a01 * b10,
                    a00 * b01 + a01 * b11,
                    a00 * b02 + a01 * b12 + a02,
                    a10 * b00 + a11 * b10,
                    a10 * b01 + a11 * b11,
                    a10 * b02 + a11 * b12 + a12,
                    0, 0, 1, MatrixType.AFFINE)

        return (a00 * b00 + a01 * b10 + a02 * b20,
                a00 * b01 + a01 * b11 + a02 * b21,
                a00 * b02 + a01 * b12 + a02 * b22,
                a10 * b00 + a11 * b10 + a12 * b20,
                a10 * b01 + a11 * b11 + a12 * b21,
                a10 * b02 + a11 * b12 + a12 * b22,
                a20 * b00 + a21 * b10 + a22 * b20,
                a20 * b01 + a21 * b11 + a22 * b21,
                a20 * b02 + a21 * b12 + a22 * b22,
                MatrixType.OTHER)

    def _inverse(self) -> MatrixValues:
        """Entries and tag of the inverse, for matrices that are not IDENTITY."""
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._values()

        if self.type is MatrixType.TRANSLATION:
            return (1, 0, -m02,
                    0, 1, -m12,
                    0, 0, 1, MatrixType.TRANSLATION)

        if self.type is MatrixType.SCALING:
            if m00 == 0 or m11 == 0:
                logger.debug("refusing to invert scaling with factors (%r, %r)", m00, m11)
                raise SingularMatrixError("Matrix could not be inverted, scale factor == 0")
            return (1 / m00, 0, 0,
                    0, 1 / m11, 0,
                    0, 0, 1, MatrixType.SCALING)

        det = self.determinant
        if det == 0:
            logger.debug("refusing to invert %s matrix, determinant == 0", self.type.name)
            raise SingularMatrixError("Matrix could not be inverted, determinant == 0")

        if self.type is MatrixType.AFFINE:
            return (m11 / det,
                    -m01 / det,
                    (m01 * m12 - m02 * m11) / det,
                    -m10 / det,
                    m00 / det,
                    (m02 * m10 - m00 * m12) / det,
                    0, 0, 1, MatrixType.AFFINE)

        return ((-m12 * m21 + m11 * m22) / det,
                (m02 * m21 - m01 * m22) / det,
                (-m02 * m11 + m01 * m12) / det,
                (m12 * m20 - m10 * m22) / det,
                (-m02 * m20 + m00 * m22) / det,
                (m02 * m10 - m00 * m12) / det,
                (-m11 * m20 + m10 * m21) / det,
                (m01 * m20 - m00 * m21) / det,
                (-m01 * m10 + m00 * m11) / det,
                MatrixType.OTHER)

    # ------------------------------------------------------------------
    # Immutable operations (return a new matrix)
    # ------------------------------------------------------------------

    def copy(self) -> "Matrix3":
        """Unlocked copy with the same entries and tag."""
        return Matrix3(*self._values(), self.type)

    def plus(self, m: "Matrix3") -> "Matrix3":
        return Matrix3.from_numpy(self.to_numpy() + m.to_numpy())

    def minus(self, m: "Matrix3") -> "Matrix3":
        return Matrix3.from_numpy(self.to_numpy() - m.to_numpy())

    def transposed(self) -> "Matrix3":
        return Matrix3.from_numpy(self.to_numpy().T, self._transposed_type())

    def negated(self) -> "Matrix3":
        return Matrix3.from_numpy(-self.to_numpy())

    def inverted(self) -> "Matrix3":
        if self.type is MatrixType.IDENTITY:
            return self
        return Matrix3(*self._inverse())

    def times_matrix(self, m: "Matrix3") -> "Matrix3":
        # I * M == M * I == M
        if self.type is MatrixType.IDENTITY or m.type is MatrixType.IDENTITY:
            return m if self.type is MatrixType.IDENTITY else self
        return Matrix3(*self._product(m))

    # ------------------------------------------------------------------
    # Immutable operations (return a new form of the parameter)
    # ------------------------------------------------------------------

    def times_vector2(self, v: Vector2) -> Vector2:
        return Vector2(*self._apply(v))

    def times_vector3(self, v: Vector3) -> Vector3:
        return Vector3(*self._apply3(v))

    def times_transpose_vector2(self, v: Vector2) -> Vector2:
        """Multiply by the transpose of the linear 2x2 block; translation is ignored."""
        return Vector2(*self._apply_transpose(v))

    def times_relative_vector2(self, v: Vector2) -> Vector2:
        """Multiply by the linear 2x2 block only, i.e. transform a direction."""
        return Vector2(*self._apply_relative(v))

    def __matmul__(self, other: Union["Matrix3", Vector2, Vector3]):
        if isinstance(other, Matrix3):
            return self.times_matrix(other)
        if isinstance(other, Vector2):
            return self.times_vector2(other)
        if isinstance(other, Vector3):
            return self.times_vector3(other)
        return NotImplemented

    def _apply(self, v: Vector2) -> Tuple[float, float]:
        m00, m01, m02, m10, m11, m12 = self._values()[:6]
        return (m00 * v.x + m01 * v.y + m02,
                m10 * v.x + m11 * v.y + m12)

    def _apply3(self, v: Vector3) -> Tuple[float, float, float]:
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._values()
        return (m00 * v.x + m01 * v.y + m02 * v.z,
                m10 * v.x + m11 * v.y + m12 * v.z,
                m20 * v.x + m21 * v.y + m22 * v.z)

    def _apply_transpose(self, v: Vector2) -> Tuple[float, float]:
        m00, m01, _, m10, m11, _ = self._values()[:6]
        return (m00 * v.x + m10 * v.y,
                m01 * v.x + m11 * v.y)

    def _apply_relative(self, v: Vector2) -> Tuple[float, float]:
        m00, m01, _, m10, m11, _ = self._values()[:6]
        return (m00 * v.x + m01 * v.y,
                m10 * v.x + m11 * v.y)

    # ------------------------------------------------------------------
    # Mutable operations (change this matrix)
    # ------------------------------------------------------------------

    def freeze(self) -> "Matrix3":
        self.entries.flags.writeable = False
        return super().freeze()

    def make_immutable(self) -> "Matrix3":
        return self.freeze()

    def row_major(self,
                  v00: float, v01: float, v02: float,
                  v10: float, v11: float, v12: float,
                  v20: float, v21: float, v22: float,
                  matrix_type: Optional[MatrixType] = None) -> "Matrix3":
        """Overwrite all nine entries and the tag.

        Without an explicit tag, AFFINE is inferred from a (0, 0, 1) bottom row
        and OTHER otherwise.
        """
        self._check_mutable("row_major")
        if matrix_type is None:
            matrix_type = MatrixType.AFFINE if (v20 == 0 and v21 == 0 and v22 == 1) else MatrixType.OTHER
        elif not isinstance(matrix_type, MatrixType):
            raise UnknownClassificationError(f"Unknown matrix type: {matrix_type!r}")

        self.entries[:] = (v00, v10, v20, v01, v11, v21, v02, v12, v22)
        self.type = matrix_type
        return self

    def column_major(self,
                     v00: float, v10: float, v20: float,
                     v01: float, v11: float, v21: float,
                     v02: float, v12: float, v22: float,
                     matrix_type: Optional[MatrixType] = None) -> "Matrix3":
        return self.row_major(v00, v01, v02, v10, v11, v12, v20, v21, v22, matrix_type)

    def set(self, m: "Matrix3") -> "Matrix3":
        return self.row_major(*m._values(), m.type)

    def add(self, m: "Matrix3") -> "Matrix3":
        return self.row_major(*(self.to_numpy() + m.to_numpy()).ravel().tolist())

    def subtract(self, m: "Matrix3") -> "Matrix3":
        return self.row_major(*(self.to_numpy() - m.to_numpy()).ravel().tolist())

    def transpose(self) -> "Matrix3":
        return self.row_major(*self.to_numpy().T.ravel().tolist(), self._transposed_type())

    def negate(self) -> "Matrix3":
        return self.row_major(*(-self.to_numpy()).ravel().tolist())

    def invert(self) -> "Matrix3":
        self._check_mutable("invert")
        if self.type is MatrixType.IDENTITY:
            return self
        return self.row_major(*self._inverse())

    def multiply_matrix(self, m: "Matrix3") -> "Matrix3":
        self._check_mutable("multiply_matrix")
        if m.type is MatrixType.IDENTITY:
            return self
        if self.type is MatrixType.IDENTITY:
            return self.set(m)
        return self.row_major(*self._product(m))

    def __imatmul__(self, other: "Matrix3"):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self.multiply_matrix(other)

    def _transposed_type(self) -> Optional[MatrixType]:
        if self.type in (MatrixType.IDENTITY, MatrixType.SCALING):
            return self.type
        return None

    # ------------------------------------------------------------------
    # Mutable operations (change the parameter)
    # ------------------------------------------------------------------

    def multiply_vector2(self, v: Vector2) -> Vector2:
        return v.set(*self._apply(v))

    def multiply_vector3(self, v: Vector3) -> Vector3:
        return v.set(*self._apply3(v))

    def multiply_transpose_vector2(self, v: Vector2) -> Vector2:
        return v.set(*self._apply_transpose(v))

    def multiply_relative_vector2(self, v: Vector2) -> Vector2:
        return v.set(*self._apply_relative(v))


#: The identity matrix
Matrix3.IDENTITY = Matrix3.identity().make_immutable()

#: Mirror across the Y axis (negates x)
Matrix3.X_REFLECTION = Matrix3(-1, 0, 0,
                               0, 1, 0,
                               0, 0, 1, MatrixType.AFFINE).make_immutable()

#: Mirror across the X axis (negates y)
Matrix3.Y_REFLECTION = Matrix3(1, 0, 0,
                               0, -1, 0,
                               0, 0, 1, MatrixType.AFFINE).make_immutable()
