from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import ClassVar, Tuple

from geometry.Freezable import Freezable
from geometry.GeometryErrors import DegenerateNormalizationError
from geometry.Vector3 import Vector3


@dataclass(slots=True)
class Vector2(Freezable):
    """Basic 2D vector / point.

    Mutators change the vector in place and return it. A frozen vector rejects
    every mutator with ImmutableViolationError.
    """

    x: float = 0.0
    y: float = 0.0
    frozen: bool = field(default=False, repr=False, compare=False, kw_only=True)

    ZERO: ClassVar["Vector2"]
    X_UNIT: ClassVar["Vector2"]
    Y_UNIT: ClassVar["Vector2"]

    @staticmethod
    def create_polar(magnitude: float, angle: float) -> "Vector2":
        return Vector2(math.cos(angle), math.sin(angle)).times(magnitude)

    def as_tuple(self) -> Tuple[float, float]: return (self.x, self.y)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def magnitude_squared(self) -> float:
        return self.dot(self)

    def dot(self, v: "Vector2") -> float:
        return self.x * v.x + self.y * v.y

    # ------------------------------------------------------------------
    # Immutables
    # ------------------------------------------------------------------

    def cross_scalar(self, v: "Vector2") -> float:
        # 2D cross product (z-component)
        return self.x * v.y - self.y * v.x

    def normalized(self) -> "Vector2":
        mag = self.magnitude()
        if mag == 0:
            raise DegenerateNormalizationError("Cannot normalize a zero-magnitude vector")
        return Vector2(self.x / mag, self.y / mag)

    def times(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def component_times(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x * v.x, self.y * v.y)

    def plus(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x + v.x, self.y + v.y)

    def plus_scalar(self, scalar: float) -> "Vector2":
        return Vector2(self.x + scalar, self.y + scalar)

    def minus(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x - v.x, self.y - v.y)

    def minus_scalar(self, scalar: float) -> "Vector2":
        return Vector2(self.x - scalar, self.y - scalar)

    def divided_scalar(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def negated(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def perpendicular(self) -> "Vector2":
        """Equivalent to a -pi/2 (right hand) rotation."""
        return Vector2(self.y, -self.x)

    def angle_between(self, v: "Vector2") -> float:
        cos_a = self.normalized().dot(v.normalized())
        return math.acos(max(-1.0, min(1.0, cos_a)))

    def rotated(self, angle: float) -> "Vector2":
        return Vector2.create_polar(self.magnitude(), self.angle() + angle)

    def copy(self) -> "Vector2":
        """Mutable copy, even when this vector is frozen."""
        return Vector2(self.x, self.y)

    def to_vector3(self) -> "Vector3":
        return Vector3(self.x, self.y, 0.0)

    def equals(self, other: "Vector2", epsilon: float = 0.0) -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) <= epsilon

    def __add__(self, v: "Vector2") -> "Vector2": return self.plus(v)
    def __sub__(self, v: "Vector2") -> "Vector2": return self.minus(v)
    def __mul__(self, k: float) -> "Vector2": return self.times(k)
    __rmul__ = __mul__
    def __neg__(self) -> "Vector2": return self.negated()
    def __abs__(self) -> float: return self.magnitude()

    # ------------------------------------------------------------------
    # Mutables
    # ------------------------------------------------------------------

    def set(self, x: float, y: float) -> "Vector2":
        self._check_mutable("set")
        self.x = x
        self.y = y
        return self

    def set_x(self, x: float) -> "Vector2":
        self._check_mutable("set_x")
        self.x = x
        return self

    def set_y(self, y: float) -> "Vector2":
        self._check_mutable("set_y")
        self.y = y
        return self

    def copy_from(self, v: "Vector2") -> "Vector2":
        self._check_mutable("copy_from")
        return self.set(v.x, v.y)

    def add(self, v: "Vector2") -> "Vector2":
        self._check_mutable("add")
        return self.set(self.x + v.x, self.y + v.y)

    def add_scalar(self, scalar: float) -> "Vector2":
        self._check_mutable("add_scalar")
        return self.set(self.x + scalar, self.y + scalar)

    def subtract(self, v: "Vector2") -> "Vector2":
        self._check_mutable("subtract")
        return self.set(self.x - v.x, self.y - v.y)

    def subtract_scalar(self, scalar: float) -> "Vector2":
        self._check_mutable("subtract_scalar")
        return self.set(self.x - scalar, self.y - scalar)

    def component_multiply(self, v: "Vector2") -> "Vector2":
        self._check_mutable("component_multiply")
        return self.set(self.x * v.x, self.y * v.y)

    def divide_scalar(self, scalar: float) -> "Vector2":
        self._check_mutable("divide_scalar")
        return self.set(self.x / scalar, self.y / scalar)

    def negate(self) -> "Vector2":
        self._check_mutable("negate")
        return self.set(-self.x, -self.y)


Vector2.ZERO = Vector2(0.0, 0.0).freeze()
Vector2.X_UNIT = Vector2(1.0, 0.0).freeze()
Vector2.Y_UNIT = Vector2(0.0, 1.0).freeze()
