from dataclasses import dataclass, field
import math
from typing import ClassVar, Tuple

from geometry.Freezable import Freezable
from geometry.GeometryErrors import DegenerateNormalizationError


@dataclass(slots=True)
class Vector3(Freezable):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    frozen: bool = field(default=False, repr=False, compare=False, kw_only=True)

    ZERO: ClassVar["Vector3"]
    X_UNIT: ClassVar["Vector3"]
    Y_UNIT: ClassVar["Vector3"]
    Z_UNIT: ClassVar["Vector3"]

    def as_tuple(self) -> Tuple[float, float, float]: return (self.x, self.y, self.z)
    def dot(self, v: "Vector3") -> float: return self.x * v.x + self.y * v.y + self.z * v.z
    def magnitude(self) -> float: return math.sqrt(self.dot(self))
    def plus(self, v: "Vector3") -> "Vector3": return Vector3(self.x + v.x, self.y + v.y, self.z + v.z)
    def minus(self, v: "Vector3") -> "Vector3": return Vector3(self.x - v.x, self.y - v.y, self.z - v.z)
    def times(self, k: float) -> "Vector3": return Vector3(self.x * k, self.y * k, self.z * k)

    def cross(self, v: "Vector3") -> "Vector3":
        return Vector3(
            self.y * v.z - self.z * v.y,
            self.z * v.x - self.x * v.z,
            self.x * v.y - self.y * v.x,
        )

    def normalized(self) -> "Vector3":
        mag = self.magnitude()
        if mag == 0:
            raise DegenerateNormalizationError("Cannot normalize a zero-magnitude vector")
        return Vector3(self.x / mag, self.y / mag, self.z / mag)

    def equals(self, other: "Vector3", epsilon: float = 0.0) -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) + abs(self.z - other.z) <= epsilon

    def set(self, x: float, y: float, z: float) -> "Vector3":
        self._check_mutable("set")
        self.x = x
        self.y = y
        self.z = z
        return self

    def set_x(self, x: float) -> "Vector3":
        self._check_mutable("set_x")
        self.x = x
        return self

    def set_y(self, y: float) -> "Vector3":
        self._check_mutable("set_y")
        self.y = y
        return self

    def set_z(self, z: float) -> "Vector3":
        self._check_mutable("set_z")
        self.z = z
        return self


Vector3.ZERO = Vector3(0.0, 0.0, 0.0).freeze()
Vector3.X_UNIT = Vector3(1.0, 0.0, 0.0).freeze()
Vector3.Y_UNIT = Vector3(0.0, 1.0, 0.0).freeze()
Vector3.Z_UNIT = Vector3(0.0, 0.0, 1.0).freeze()
