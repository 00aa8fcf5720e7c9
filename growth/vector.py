"""
2D value types shared by the geometry library and the simulation.
"""

import math
from dataclasses import dataclass
from typing import List


class Vec2:
    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vec2':
        return Vec2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> 'Vec2':
        return Vec2(self.x / scalar, self.y / scalar)

    def __repr__(self) -> str:
        return f"Vec2({self.x:.2f}, {self.y:.2f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared)

    @property
    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> 'Vec2':
        # Only an exactly-zero vector maps to zero; tiny vectors still normalize
        mag = self.magnitude
        if mag == 0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / mag, self.y / mag)

    def rotate(self, radians: float) -> 'Vec2':
        cos = math.cos(radians)
        sin = math.sin(radians)
        return Vec2(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def distance_squared_to(self, other: 'Vec2') -> float:
        return (self - other).magnitude_squared

    def distance_to(self, other: 'Vec2') -> float:
        return math.sqrt(self.distance_squared_to(other))

    def to_tuple(self) -> tuple:
        return (self.x, self.y)

    def copy(self) -> 'Vec2':
        return Vec2(self.x, self.y)


Polygon = List[Vec2]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned region [0, width] x [0, height]."""
    width: float
    height: float

    def contains(self, point: Vec2) -> bool:
        return 0 <= point.x <= self.width and 0 <= point.y <= self.height

    @property
    def center(self) -> Vec2:
        return Vec2(self.width * 0.5, self.height * 0.5)
