"""
Immutable 2D vector used for every position, velocity and impulse in the core.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Vector2:
    """
    Immutable 2D vector.

    Every operation returns a new Vector2 and never mutates an operand, so
    vectors can be shared freely between agents and snapshots.
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> Vector2:
        """Build a vector of the given length pointing along angle (radians)."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def add(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def subtract(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vector2:
        """
        Unit vector in the same direction.

        The zero vector normalizes to the zero vector.
        """
        length = self.length()
        if length == 0:
            return ZERO
        return Vector2(self.x / length, self.y / length)

    def limit(self, maximum: float) -> Vector2:
        """
        Cap the magnitude at maximum, keeping the direction.

        Args:
            maximum: Largest allowed length

        Returns:
            This vector if already short enough, otherwise a rescaled copy
        """
        length = self.length()
        if length <= maximum:
            return self
        return self.scale(maximum / length)

    def distance_to(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def heading(self) -> float:
        """Angle of the vector in (-pi, pi]; 0.0 for the zero vector."""
        return math.atan2(self.y, self.x)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: Vector2) -> Vector2:
        return self.add(other)

    def __sub__(self, other: Vector2) -> Vector2:
        return self.subtract(other)

    def __mul__(self, factor: float) -> Vector2:
        return self.scale(factor)

    def __rmul__(self, factor: float) -> Vector2:
        return self.scale(factor)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)


ZERO = Vector2(0.0, 0.0)
