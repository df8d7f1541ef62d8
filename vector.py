# vector.py
"""
A small immutable 2D vector used to expose particle state.

The simulation itself works on NumPy arrays; Vector2 is the value type
handed out when a single particle is inspected.
"""
import math
from dataclasses import dataclass


class InvalidOperationError(ValueError):
    """Raised for vector operations with no defined result."""


@dataclass(frozen=True)
class Vector2:
    """2D real-valued quantity (x, y)."""

    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def scale(self, factor: float) -> "Vector2":
        return Vector2(self.x * factor, self.y * factor)

    def divide(self, divisor: float) -> "Vector2":
        if divisor == 0:
            raise InvalidOperationError("Cannot divide a vector by zero.")
        return Vector2(self.x / divisor, self.y / divisor)

    def length(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2)

    def normalized(self) -> "Vector2":
        """Returns the unit vector with the same direction."""
        magnitude = self.length()
        if magnitude == 0:
            raise InvalidOperationError("Cannot normalize a zero-length vector.")
        return self.divide(magnitude)

    # Operators. `+=` rebinds to a new value since the type is frozen.
    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __mul__(self, factor: float) -> "Vector2":
        return self.scale(factor)

    def __rmul__(self, factor: float) -> "Vector2":
        return self.scale(factor)

    def __truediv__(self, divisor: float) -> "Vector2":
        return self.divide(divisor)
