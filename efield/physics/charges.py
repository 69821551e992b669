"""
Value types shared by the grid sampler, the field calculator and the renderer.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Charge:
    """
    Point charge in the plot plane.

    Attributes:
        x: Position along the x axis
        y: Position along the y axis
        magnitude: Charge in coulombs; positive charges are sources,
            zero and negative charges are sinks
    """
    x: float
    y: float
    magnitude: float

    @property
    def is_positive(self) -> bool:
        return self.magnitude > 0


@dataclass(frozen=True)
class ObservationPoint:
    """Grid sample at which the net field is evaluated."""
    x: float
    y: float


@dataclass(frozen=True)
class FieldVector:
    """Electric field vector (V/m)."""
    ex: float = 0.0
    ey: float = 0.0

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.ex * self.ex + self.ey * self.ey)

    def __add__(self, other: 'FieldVector') -> 'FieldVector':
        if not isinstance(other, FieldVector):
            return NotImplemented
        return FieldVector(self.ex + other.ex, self.ey + other.ey)


ZERO_FIELD = FieldVector(0.0, 0.0)
