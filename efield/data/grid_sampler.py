"""
Uniform grid sampling of observation points over the plot area.

The same bounds apply to both axes. Grid coordinates are derived from an
integer step index so that the number of samples is fixed before iterating.
"""

import math
import logging
from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

from ..errors import InvalidConfiguration
from ..physics.charges import Charge, ObservationPoint


logger = logging.getLogger(__name__)

# Absolute slack on (max - min) / interval: a ratio this close to a whole
# number counts as landing on a step boundary.
STEP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class PlotBounds:
    """
    Axis range shared by the x and y axes.

    Attributes:
        min: Lower bound of both axes
        max: Upper bound of both axes
    """
    min: float
    max: float

    def __post_init__(self):
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise InvalidConfiguration(
                f"Plot bounds must be finite, got [{self.min}, {self.max}]")
        if self.min >= self.max:
            raise InvalidConfiguration(
                f"Invalid plot bounds: minimum {self.min} >= maximum {self.max}")

    @property
    def span(self) -> float:
        return self.max - self.min


class GridSampler:
    """
    Evenly spaced observation points over ``bounds``.

    Args:
        bounds: Plot bounds for both axes
        interval: Spacing between neighbouring samples (must be positive)
    """

    def __init__(self, bounds: PlotBounds, interval: float = 1.0):
        self.bounds = bounds
        self.interval = interval
        self._validate()

    def _validate(self):
        """Validate sampling interval."""
        if not math.isfinite(self.interval) or self.interval <= 0:
            raise InvalidConfiguration(
                f"Sampling interval must be positive, got {self.interval}")

    @property
    def steps(self) -> int:
        """Number of intervals between the lower and upper bound."""
        ratio = self.bounds.span / self.interval
        nearest = round(ratio)
        if math.isclose(ratio, nearest, rel_tol=0.0, abs_tol=STEP_TOLERANCE):
            return int(nearest)
        return int(math.floor(ratio))

    def axis_values(self) -> List[float]:
        """Sample coordinates along one axis, ascending."""
        values = []
        for i in range(self.steps + 1):
            value = self.bounds.min + i * self.interval
            values.append(min(value, self.bounds.max))
        return values

    def generate(self, charges: Iterable[Charge]) -> List[ObservationPoint]:
        """
        Build the observation grid.

        Points are ordered with x ascending in the outer loop and y ascending
        in the inner loop. A grid point whose exact (x, y) equals a charge
        position is left out.

        Args:
            charges: Charges whose positions are excluded

        Returns:
            List of observation points
        """
        occupied: Set[Tuple[float, float]] = {(c.x, c.y) for c in charges}
        axis = self.axis_values()

        points = []
        for x in axis:
            for y in axis:
                if (x, y) not in occupied:
                    points.append(ObservationPoint(x, y))

        logger.debug(f"Sampled {len(points)} observation points on a {len(axis)}x{len(axis)} grid "
                     f"({len(axis) ** 2 - len(points)} excluded)")
        return points


def generate(bounds: PlotBounds, interval: float, charges: Iterable[Charge]) -> List[ObservationPoint]:
    """Observation points over ``bounds`` spaced by ``interval``, skipping charge positions."""
    return GridSampler(bounds, interval).generate(charges)
