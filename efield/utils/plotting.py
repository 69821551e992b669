"""
Visualization tools for point-charge field plots.

Translates charges, observation points and their net field into drawable
primitives (coloured markers and line segments) and hands them to
matplotlib, which writes the raster file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import torch
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
from matplotlib.collections import LineCollection

from ..errors import RenderError
from ..data.grid_sampler import PlotBounds
from ..physics.charges import Charge, ObservationPoint
from ..physics.coulomb import CoulombField, field_magnitude, normalize_field_map


logger = logging.getLogger(__name__)

RGBA = Tuple[float, float, float, float]

# Field magnitude (V/m) at which arrow colour saturates. A visual tuning
# choice equal to k / 100, not a physical quantity.
REFERENCE_SCALE = 8.987551787e7

INVISIBLE = (0.0, 0.0, 0.0, 0.0)


@dataclass
class PlotConfig:
    """Configuration for plot styling and parameters."""
    figsize: Tuple[float, float] = (8, 8)
    dpi: int = 100
    title: str = "Electric Field Vectors"
    xlabel: str = "X"
    ylabel: str = "Y"
    positive_color: str = 'red'
    negative_color: str = 'blue'
    observation_color: str = 'black'
    charge_radius: float = 5.0
    observation_radius: float = 2.0
    line_width: float = 1.0
    arrow_length: float = 1.0
    reference_scale: float = REFERENCE_SCALE

    @classmethod
    def from_config(cls, rendering: Dict[str, Any]) -> 'PlotConfig':
        """Build from the ``rendering`` section of the configuration."""
        known = {k: v for k, v in rendering.items() if k in cls.__dataclass_fields__}
        if 'figsize' in known:
            known['figsize'] = tuple(known['figsize'])
        return cls(**known)


@dataclass(frozen=True)
class ScatterPrimitive:
    """Filled circular marker; ``radius`` is in points."""
    x: float
    y: float
    color: RGBA
    radius: float


@dataclass(frozen=True)
class SegmentPrimitive:
    """Straight line segment between two plot coordinates."""
    start: Tuple[float, float]
    end: Tuple[float, float]
    color: RGBA


@dataclass
class RenderResult:
    """Outcome of a successful render."""
    output_path: str
    n_charges: int
    n_observations: int
    n_segments: int
    field_map: torch.Tensor = field(repr=False)


def field_line_color(magnitude: float, reference_scale: float = REFERENCE_SCALE) -> RGBA:
    """
    Colour of a field arrow for a given net field magnitude.

    Zero magnitude is fully transparent. Otherwise the green channel rises
    and the blue channel falls with ``min(1, magnitude / reference_scale)``,
    quantised to 8 bits.
    """
    if magnitude == 0:
        return INVISIBLE
    intensity = int(min(255.0, 255.0 * magnitude / reference_scale))
    return (0.0, intensity / 255.0, (255 - intensity) / 255.0, 1.0)


def charge_color(charge: Charge, config: Optional[PlotConfig] = None) -> RGBA:
    """Marker colour of a charge: warm for positive, cool otherwise."""
    config = config or PlotConfig()
    name = config.positive_color if charge.magnitude > 0 else config.negative_color
    return mcolors.to_rgba(name)


class BasePlotter:
    """Base class for field plotting utilities."""

    def __init__(self, config: Optional[PlotConfig] = None):
        self.config = config or PlotConfig()
        self._setup_matplotlib()

    def _setup_matplotlib(self):
        """Configure matplotlib settings."""
        plt.rcParams.update({
            'figure.dpi': self.config.dpi,
            'savefig.dpi': self.config.dpi
        })

    def save_figure(self, fig: plt.Figure, output_path: Union[str, Path]):
        """
        Write the figure; the format follows the file extension.

        Raises:
            RenderError: If the file cannot be written
        """
        try:
            fig.savefig(output_path, dpi=self.config.dpi)
        except (OSError, ValueError) as e:
            raise RenderError(f"could not save plot to {output_path}: {e}") from e
        logger.info(f"Saved plot: {output_path}")


class ChargeFieldPlotter(BasePlotter):
    """
    Renderer for charges and normalised field-direction arrows.

    Args:
        config: Plot styling
        field_calculator: Calculator used for the net field at each point
    """

    def __init__(self,
                 config: Optional[PlotConfig] = None,
                 field_calculator: Optional[CoulombField] = None):
        super().__init__(config)
        self.field_calculator = field_calculator or CoulombField()

    def build_primitives(self,
                         charges: Sequence[Charge],
                         points: Sequence[ObservationPoint],
                         field_map: Optional[torch.Tensor] = None) -> List[Union[ScatterPrimitive, SegmentPrimitive]]:
        """
        Scene primitives in drawing order.

        One marker per charge, one marker per observation point, then one
        arrow per observation point from the point along the unit field
        direction.

        Args:
            charges: Source charges
            points: Observation points
            field_map: Precomputed (N, 2) net field; computed when omitted

        Returns:
            List of scatter and segment primitives
        """
        if field_map is None:
            field_map = self.field_calculator.field_map(charges, points)

        primitives = []
        for charge in charges:
            primitives.append(ScatterPrimitive(
                charge.x, charge.y, charge_color(charge, self.config), self.config.charge_radius))

        observation_rgba = mcolors.to_rgba(self.config.observation_color)
        for point in points:
            primitives.append(ScatterPrimitive(
                point.x, point.y, observation_rgba, self.config.observation_radius))

        directions = normalize_field_map(field_map).cpu().tolist()
        magnitudes = field_magnitude(field_map).cpu().tolist()
        for point, (ux, uy), magnitude in zip(points, directions, magnitudes):
            end = (point.x + self.config.arrow_length * ux, point.y + self.config.arrow_length * uy)
            primitives.append(SegmentPrimitive(
                (point.x, point.y), end, field_line_color(magnitude, self.config.reference_scale)))

        return primitives

    def draw(self,
             primitives: Sequence[Union[ScatterPrimitive, SegmentPrimitive]],
             bounds: PlotBounds) -> plt.Figure:
        """Draw primitives on a new figure with both axes set to ``bounds``."""
        fig, ax = plt.subplots(figsize=self.config.figsize)

        markers = [p for p in primitives if isinstance(p, ScatterPrimitive)]
        segments = [p for p in primitives if isinstance(p, SegmentPrimitive)]

        if markers:
            # Scatter sizes are marker areas in points²
            ax.scatter([m.x for m in markers], [m.y for m in markers],
                       c=[m.color for m in markers],
                       s=[(2 * m.radius) ** 2 for m in markers],
                       linewidths=0)

        if segments:
            lines = LineCollection([[s.start, s.end] for s in segments],
                                   colors=[s.color for s in segments],
                                   linewidths=self.config.line_width)
            ax.add_collection(lines)

        ax.set_xlim(bounds.min, bounds.max)
        ax.set_ylim(bounds.min, bounds.max)
        ax.set_title(self.config.title)
        ax.set_xlabel(self.config.xlabel)
        ax.set_ylabel(self.config.ylabel)

        return fig

    def render(self,
               charges: Sequence[Charge],
               points: Sequence[ObservationPoint],
               bounds: PlotBounds,
               output_path: Union[str, Path]) -> RenderResult:
        """
        Compute the field, draw the scene and write it to ``output_path``.

        Raises:
            RenderError: If the output file cannot be written
        """
        field_map = self.field_calculator.field_map(charges, points)
        primitives = self.build_primitives(charges, points, field_map)
        logger.debug(f"Built {len(primitives)} primitives")

        fig = self.draw(primitives, bounds)
        try:
            self.save_figure(fig, output_path)
        finally:
            plt.close(fig)

        return RenderResult(
            output_path=str(output_path),
            n_charges=len(charges),
            n_observations=len(points),
            n_segments=len(points),
            field_map=field_map
        )
