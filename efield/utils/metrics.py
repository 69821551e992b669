"""
Summary statistics of a computed field map.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import torch

from ..physics.coulomb import field_magnitude


@dataclass
class MetricResult:
    """Container for metric evaluation results."""
    name: str
    value: float
    unit: Optional[str] = None
    description: Optional[str] = None


class FieldStatistics:
    """Magnitude statistics over an (N, 2) net field tensor."""

    name = "field_statistics"

    def compute(self, field_map: torch.Tensor) -> Dict[str, MetricResult]:
        """
        Compute magnitude statistics.

        Args:
            field_map: Net field per observation point, shape (N, 2)

        Returns:
            Metric results keyed by name; all zero for an empty field map
        """
        if field_map.shape[0] == 0:
            magnitude = torch.zeros(1, dtype=field_map.dtype, device=field_map.device)
            null_points = 0
        else:
            magnitude = field_magnitude(field_map)
            null_points = int(torch.sum(magnitude == 0).item())

        results = [
            MetricResult('max_magnitude', float(magnitude.max().item()), 'V/m',
                         'Largest net field magnitude on the grid'),
            MetricResult('mean_magnitude', float(magnitude.mean().item()), 'V/m',
                         'Mean net field magnitude on the grid'),
            MetricResult('min_magnitude', float(magnitude.min().item()), 'V/m',
                         'Smallest net field magnitude on the grid'),
            MetricResult('null_points', float(null_points), None,
                         'Observation points with exactly zero net field'),
        ]
        return {r.name: r for r in results}


def format_metrics(results: Dict[str, MetricResult]) -> List[str]:
    """One human-readable line per metric."""
    lines = []
    for result in results.values():
        unit = f" {result.unit}" if result.unit else ""
        lines.append(f"{result.name}: {result.value:.4e}{unit}")
    return lines
