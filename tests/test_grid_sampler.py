"""
Unit tests for observation grid sampling and plot bounds.
"""

import pytest

from efield.errors import InvalidConfiguration
from efield.physics import Charge, ObservationPoint
from efield.data import PlotBounds, GridSampler, generate


class TestPlotBounds:
    """Test suite for plot bounds validation."""

    def test_valid_bounds(self):
        bounds = PlotBounds(0.0, 10.0)
        assert bounds.span == 10.0

    @pytest.mark.parametrize("low, high", [(0.0, 0.0), (5.0, 1.0), (0.0, float('inf')), (float('nan'), 1.0)])
    def test_invalid_bounds(self, low, high):
        with pytest.raises(InvalidConfiguration):
            PlotBounds(low, high)


class TestGridSampler:
    """Test suite for grid generation."""

    def test_excludes_charge_position(self):
        points = generate(PlotBounds(0.0, 2.0), 1.0, [Charge(0.0, 0.0, 1e-9)])
        assert {(p.x, p.y) for p in points} == {
            (0.0, 1.0), (1.0, 0.0), (1.0, 1.0), (0.0, 2.0),
            (1.0, 2.0), (2.0, 0.0), (2.0, 1.0), (2.0, 2.0)
        }
        assert len(points) == 8

    def test_row_major_order(self):
        points = GridSampler(PlotBounds(0.0, 2.0), 1.0).generate([])
        assert [(p.x, p.y) for p in points] == [
            (0.0, 0.0), (0.0, 1.0), (0.0, 2.0),
            (1.0, 0.0), (1.0, 1.0), (1.0, 2.0),
            (2.0, 0.0), (2.0, 1.0), (2.0, 2.0)
        ]

    def test_deterministic(self):
        charges = [Charge(1.0, 1.0, 1e-9)]
        sampler = GridSampler(PlotBounds(0.0, 5.0), 0.5)
        assert sampler.generate(charges) == sampler.generate(charges)

    def test_default_grid_size(self):
        points = generate(PlotBounds(0.0, 10.0), 1.0, [Charge(5.0, 5.0, 1e-9)])
        assert len(points) == 11 * 11 - 1
        assert ObservationPoint(5.0, 5.0) not in points

    def test_exclusion_uses_exact_pair(self):
        """A charge only removes the grid point matching both coordinates."""
        points = generate(PlotBounds(0.0, 2.0), 1.0, [Charge(1.0, 1.5, 1e-9), Charge(1.0000001, 1.0, 1e-9)])
        assert len(points) == 9

    def test_off_grid_endpoint_not_included(self):
        sampler = GridSampler(PlotBounds(0.0, 2.5), 1.0)
        assert sampler.axis_values() == [0.0, 1.0, 2.0]

    def test_large_grid_near_boundary_maximum_not_included(self):
        """A maximum just short of a step boundary does not add a clamped sample."""
        values = GridSampler(PlotBounds(0.0, 999.9999995), 1.0).axis_values()
        assert len(values) == 1000
        assert values[-3:] == [997.0, 998.0, 999.0]

    def test_fractional_interval_includes_endpoint(self):
        sampler = GridSampler(PlotBounds(0.0, 0.3), 0.1)
        values = sampler.axis_values()
        assert len(values) == 4
        assert values[-1] == pytest.approx(0.3)
        assert values[-1] <= 0.3

    def test_nonzero_lower_bound(self):
        sampler = GridSampler(PlotBounds(-1.0, 1.0), 0.5)
        assert sampler.axis_values() == [-1.0, -0.5, 0.0, 0.5, 1.0]

    @pytest.mark.parametrize("interval", [0.0, -1.0, float('nan'), float('inf')])
    def test_invalid_interval(self, interval):
        with pytest.raises(InvalidConfiguration):
            generate(PlotBounds(0.0, 10.0), interval, [])
