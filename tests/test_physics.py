"""
Unit tests for physics module components.

Tests the single-charge Coulomb field, superposition, direction
normalisation and the batched grid evaluation.
"""

import math

import pytest
import torch
import numpy as np

from efield.physics import (
    COULOMB_CONSTANT,
    Charge,
    CoulombField,
    FieldVector,
    ObservationPoint,
    ZERO_FIELD,
    field_from,
    net_field,
    normalized_direction,
    normalize_field_map
)


class TestCoulombField:
    """Test suite for the single-charge field."""

    @pytest.fixture
    def field(self):
        """Create field calculator with Coulomb's constant."""
        return CoulombField()

    def test_initialization(self, field):
        """Test default constant and tensor settings."""
        assert field.k == pytest.approx(8.987551787e9)
        assert field.dtype == torch.float64

    def test_positive_charge_points_outward(self, field):
        result = field.field_from(Charge(0.0, 0.0, 1e-9), ObservationPoint(1.0, 0.0))
        assert result.ex > 0
        assert result.ey == pytest.approx(0.0, abs=1e-12)

    def test_negative_charge_points_inward(self, field):
        result = field.field_from(Charge(0.0, 0.0, -1e-9), ObservationPoint(1.0, 0.0))
        assert result.ex < 0
        assert result.ey == pytest.approx(0.0, abs=1e-12)

    def test_inverse_square_magnitude(self, field):
        """Test |E| = k|q|/r² and monotone decay."""
        q = -3e-9
        previous = math.inf
        for r in [0.25, 0.5, 1.0, 2.0, 3.0, 7.5, 10.0]:
            result = field.field_from(Charge(1.0, 1.0, q), ObservationPoint(1.0 + r, 1.0))
            assert result.magnitude == pytest.approx(COULOMB_CONSTANT * abs(q) / r**2, rel=1e-12)
            assert result.magnitude < previous
            previous = result.magnitude

    def test_diagonal_components(self, field):
        result = field.field_from(Charge(0.0, 0.0, 1e-9), ObservationPoint(3.0, 4.0))
        expected = COULOMB_CONSTANT * 1e-9 / 25.0
        assert result.ex == pytest.approx(expected * 3.0 / 5.0, rel=1e-12)
        assert result.ey == pytest.approx(expected * 4.0 / 5.0, rel=1e-12)

    def test_zero_distance_is_skipped(self, field):
        """Test coinciding charge contributes the zero vector."""
        result = field.field_from(Charge(2.0, 3.0, 1e-9), ObservationPoint(2.0, 3.0))
        assert result == ZERO_FIELD
        assert math.isfinite(result.ex) and math.isfinite(result.ey)

    def test_zero_charge_gives_zero_field(self, field):
        result = field.field_from(Charge(0.0, 0.0, 0.0), ObservationPoint(1.0, 1.0))
        assert result.magnitude == 0.0

    def test_custom_constant(self):
        result = CoulombField(coulomb_constant=1.0).field_from(Charge(0.0, 0.0, 4.0), ObservationPoint(0.0, 2.0))
        assert result.ey == pytest.approx(1.0)
        assert result.ex == pytest.approx(0.0, abs=1e-15)


class TestSuperposition:
    """Test suite for the net field of several charges."""

    def test_linearity(self):
        c1 = Charge(0.0, 0.0, 1e-9)
        c2 = Charge(4.0, 1.0, -2e-9)
        point = ObservationPoint(2.0, 3.0)

        combined = net_field([c1, c2], point)
        separate = field_from(c1, point) + field_from(c2, point)

        assert combined.ex == pytest.approx(separate.ex, rel=1e-12)
        assert combined.ey == pytest.approx(separate.ey, rel=1e-12)

    def test_dipole_bisector_symmetry(self):
        """Equal and opposite charges cancel along the perpendicular bisector."""
        charges = [Charge(-1.0, 0.0, 1e-9), Charge(1.0, 0.0, -1e-9)]
        for y in [-3.0, -0.5, 0.0, 0.5, 2.0]:
            result = net_field(charges, ObservationPoint(0.0, y))
            assert result.ey == pytest.approx(0.0, abs=1e-9 * result.magnitude)
            assert result.ex > 0

    def test_equal_charges_cancel_at_midpoint(self):
        charges = [Charge(0.0, 0.0, 1e-9), Charge(2.0, 0.0, 1e-9)]
        result = net_field(charges, ObservationPoint(1.0, 0.0))
        assert result.magnitude == pytest.approx(0.0, abs=1e-6)

    def test_no_charges(self):
        assert net_field([], ObservationPoint(1.0, 1.0)) == ZERO_FIELD

    def test_coinciding_charge_ignored_in_sum(self):
        other = Charge(3.0, 0.0, 1e-9)
        point = ObservationPoint(0.0, 0.0)
        result = net_field([Charge(0.0, 0.0, 5e-9), other], point)
        assert result == field_from(other, point)


class TestNormalizedDirection:
    """Test suite for unit field directions."""

    def test_unit_length(self):
        result = normalized_direction(FieldVector(3.0, -4.0))
        assert result.ex == pytest.approx(0.6)
        assert result.ey == pytest.approx(-0.8)
        assert result.magnitude == pytest.approx(1.0)

    def test_zero_vector_unchanged(self):
        result = normalized_direction(ZERO_FIELD)
        assert result == ZERO_FIELD

    def test_field_map_normalisation(self):
        field = torch.tensor([[3.0, 4.0], [0.0, 0.0], [-2.0, 0.0]], dtype=torch.float64)
        unit = normalize_field_map(field)
        expected = torch.tensor([[0.6, 0.8], [0.0, 0.0], [-1.0, 0.0]], dtype=torch.float64)
        assert torch.allclose(unit, expected)
        assert torch.isfinite(unit).all()


class TestFieldMap:
    """Test suite for batched grid evaluation."""

    @pytest.fixture
    def charges(self):
        return [Charge(2.0, 2.0, 1e-9), Charge(6.0, 3.0, -2e-9), Charge(4.0, 7.0, 0.0)]

    @pytest.fixture
    def points(self):
        np.random.seed(42)
        coords = np.random.uniform(0.0, 10.0, size=(25, 2))
        return [ObservationPoint(float(x), float(y)) for x, y in coords] + [ObservationPoint(2.0, 2.0)]

    def test_shape_and_dtype(self, charges, points):
        result = CoulombField().field_map(charges, points)
        assert result.shape == (len(points), 2)
        assert result.dtype == torch.float64

    def test_matches_scalar_superposition(self, charges, points):
        field = CoulombField()
        batched = field.field_map(charges, points)
        reference = torch.tensor([[v.ex, v.ey] for v in (field.net_field(charges, p) for p in points)],
                                 dtype=torch.float64)
        assert torch.allclose(batched, reference, rtol=1e-9, atol=1e-9)

    def test_coinciding_point_is_finite(self, charges, points):
        result = CoulombField().field_map(charges, points)
        assert torch.isfinite(result).all()

    def test_empty_inputs(self, charges, points):
        field = CoulombField()
        assert field.field_map([], points).abs().sum().item() == 0.0
        assert field.field_map(charges, []).shape == (0, 2)
