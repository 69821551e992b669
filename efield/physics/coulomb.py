"""
Coulomb field of a set of point charges.

Implements the single-charge field, vector superposition over all charges
and direction normalisation, both for one observation point at a time and
as a batched torch evaluation over a whole grid.

    |E| = k |q| / r²

A positive charge points the field from the charge toward the observation
point, a non-positive charge from the observation point toward the charge.
"""

import math
from typing import Iterable, Sequence, Union

import torch

from .charges import Charge, FieldVector, ObservationPoint, ZERO_FIELD


COULOMB_CONSTANT = 8.987551787e9  # N·m²/C²


class CoulombField:
    """
    Electrostatic field calculator for point charges in the plane.

    Args:
        coulomb_constant: Value of k used in Coulomb's law (N·m²/C²)
        device: Torch device for batched evaluation
        dtype: Floating point type for batched evaluation
    """

    def __init__(self,
                 coulomb_constant: float = COULOMB_CONSTANT,
                 device: Union[str, torch.device] = 'cpu',
                 dtype: torch.dtype = torch.float64):
        self.k = coulomb_constant
        self.device = torch.device(device)
        self.dtype = dtype

    def field_from(self, charge: Charge, observation: ObservationPoint) -> FieldVector:
        """
        Field of a single charge at an observation point.

        Args:
            charge: Source charge
            observation: Point at which the field is evaluated

        Returns:
            Field vector, or the zero vector when the point coincides
            with the charge
        """
        if charge.magnitude > 0:
            dx = observation.x - charge.x
            dy = observation.y - charge.y
        else:
            dx = charge.x - observation.x
            dy = charge.y - observation.y

        r = math.sqrt(dx * dx + dy * dy)
        if r == 0:
            return ZERO_FIELD

        direction = math.atan2(dy, dx)
        strength = abs(self.k * charge.magnitude / (r * r))

        return FieldVector(strength * math.cos(direction), strength * math.sin(direction))

    def net_field(self, charges: Iterable[Charge], observation: ObservationPoint) -> FieldVector:
        """Superposition of the fields of all charges at one point."""
        ex = 0.0
        ey = 0.0
        for charge in charges:
            contribution = self.field_from(charge, observation)
            ex += contribution.ex
            ey += contribution.ey
        return FieldVector(ex, ey)

    @staticmethod
    def normalized_direction(field: FieldVector) -> FieldVector:
        """Unit vector along the field; a zero field is returned unchanged."""
        norm = field.magnitude
        if norm == 0:
            return field
        return FieldVector(field.ex / norm, field.ey / norm)

    def field_map(self,
                  charges: Sequence[Charge],
                  points: Sequence[ObservationPoint]) -> torch.Tensor:
        """
        Net field at every observation point.

        Args:
            charges: Source charges
            points: Observation points

        Returns:
            Tensor of shape (N, 2) holding [Ex, Ey] per point, rows in the
            same order as ``points``
        """
        coords = points_to_tensor(points, device=self.device, dtype=self.dtype)
        field = torch.zeros(coords.shape[0], 2, device=self.device, dtype=self.dtype)
        if len(charges) == 0 or coords.shape[0] == 0:
            return field

        sources = charges_to_tensor(charges, device=self.device, dtype=self.dtype)
        positions = sources[:, :2]
        q = sources[:, 2]

        # (N, M, 2): observation minus charge for every pair
        separation = coords.unsqueeze(1) - positions.unsqueeze(0)
        orientation = torch.where(q > 0, torch.ones_like(q), -torch.ones_like(q))
        separation = separation * orientation.view(1, -1, 1)

        dx = separation[..., 0]
        dy = separation[..., 1]
        r = torch.sqrt(dx * dx + dy * dy)

        coincident = r == 0
        r_squared = torch.where(coincident, torch.ones_like(r), r * r)
        strength = torch.abs(self.k * q.unsqueeze(0) / r_squared)
        direction = torch.atan2(dy, dx)

        zeros = torch.zeros_like(r)
        ex = torch.where(coincident, zeros, strength * torch.cos(direction))
        ey = torch.where(coincident, zeros, strength * torch.sin(direction))

        field[:, 0] = ex.sum(dim=1)
        field[:, 1] = ey.sum(dim=1)
        return field


def normalize_field_map(field: torch.Tensor) -> torch.Tensor:
    """Row-wise unit vectors of an (N, 2) field tensor; zero rows stay zero."""
    norm = torch.sqrt(field[:, 0] ** 2 + field[:, 1] ** 2).unsqueeze(1)
    is_null = norm == 0
    safe_norm = torch.where(is_null, torch.ones_like(norm), norm)
    return torch.where(is_null, field, field / safe_norm)


def field_magnitude(field: torch.Tensor) -> torch.Tensor:
    """Magnitude of each row of an (N, 2) field tensor."""
    return torch.sqrt(field[:, 0] ** 2 + field[:, 1] ** 2)


def points_to_tensor(points: Sequence[ObservationPoint],
                     device: Union[str, torch.device] = 'cpu',
                     dtype: torch.dtype = torch.float64) -> torch.Tensor:
    """Stack observation points into an (N, 2) tensor."""
    if len(points) == 0:
        return torch.zeros(0, 2, device=device, dtype=dtype)
    return torch.tensor([[p.x, p.y] for p in points], device=device, dtype=dtype)


def charges_to_tensor(charges: Sequence[Charge],
                      device: Union[str, torch.device] = 'cpu',
                      dtype: torch.dtype = torch.float64) -> torch.Tensor:
    """Stack charges into an (M, 3) tensor of [x, y, q]."""
    if len(charges) == 0:
        return torch.zeros(0, 3, device=device, dtype=dtype)
    return torch.tensor([[c.x, c.y, c.magnitude] for c in charges], device=device, dtype=dtype)


# Module-level calculator using Coulomb's constant
_default_field = CoulombField()


def field_from(charge: Charge, observation: ObservationPoint) -> FieldVector:
    """Field of one charge at one point, using Coulomb's constant."""
    return _default_field.field_from(charge, observation)


def net_field(charges: Iterable[Charge], observation: ObservationPoint) -> FieldVector:
    """Superposed field of all charges at one point, using Coulomb's constant."""
    return _default_field.net_field(charges, observation)


def normalized_direction(field: FieldVector) -> FieldVector:
    """Unit vector along ``field``, or the zero vector unchanged."""
    return CoulombField.normalized_direction(field)
