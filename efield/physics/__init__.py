"""
Physics module for point-charge electrostatics.

This module contains the core field computation:
- Charge, observation point and field vector value types
- Coulomb's law for a single charge
- Superposition and direction normalisation over a charge set
"""

from .charges import Charge, ObservationPoint, FieldVector, ZERO_FIELD
from .coulomb import (
    COULOMB_CONSTANT,
    CoulombField,
    field_from,
    net_field,
    normalized_direction,
    normalize_field_map,
    field_magnitude
)

__all__ = [
    'Charge',
    'ObservationPoint',
    'FieldVector',
    'ZERO_FIELD',
    'COULOMB_CONSTANT',
    'CoulombField',
    'field_from',
    'net_field',
    'normalized_direction',
    'normalize_field_map',
    'field_magnitude'
]
