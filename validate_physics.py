import sys

import torch
import numpy as np

from efield.physics import Charge, ObservationPoint, CoulombField, COULOMB_CONSTANT
from efield.data import PlotBounds, GridSampler


def validate_direction_convention():
    """Validate source/sink orientation of a single charge."""
    print("Validating direction convention...")

    field = CoulombField()
    point = ObservationPoint(1.0, 0.0)
    positive = field.field_from(Charge(0.0, 0.0, 1e-9), point)
    negative = field.field_from(Charge(0.0, 0.0, -1e-9), point)

    print(f"Positive charge field at (1, 0): ({positive.ex:.4e}, {positive.ey:.4e})")
    print(f"Negative charge field at (1, 0): ({negative.ex:.4e}, {negative.ey:.4e})")

    if positive.ex > 0 and negative.ex < 0 and abs(positive.ey) < 1e-12 and abs(negative.ey) < 1e-12:
        print("✓ Direction convention validation passed")
        return True
    else:
        print("✗ Direction convention validation failed")
        return False


def validate_inverse_square_law():
    """Validate |E| = k|q|/r² and monotone decay along a ray."""
    print("\nValidating inverse-square decay...")

    field = CoulombField()
    q = 2e-9
    distances = np.linspace(0.5, 20.0, 40)
    magnitudes = np.array([field.field_from(Charge(0.0, 0.0, q), ObservationPoint(r, 0.0)).magnitude
                           for r in distances])
    expected = COULOMB_CONSTANT * q / distances**2

    max_relative_error = np.max(np.abs(magnitudes - expected) / expected)
    monotone = bool(np.all(np.diff(magnitudes) < 0))

    print(f"Maximum relative error: {max_relative_error:.2e}")
    print(f"Monotone decay: {monotone}")

    if max_relative_error < 1e-12 and monotone:
        print("✓ Inverse-square validation passed")
        return True
    else:
        print("✗ Inverse-square validation failed")
        return False


def validate_dipole_symmetry():
    """Validate the field of a dipole on its perpendicular bisector."""
    print("\nValidating dipole symmetry...")

    field = CoulombField()
    charges = [Charge(-1.0, 0.0, 1e-9), Charge(1.0, 0.0, -1e-9)]
    bisector = [ObservationPoint(0.0, y) for y in np.linspace(-5.0, 5.0, 11)]

    # Field on the bisector is parallel to the dipole axis
    max_ratio = 0.0
    for point in bisector:
        net = field.net_field(charges, point)
        max_ratio = max(max_ratio, abs(net.ey) / net.magnitude)

    print(f"Maximum |Ey|/|E| on bisector: {max_ratio:.2e}")

    if max_ratio < 1e-12:
        print("✓ Dipole symmetry validation passed")
        return True
    else:
        print("✗ Dipole symmetry validation failed")
        return False


def validate_superposition():
    """Validate that the net field is the component-wise sum of single-charge fields."""
    print("\nValidating superposition...")

    field = CoulombField()
    charges = [Charge(0.0, 0.0, 1e-9), Charge(4.0, 1.0, -2e-9), Charge(1.0, 6.0, 3e-9)]
    points = [ObservationPoint(x, y) for x, y in [(2.0, 3.0), (5.5, 0.5), (9.0, 9.0), (0.5, 4.0)]]

    max_relative_error = 0.0
    for point in points:
        net = field.net_field(charges, point)
        ex = sum(field.field_from(c, point).ex for c in charges)
        ey = sum(field.field_from(c, point).ey for c in charges)
        error = np.hypot(net.ex - ex, net.ey - ey) / max(np.hypot(ex, ey), 1e-300)
        max_relative_error = max(max_relative_error, error)

    print(f"Maximum relative error: {max_relative_error:.2e}")

    if max_relative_error < 1e-12:
        print("✓ Superposition validation passed")
        return True
    else:
        print("✗ Superposition validation failed")
        return False


def validate_zero_distance_skip():
    """Validate that a charge on the observation point contributes nothing."""
    print("\nValidating zero-distance skip...")

    field = CoulombField()
    charge = Charge(2.0, 3.0, 1e-9)
    point = ObservationPoint(2.0, 3.0)
    own = field.field_from(charge, point)

    other = Charge(5.0, 3.0, -1e-9)
    combined = field.net_field([charge, other], point)
    expected = field.field_from(other, point)

    batched = field.field_map([charge], [point])

    print(f"Coinciding charge field: ({own.ex}, {own.ey})")

    if (own.ex == 0.0 and own.ey == 0.0 and combined == expected
            and bool(torch.all(batched == 0))):
        print("✓ Zero-distance skip validation passed")
        return True
    else:
        print("✗ Zero-distance skip validation failed")
        return False


def validate_batched_evaluation():
    """Validate that the grid evaluation matches point-by-point superposition."""
    print("\nValidating batched field evaluation...")

    field = CoulombField()
    charges = [Charge(3.0, 4.0, 1e-9), Charge(7.0, 2.0, -2e-9), Charge(5.0, 5.0, 0.5e-9)]
    points = GridSampler(PlotBounds(0.0, 10.0), 1.0).generate(charges)

    batched = field.field_map(charges, points)
    reference = torch.tensor([[v.ex, v.ey] for v in (field.net_field(charges, p) for p in points)],
                             dtype=torch.float64)

    max_difference = torch.max(torch.abs(batched - reference) / (torch.abs(reference) + 1.0)).item()
    finite = bool(torch.isfinite(batched).all())

    print(f"Observation points: {len(points)}")
    print(f"Maximum scaled difference: {max_difference:.2e}")

    if max_difference < 1e-9 and finite:
        print("✓ Batched evaluation validation passed")
        return True
    else:
        print("✗ Batched evaluation validation failed")
        return False


def main():
    """Run all physics validations."""
    print("Point-Charge Field Physics Validation")
    print("=" * 50)

    print(f"PyTorch version: {torch.__version__}")
    print()

    validations = [
        validate_direction_convention,
        validate_inverse_square_law,
        validate_dipole_symmetry,
        validate_superposition,
        validate_zero_distance_skip,
        validate_batched_evaluation
    ]

    results = []
    for validation in validations:
        try:
            result = validation()
            results.append(result)
        except Exception as e:
            print(f"✗ Validation failed with error: {e}")
            results.append(False)

    print("\n" + "=" * 50)
    print("VALIDATION SUMMARY")
    print("=" * 50)

    passed = sum(results)
    total = len(results)

    print(f"Tests passed: {passed}/{total}")

    if passed == total:
        print("✓ All physics validations passed successfully!")
        return 0
    else:
        print("✗ Some validations failed. Review implementation before proceeding.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
