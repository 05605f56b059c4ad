import math

import numpy as np
import pytest

from tankfield.world.noise_field import NoiseField, SPATIAL_FREQUENCY_DIVISOR, heading_direction, heading_for

@pytest.mark.simulation
def test_noise_field_is_deterministic_for_a_seed() -> None:
    """Two fields built with the same seed return identical samples."""
    points = [(0.13, 1.0, 4.2), (-3.7, 7.0, 0.05), (12.5, 19.0, -8.25)]
    field_a = NoiseField(seed=42)
    field_b = NoiseField(seed=42)

    assert [field_a.sample(*p) for p in points] == [field_b.sample(*p) for p in points]


@pytest.mark.simulation
def test_noise_field_is_continuous() -> None:
    """Nearby inputs give nearby outputs, so headings turn smoothly."""
    field = NoiseField(seed=3)
    for x in np.linspace(-5.0, 5.0, 41):
        here = field.sample(float(x), 2.0, 0.37)
        nearby = field.sample(float(x) + 1e-4, 2.0, 0.37)
        assert abs(here - nearby) < 1e-2


@pytest.mark.simulation
def test_noise_field_stays_near_nominal_range() -> None:
    field = NoiseField(seed=11)
    samples = [field.sample(x * 0.173, float(tank_id), x * 0.311) for x in range(200) for tank_id in range(1, 6)]
    assert max(abs(s) for s in samples) <= 1.5
    assert len(set(samples)) > 1, "Noise field should not be constant."


@pytest.mark.simulation
def test_heading_uses_scaled_position_and_tank_id() -> None:
    """The sample point is (x / 10, id, z / 10) and maps to (0.5 + n) * 4*pi."""
    field = NoiseField(seed=7)
    translation = np.array([4.0, 123.0, -6.5])
    tank_id = 5

    n = field.sample(4.0 / SPATIAL_FREQUENCY_DIVISOR, 5.0, -6.5 / SPATIAL_FREQUENCY_DIVISOR)
    assert heading_for(field, tank_id, translation) == pytest.approx((0.5 + n) * 4.0 * math.pi)


@pytest.mark.simulation
def test_heading_ignores_height() -> None:
    field = NoiseField(seed=7)
    low = heading_for(field, 2, np.array([1.5, 0.0, 2.5]))
    high = heading_for(field, 2, np.array([1.5, 50.0, 2.5]))
    assert low == high


@pytest.mark.simulation
def test_tanks_with_different_ids_sample_different_slices() -> None:
    field = NoiseField(seed=0)
    translation = np.array([3.3, 0.0, 1.7])
    headings = {heading_for(field, tank_id, translation) for tank_id in range(1, 10)}
    assert len(headings) > 1


@pytest.mark.simulation
@pytest.mark.parametrize("angle", [0.0, 0.5, math.pi, 7.0, 4.0 * math.pi + 1.0])
def test_heading_direction_is_horizontal_unit_vector(angle: float) -> None:
    direction = heading_direction(angle)
    assert direction[1] == 0.0
    assert np.linalg.norm(direction) == pytest.approx(1.0)
    assert direction[0] == pytest.approx(math.sin(angle))
    assert direction[2] == pytest.approx(math.cos(angle))


@pytest.mark.simulation
def test_tank_ids_wrap_every_256() -> None:
    """Lattice indices are masked to 8 bits, so id k and k + 256 share a slice."""
    field = NoiseField(seed=4)
    translation = np.array([3.3, 0.0, 1.7])
    assert heading_for(field, 1, translation) == heading_for(field, 257, translation)
