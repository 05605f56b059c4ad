import math
from dataclasses import dataclass

import noise # Perlin noise
import numpy as np

# Motion generator parameters
SPATIAL_FREQUENCY_DIVISOR = 10.0 # Higher = smoother, wider turns
NOISE_REPEAT = 1024 # Lattice period per axis, positions repeat every 10240 units
MAX_SEED = 255 # pnoise3 adds base to a masked lattice index into a 512-entry table

@dataclass(frozen=True)
class NoiseField:
    """A seeded, read-only 3D Perlin noise field shared by every tank.

    Args:
        seed: Base passed to pnoise3. Fixed for the lifetime of the field.
    """
    seed: int = 0

    def sample(self, x: float, y: float, z: float) -> float:
        """Returns the noise value at (x, y, z), nominally within [-1, 1]."""
        return noise.pnoise3(
            x,
            y,
            z,
            repeatx=NOISE_REPEAT,
            repeaty=NOISE_REPEAT,
            repeatz=NOISE_REPEAT,
            base=self.seed,
        )


def heading_for(field: NoiseField, tank_id: int, translation: np.ndarray) -> float:
    """Maps a tank's identity and current position to a heading angle in radians.

    The tank id is the middle sample coordinate, so every tank follows its own
    slice of the field. Lattice indices are masked to 8 bits, so ids k and
    k + 256 share a slice. The result is unwrapped and spans several full turns.
    """
    seed = translation / SPATIAL_FREQUENCY_DIVISOR
    n = field.sample(float(seed[0]), float(tank_id), float(seed[2]))
    return (0.5 + n) * 4.0 * math.pi


def heading_direction(angle: float) -> np.ndarray:
    """Unit forward vector in the horizontal plane for a heading angle."""
    return np.array([math.sin(angle), 0.0, math.cos(angle)])
