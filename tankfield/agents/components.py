from dataclasses import dataclass, field
from typing import Any

import numpy as np

from tankfield.core.math3d import IDENTITY_QUAT, vec3

@dataclass
class Transform:
    """Position, orientation and scale of an entity in world coordinates.

    The rotation is a unit quaternion stored as (x, y, z, w).
    """
    translation: np.ndarray = field(default_factory=lambda: vec3(0.0, 0.0, 0.0))
    rotation: np.ndarray = field(default_factory=lambda: IDENTITY_QUAT.copy())
    scale: np.ndarray = field(default_factory=lambda: vec3(1.0, 1.0, 1.0))

@dataclass
class Velocity:
    """Linear velocity of a cannonball in units per second."""
    val: np.ndarray = field(default_factory=lambda: vec3(0.0, 0.0, 0.0))

@dataclass
class AiTank:
    """An autonomous tank driven by the noise field."""
    id: int # Seeds the noise sample, never reused
    visual: Any = None # Opaque to the simulation, handed through to cannonballs

@dataclass
class Cannonball:
    """A marker component for projectiles, carrying the firer's visual."""
    visual: Any = None

@dataclass
class PlayerTank:
    """A marker component for the single camera-tracked tank."""
    visual: Any = None

@dataclass
class Camera:
    """A marker component for the single chase camera."""
    pass
