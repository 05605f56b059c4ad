from typing import Tuple

import numpy as np

from tankfield.agents.components import Transform, Velocity
from tankfield.core.math3d import quat_rotate, vec3

# Cannon geometry, in tank-local coordinates
MUZZLE_OFFSET = vec3(0.0, 1.235, 0.324) # Tip of the cannon
LAUNCH_DIRECTION = vec3(0.0, 0.717, 0.8)
MUZZLE_SPEED = 20.0
CANNONBALL_SCALE = 0.2

# Physics parameters
GRAVITY = 9.82
FLOOR_HEIGHT = 0.1
BOUNCE_DAMPING = vec3(0.8, -0.8, 0.8) # Reverses and damps the vertical component
DESPAWN_SPEED_SQUARED = 0.1 # Compared against |v|^2, no sqrt per ball


def spawn_cannonball(tank_transform: Transform) -> Tuple[Transform, Velocity]:
    """Computes the initial pose and velocity of a cannonball fired by a tank.

    The ball appears at the cannon tip, shares the tank's rotation and flies
    along the tank's launch direction at MUZZLE_SPEED.
    """
    rotation = tank_transform.rotation
    offset = quat_rotate(rotation, MUZZLE_OFFSET)

    transform = Transform(
        translation=tank_transform.translation + offset,
        rotation=rotation.copy(),
        scale=vec3(CANNONBALL_SCALE, CANNONBALL_SCALE, CANNONBALL_SCALE),
    )
    velocity = Velocity(val=quat_rotate(rotation, LAUNCH_DIRECTION * MUZZLE_SPEED))
    return transform, velocity


def integrate_cannonball(transform: Transform, velocity: Velocity, dt: float) -> bool:
    """Advances one cannonball by dt seconds, in place.

    Returns True when the ball has slowed enough to be despawned.
    """
    transform.translation += velocity.val * dt

    # Bounce if position drops below floor.
    if transform.translation[1] < FLOOR_HEIGHT:
        transform.translation[1] = FLOOR_HEIGHT
        velocity.val *= BOUNCE_DAMPING

    velocity.val[1] -= GRAVITY * dt

    return float(np.dot(velocity.val, velocity.val)) < DESPAWN_SPEED_SQUARED
