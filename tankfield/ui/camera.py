import numpy as np

from tankfield.agents.components import Transform
from tankfield.core.math3d import UP, looking_at, quat_rotate, vec3

CAMERA_LOCAL_OFFSET = vec3(0.0, 5.0, -10.0) # Above and behind, in the tank's frame
LOOK_TARGET_HEIGHT = 1.0 # Roughly hull height


def camera_target(tank_transform: Transform) -> np.ndarray:
    """Point the chase camera looks at: just above the tank's base."""
    return tank_transform.translation + vec3(0.0, LOOK_TARGET_HEIGHT, 0.0)


def camera_transform(tank_transform: Transform) -> Transform:
    """Derives the chase camera pose from the tracked tank's pose.

    The offset rotates with the tank, so the camera always sits behind it.
    Nothing is carried over from previous frames.

    Args:
        tank_transform: Current transform of the player tank.

    Returns:
        A new Transform for the camera, looking at the tank with +Y as up.
    """
    translation = tank_transform.translation + quat_rotate(tank_transform.rotation, CAMERA_LOCAL_OFFSET)
    rotation = looking_at(translation, camera_target(tank_transform), UP)
    return Transform(translation=translation, rotation=rotation)
