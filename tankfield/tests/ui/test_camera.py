import math

import numpy as np
import pytest

from tankfield.agents.components import Transform
from tankfield.core.math3d import UP, normalize, quat_from_axis_angle, quat_rotate, vec3
from tankfield.ui.camera import camera_target, camera_transform

FORWARD = vec3(0.0, 0.0, -1.0) # Camera looks down local -Z

@pytest.mark.camera
def test_camera_behind_tank_at_origin() -> None:
    tank = Transform()

    camera = camera_transform(tank)

    np.testing.assert_allclose(camera.translation, [0.0, 5.0, -10.0], atol=1e-9)
    np.testing.assert_allclose(camera_target(tank), [0.0, 1.0, 0.0], atol=1e-9)


@pytest.mark.camera
def test_camera_faces_look_target() -> None:
    tank = Transform()
    camera = camera_transform(tank)

    view_direction = quat_rotate(camera.rotation, FORWARD)
    expected = normalize(camera_target(tank) - camera.translation)
    np.testing.assert_allclose(view_direction, expected, atol=1e-9)


@pytest.mark.camera
def test_camera_keeps_world_up() -> None:
    """No roll: the camera's right axis stays horizontal."""
    tank = Transform(rotation=quat_from_axis_angle(UP, 2.1))
    camera = camera_transform(tank)

    right = quat_rotate(camera.rotation, vec3(1.0, 0.0, 0.0))
    up = quat_rotate(camera.rotation, vec3(0.0, 1.0, 0.0))
    assert right[1] == pytest.approx(0.0, abs=1e-9)
    assert up[1] > 0.0


@pytest.mark.camera
def test_camera_offset_rotates_with_tank() -> None:
    """A quarter turn about +Y moves the camera from -Z to -X of the tank."""
    tank = Transform(
        translation=vec3(3.0, 0.0, 4.0),
        rotation=quat_from_axis_angle(UP, math.pi / 2.0),
    )

    camera = camera_transform(tank)

    np.testing.assert_allclose(camera.translation, [-7.0, 5.0, 4.0], atol=1e-9)
    np.testing.assert_allclose(camera_target(tank), [3.0, 1.0, 4.0], atol=1e-9)
    view_direction = quat_rotate(camera.rotation, FORWARD)
    np.testing.assert_allclose(view_direction, normalize(vec3(10.0, -4.0, 0.0)), atol=1e-9)


@pytest.mark.camera
def test_camera_has_no_memory() -> None:
    """The same tank pose always yields the same camera pose."""
    tank = Transform(translation=vec3(-2.0, 0.0, 9.0), rotation=quat_from_axis_angle(UP, 0.4))
    first = camera_transform(tank)
    camera_transform(Transform(translation=vec3(50.0, 0.0, 50.0)))
    second = camera_transform(tank)

    np.testing.assert_allclose(first.translation, second.translation)
    np.testing.assert_allclose(first.rotation, second.rotation)


@pytest.mark.camera
@pytest.mark.parametrize("angle", [0.0, 0.3, math.pi / 2.0, math.pi, 4.0 * math.pi + 0.25])
def test_yaw_quaternion_leaves_up_unchanged(angle: float) -> None:
    q = quat_from_axis_angle(UP, angle)
    np.testing.assert_allclose(quat_rotate(q, UP), UP, atol=1e-9)
    assert np.linalg.norm(q) == pytest.approx(1.0)
