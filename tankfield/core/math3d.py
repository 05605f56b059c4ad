"""Small 3D vector and quaternion helpers on top of NumPy.

Conventions match a right-handed, Y-up world: yaw rotates about +Y, and a
camera looks down its local -Z axis. Quaternions are stored as (x, y, z, w).
"""

import math

import numpy as np

UP = np.array([0.0, 1.0, 0.0])
IDENTITY_QUAT = np.array([0.0, 0.0, 0.0, 1.0])


def vec3(x: float, y: float, z: float) -> np.ndarray:
    return np.array([x, y, z], dtype=np.float64)


def normalize(v: np.ndarray) -> np.ndarray:
    # Zero-length input yields NaNs, which the simulation tolerates.
    return v / np.linalg.norm(v)


def quat_from_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    """Returns the unit quaternion rotating `angle` radians about a unit `axis`."""
    half = 0.5 * angle
    s = math.sin(half)
    return np.array([axis[0] * s, axis[1] * s, axis[2] * s, math.cos(half)])


def quat_rotate(q: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Applies the rotation `q` to the vector `v`."""
    u = q[:3]
    w = q[3]
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def quat_from_mat3(m: np.ndarray) -> np.ndarray:
    """Converts a 3x3 rotation matrix (row-major indexing) to a quaternion."""
    m00, m01, m02 = m[0]
    m10, m11, m12 = m[1]
    m20, m21, m22 = m[2]
    trace = m00 + m11 + m22
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        q = [(m21 - m12) / s, (m02 - m20) / s, (m10 - m01) / s, 0.25 * s]
    elif m00 > m11 and m00 > m22:
        s = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
        q = [0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s]
    elif m11 > m22:
        s = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
        q = [(m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s]
    else:
        s = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
        q = [(m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s]
    return normalize(np.array(q))


def looking_at(eye: np.ndarray, target: np.ndarray, up: np.ndarray = UP) -> np.ndarray:
    """Returns the rotation that points local -Z from `eye` towards `target`.

    `up` fixes the roll: the rotated +Y stays in the plane spanned by `up`
    and the viewing direction.
    """
    back = normalize(eye - target)
    right = normalize(np.cross(up, back))
    true_up = np.cross(back, right)
    return quat_from_mat3(np.column_stack((right, true_up, back)))
