"""Rotation helpers: Euler angles, quaternions and rotation matrices.

Quaternions are numpy arrays ordered ``[w, x, y, z]``.
"""

from __future__ import annotations

import math

import numpy as np

_SINGULAR_EPS = 1e-6


def _vector3(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {arr.shape}")
    return arr


def _matrix3(r) -> np.ndarray:
    arr = np.asarray(r, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {arr.shape}")
    return arr


def _quaternion(q) -> np.ndarray:
    arr = np.asarray(q, dtype=float).reshape(-1)
    if arr.shape != (4,):
        raise ValueError(f"expected a quaternion [w, x, y, z], got shape {arr.shape}")
    return arr


def skew(v) -> np.ndarray:
    """Return the cross-product matrix of ``v``, so that ``skew(v) @ w == v x w``."""
    x, y, z = _vector3(v)
    return np.array(
        [
            [0.0, -z, y],
            [z, 0.0, -x],
            [-y, x, 0.0],
        ]
    )


def _rz(y: float) -> np.ndarray:
    c, s = math.cos(y), math.sin(y)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def _ry(p: float) -> np.ndarray:
    c, s = math.cos(p), math.sin(p)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def _rx(r: float) -> np.ndarray:
    c, s = math.cos(r), math.sin(r)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def r_to_ypr(r) -> np.ndarray:
    """Return ``[yaw, pitch, roll]`` in degrees of a rotation matrix."""
    m = _matrix3(r)
    n, o, a = m[:, 0], m[:, 1], m[:, 2]
    y = math.atan2(n[1], n[0])
    p = math.atan2(-n[2], n[0] * math.cos(y) + n[1] * math.sin(y))
    roll = math.atan2(
        a[0] * math.sin(y) - a[1] * math.cos(y),
        -o[0] * math.sin(y) + o[1] * math.cos(y),
    )
    return np.array([y, p, roll]) / math.pi * 180.0


def ypr_to_r(ypr) -> np.ndarray:
    """Return the rotation ``Rz(yaw) Ry(pitch) Rx(roll)`` from degrees."""
    y, p, r = (angle / 180.0 * math.pi for angle in _vector3(ypr))
    return _rz(y) @ _ry(p) @ _rx(r)


def euler_angles_to_rotation_matrix(theta) -> np.ndarray:
    """Return ``Rz Ry Rx`` from ``[roll, pitch, yaw]`` in radians."""
    roll, pitch, yaw = _vector3(theta)
    return _rz(yaw) @ _ry(pitch) @ _rx(roll)


def rotation_matrix_to_euler_angles(r) -> np.ndarray:
    """Return ``[roll, pitch, yaw]`` in radians; yaw is zero at gimbal lock."""
    m = _matrix3(r)
    sy = math.sqrt(m[0, 0] * m[0, 0] + m[1, 0] * m[1, 0])
    if sy >= _SINGULAR_EPS:
        x = math.atan2(m[2, 1], m[2, 2])
        y = math.atan2(-m[2, 0], sy)
        z = math.atan2(m[1, 0], m[0, 0])
    else:
        x = math.atan2(-m[1, 2], m[1, 1])
        y = math.atan2(-m[2, 0], sy)
        z = 0.0
    return np.array([x, y, z])


def _quaternion_from_two_vectors(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    v0 = a / np.linalg.norm(a)
    v1 = b / np.linalg.norm(b)
    c = float(v1 @ v0)
    if c < -1.0 + np.finfo(float).eps:
        c = max(c, -1.0)
        _, _, vt = np.linalg.svd(np.vstack([v0, v1]))
        axis = vt[2]
        w2 = (1.0 + c) * 0.5
        return np.concatenate([[math.sqrt(w2)], axis * math.sqrt(1.0 - w2)])
    axis = np.cross(v0, v1)
    s = math.sqrt((1.0 + c) * 2.0)
    return np.concatenate([[s * 0.5], axis / s])


def gravity_to_rotation(g) -> np.ndarray:
    """Return a rotation that aligns ``g`` with +z and has zero yaw."""
    gv = _vector3(g)
    if not np.any(gv):
        raise ValueError("gravity vector must not be zero")
    r0 = quaternion_to_matrix(_quaternion_from_two_vectors(gv, np.array([0.0, 0.0, 1.0])))
    yaw = r_to_ypr(r0)[0]
    return ypr_to_r([-yaw, 0.0, 0.0]) @ r0


def quaternion_multiply(a, b) -> np.ndarray:
    """Return the Hamilton product ``a * b``."""
    aw, ax, ay, az = _quaternion(a)
    bw, bx, by, bz = _quaternion(b)
    return np.array(
        [
            aw * bw - ax * bx - ay * by - az * bz,
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
        ]
    )


def quaternion_to_matrix(q) -> np.ndarray:
    """Return the rotation matrix of a unit quaternion."""
    w, x, y, z = _quaternion(q)
    tx, ty, tz = 2.0 * x, 2.0 * y, 2.0 * z
    twx, twy, twz = tx * w, ty * w, tz * w
    txx, txy, txz = tx * x, ty * x, tz * x
    tyy, tyz, tzz = ty * y, tz * y, tz * z
    return np.array(
        [
            [1.0 - (tyy + tzz), txy - twz, txz + twy],
            [txy + twz, 1.0 - (txx + tzz), tyz - twx],
            [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
        ]
    )


def matrix_to_quaternion(r) -> np.ndarray:
    """Return the quaternion of a rotation matrix."""
    m = _matrix3(r)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        t = math.sqrt(trace + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return np.array(
            [
                w,
                (m[2, 1] - m[1, 2]) * t,
                (m[0, 2] - m[2, 0]) * t,
                (m[1, 0] - m[0, 1]) * t,
            ]
        )
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    vec = np.zeros(3)
    vec[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    vec[j] = (m[j, i] + m[i, j]) * t
    vec[k] = (m[k, i] + m[i, k]) * t
    return np.concatenate([[w], vec])


def delta_quaternion(angular_delta) -> np.ndarray:
    """Return the quaternion of a rotation vector; zero gives the identity."""
    delta = _vector3(angular_delta)
    magnitude = float(np.linalg.norm(delta))
    direction = delta / magnitude if magnitude > 0.0 else delta
    half = magnitude / 2.0
    return np.concatenate([[math.cos(half)], math.sin(half) * direction])


def euler_angles_zyx(r) -> np.ndarray:
    """Return ``[yaw, pitch, roll]`` in radians with ``R = Rz Ry Rx``.

    Yaw lies in ``[0, pi]``; pitch and roll absorb the remaining turn.
    """
    m = _matrix3(r)
    i, j, k = 2, 1, 0
    a0 = math.atan2(m[j, k], m[k, k])
    c2 = math.hypot(m[i, i], m[i, j])
    if a0 < 0.0:
        a0 += math.pi
        a1 = math.atan2(-m[i, k], -c2)
    else:
        a1 = math.atan2(-m[i, k], c2)
    s1, c1 = math.sin(a0), math.cos(a0)
    a2 = math.atan2(s1 * m[k, i] - c1 * m[j, i], c1 * m[j, j] - s1 * m[k, j])
    return np.array([a0, a1, a2])


def normalize_rotation(r) -> np.ndarray:
    """Project a near-rotation matrix back onto a proper rotation."""
    q = matrix_to_quaternion(r)
    norm = float(np.linalg.norm(q))
    if norm == 0.0:
        raise ValueError("matrix does not describe a rotation")
    return quaternion_to_matrix(q / norm)