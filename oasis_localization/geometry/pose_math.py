################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Angle, rotation and quaternion helpers for planar localization
"""

from __future__ import annotations

import math
from typing import Iterable
from typing import Sequence
from typing import Tuple

import numpy as np


_TWO_PI: float = 2.0 * math.pi

# Units: unitless. Meaning: |cos(pitch)| below this is treated as gimbal lock
_GIMBAL_LOCK_EPS: float = 1.0e-9


def wrap_to_pi(angle_rad: float) -> float:
    """
    Wrap an angle into the half-open interval (-pi, pi]

    Non-finite angles wrap to NaN.
    """

    if not math.isfinite(angle_rad):
        return math.nan

    wrapped: float = math.fmod(float(angle_rad), _TWO_PI)
    if wrapped <= -math.pi:
        wrapped += _TWO_PI
    elif wrapped > math.pi:
        wrapped -= _TWO_PI
    return wrapped


def clamp(value: float, lower: float, upper: float) -> float:
    """
    Clamp a value into [lower, upper]

    NaN passes through unchanged so that callers can detect it. Swapped bounds
    are reordered.
    """

    if math.isnan(value):
        return value
    if lower > upper:
        lower, upper = upper, lower
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def is_finite_vector(values: Iterable[float]) -> bool:
    """
    Check if all values in an iterable are finite
    """

    for value in values:
        if not math.isfinite(float(value)):
            return False
    return True


def rotation_from_ypr(yaw_rad: float, pitch_rad: float, roll_rad: float) -> np.ndarray:
    """
    Build the 3x3 rotation Rz(yaw) * Ry(pitch) * Rx(roll)

    Any non-finite angle yields an all-NaN matrix.
    """

    if not is_finite_vector((yaw_rad, pitch_rad, roll_rad)):
        return np.full((3, 3), math.nan)

    cy: float = math.cos(yaw_rad)
    sy: float = math.sin(yaw_rad)
    cp: float = math.cos(pitch_rad)
    sp: float = math.sin(pitch_rad)
    cr: float = math.cos(roll_rad)
    sr: float = math.sin(roll_rad)

    return np.array(
        [
            [cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr],
            [sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr],
            [-sp, cp * sr, cp * cr],
        ],
        dtype=float,
    )


def ypr_from_rotation(rot: np.ndarray) -> Tuple[float, float, float]:
    """
    Extract (yaw, pitch, roll) from a Z-Y-X rotation matrix

    All three angles are wrapped into (-pi, pi]. At gimbal lock roll is pinned
    to zero and the full in-plane rotation is attributed to yaw.
    """

    sin_pitch: float = clamp(-float(rot[2, 0]), -1.0, 1.0)
    pitch: float = math.asin(sin_pitch)

    yaw: float
    roll: float
    if abs(math.cos(pitch)) > _GIMBAL_LOCK_EPS:
        yaw = math.atan2(float(rot[1, 0]), float(rot[0, 0]))
        roll = math.atan2(float(rot[2, 1]), float(rot[2, 2]))
    else:
        roll = 0.0
        yaw = math.atan2(-float(rot[0, 1]), float(rot[1, 1]))

    return wrap_to_pi(yaw), wrap_to_pi(pitch), wrap_to_pi(roll)


def rpy_from_quaternion(quat_xyzw: Sequence[float]) -> Tuple[float, float, float]:
    """
    Convert a quaternion in (x, y, z, w) order to roll, pitch, yaw angles
    """

    x: float = float(quat_xyzw[0])
    y: float = float(quat_xyzw[1])
    z: float = float(quat_xyzw[2])
    w: float = float(quat_xyzw[3])

    norm: float = math.sqrt(x * x + y * y + z * z + w * w)
    if norm <= 0.0 or not math.isfinite(norm):
        raise ValueError("quaternion must have finite, non-zero norm")
    x, y, z, w = x / norm, y / norm, z / norm, w / norm

    sinr_cosp: float = 2.0 * (w * x + y * z)
    cosr_cosp: float = 1.0 - 2.0 * (x * x + y * y)
    roll: float = math.atan2(sinr_cosp, cosr_cosp)

    sinp: float = 2.0 * (w * y - z * x)
    if abs(sinp) >= 1.0:
        pitch: float = math.copysign(math.pi / 2.0, sinp)
    else:
        pitch = math.asin(sinp)

    siny_cosp: float = 2.0 * (w * z + x * y)
    cosy_cosp: float = 1.0 - 2.0 * (y * y + z * z)
    yaw: float = math.atan2(siny_cosp, cosy_cosp)

    return (roll, pitch, yaw)
