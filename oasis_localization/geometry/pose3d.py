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
6-DoF rigid transform used for the field, robot and camera frame chain
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from oasis_localization.geometry.pose2d import Pose2d
from oasis_localization.geometry.pose_math import is_finite_vector
from oasis_localization.geometry.pose_math import rotation_from_ypr
from oasis_localization.geometry.pose_math import rpy_from_quaternion
from oasis_localization.geometry.pose_math import wrap_to_pi
from oasis_localization.geometry.pose_math import ypr_from_rotation


@dataclass(frozen=True)
class Pose3d:
    """
    Rigid transform T_AB between two frames

    A pose T_AB maps points expressed in frame {B} into frame {A}:
        p_A = R_AB * p_B + t_AB
    with R_AB = Rz(yaw) * Ry(pitch) * Rx(roll).

    Frames follow the robot convention: +X forward, +Y left, +Z up.

    Fields:
        x: Translation along X in inches
        y: Translation along Y in inches
        z: Translation along Z in inches
        yaw: Rotation about Z in radians
        pitch: Rotation about Y in radians
        roll: Rotation about X in radians

    Angles are stored as given. Poses produced by compose() and inverse()
    carry angles wrapped into (-pi, pi].
    """

    x: float
    y: float
    z: float
    yaw: float
    pitch: float
    roll: float

    @staticmethod
    def zero() -> Pose3d:
        return _ZERO

    @staticmethod
    def from_matrix(translation: Sequence[float], rotation: np.ndarray) -> Pose3d:
        """
        Build a pose from a translation vector and a 3x3 rotation matrix
        """

        yaw, pitch, roll = ypr_from_rotation(np.asarray(rotation, dtype=float))
        return Pose3d(
            x=float(translation[0]),
            y=float(translation[1]),
            z=float(translation[2]),
            yaw=yaw,
            pitch=pitch,
            roll=roll,
        )

    @staticmethod
    def from_quaternion(
        x: float, y: float, z: float, quat_xyzw: Sequence[float]
    ) -> Pose3d:
        roll, pitch, yaw = rpy_from_quaternion(quat_xyzw)
        return Pose3d(x=x, y=y, z=z, yaw=yaw, pitch=pitch, roll=roll)

    def translation(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def rotation(self) -> np.ndarray:
        return rotation_from_ypr(self.yaw, self.pitch, self.roll)

    def translation_norm(self) -> float:
        return float(np.linalg.norm(self.translation()))

    def is_finite(self) -> bool:
        return is_finite_vector(
            (self.x, self.y, self.z, self.yaw, self.pitch, self.roll)
        )

    def then(self, next_pose: Pose3d) -> Pose3d:
        """
        Compose T_AB.then(T_BC) -> T_AC

        The next pose is interpreted in this pose's local frame.
        """

        if next_pose is None:
            raise ValueError("next_pose is required")

        r_this: np.ndarray = self.rotation()
        r_out: np.ndarray = r_this @ next_pose.rotation()
        t_out: np.ndarray = self.translation() + r_this @ next_pose.translation()

        return Pose3d.from_matrix(t_out, r_out)

    def inverse(self) -> Pose3d:
        """
        Invert T_AB -> T_BA
        """

        # Rotation matrices are orthonormal, so R^-1 = R^T
        r_inv: np.ndarray = self.rotation().T
        t_inv: np.ndarray = -(r_inv @ self.translation())

        return Pose3d.from_matrix(t_inv, r_inv)

    def planarize(self) -> Pose3d:
        """
        Project onto the floor plane: keep x, y and wrapped yaw
        """

        return Pose3d(
            x=self.x,
            y=self.y,
            z=0.0,
            yaw=wrap_to_pi(self.yaw),
            pitch=0.0,
            roll=0.0,
        )

    def to_pose2d(self) -> Pose2d:
        return Pose2d(x=self.x, y=self.y, heading=self.yaw)

    @staticmethod
    def from_pose2d(pose: Pose2d) -> Pose3d:
        return Pose3d(
            x=pose.x,
            y=pose.y,
            z=0.0,
            yaw=wrap_to_pi(pose.heading),
            pitch=0.0,
            roll=0.0,
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "yaw": self.yaw,
            "pitch": self.pitch,
            "roll": self.roll,
        }


def compose(pose_ab: Pose3d, pose_bc: Pose3d) -> Pose3d:
    return pose_ab.then(pose_bc)


def inverse(pose_ab: Pose3d) -> Pose3d:
    return pose_ab.inverse()


def planarize(pose: Pose3d) -> Pose3d:
    """
    Flatten a pose onto the floor plane

    The result stays a Pose3d with z, pitch and roll zeroed so it can be
    composed with other 3D poses. Use Pose3d.to_pose2d() for the planar
    (x, y, heading) form.
    """

    return pose.planarize()


@dataclass(frozen=True)
class PoseDelta:
    """
    Difference between two poses, for comparing estimates

    Fields:
        dx: X difference in inches
        dy: Y difference in inches
        dxy: Planar distance in inches
        dyaw: Wrapped yaw difference in radians
        dz: Z difference in inches
        dxyz: 3D distance in inches
        dpitch: Wrapped pitch difference in radians
        droll: Wrapped roll difference in radians
    """

    dx: float
    dy: float
    dxy: float
    dyaw: float
    dz: float
    dxyz: float
    dpitch: float
    droll: float

    @staticmethod
    def between(pose: Pose3d, reference: Pose3d) -> PoseDelta:
        """
        Compute pose - reference component-wise
        """

        dx: float = pose.x - reference.x
        dy: float = pose.y - reference.y
        dz: float = pose.z - reference.z
        return PoseDelta(
            dx=dx,
            dy=dy,
            dxy=math.hypot(dx, dy),
            dyaw=wrap_to_pi(pose.yaw - reference.yaw),
            dz=dz,
            dxyz=math.sqrt(dx * dx + dy * dy + dz * dz),
            dpitch=wrap_to_pi(pose.pitch - reference.pitch),
            droll=wrap_to_pi(pose.roll - reference.roll),
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "dx": self.dx,
            "dy": self.dy,
            "dxy": self.dxy,
            "dyaw": self.dyaw,
            "dz": self.dz,
            "dxyz": self.dxyz,
            "dpitch": self.dpitch,
            "droll": self.droll,
        }


_ZERO: Pose3d = Pose3d(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
