################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from oasis_localization.geometry.pose3d import Pose3d


_MOUNT_KEYS: tuple[str, ...] = ("x", "y", "z", "yaw", "pitch", "roll")


@dataclass(frozen=True, slots=True)
class CameraMount:
    """Camera extrinsics expressed in the robot frame.

    Data contract:
        robot_to_camera_pose:
            Pose of the camera in the robot frame. The robot origin is the
            center of rotation on the floor plane

    Frames and units:
        - +X forward, +Y left, +Z up; inches and radians
    """

    robot_to_camera_pose: Pose3d

    @staticmethod
    def identity() -> CameraMount:
        return CameraMount(robot_to_camera_pose=Pose3d.zero())

    @staticmethod
    def of(
        x: float,
        y: float,
        z: float,
        yaw: float = 0.0,
        pitch: float = 0.0,
        roll: float = 0.0,
    ) -> CameraMount:
        return CameraMount(
            robot_to_camera_pose=Pose3d(
                x=x, y=y, z=z, yaw=yaw, pitch=pitch, roll=roll
            )
        )

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> CameraMount:
        """Construct a mount from a mapping of pose components."""
        if not isinstance(params, Mapping):
            raise ValueError("camera_mount must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(_MOUNT_KEYS))
        if unknown_keys:
            raise ValueError(f"unknown camera_mount key: {unknown_keys[0]}")
        values: dict[str, float] = {}
        for key in _MOUNT_KEYS:
            raw: object = params.get(key, 0.0)
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError(f"camera_mount.{key} must be a number")
            values[key] = float(raw)
        mount: CameraMount = cls(robot_to_camera_pose=Pose3d(**values))
        mount.validate()
        return mount

    def validate(self) -> None:
        """Validate the mount pose and raise ValueError on failure."""
        if not self.robot_to_camera_pose.is_finite():
            raise ValueError("camera_mount pose must be finite")

    def as_dict(self) -> dict[str, float]:
        return self.robot_to_camera_pose.as_dict()
