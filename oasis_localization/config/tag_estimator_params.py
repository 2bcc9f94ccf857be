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

import math
from dataclasses import dataclass
from typing import Mapping

from oasis_localization.fusion_types.camera_mount import CameraMount


_ANGLE_KEYS: tuple[str, ...] = ("yaw", "pitch", "roll")


@dataclass(frozen=True, slots=True)
class TagEstimatorParams:
    """Parameters for the single-tag absolute pose estimator.

    Data contract:
        - max_abs_bearing_rad: ignore tags whose camera-frame bearing exceeds
          this magnitude, radians. 0 disables the bearing filter
        - camera_mount: robot-to-camera extrinsics

    Config file aliases:
        - max_abs_bearing_deg instead of max_abs_bearing_rad
        - yaw_deg, pitch_deg and roll_deg inside camera_mount
    """

    max_abs_bearing_rad: float
    camera_mount: CameraMount

    @staticmethod
    def defaults() -> TagEstimatorParams:
        return TagEstimatorParams(
            max_abs_bearing_rad=0.0,
            camera_mount=CameraMount.identity(),
        )

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> TagEstimatorParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        allowed: set[str] = {
            "max_abs_bearing_rad",
            "max_abs_bearing_deg",
            "camera_mount",
        }
        unknown_keys: list[str] = sorted(set(params.keys()) - allowed)
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")

        if "max_abs_bearing_deg" in params:
            if "max_abs_bearing_rad" in params:
                raise ValueError(
                    "max_abs_bearing_rad and max_abs_bearing_deg are mutually "
                    "exclusive"
                )
            max_abs_bearing_rad: float = math.radians(
                cls._as_float("max_abs_bearing_deg", params["max_abs_bearing_deg"])
            )
        else:
            max_abs_bearing_rad = cls._as_float(
                "max_abs_bearing_rad", params.get("max_abs_bearing_rad", 0.0)
            )

        mount_raw: object = params.get("camera_mount")
        if mount_raw is None:
            camera_mount: CameraMount = CameraMount.identity()
        elif isinstance(mount_raw, Mapping):
            camera_mount = CameraMount.from_dict(cls._mount_radians(mount_raw))
        else:
            raise ValueError("camera_mount must be a mapping")

        result: TagEstimatorParams = cls(
            max_abs_bearing_rad=max_abs_bearing_rad,
            camera_mount=camera_mount,
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameter ranges and raise ValueError on failure."""
        if not math.isfinite(self.max_abs_bearing_rad):
            raise ValueError("max_abs_bearing_rad must be finite")
        if self.max_abs_bearing_rad < 0.0:
            raise ValueError("max_abs_bearing_rad must be >= 0")
        if not isinstance(self.camera_mount, CameraMount):
            raise ValueError("camera_mount must be CameraMount")
        self.camera_mount.validate()

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "max_abs_bearing_rad": self.max_abs_bearing_rad,
            "camera_mount": self.camera_mount.as_dict(),
        }

    @classmethod
    def _mount_radians(cls, mount: Mapping[str, object]) -> dict[str, object]:
        converted: dict[str, object] = dict(mount)
        for key in _ANGLE_KEYS:
            deg_key: str = f"{key}_deg"
            if deg_key not in converted:
                continue
            if key in converted:
                raise ValueError(
                    f"camera_mount.{key} and camera_mount.{deg_key} are "
                    "mutually exclusive"
                )
            converted[key] = math.radians(
                cls._as_float(f"camera_mount.{deg_key}", converted.pop(deg_key))
            )
        return converted

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a number")
        return float(value)
