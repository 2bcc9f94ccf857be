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

from oasis_localization.geometry.pose2d import Pose2d
from oasis_localization.geometry.pose3d import Pose3d


@dataclass(frozen=True, slots=True)
class PoseEstimate:
    """Field-frame robot pose reported by a pose source for one cycle.

    Data contract:
        pose:
            Field-to-robot pose. Identity when has_pose is False
        has_pose:
            True when the source produced a usable pose this cycle
        quality:
            Trust in the pose, in [0, 1]
        age_sec:
            Seconds between measurement capture and estimate creation
        timestamp_sec:
            Clock time in seconds at which the pose was valid

    Determinism and edge cases:
        - When has_pose is False, pose/quality/age_sec are placeholders and
          must never drive control
        - Estimates are created fresh every cycle and never mutated
    """

    pose: Pose3d
    has_pose: bool
    quality: float
    age_sec: float
    timestamp_sec: float

    def __post_init__(self) -> None:
        if self.pose is None:
            raise ValueError("pose is required")

    @staticmethod
    def no_pose(now_sec: float) -> PoseEstimate:
        """Return the typed "no pose" estimate for this cycle."""
        return PoseEstimate(
            pose=Pose3d.zero(),
            has_pose=False,
            quality=0.0,
            age_sec=0.0,
            timestamp_sec=now_sec,
        )

    def to_pose2d(self) -> Pose2d:
        return self.pose.to_pose2d()

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "pose": self.pose.as_dict(),
            "has_pose": self.has_pose,
            "quality": self.quality,
            "age_sec": self.age_sec,
            "timestamp_sec": self.timestamp_sec,
        }

    def __str__(self) -> str:
        if not self.has_pose:
            return f"PoseEstimate(no pose, timestamp_sec={self.timestamp_sec})"
        return (
            f"PoseEstimate(pose={self.pose}, quality={self.quality}, "
            f"age_sec={self.age_sec}, timestamp_sec={self.timestamp_sec})"
        )
