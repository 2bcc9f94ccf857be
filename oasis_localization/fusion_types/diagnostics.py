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
from typing import Optional

from oasis_localization.fusion_types.pose_estimate import PoseEstimate
from oasis_localization.geometry.pose3d import Pose3d


@dataclass(frozen=True, slots=True)
class FusionDiagnostics:
    """Snapshot of fusion estimator state for telemetry and tests.

    Data contract:
        initialized:
            True once a starting pose has been established
        vision_enabled:
            True when vision corrections are applied
        fused_pose:
            Current planar fused pose in the field frame
        last_odom_pose:
            Planar odometry baseline used for the next delta
        last_vision_accepted_sec:
            Clock time of the last accepted vision measurement, None if never
        last_vision_pose:
            Last accepted planar vision pose
        accepted_count:
            Vision measurements accepted since construction
        rejected_count:
            Vision measurements rejected since construction
        last_reject_reason:
            Reason for the most recent rejection, "" if none yet
        last_estimate:
            Estimate emitted by the most recent update

    Determinism and edge cases:
        - Counters are monotonic and deterministic for identical sequences
    """

    initialized: bool
    vision_enabled: bool
    fused_pose: Pose3d
    last_odom_pose: Pose3d
    last_vision_accepted_sec: Optional[float]
    last_vision_pose: Pose3d
    accepted_count: int
    rejected_count: int
    last_reject_reason: str
    last_estimate: PoseEstimate

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "initialized": self.initialized,
            "vision_enabled": self.vision_enabled,
            "fused_pose": self.fused_pose.as_dict(),
            "last_odom_pose": self.last_odom_pose.as_dict(),
            "last_vision_accepted_sec": self.last_vision_accepted_sec,
            "last_vision_pose": self.last_vision_pose.as_dict(),
            "accepted_count": self.accepted_count,
            "rejected_count": self.rejected_count,
            "last_reject_reason": self.last_reject_reason,
            "last_estimate": self.last_estimate.as_dict(),
        }


@dataclass(frozen=True, slots=True)
class TagEstimatorDiagnostics:
    """Snapshot of the tag-only estimator for telemetry.

    Data contract:
        max_abs_bearing_rad:
            Configured bearing filter, 0 when disabled
        camera_mount_pose:
            Configured robot-to-camera pose
        has_target:
            True when the last observation had a target
        tag_id:
            Identifier of the last observed tag, -1 when none
        bearing_rad:
            Camera-frame bearing of the last observation
        range_inches:
            Camera-frame range of the last observation
        observation_age_sec:
            Age of the last observation, -1 when unknown
        drop_reason:
            Why the last observation produced no pose: "no_target",
            "unknown_tag", "bearing", or "" when a pose was produced
        last_estimate:
            Estimate emitted by the most recent update
    """

    max_abs_bearing_rad: float
    camera_mount_pose: Pose3d
    has_target: bool
    tag_id: int
    bearing_rad: float
    range_inches: float
    observation_age_sec: float
    drop_reason: str
    last_estimate: PoseEstimate

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "max_abs_bearing_rad": self.max_abs_bearing_rad,
            "camera_mount_pose": self.camera_mount_pose.as_dict(),
            "has_target": self.has_target,
            "tag_id": self.tag_id,
            "bearing_rad": self.bearing_rad,
            "range_inches": self.range_inches,
            "observation_age_sec": self.observation_age_sec,
            "drop_reason": self.drop_reason,
            "last_estimate": self.last_estimate.as_dict(),
        }
