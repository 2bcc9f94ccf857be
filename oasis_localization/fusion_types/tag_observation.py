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

from oasis_localization.geometry.pose3d import Pose3d


@dataclass(frozen=True, slots=True)
class TagObservation:
    """Best fiducial tag observation selected upstream for one cycle.

    Data contract:
        has_target:
            True when a tag was seen and selected this cycle
        tag_id:
            Tag identifier, -1 when there is no target
        camera_to_tag_pose:
            Pose of the tag in the camera frame (+X forward, +Y left, +Z up)
        age_sec:
            Seconds since the source frame was captured

    Determinism and edge cases:
        - Read-only input; the tag estimator never mutates it
        - Bearing and range are 0 when there is no target
    """

    has_target: bool
    tag_id: int
    camera_to_tag_pose: Pose3d
    age_sec: float

    @staticmethod
    def no_target(age_sec: float = math.inf) -> TagObservation:
        return TagObservation(
            has_target=False,
            tag_id=-1,
            camera_to_tag_pose=Pose3d.zero(),
            age_sec=age_sec,
        )

    @staticmethod
    def target(tag_id: int, camera_to_tag_pose: Pose3d, age_sec: float) -> TagObservation:
        return TagObservation(
            has_target=True,
            tag_id=tag_id,
            camera_to_tag_pose=camera_to_tag_pose,
            age_sec=age_sec,
        )

    def camera_bearing_rad(self) -> float:
        """Camera-frame bearing to the tag, positive to the left."""
        if not self.has_target:
            return 0.0
        return math.atan2(self.camera_to_tag_pose.y, self.camera_to_tag_pose.x)

    def camera_range_inches(self) -> float:
        if not self.has_target:
            return 0.0
        return self.camera_to_tag_pose.translation_norm()
