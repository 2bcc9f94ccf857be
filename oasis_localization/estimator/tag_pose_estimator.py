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
Absolute field pose from a single fiducial tag observation
"""

from __future__ import annotations

import math
from typing import Optional

from oasis_localization.config.tag_estimator_params import TagEstimatorParams
from oasis_localization.estimator.pose_estimator import TagObservationSource
from oasis_localization.field.tag_layout import TagLayout
from oasis_localization.fusion_types.diagnostics import TagEstimatorDiagnostics
from oasis_localization.fusion_types.pose_estimate import PoseEstimate
from oasis_localization.fusion_types.tag_observation import TagObservation
from oasis_localization.geometry.pose3d import Pose3d
from oasis_localization.timing.loop_clock import LoopClock


# Drop reasons reported in diagnostics
DROP_NONE: str = ""
DROP_NO_TARGET: str = "no_target"
DROP_UNKNOWN_TAG: str = "unknown_tag"
DROP_BEARING: str = "bearing"
DROP_NON_FINITE: str = "non_finite"


class TagPoseEstimator:
    """
    Tag-only pose estimator

    Each cycle reads the latest tag observation and, when the tag is mapped,
    solves the robot pose in the field frame:

        robot_to_tag   = robot_to_camera . camera_to_tag
        field_to_robot = field_to_tag . inverse(robot_to_tag)

    The result is planarized before it is reported. Quality is always 1.0;
    downstream fusion gates on age instead.
    """

    def __init__(
        self,
        observation_source: TagObservationSource,
        layout: TagLayout,
        params: Optional[TagEstimatorParams] = None,
    ) -> None:
        if observation_source is None:
            raise ValueError("observation_source is required")
        if layout is None:
            raise ValueError("layout is required")
        if params is None:
            params = TagEstimatorParams.defaults()
        params.validate()

        self._source: TagObservationSource = observation_source
        self._layout: TagLayout = layout
        self._params: TagEstimatorParams = params

        self._last_observation: TagObservation = TagObservation.no_target()
        self._last_estimate: PoseEstimate = PoseEstimate.no_pose(0.0)
        self._drop_reason: str = DROP_NO_TARGET

    @property
    def params(self) -> TagEstimatorParams:
        return self._params

    @property
    def layout(self) -> TagLayout:
        return self._layout

    def update(self, clock: Optional[LoopClock]) -> None:
        if clock is None:
            raise ValueError("clock is required")

        now_sec: float = clock.now_sec()
        observation: TagObservation = self._source.last()
        self._last_observation = observation

        if not observation.has_target:
            self._drop(DROP_NO_TARGET, now_sec)
            return

        if not self._layout.has(observation.tag_id):
            self._drop(DROP_UNKNOWN_TAG, now_sec)
            return

        if not observation.camera_to_tag_pose.is_finite():
            self._drop(DROP_NON_FINITE, now_sec)
            return

        max_abs_bearing_rad: float = self._params.max_abs_bearing_rad
        if max_abs_bearing_rad > 0.0:
            bearing_rad: float = observation.camera_bearing_rad()
            if abs(bearing_rad) > max_abs_bearing_rad:
                self._drop(DROP_BEARING, now_sec)
                return

        field_to_tag: Pose3d = self._layout.require(observation.tag_id).field_to_tag_pose
        robot_to_camera: Pose3d = self._params.camera_mount.robot_to_camera_pose

        robot_to_tag: Pose3d = robot_to_camera.then(observation.camera_to_tag_pose)
        field_to_robot: Pose3d = field_to_tag.then(robot_to_tag.inverse())

        age_sec: float = observation.age_sec
        self._drop_reason = DROP_NONE
        self._last_estimate = PoseEstimate(
            pose=field_to_robot.planarize(),
            has_pose=True,
            quality=1.0,
            age_sec=age_sec,
            timestamp_sec=now_sec - age_sec,
        )

    def get_estimate(self) -> PoseEstimate:
        return self._last_estimate

    def diagnostics(self) -> TagEstimatorDiagnostics:
        observation: TagObservation = self._last_observation
        age_sec: float = observation.age_sec
        return TagEstimatorDiagnostics(
            max_abs_bearing_rad=self._params.max_abs_bearing_rad,
            camera_mount_pose=self._params.camera_mount.robot_to_camera_pose,
            has_target=observation.has_target,
            tag_id=observation.tag_id,
            bearing_rad=observation.camera_bearing_rad(),
            range_inches=observation.camera_range_inches(),
            observation_age_sec=age_sec if math.isfinite(age_sec) else -1.0,
            drop_reason=self._drop_reason,
            last_estimate=self._last_estimate,
        )

    def _drop(self, reason: str, now_sec: float) -> None:
        self._drop_reason = reason
        self._last_estimate = PoseEstimate.no_pose(now_sec)
