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
Odometry/vision pose fusion

Odometry drives the fused pose every cycle. Accepted absolute vision
measurements pull the fused pose toward them with a bounded, quality-weighted
proportional correction. This is a complementary filter, not a Kalman
filter: no covariance is tracked.
"""

from __future__ import annotations

import logging
import math
from typing import Final
from typing import Optional
from typing import Union

from oasis_localization.config.fusion_params import FusionParams
from oasis_localization.estimator.pose_estimator import PoseEstimator
from oasis_localization.estimator.pose_estimator import PoseResetter
from oasis_localization.fusion_types.diagnostics import FusionDiagnostics
from oasis_localization.fusion_types.pose_estimate import PoseEstimate
from oasis_localization.geometry.pose2d import Pose2d
from oasis_localization.geometry.pose3d import Pose3d
from oasis_localization.geometry.pose_math import clamp
from oasis_localization.geometry.pose_math import wrap_to_pi
from oasis_localization.timing.loop_clock import LoopClock


_LOG: logging.Logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marker for "resolve the resetter from the odometry source"
UNSET: Final[_Unset] = _Unset()

# Reasons recorded when a vision measurement is rejected
REJECT_NON_FINITE: str = "non_finite"
REJECT_STALE: str = "stale"
REJECT_LOW_QUALITY: str = "low_quality"
REJECT_NOT_INITIALIZED: str = "not_initialized"
REJECT_POSITION_JUMP: str = "position_jump"
REJECT_HEADING_JUMP: str = "heading_jump"


class FusionPoseEstimator:
    """
    Fuses a drifting odometry source with an intermittent absolute vision
    source

    Per cycle:
        1. Update odometry, then vision, and read both estimates
        2. Initialize from vision or odometry if not yet initialized
        3. Propagate the fused pose by the odometry delta since the baseline
        4. Gate the vision candidate on freshness, quality and jump size and
           blend it in
        5. Report quality boosted by recent vision acceptance

    Every cycle with vision enabled and a vision pose present counts as
    exactly one acceptance or one rejection.

    When the odometry source can be reset, corrected poses are written back
    to it and the odometry baseline moves to the written pose, so the next
    delta only contains motion since the write.
    """

    def __init__(
        self,
        odometry: PoseEstimator,
        vision: PoseEstimator,
        params: Optional[FusionParams] = None,
        resetter: Union[Optional[PoseResetter], _Unset] = UNSET,
    ) -> None:
        if odometry is None:
            raise ValueError("odometry is required")
        if vision is None:
            raise ValueError("vision is required")
        if params is None:
            params = FusionParams.defaults()
        params.validate()

        self._odometry: PoseEstimator = odometry
        self._vision: PoseEstimator = vision
        self._params: FusionParams = params

        if isinstance(resetter, _Unset):
            self._resetter: Optional[PoseResetter] = (
                odometry if isinstance(odometry, PoseResetter) else None
            )
        elif resetter is None or isinstance(resetter, PoseResetter):
            self._resetter = resetter
        else:
            raise ValueError("resetter must implement set_pose()")

        self._initialized: bool = False
        self._vision_enabled: bool = True

        self._fused_pose: Pose3d = Pose3d.zero()
        self._last_odom_pose: Pose3d = Pose3d.zero()

        self._last_vision_accepted_sec: Optional[float] = None
        self._last_vision_pose: Pose3d = Pose3d.zero()

        self._accepted_count: int = 0
        self._rejected_count: int = 0
        self._last_reject_reason: str = ""

        self._last_estimate: PoseEstimate = PoseEstimate.no_pose(0.0)

    @property
    def params(self) -> FusionParams:
        return self._params

    @property
    def resetter(self) -> Optional[PoseResetter]:
        return self._resetter

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def vision_enabled(self) -> bool:
        return self._vision_enabled

    @property
    def fused_pose(self) -> Pose3d:
        return self._fused_pose

    @property
    def accepted_vision_count(self) -> int:
        return self._accepted_count

    @property
    def rejected_vision_count(self) -> int:
        return self._rejected_count

    @property
    def last_vision_accepted_sec(self) -> Optional[float]:
        return self._last_vision_accepted_sec

    @property
    def last_vision_pose(self) -> Pose3d:
        return self._last_vision_pose

    @property
    def last_reject_reason(self) -> str:
        return self._last_reject_reason

    def set_vision_enabled(self, enabled: bool) -> None:
        """
        Enable or disable vision corrections

        Odometry integration continues while vision is disabled.
        """

        enabled = bool(enabled)
        if enabled != self._vision_enabled:
            _LOG.info("Vision corrections %s", "enabled" if enabled else "disabled")
        self._vision_enabled = enabled

    def update(self, clock: Optional[LoopClock]) -> None:
        now_sec: float = clock.now_sec() if clock is not None else 0.0

        self._odometry.update(clock)
        self._vision.update(clock)

        odom_est: PoseEstimate = self._odometry.get_estimate()
        vis_est: PoseEstimate = self._vision.get_estimate()
        odom_present: bool = odom_est.has_pose and odom_est.pose.is_finite()

        vision_present: bool = self._vision_enabled and vis_est.has_pose
        reject_reason: str = (
            self._acceptability(vis_est, now_sec) if vision_present else ""
        )
        vision_ok: bool = vision_present and not reject_reason

        just_initialized: bool = False
        if not self._initialized:
            if self._params.allow_vision_initialize and vision_ok:
                self._fused_pose = vis_est.pose.planarize()
                self._record_acceptance(now_sec, self._fused_pose)
                source: str = "vision"
            elif odom_present:
                self._fused_pose = odom_est.pose.planarize()
                source = "odometry"
            else:
                if vision_present:
                    self._reject(reject_reason or REJECT_NOT_INITIALIZED)
                self._last_estimate = PoseEstimate.no_pose(now_sec)
                return

            self._last_odom_pose = (
                odom_est.pose.planarize() if odom_present else self._fused_pose
            )
            self._push_to_odometry(self._fused_pose)
            self._initialized = True
            just_initialized = True
            _LOG.info("Pose fusion initialized from %s at %s", source, self._fused_pose)

            # A vision initialization already consumed this cycle's candidate
            if source == "vision":
                vision_present = False

        # A non-finite odometry pose holds the fused pose for this cycle
        if not just_initialized and odom_present:
            curr_odom_pose: Pose3d = odom_est.pose.planarize()
            delta: Pose3d = self._last_odom_pose.inverse().then(curr_odom_pose)
            self._fused_pose = self._fused_pose.then(delta).planarize()
            self._last_odom_pose = curr_odom_pose

        if vision_present:
            if vision_ok:
                self._correct(vis_est, now_sec)
            else:
                self._reject(reject_reason)

        self._last_estimate = PoseEstimate(
            pose=self._fused_pose,
            has_pose=True,
            quality=self._confidence(odom_est, now_sec),
            age_sec=0.0,
            timestamp_sec=now_sec,
        )

    def get_estimate(self) -> PoseEstimate:
        return self._last_estimate

    def set_pose(self, pose: Optional[Pose2d]) -> None:
        """
        Hard-overwrite the fused pose, e.g. at the start of a match

        The estimator becomes initialized. A None pose is ignored.
        """

        if pose is None:
            return

        self._fused_pose = Pose3d.from_pose2d(pose)
        self._initialized = True

        if not self._push_to_odometry(self._fused_pose):
            odom_est: PoseEstimate = self._odometry.get_estimate()
            self._last_odom_pose = (
                odom_est.pose.planarize() if odom_est.has_pose else self._fused_pose
            )

        _LOG.info("Fused pose set to %s", self._fused_pose)

    def diagnostics(self) -> FusionDiagnostics:
        return FusionDiagnostics(
            initialized=self._initialized,
            vision_enabled=self._vision_enabled,
            fused_pose=self._fused_pose,
            last_odom_pose=self._last_odom_pose,
            last_vision_accepted_sec=self._last_vision_accepted_sec,
            last_vision_pose=self._last_vision_pose,
            accepted_count=self._accepted_count,
            rejected_count=self._rejected_count,
            last_reject_reason=self._last_reject_reason,
            last_estimate=self._last_estimate,
        )

    def _acceptability(self, vis_est: PoseEstimate, now_sec: float) -> str:
        """
        Return the reason a present vision candidate is unusable, or "" when
        it may be used
        """

        pose: Pose3d = vis_est.pose
        if not (
            math.isfinite(pose.x)
            and math.isfinite(pose.y)
            and math.isfinite(pose.yaw)
            and math.isfinite(vis_est.timestamp_sec)
        ):
            return REJECT_NON_FINITE

        max_age_sec: float = self._params.max_vision_age_sec
        if max_age_sec > 0.0 and now_sec - vis_est.timestamp_sec > max_age_sec:
            return REJECT_STALE

        # NaN quality fails this comparison
        if not vis_est.quality >= self._params.min_vision_quality:
            return REJECT_LOW_QUALITY

        return ""

    def _correct(self, vis_est: PoseEstimate, now_sec: float) -> None:
        vision_pose: Pose3d = vis_est.pose.planarize()
        fused_2d: Pose2d = self._fused_pose.to_pose2d()
        vision_2d: Pose2d = vision_pose.to_pose2d()

        dx: float = vision_2d.x - fused_2d.x
        dy: float = vision_2d.y - fused_2d.y
        d_pos: float = fused_2d.distance_to(vision_2d)
        d_heading: float = fused_2d.heading_error_to(vision_2d)

        if d_pos > self._params.max_vision_position_jump_in:
            self._reject(REJECT_POSITION_JUMP, d_pos=d_pos, d_heading=d_heading)
            return
        if abs(d_heading) > self._params.max_vision_heading_jump_rad:
            self._reject(REJECT_HEADING_JUMP, d_pos=d_pos, d_heading=d_heading)
            return

        quality: float = clamp(vis_est.quality, 0.0, 1.0)
        pos_gain: float = clamp(self._params.vision_position_gain * quality, 0.0, 1.0)
        heading_gain: float = clamp(
            self._params.vision_heading_gain * quality, 0.0, 1.0
        )

        self._fused_pose = Pose3d(
            x=self._fused_pose.x + dx * pos_gain,
            y=self._fused_pose.y + dy * pos_gain,
            z=0.0,
            yaw=wrap_to_pi(self._fused_pose.yaw + d_heading * heading_gain),
            pitch=0.0,
            roll=0.0,
        )
        self._record_acceptance(now_sec, vision_pose)
        self._push_to_odometry(self._fused_pose)

        _LOG.debug(
            "Vision correction accepted: d_pos=%.3f in, d_heading=%.4f rad, "
            "pos_gain=%.3f, heading_gain=%.3f",
            d_pos,
            d_heading,
            pos_gain,
            heading_gain,
        )

    def _confidence(self, odom_est: PoseEstimate, now_sec: float) -> float:
        quality: float = (
            clamp(odom_est.quality, 0.0, 1.0) if odom_est.has_pose else 0.0
        )
        if math.isnan(quality):
            quality = 0.0

        hold_sec: float = self._params.vision_confidence_hold_sec
        if self._last_vision_accepted_sec is not None and hold_sec > 0.0:
            age_sec: float = now_sec - self._last_vision_accepted_sec
            if 0.0 <= age_sec < hold_sec:
                boost: float = 1.0 - age_sec / hold_sec
                quality = clamp(max(quality, boost), 0.0, 1.0)

        return quality

    def _record_acceptance(self, now_sec: float, vision_pose: Pose3d) -> None:
        self._last_vision_accepted_sec = now_sec
        self._last_vision_pose = vision_pose
        self._accepted_count += 1

    def _reject(
        self,
        reason: str,
        d_pos: Optional[float] = None,
        d_heading: Optional[float] = None,
    ) -> None:
        self._rejected_count += 1
        self._last_reject_reason = reason
        if d_pos is not None and d_heading is not None:
            _LOG.debug(
                "Vision rejected (%s): d_pos=%.3f in, d_heading=%.4f rad",
                reason,
                d_pos,
                d_heading,
            )
        else:
            _LOG.debug("Vision rejected (%s)", reason)

    def _push_to_odometry(self, pose: Pose3d) -> bool:
        """
        Write a pose into odometry when enabled and supported

        On success the odometry baseline becomes the written pose.
        """

        if not self._params.push_corrections_to_odometry or self._resetter is None:
            return False

        self._resetter.set_pose(pose.to_pose2d())
        self._last_odom_pose = pose
        return True
