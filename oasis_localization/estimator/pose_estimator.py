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
Contracts between pose sources and the estimators that consume them
"""

from __future__ import annotations

from typing import Optional
from typing import Protocol
from typing import runtime_checkable

from oasis_localization.fusion_types.pose_estimate import PoseEstimate
from oasis_localization.fusion_types.tag_observation import TagObservation
from oasis_localization.geometry.pose2d import Pose2d
from oasis_localization.timing.loop_clock import LoopClock


@runtime_checkable
class PoseEstimator(Protocol):
    """
    A pose source that is advanced once per control cycle

    update() is called exactly once per cycle before get_estimate() is read.
    get_estimate() never returns None; missing data is reported with
    has_pose=False.
    """

    def update(self, clock: Optional[LoopClock]) -> None: ...

    def get_estimate(self) -> PoseEstimate: ...


@runtime_checkable
class PoseResetter(Protocol):
    """
    A pose source whose field pose can be overwritten

    Odometry that implements this lets the fusion estimator write corrected
    poses back so both sources agree.
    """

    def set_pose(self, pose: Pose2d) -> None: ...


@runtime_checkable
class TagObservationSource(Protocol):
    """
    Upstream tag detector that holds the most recent observation
    """

    def last(self) -> TagObservation: ...
