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
Pose estimators: tag-only absolute pose and odometry/vision fusion
"""

from __future__ import annotations

from oasis_localization.estimator.fusion_pose_estimator import UNSET
from oasis_localization.estimator.fusion_pose_estimator import FusionPoseEstimator
from oasis_localization.estimator.pose_estimator import PoseEstimator
from oasis_localization.estimator.pose_estimator import PoseResetter
from oasis_localization.estimator.pose_estimator import TagObservationSource
from oasis_localization.estimator.tag_pose_estimator import TagPoseEstimator


__all__ = [
    "UNSET",
    "FusionPoseEstimator",
    "PoseEstimator",
    "PoseResetter",
    "TagObservationSource",
    "TagPoseEstimator",
]
