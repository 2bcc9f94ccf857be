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
Immutable records shared by the pose sources
"""

from __future__ import annotations

from oasis_localization.fusion_types.camera_mount import CameraMount
from oasis_localization.fusion_types.diagnostics import FusionDiagnostics
from oasis_localization.fusion_types.diagnostics import TagEstimatorDiagnostics
from oasis_localization.fusion_types.pose_estimate import PoseEstimate
from oasis_localization.fusion_types.tag_observation import TagObservation


__all__ = [
    "CameraMount",
    "FusionDiagnostics",
    "PoseEstimate",
    "TagEstimatorDiagnostics",
    "TagObservation",
]
