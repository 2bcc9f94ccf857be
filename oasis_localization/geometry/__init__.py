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
Rigid transform algebra for field localization
"""

from __future__ import annotations

from oasis_localization.geometry.pose2d import Pose2d
from oasis_localization.geometry.pose3d import Pose3d
from oasis_localization.geometry.pose3d import PoseDelta
from oasis_localization.geometry.pose3d import compose
from oasis_localization.geometry.pose3d import inverse
from oasis_localization.geometry.pose3d import planarize
from oasis_localization.geometry.pose_math import clamp
from oasis_localization.geometry.pose_math import wrap_to_pi


__all__ = [
    "Pose2d",
    "Pose3d",
    "PoseDelta",
    "clamp",
    "compose",
    "inverse",
    "planarize",
    "wrap_to_pi",
]
