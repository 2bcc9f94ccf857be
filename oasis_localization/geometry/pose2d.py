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
Planar rigid transform on the field floor
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from oasis_localization.geometry.pose_math import wrap_to_pi


@dataclass(frozen=True)
class Pose2d:
    """
    Planar pose (x, y, heading)

    Fields:
        x: Forward position in inches
        y: Left position in inches
        heading: Counter-clockwise heading in radians, not wrapped on
            construction
    """

    x: float
    y: float
    heading: float

    def then(self, next_pose: Pose2d) -> Pose2d:
        """
        Compose with a pose expressed in this pose's local frame
        """

        if next_pose is None:
            raise ValueError("next_pose is required")

        cos_h, sin_h = _cos_sin(self.heading)

        return Pose2d(
            x=self.x + cos_h * next_pose.x - sin_h * next_pose.y,
            y=self.y + sin_h * next_pose.x + cos_h * next_pose.y,
            heading=self.heading + next_pose.heading,
        )

    def inverse(self) -> Pose2d:
        cos_h, sin_h = _cos_sin(self.heading)

        # R^T * t
        x_rt: float = cos_h * self.x + sin_h * self.y
        y_rt: float = -sin_h * self.x + cos_h * self.y

        return Pose2d(x=-x_rt, y=-y_rt, heading=-self.heading)

    def distance_to(self, other: Pose2d) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def heading_error_to(self, other: Pose2d) -> float:
        """
        Signed heading change from this pose to another, in (-pi, pi]
        """

        return wrap_to_pi(other.heading - self.heading)

    def as_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "heading": self.heading}


def _cos_sin(angle_rad: float) -> tuple[float, float]:
    # Non-finite headings propagate as NaN
    if not math.isfinite(angle_rad):
        return math.nan, math.nan
    return math.cos(angle_rad), math.sin(angle_rad)
