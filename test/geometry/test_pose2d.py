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

import pytest

from oasis_localization.geometry.pose2d import Pose2d
from oasis_localization.geometry.pose3d import Pose3d


def test_then_matches_pose3d() -> None:
    a: Pose2d = Pose2d(1.0, -2.0, 0.7)
    b: Pose2d = Pose2d(3.0, 4.0, -1.1)

    planar: Pose2d = a.then(b)
    spatial: Pose3d = Pose3d.from_pose2d(a).then(Pose3d.from_pose2d(b))

    assert planar.x == pytest.approx(spatial.x, abs=1e-9)
    assert planar.y == pytest.approx(spatial.y, abs=1e-9)
    assert math.isclose(
        math.remainder(planar.heading - spatial.yaw, 2.0 * math.pi), 0.0, abs_tol=1e-9
    )


def test_inverse_cancels() -> None:
    pose: Pose2d = Pose2d(5.0, -3.0, 2.2)
    identity: Pose2d = pose.then(pose.inverse())
    assert identity.x == pytest.approx(0.0, abs=1e-9)
    assert identity.y == pytest.approx(0.0, abs=1e-9)
    assert identity.heading == pytest.approx(0.0, abs=1e-12)


def test_distance_and_heading_error() -> None:
    a: Pose2d = Pose2d(0.0, 0.0, 3.0)
    b: Pose2d = Pose2d(3.0, 4.0, -3.0)
    assert a.distance_to(b) == pytest.approx(5.0)
    assert a.heading_error_to(b) == pytest.approx(2.0 * math.pi - 6.0, abs=1e-12)


def test_as_dict() -> None:
    assert Pose2d(1.0, 2.0, -0.5).as_dict() == {"x": 1.0, "y": 2.0, "heading": -0.5}


@pytest.mark.parametrize("heading", [math.inf, -math.inf, math.nan])
def test_non_finite_heading_propagates_as_nan(heading: float) -> None:
    garbage: Pose2d = Pose2d(3.0, 4.0, heading)

    moved: Pose2d = garbage.then(Pose2d(1.0, 0.0, 0.0))
    assert math.isnan(moved.x)
    assert math.isnan(moved.y)

    inverted: Pose2d = garbage.inverse()
    assert math.isnan(inverted.x)
    assert math.isnan(inverted.y)

    assert math.isnan(Pose2d(0.0, 0.0, 0.0).heading_error_to(garbage))
