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
from dataclasses import FrozenInstanceError

import pytest

from oasis_localization.geometry.pose2d import Pose2d
from oasis_localization.geometry.pose3d import Pose3d
from oasis_localization.geometry.pose3d import PoseDelta
from oasis_localization.geometry.pose3d import compose
from oasis_localization.geometry.pose3d import inverse
from oasis_localization.geometry.pose3d import planarize


_TOL: float = 1e-6


def _assert_pose_close(actual: Pose3d, expected: Pose3d, tol: float = _TOL) -> None:
    assert math.isclose(actual.x, expected.x, abs_tol=tol)
    assert math.isclose(actual.y, expected.y, abs_tol=tol)
    assert math.isclose(actual.z, expected.z, abs_tol=tol)
    # Compare through rotations so equivalent angle sets match
    delta: Pose3d = expected.inverse().then(actual)
    assert math.isclose(delta.yaw, 0.0, abs_tol=tol)
    assert math.isclose(delta.pitch, 0.0, abs_tol=tol)
    assert math.isclose(delta.roll, 0.0, abs_tol=tol)


_SAMPLES: list[Pose3d] = [
    Pose3d(1.0, 2.0, 3.0, 0.3, -0.2, 0.1),
    Pose3d(-4.0, 0.5, 1.0, 2.9, 0.4, -0.7),
    Pose3d(10.0, -7.0, 0.0, -1.5, 0.0, 0.0),
    Pose3d(0.0, 0.0, 12.0, 0.0, -1.0, 2.5),
]


def test_compose_translates_in_local_frame() -> None:
    a: Pose3d = Pose3d(1.0, 2.0, 0.0, math.pi / 2.0, 0.0, 0.0)
    b: Pose3d = Pose3d(3.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    result: Pose3d = compose(a, b)
    assert result.x == pytest.approx(1.0, abs=1e-12)
    assert result.y == pytest.approx(5.0, abs=1e-12)
    assert result.yaw == pytest.approx(math.pi / 2.0, abs=1e-12)


@pytest.mark.parametrize("pose", _SAMPLES)
def test_compose_with_inverse_is_identity(pose: Pose3d) -> None:
    _assert_pose_close(compose(pose, inverse(pose)), Pose3d.zero())
    _assert_pose_close(inverse(pose).then(pose), Pose3d.zero())


def test_compose_is_associative() -> None:
    a, b, c = _SAMPLES[0], _SAMPLES[1], _SAMPLES[2]
    left: Pose3d = compose(compose(a, b), c)
    right: Pose3d = compose(a, compose(b, c))
    _assert_pose_close(left, right)


def test_identity_is_neutral() -> None:
    pose: Pose3d = _SAMPLES[1]
    _assert_pose_close(Pose3d.zero().then(pose), pose)
    _assert_pose_close(pose.then(Pose3d.zero()), pose)


def test_planarize_drops_out_of_plane_terms() -> None:
    pose: Pose3d = Pose3d(4.0, -3.0, 7.0, 4.0, 0.3, -0.2)
    flat: Pose3d = planarize(pose)
    assert flat.x == 4.0
    assert flat.y == -3.0
    assert flat.z == 0.0
    assert flat.pitch == 0.0
    assert flat.roll == 0.0
    assert flat.yaw == pytest.approx(4.0 - 2.0 * math.pi, abs=1e-12)
    assert planarize(flat) == flat
    assert flat.to_pose2d() == Pose2d(4.0, -3.0, flat.yaw)


def test_extracted_angles_are_wrapped() -> None:
    pose: Pose3d = Pose3d(0.0, 0.0, 0.0, 3.0, 0.0, 0.0).then(
        Pose3d(0.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    )
    assert -math.pi < pose.yaw <= math.pi
    assert pose.yaw == pytest.approx(4.0 - 2.0 * math.pi, abs=1e-9)


def test_construction_does_not_wrap() -> None:
    assert Pose3d(0.0, 0.0, 0.0, 7.0, 0.0, 0.0).yaw == 7.0


def test_pose_is_immutable() -> None:
    pose: Pose3d = Pose3d.zero()
    with pytest.raises(FrozenInstanceError):
        pose.x = 1.0  # type: ignore[misc]


def test_then_rejects_none() -> None:
    with pytest.raises(ValueError):
        Pose3d.zero().then(None)  # type: ignore[arg-type]


def test_from_quaternion() -> None:
    half: float = 0.25 * math.pi
    pose: Pose3d = Pose3d.from_quaternion(
        1.0, 2.0, 3.0, [0.0, 0.0, math.sin(half), math.cos(half)]
    )
    assert (pose.x, pose.y, pose.z) == (1.0, 2.0, 3.0)
    assert pose.yaw == pytest.approx(math.pi / 2.0, abs=1e-12)


def test_pose2d_conversions() -> None:
    pose: Pose3d = Pose3d.from_pose2d(Pose2d(3.0, 4.0, 2.0 * math.pi + 0.5))
    assert pose.yaw == pytest.approx(0.5, abs=1e-12)
    assert pose.z == 0.0
    assert pose.to_pose2d() == Pose2d(3.0, 4.0, pose.yaw)


def test_is_finite() -> None:
    assert Pose3d(1.0, 2.0, 3.0, 0.0, 0.0, 0.0).is_finite()
    assert not Pose3d(math.nan, 0.0, 0.0, 0.0, 0.0, 0.0).is_finite()
    assert not Pose3d(0.0, 0.0, 0.0, math.inf, 0.0, 0.0).is_finite()


@pytest.mark.parametrize("angle", [math.inf, -math.inf, math.nan])
def test_non_finite_angles_propagate_as_nan(angle: float) -> None:
    garbage: Pose3d = Pose3d(40.0, 0.0, 0.0, angle, 0.0, 0.0)
    sample: Pose3d = _SAMPLES[0]

    assert not compose(sample, garbage).is_finite()
    assert not compose(garbage, sample).is_finite()
    assert not inverse(garbage).is_finite()

    flat: Pose3d = planarize(garbage)
    assert math.isnan(flat.yaw)
    assert (flat.x, flat.y, flat.z) == (40.0, 0.0, 0.0)


def test_pose_delta_between() -> None:
    pose: Pose3d = Pose3d(4.0, 6.0, 2.0, 3.0, 0.0, 0.0)
    reference: Pose3d = Pose3d(1.0, 2.0, 0.0, -3.0, 0.0, 0.0)
    delta: PoseDelta = PoseDelta.between(pose, reference)

    assert delta.dx == 3.0
    assert delta.dy == 4.0
    assert delta.dxy == pytest.approx(5.0)
    assert delta.dz == 2.0
    assert delta.dxyz == pytest.approx(math.sqrt(29.0))
    assert delta.dyaw == pytest.approx(6.0 - 2.0 * math.pi, abs=1e-12)
    assert set(delta.as_dict()) == {
        "dx",
        "dy",
        "dxy",
        "dyaw",
        "dz",
        "dxyz",
        "dpitch",
        "droll",
    }
