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

import json
import math

import pytest

from oasis_localization.config.tag_estimator_params import TagEstimatorParams
from oasis_localization.estimator.pose_estimator import PoseEstimator
from oasis_localization.estimator.tag_pose_estimator import TagPoseEstimator
from oasis_localization.field.tag_layout import TagLayout
from oasis_localization.field.tag_layout import TagPose
from oasis_localization.fusion_types.camera_mount import CameraMount
from oasis_localization.fusion_types.diagnostics import TagEstimatorDiagnostics
from oasis_localization.fusion_types.pose_estimate import PoseEstimate
from oasis_localization.fusion_types.tag_observation import TagObservation
from oasis_localization.geometry.pose3d import Pose3d
from oasis_localization.timing.loop_clock import LoopClock


class _TagSource:
    def __init__(self, observation: TagObservation) -> None:
        self.observation: TagObservation = observation

    def last(self) -> TagObservation:
        return self.observation


_FIELD_TO_TAG: Pose3d = Pose3d(72.0, 10.0, 6.0, math.pi, 0.0, 0.0)


def _layout() -> TagLayout:
    return TagLayout.of(TagPose(tag_id=7, field_to_tag_pose=_FIELD_TO_TAG))


def _clock(now_sec: float) -> LoopClock:
    clock: LoopClock = LoopClock()
    clock.update(now_sec)
    return clock


def _observe(
    field_to_robot: Pose3d, mount: CameraMount, age_sec: float = 0.0
) -> TagObservation:
    """Synthesize what the camera would see from a known robot pose."""
    field_to_camera: Pose3d = field_to_robot.then(mount.robot_to_camera_pose)
    camera_to_tag: Pose3d = field_to_camera.inverse().then(_FIELD_TO_TAG)
    return TagObservation.target(7, camera_to_tag, age_sec)


def test_solves_robot_pose_through_mount() -> None:
    mount: CameraMount = CameraMount.of(6.0, -1.5, 8.0, yaw=0.1, pitch=-0.25)
    truth: Pose3d = Pose3d(10.0, 5.0, 0.0, 0.3, 0.0, 0.0)
    source: _TagSource = _TagSource(_observe(truth, mount, age_sec=0.05))
    estimator: TagPoseEstimator = TagPoseEstimator(
        source,
        _layout(),
        TagEstimatorParams(max_abs_bearing_rad=0.0, camera_mount=mount),
    )

    estimator.update(_clock(2.0))
    estimate: PoseEstimate = estimator.get_estimate()

    assert estimate.has_pose
    assert estimate.pose.x == pytest.approx(10.0, abs=1e-6)
    assert estimate.pose.y == pytest.approx(5.0, abs=1e-6)
    assert estimate.pose.yaw == pytest.approx(0.3, abs=1e-6)
    assert estimate.pose.z == 0.0
    assert estimate.pose.pitch == 0.0
    assert estimate.pose.roll == 0.0
    assert estimate.quality == 1.0
    assert estimate.age_sec == 0.05
    assert estimate.timestamp_sec == pytest.approx(1.95)


def test_identity_mount_facing_tag() -> None:
    camera_to_tag: Pose3d = Pose3d(72.0, 10.0, 6.0, math.pi, 0.0, 0.0)
    estimator: TagPoseEstimator = TagPoseEstimator(
        _TagSource(TagObservation.target(7, camera_to_tag, 0.0)), _layout()
    )
    estimator.update(_clock(1.0))
    pose: Pose3d = estimator.get_estimate().pose
    assert pose.x == pytest.approx(0.0, abs=1e-9)
    assert pose.y == pytest.approx(0.0, abs=1e-9)
    assert pose.yaw == pytest.approx(0.0, abs=1e-9)


def test_no_target() -> None:
    estimator: TagPoseEstimator = TagPoseEstimator(
        _TagSource(TagObservation.no_target()), _layout()
    )
    estimator.update(_clock(3.0))
    estimate: PoseEstimate = estimator.get_estimate()
    assert not estimate.has_pose
    assert estimate.timestamp_sec == 3.0
    assert estimator.diagnostics().drop_reason == "no_target"


def test_unknown_tag() -> None:
    observation: TagObservation = TagObservation.target(99, Pose3d.zero(), 0.0)
    estimator: TagPoseEstimator = TagPoseEstimator(_TagSource(observation), _layout())
    estimator.update(_clock(1.0))
    assert not estimator.get_estimate().has_pose
    assert estimator.diagnostics().drop_reason == "unknown_tag"


@pytest.mark.parametrize(
    "camera_to_tag",
    [
        Pose3d(40.0, 0.0, 0.0, math.inf, 0.0, 0.0),
        Pose3d(40.0, 0.0, 0.0, 0.0, -math.inf, 0.0),
        Pose3d(math.nan, 0.0, 0.0, 0.0, 0.0, 0.0),
        Pose3d(40.0, 0.0, math.inf, 0.0, 0.0, 0.0),
    ],
)
def test_non_finite_observation_dropped(camera_to_tag: Pose3d) -> None:
    source: _TagSource = _TagSource(TagObservation.target(7, camera_to_tag, 0.0))
    estimator: TagPoseEstimator = TagPoseEstimator(
        source,
        _layout(),
        TagEstimatorParams(
            max_abs_bearing_rad=math.radians(30.0),
            camera_mount=CameraMount.identity(),
        ),
    )

    estimator.update(_clock(2.0))
    estimate: PoseEstimate = estimator.get_estimate()
    assert not estimate.has_pose
    assert estimate.timestamp_sec == 2.0
    assert estimator.diagnostics().drop_reason == "non_finite"

    # Recovers once the camera reports a sane pose again
    source.observation = TagObservation.target(
        7, Pose3d(72.0, 10.0, 6.0, math.pi, 0.0, 0.0), 0.0
    )
    estimator.update(_clock(2.02))
    assert estimator.get_estimate().has_pose
    assert estimator.diagnostics().drop_reason == ""


def test_bearing_filter() -> None:
    # Tag 45 degrees to the left of the camera axis
    observation: TagObservation = TagObservation.target(
        7, Pose3d(20.0, 20.0, 0.0, math.pi, 0.0, 0.0), 0.0
    )
    source: _TagSource = _TagSource(observation)

    strict: TagPoseEstimator = TagPoseEstimator(
        source,
        _layout(),
        TagEstimatorParams(
            max_abs_bearing_rad=math.radians(30.0),
            camera_mount=CameraMount.identity(),
        ),
    )
    strict.update(_clock(1.0))
    assert not strict.get_estimate().has_pose
    assert strict.diagnostics().drop_reason == "bearing"

    # Zero disables the filter
    permissive: TagPoseEstimator = TagPoseEstimator(source, _layout())
    permissive.update(_clock(1.0))
    assert permissive.get_estimate().has_pose
    assert permissive.diagnostics().drop_reason == ""


def test_estimate_before_first_update() -> None:
    estimator: TagPoseEstimator = TagPoseEstimator(
        _TagSource(TagObservation.no_target()), _layout()
    )
    estimate: PoseEstimate = estimator.get_estimate()
    assert not estimate.has_pose
    assert estimate.timestamp_sec == 0.0


def test_update_requires_clock() -> None:
    estimator: TagPoseEstimator = TagPoseEstimator(
        _TagSource(TagObservation.no_target()), _layout()
    )
    with pytest.raises(ValueError):
        estimator.update(None)


def test_constructor_requires_inputs() -> None:
    with pytest.raises(ValueError):
        TagPoseEstimator(None, _layout())  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        TagPoseEstimator(_TagSource(TagObservation.no_target()), None)  # type: ignore[arg-type]


def test_satisfies_pose_estimator_protocol() -> None:
    estimator: TagPoseEstimator = TagPoseEstimator(
        _TagSource(TagObservation.no_target()), _layout()
    )
    assert isinstance(estimator, PoseEstimator)


def test_diagnostics() -> None:
    observation: TagObservation = TagObservation.target(
        7, Pose3d(30.0, 0.0, 40.0, math.pi, 0.0, 0.0), 0.1
    )
    estimator: TagPoseEstimator = TagPoseEstimator(_TagSource(observation), _layout())
    estimator.update(_clock(1.0))

    diagnostics: TagEstimatorDiagnostics = estimator.diagnostics()
    assert diagnostics.has_target
    assert diagnostics.tag_id == 7
    assert diagnostics.bearing_rad == 0.0
    assert diagnostics.range_inches == pytest.approx(50.0)
    assert diagnostics.observation_age_sec == 0.1
    assert diagnostics.last_estimate.has_pose
    json.dumps(diagnostics.as_dict())


def test_diagnostics_without_observation_age() -> None:
    estimator: TagPoseEstimator = TagPoseEstimator(
        _TagSource(TagObservation.no_target()), _layout()
    )
    estimator.update(_clock(1.0))
    diagnostics: TagEstimatorDiagnostics = estimator.diagnostics()
    assert diagnostics.tag_id == -1
    assert diagnostics.observation_age_sec == -1.0
    json.dumps(diagnostics.as_dict())
