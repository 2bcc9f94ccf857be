################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tag layout schema for localization config files.

Each entry under ``tags`` places one tag in the field frame:

    tags:
      - {id: 1, x: 72.0, y: 0.0, z: 6.0, yaw: 3.14159}
      - {id: 2, x: 0.0, y: 48.0, z: 6.0, quaternion: [0.0, 0.0, 0.0, 1.0]}

Orientation is either yaw/pitch/roll in radians or an [x, y, z, w] unit
quaternion, never both. Missing angles default to zero.
"""

from __future__ import annotations

import numbers
from typing import Mapping
from typing import Sequence

from oasis_localization.config.config_error import ConfigError
from oasis_localization.field.tag_layout import TagLayout
from oasis_localization.field.tag_layout import TagPose
from oasis_localization.geometry.pose3d import Pose3d


_POSITION_KEYS: tuple[str, ...] = ("x", "y", "z")
_ANGLE_KEYS: tuple[str, ...] = ("yaw", "pitch", "roll")
_TAG_KEYS: frozenset[str] = frozenset(
    ("id",) + _POSITION_KEYS + _ANGLE_KEYS + ("quaternion",)
)


def tag_layout_from_dict(data: Mapping[str, object]) -> TagLayout:
    """Build a TagLayout from a parsed ``tag_layout`` section."""
    if not isinstance(data, Mapping):
        raise ConfigError("tag_layout must be a mapping")
    unknown: set[str] = {str(key) for key in data.keys() if key != "tags"}
    if unknown:
        raise ConfigError(f"Unexpected keys in tag_layout: {', '.join(sorted(unknown))}")

    entries: object = data.get("tags", [])
    if entries is None:
        entries = []
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise ConfigError("tag_layout.tags must be a list")

    tags: list[TagPose] = [
        _tag_from_dict(entry, f"tag_layout.tags[{index}]")
        for index, entry in enumerate(entries)
    ]
    try:
        return TagLayout(tags)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _tag_from_dict(entry: object, scope: str) -> TagPose:
    if not isinstance(entry, Mapping):
        raise ConfigError(f"{scope} must be a mapping")
    unknown: set[str] = {str(key) for key in entry.keys() if key not in _TAG_KEYS}
    if unknown:
        raise ConfigError(f"Unexpected keys in {scope}: {', '.join(sorted(unknown))}")
    if "id" not in entry:
        raise ConfigError(f"Missing keys in {scope}: id")

    tag_id: int = _require_int(entry["id"], f"{scope}.id")
    if tag_id < 0:
        raise ConfigError(f"{scope}.id must be non-negative")

    x: float = _require_float(entry.get("x", 0.0), f"{scope}.x")
    y: float = _require_float(entry.get("y", 0.0), f"{scope}.y")
    z: float = _require_float(entry.get("z", 0.0), f"{scope}.z")

    if "quaternion" in entry:
        if any(key in entry for key in _ANGLE_KEYS):
            raise ConfigError(
                f"{scope} must give either quaternion or yaw/pitch/roll, not both"
            )
        quat: list[float] = _require_quaternion(entry["quaternion"], f"{scope}.quaternion")
        try:
            pose: Pose3d = Pose3d.from_quaternion(x, y, z, quat)
        except ValueError as exc:
            raise ConfigError(f"{scope}.quaternion: {exc}") from exc
    else:
        pose = Pose3d(
            x=x,
            y=y,
            z=z,
            yaw=_require_float(entry.get("yaw", 0.0), f"{scope}.yaw"),
            pitch=_require_float(entry.get("pitch", 0.0), f"{scope}.pitch"),
            roll=_require_float(entry.get("roll", 0.0), f"{scope}.roll"),
        )

    if not pose.is_finite():
        raise ConfigError(f"{scope} pose must be finite")
    return TagPose(tag_id=tag_id, field_to_tag_pose=pose)


def _require_quaternion(value: object, name: str) -> list[float]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigError(f"{name} must be a list [x, y, z, w]")
    if len(value) != 4:
        raise ConfigError(f"{name} must have 4 elements")
    return [_require_float(item, f"{name}[{i}]") for i, item in enumerate(value)]


def _require_int(value: object, name: str) -> int:
    """Ensure the value is an integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigError(f"{name} must be an integer")
    return int(value)


def _require_float(value: object, name: str) -> float:
    """Ensure the value is a float."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigError(f"{name} must be a float")
    return float(value)
