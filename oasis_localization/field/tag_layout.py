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
Static map of fiducial tag placements in the field frame
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable
from typing import Iterator
from typing import Mapping
from typing import Optional

from oasis_localization.geometry.pose3d import Pose3d


class UnknownTagError(LookupError):
    """Raised when a required tag id is missing from the layout."""


@dataclass(frozen=True)
class TagPose:
    """
    Known placement of one tag

    Fields:
        tag_id: Non-negative tag identifier
        field_to_tag_pose: Pose of the tag in the field frame
    """

    tag_id: int
    field_to_tag_pose: Pose3d

    def __post_init__(self) -> None:
        if isinstance(self.tag_id, bool) or not isinstance(self.tag_id, int):
            raise ValueError("tag_id must be int")
        if self.tag_id < 0:
            raise ValueError("tag_id must be non-negative")
        if self.field_to_tag_pose is None:
            raise ValueError("field_to_tag_pose is required")

    @staticmethod
    def of(
        tag_id: int,
        x: float,
        y: float,
        z: float,
        yaw: float,
        pitch: float = 0.0,
        roll: float = 0.0,
    ) -> TagPose:
        return TagPose(
            tag_id=tag_id,
            field_to_tag_pose=Pose3d(x=x, y=y, z=z, yaw=yaw, pitch=pitch, roll=roll),
        )


class TagLayout:
    """
    Immutable tag id -> field pose map, built once at startup
    """

    def __init__(self, tags: Iterable[TagPose] = ()) -> None:
        by_id: dict[int, TagPose] = {}
        for tag in tags:
            if tag.tag_id in by_id:
                raise ValueError(f"duplicate tag id: {tag.tag_id}")
            by_id[tag.tag_id] = tag
        self._by_id: Mapping[int, TagPose] = MappingProxyType(by_id)

    @staticmethod
    def of(*tags: TagPose) -> TagLayout:
        return TagLayout(tags)

    def get(self, tag_id: int) -> Optional[TagPose]:
        return self._by_id.get(tag_id)

    def has(self, tag_id: int) -> bool:
        return tag_id in self._by_id

    def require(self, tag_id: int) -> TagPose:
        """
        Return the placement for a tag that must be mapped

        Callers check has() first. An unmapped id here is a
        configuration bug, not a sensing condition.
        """

        tag: Optional[TagPose] = self._by_id.get(tag_id)
        if tag is None:
            raise UnknownTagError(f"tag layout does not contain tag id={tag_id}")
        return tag

    def ids(self) -> frozenset[int]:
        return frozenset(self._by_id.keys())

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[TagPose]:
        for tag_id in sorted(self._by_id):
            yield self._by_id[tag_id]

    def __contains__(self, tag_id: object) -> bool:
        return tag_id in self._by_id

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "tags": [
                {"id": tag.tag_id, **tag.field_to_tag_pose.as_dict()} for tag in self
            ]
        }

    def __repr__(self) -> str:
        return f"TagLayout(ids={sorted(self._by_id)})"
