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
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class FusionParams:
    """Tuning parameters for odometry/vision pose fusion.

    Responsibility:
        Hold the acceptance gates, correction gains and confidence window of
        the fusion estimator.

    Data contract:
        Vision acceptance gates:
        - max_vision_age_sec: reject vision older than this (seconds);
          0 disables the freshness gate.
        - min_vision_quality: reject vision with quality below this, [0, 1].
        - max_vision_position_jump_in: reject corrections whose planar
          distance to the fused pose exceeds this (inches).
        - max_vision_heading_jump_rad: reject corrections whose heading
          difference exceeds this (radians).

        Correction gains (scaled by vision quality, clamped to [0, 1]):
        - vision_position_gain: fraction of x/y error corrected per update.
        - vision_heading_gain: fraction of heading error corrected per update.

        Behavior flags:
        - allow_vision_initialize: the first pose may come from vision.
        - push_corrections_to_odometry: write the fused pose back into an
          odometry source that supports pose resets.

        Confidence:
        - vision_confidence_hold_sec: window over which an accepted vision
          measurement boosts reported quality, decaying linearly to the
          odometry-only baseline.

    Config file aliases:
        - max_vision_heading_jump_deg may be given instead of the radian key.

    Determinism and edge cases:
        - Immutable once constructed
        - validate() rejects negative or non-finite values
    """

    max_vision_age_sec: float
    min_vision_quality: float
    vision_position_gain: float
    vision_heading_gain: float
    max_vision_position_jump_in: float
    max_vision_heading_jump_rad: float
    allow_vision_initialize: bool
    push_corrections_to_odometry: bool
    vision_confidence_hold_sec: float

    @staticmethod
    def defaults() -> FusionParams:
        """Return the tuned default parameter set."""
        params: FusionParams = FusionParams(
            max_vision_age_sec=0.25,
            min_vision_quality=0.05,
            vision_position_gain=0.25,
            vision_heading_gain=0.35,
            max_vision_position_jump_in=24.0,
            max_vision_heading_jump_rad=math.radians(60.0),
            allow_vision_initialize=True,
            push_corrections_to_odometry=True,
            vision_confidence_hold_sec=0.75,
        )
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> FusionParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        allowed: set[str] = set(cls._field_order()) | {"max_vision_heading_jump_deg"}
        unknown_keys: list[str] = sorted(set(params.keys()) - allowed)
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        if "max_vision_heading_jump_deg" in params:
            if "max_vision_heading_jump_rad" in params:
                raise ValueError(
                    "max_vision_heading_jump_rad and max_vision_heading_jump_deg "
                    "are mutually exclusive"
                )
            heading_jump_rad: float = math.radians(
                cls._as_float(
                    "max_vision_heading_jump_deg",
                    params["max_vision_heading_jump_deg"],
                )
            )
        else:
            heading_jump_rad = cls._as_float(
                "max_vision_heading_jump_rad",
                params.get(
                    "max_vision_heading_jump_rad",
                    cls.defaults().max_vision_heading_jump_rad,
                ),
            )

        defaults: FusionParams = cls.defaults()
        result: FusionParams = cls(
            max_vision_age_sec=cls._as_float(
                "max_vision_age_sec",
                params.get("max_vision_age_sec", defaults.max_vision_age_sec),
            ),
            min_vision_quality=cls._as_float(
                "min_vision_quality",
                params.get("min_vision_quality", defaults.min_vision_quality),
            ),
            vision_position_gain=cls._as_float(
                "vision_position_gain",
                params.get("vision_position_gain", defaults.vision_position_gain),
            ),
            vision_heading_gain=cls._as_float(
                "vision_heading_gain",
                params.get("vision_heading_gain", defaults.vision_heading_gain),
            ),
            max_vision_position_jump_in=cls._as_float(
                "max_vision_position_jump_in",
                params.get(
                    "max_vision_position_jump_in",
                    defaults.max_vision_position_jump_in,
                ),
            ),
            max_vision_heading_jump_rad=heading_jump_rad,
            allow_vision_initialize=cls._as_bool(
                "allow_vision_initialize",
                params.get(
                    "allow_vision_initialize", defaults.allow_vision_initialize
                ),
            ),
            push_corrections_to_odometry=cls._as_bool(
                "push_corrections_to_odometry",
                params.get(
                    "push_corrections_to_odometry",
                    defaults.push_corrections_to_odometry,
                ),
            ),
            vision_confidence_hold_sec=cls._as_float(
                "vision_confidence_hold_sec",
                params.get(
                    "vision_confidence_hold_sec",
                    defaults.vision_confidence_hold_sec,
                ),
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameter ranges and raise ValueError on failure."""
        for name in (
            "max_vision_age_sec",
            "min_vision_quality",
            "vision_position_gain",
            "vision_heading_gain",
            "max_vision_position_jump_in",
            "max_vision_heading_jump_rad",
            "vision_confidence_hold_sec",
        ):
            value: float = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite")
            if value < 0.0:
                raise ValueError(f"{name} must be >= 0")
        if self.min_vision_quality > 1.0:
            raise ValueError("min_vision_quality must be in [0, 1]")

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {name: getattr(self, name) for name in self._field_order()}

    @staticmethod
    def _field_order() -> tuple[str, ...]:
        return (
            "max_vision_age_sec",
            "min_vision_quality",
            "vision_position_gain",
            "vision_heading_gain",
            "max_vision_position_jump_in",
            "max_vision_heading_jump_rad",
            "allow_vision_initialize",
            "push_corrections_to_odometry",
            "vision_confidence_hold_sec",
        )

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a number")
        return float(value)

    @staticmethod
    def _as_bool(name: str, value: object) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be a bool")
        return value
