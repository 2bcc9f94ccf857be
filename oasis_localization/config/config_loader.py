################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML loading for localization configuration.

A localization config file has up to three top-level sections:

    fusion:
      vision_position_gain: 0.25
      max_vision_heading_jump_deg: 60.0
    tag_estimator:
      max_abs_bearing_deg: 30.0
      camera_mount: {x: 6.0, y: 0.0, z: 8.0, pitch_deg: -15.0}
    tag_layout:
      tags:
        - {id: 1, x: 72.0, y: 0.0, z: 6.0, yaw: 3.14159}

Missing sections fall back to defaults. A section that is present but empty
is logged as a warning.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any
from typing import Mapping
from typing import Union

import yaml

from oasis_localization.config.config_error import ConfigError
from oasis_localization.config.fusion_params import FusionParams
from oasis_localization.config.tag_estimator_params import TagEstimatorParams
from oasis_localization.config.tag_layout_config import tag_layout_from_dict
from oasis_localization.field.tag_layout import TagLayout


_LOG: logging.Logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_SECTIONS: tuple[str, ...] = ("fusion", "tag_estimator", "tag_layout")


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Everything needed to assemble the localization estimators."""

    fusion: FusionParams
    tag_estimator: TagEstimatorParams
    tag_layout: TagLayout

    @staticmethod
    def defaults() -> LocalizationConfig:
        return LocalizationConfig(
            fusion=FusionParams.defaults(),
            tag_estimator=TagEstimatorParams.defaults(),
            tag_layout=TagLayout(),
        )

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "fusion": self.fusion.as_dict(),
            "tag_estimator": self.tag_estimator.as_dict(),
            "tag_layout": self.tag_layout.as_dict(),
        }


def loads_localization_config(text: str) -> LocalizationConfig:
    """Parse a localization config from YAML text."""
    return localization_config_from_dict(_parse_document(text, "<string>"))


def load_localization_config(path: PathLike) -> LocalizationConfig:
    """Load all sections of a localization config file."""
    return localization_config_from_dict(_read_document(path))


def load_fusion_params(path: PathLike) -> FusionParams:
    """Load only the ``fusion`` section of a config file."""
    section: Mapping[str, object] = _section(_read_document(path), "fusion")
    return _build(FusionParams.from_dict, section, "fusion")


def load_tag_estimator_params(path: PathLike) -> TagEstimatorParams:
    """Load only the ``tag_estimator`` section of a config file."""
    section: Mapping[str, object] = _section(_read_document(path), "tag_estimator")
    return _build(TagEstimatorParams.from_dict, section, "tag_estimator")


def load_tag_layout(path: PathLike) -> TagLayout:
    """Load only the ``tag_layout`` section of a config file."""
    return tag_layout_from_dict(_section(_read_document(path), "tag_layout"))


def localization_config_from_dict(data: Mapping[str, object]) -> LocalizationConfig:
    unknown: set[str] = {str(key) for key in data.keys() if key not in _SECTIONS}
    if unknown:
        raise ConfigError(f"Unexpected sections: {', '.join(sorted(unknown))}")

    return LocalizationConfig(
        fusion=_build(FusionParams.from_dict, _section(data, "fusion"), "fusion"),
        tag_estimator=_build(
            TagEstimatorParams.from_dict,
            _section(data, "tag_estimator"),
            "tag_estimator",
        ),
        tag_layout=tag_layout_from_dict(_section(data, "tag_layout")),
    )


def _read_document(path: PathLike) -> Mapping[str, object]:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            text: str = handle.read()
    except OSError as exc:
        raise ConfigError(f"cannot read config file {os.fspath(path)}: {exc}") from exc
    return _parse_document(text, os.fspath(path))


def _parse_document(text: str, source: str) -> Mapping[str, object]:
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {source}: {exc}") from exc
    if loaded is None:
        _LOG.warning("Config %s is empty, using defaults", source)
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"YAML root of {source} must be a mapping")
    return loaded


def _section(data: Mapping[str, object], name: str) -> Mapping[str, object]:
    if name not in data:
        return {}
    value: object = data[name]
    if value is None:
        _LOG.warning("Config section '%s' is empty, using defaults", name)
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping")
    return value


def _build(factory: Any, section: Mapping[str, object], name: str) -> Any:
    try:
        return factory(section)
    except ConfigError:
        raise
    except ValueError as exc:
        raise ConfigError(f"{name}: {exc}") from exc
