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
Localization configuration and YAML loading
"""

from __future__ import annotations

from oasis_localization.config.config_error import ConfigError
from oasis_localization.config.config_loader import LocalizationConfig
from oasis_localization.config.config_loader import load_fusion_params
from oasis_localization.config.config_loader import load_localization_config
from oasis_localization.config.config_loader import load_tag_estimator_params
from oasis_localization.config.config_loader import load_tag_layout
from oasis_localization.config.config_loader import loads_localization_config
from oasis_localization.config.fusion_params import FusionParams
from oasis_localization.config.tag_estimator_params import TagEstimatorParams
from oasis_localization.config.tag_layout_config import tag_layout_from_dict


__all__ = [
    "ConfigError",
    "FusionParams",
    "LocalizationConfig",
    "TagEstimatorParams",
    "load_fusion_params",
    "load_localization_config",
    "load_tag_estimator_params",
    "load_tag_layout",
    "loads_localization_config",
    "tag_layout_from_dict",
]
