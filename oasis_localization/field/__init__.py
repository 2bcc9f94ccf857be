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
Field tag map
"""

from __future__ import annotations

from oasis_localization.field.tag_layout import TagLayout
from oasis_localization.field.tag_layout import TagPose
from oasis_localization.field.tag_layout import UnknownTagError


__all__ = ["TagLayout", "TagPose", "UnknownTagError"]
