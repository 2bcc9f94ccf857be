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
Control-loop timing
"""

from __future__ import annotations

from oasis_localization.timing.loop_clock import LoopClock


__all__ = ["LoopClock"]
