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
Planar robot localization from odometry and fiducial tag vision

Units are inches and radians. Field and robot frames are +X forward,
+Y left, +Z up.
"""
