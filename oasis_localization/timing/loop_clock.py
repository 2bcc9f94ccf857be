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
Per-cycle clock shared by every pose source in a control loop
"""

from __future__ import annotations


class LoopClock:
    """
    Control-loop clock advanced once per cycle by the caller

    The clock never reads wall time itself; the loop passes the current time
    in seconds to update(). The first update initializes the clock and
    reports dt = 0. Backwards time steps are clamped to dt = 0.
    """

    def __init__(self) -> None:
        self._last_sec: float = 0.0
        self._now_sec: float = 0.0
        self._dt_sec: float = 0.0
        self._cycle: int = 0
        self._started: bool = False

    def reset(self, current_time_sec: float) -> None:
        self._last_sec = current_time_sec
        self._now_sec = current_time_sec
        self._dt_sec = 0.0
        self._cycle = 0
        self._started = True

    def update(self, current_time_sec: float) -> None:
        if not self._started:
            self.reset(current_time_sec)
            self._cycle += 1
            return

        self._now_sec = current_time_sec
        self._dt_sec = max(0.0, self._now_sec - self._last_sec)
        self._last_sec = self._now_sec
        self._cycle += 1

    def now_sec(self) -> float:
        return self._now_sec

    def dt_sec(self) -> float:
        return self._dt_sec

    def cycle(self) -> int:
        return self._cycle

    def as_dict(self) -> dict[str, object]:
        return {
            "cycle": self._cycle,
            "now_sec": self._now_sec,
            "last_sec": self._last_sec,
            "dt_sec": self._dt_sec,
            "started": self._started,
        }
