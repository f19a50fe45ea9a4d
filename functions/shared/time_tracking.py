# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""Billable-time rounding and time entry statistics."""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

ROUNDING_INCREMENTS = {
    "15_min": 15,
    "30_min": 30,
    "1_hour": 60,
}


@dataclass
class TimeEntryStats:
    total_hours: float
    billable_hours: float
    earnings: float
    entries_count: int


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def apply_time_rounding(
    minutes: int, increment: Optional[str], direction: Optional[str]
) -> int:
    """
    Rounds a duration to the client's billing increment.

    Unknown increments or directions (including "none") leave the minutes
    unchanged. Exact multiples are never rounded up.
    """
    step = ROUNDING_INCREMENTS.get(increment or "")
    if not step:
        return minutes

    if direction == "up":
        if minutes % step == 0:
            return minutes
        return math.ceil(minutes / step) * step
    if direction == "down":
        return math.floor(minutes / step) * step
    if direction == "nearest":
        return int(_round_half_up(minutes / step)) * step
    return minutes


def summarize_entries(
    entries: Iterable[dict], client: Optional[dict]
) -> TimeEntryStats:
    entries = list(entries)
    if not client:
        return TimeEntryStats(0, 0, 0, len(entries))

    increment = client.get("time_rounding_increment")
    direction = client.get("time_rounding_direction")

    total_minutes = 0
    billable_minutes = 0
    for entry in entries:
        raw_minutes = entry.get("duration_minutes") or 0
        total_minutes += raw_minutes
        if entry.get("billable"):
            billable_minutes += apply_time_rounding(raw_minutes, increment, direction)

    total_hours = _round_half_up(total_minutes / 60, 1)
    billable_hours = _round_half_up(billable_minutes / 60, 1)
    earnings = billable_hours * (client.get("hourly_rate") or 0)
    return TimeEntryStats(
        total_hours=total_hours,
        billable_hours=billable_hours,
        earnings=_round_half_up(earnings, 2),
        entries_count=len(entries),
    )
