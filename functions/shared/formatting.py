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
"""Pure formatting helpers used by dashboards, timers and avatars."""

from dataclasses import dataclass
from typing import Optional, Union

Number = Union[int, float]

INFINITE_CHANGE = "∞"

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "GBP": "£",
    "CAD": "C$",
    "AUD": "A$",
}
DEFAULT_CURRENCY_SYMBOL = "$"


@dataclass(frozen=True)
class ChangeResult:
    """Period-over-period change as displayed next to a KPI."""

    change: str
    is_positive: bool


def format_duration(total_seconds: Optional[Number]) -> str:
    """Formats a number of seconds as HH:MM:SS (hours are not capped at 24)."""
    seconds = max(int(total_seconds or 0), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def currency_symbol(currency: Optional[str]) -> str:
    return CURRENCY_SYMBOLS.get((currency or "").upper(), DEFAULT_CURRENCY_SYMBOL)


def format_currency(amount: Optional[Number], currency: Optional[str] = "USD") -> str:
    """
    Formats an amount with its currency symbol, thousands separators and
    two decimals, e.g. ``format_currency(1234.5) == "$1,234.50"``.
    """
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    return f"{sign}{currency_symbol(currency)}{abs(value):,.2f}"


def _format_number(value: Number) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_kpi_value(value: Optional[Number], unit: Optional[str] = None) -> str:
    """
    Formats a KPI value for display.

    Args:
        value: The raw metric value.
        unit: "USD" for money, "%" for percentages, "x" for multipliers,
            anything else for a plain grouped number.

    Returns:
        str: The display string.
    """
    value = value or 0
    if unit == "USD":
        return format_currency(value, "USD")
    if unit == "%":
        return f"{value:.1f}%"
    if unit == "x":
        return f"{value:.1f}x"
    return _format_number(value)


def get_initials(name: Optional[str]) -> str:
    """
    Returns avatar initials: first letters of the first and last words, or the
    first two letters of a single word. Empty names give "?".
    """
    if not name or not name.strip():
        return "?"
    words = name.split()
    if len(words) > 1:
        return f"{words[0][0]}{words[-1][0]}".upper()
    return words[0][:2].upper()


def calculate_change(value: Number, previous_value: Number) -> ChangeResult:
    """Percent change against the previous period; a zero baseline is infinite growth."""
    if previous_value == 0:
        return ChangeResult(change=INFINITE_CHANGE, is_positive=True)
    change = (value - previous_value) / previous_value * 100
    return ChangeResult(change=f"{abs(change):.1f}%", is_positive=change >= 0)
