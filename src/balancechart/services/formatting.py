"""Readout formatting for scrub tooltips.

Pure helpers turning a resolved scrub sample into the strings the consumer
shows in place of the latest balance while the user drags.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_EVEN
from enum import Enum
from typing import Dict, Union

__all__ = ["Timeframe", "format_currency", "format_scrub_date"]

_CURRENCY_SYMBOLS: Dict[str, str] = {"USD": "$", "EUR": "€", "GBP": "£"}


class Timeframe(str, Enum):
    DAY = "D"
    WEEK = "W"
    MONTH = "M"
    YEAR = "Y"
    ALL = "ALL"

    @property
    def ideal_point_count(self) -> int:
        return {
            Timeframe.DAY: 24,  # hourly
            Timeframe.WEEK: 7,
            Timeframe.MONTH: 30,
            Timeframe.YEAR: 52,  # weekly
            Timeframe.ALL: 60,  # monthly
        }[self]

    @property
    def accessibility_label(self) -> str:
        return {
            Timeframe.DAY: "1 Day",
            Timeframe.WEEK: "1 Week",
            Timeframe.MONTH: "1 Month",
            Timeframe.YEAR: "1 Year",
            Timeframe.ALL: "All Time",
        }[self]


def format_currency(value: Union[int, float, Decimal], currency: str = "USD") -> str:
    """Format ``value`` as e.g. ``$12,345.67`` / ``-$12.00``."""
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
    symbol = _CURRENCY_SYMBOLS.get(currency.upper(), currency.upper() + " ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_scrub_date(ts: datetime, timeframe: Timeframe) -> str:
    if timeframe is Timeframe.DAY:
        hour = ts.hour % 12 or 12
        return f"{hour}:{ts:%M} {ts:%p}"  # 2:30 PM
    if timeframe is Timeframe.WEEK:
        return f"{ts:%a, %b} {ts.day}"  # Mon, Jan 15
    if timeframe is Timeframe.MONTH:
        return f"{ts:%b} {ts.day}"  # Jan 15
    return f"{ts:%b %Y}"  # Jan 2026
