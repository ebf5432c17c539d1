"""Late fee policy.

A late fee is ``days_late * daily_rate`` where the daily rate is fixed per
item kind. Days are counted on a calendar basis: only the date part is
compared, so returning an item on its due date costs nothing and partial
days never count.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Mapping

from lms.enums import ItemKind

DAILY_LATE_FEES: Mapping[ItemKind, Decimal] = {
    ItemKind.BOOK: Decimal("1.00"),
    ItemKind.MAGAZINE: Decimal("0.50"),
    ItemKind.DVD: Decimal("2.00"),
}

ZERO = Decimal("0.00")


def daily_rate(kind: ItemKind) -> Decimal:
    return DAILY_LATE_FEES[kind]


def days_late(due_date: date, on_date: date) -> int:
    """Whole calendar days between ``due_date`` and ``on_date`` (0 if not late)."""
    return max(0, (_as_date(on_date) - _as_date(due_date)).days)


def calculate_late_fee(kind: ItemKind, days: int) -> Decimal:
    """Fee owed for an item of ``kind`` returned ``days`` days late.

    Raises:
        ValueError: if ``days`` is negative.
    """
    if days < 0:
        raise ValueError(f"days_late must be non-negative, got {days}")
    return daily_rate(kind) * days


def _as_date(value: date) -> date:
    # datetime is a subclass of date; drop the time of day
    return value.date() if isinstance(value, datetime) else value
