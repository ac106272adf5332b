"""Cutoff parsing.

A cutoff is turned into an exclusive UTC instant: a submission belongs to the
historical leaderboard iff it was submitted strictly before that instant.
Bare periods (year, month, day) include the whole period, so their instant is
the start of the following one.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dtp
from dateutil.relativedelta import relativedelta

from golf_rivals.errors import CutoffFormatError

SUPPORTED_FORMATS = [
    "now",
    "YYYY",
    "YYYY-MM",
    "YYYY-MM-DD",
    "YYYY-MM-DDTHH:MM",
    "YYYY-MM-DDTHH:MM:SS",
    "YYYY-MM-DDTHH:MM:SS.ffffff",
]

_YEAR = re.compile(r"^(\d{4})$")
_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
_DAY = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_INSTANT = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?Z?$")


@dataclass(frozen=True)
class Cutoff:
    label: str
    instant: datetime


def _period_end(step: relativedelta, year: int, month: int = 1, day: int = 1) -> datetime:
    start = datetime(year, month, day, tzinfo=timezone.utc)
    try:
        return start + step
    except (ValueError, OverflowError):
        # no next period to point at (year 9999)
        return datetime.max.replace(tzinfo=timezone.utc)


def parse_cutoff(text: str, now: Optional[datetime] = None) -> Cutoff:
    raw = (text or "").strip()
    try:
        if raw.lower() == "now":
            instant = now or datetime.now(timezone.utc)
            if instant.tzinfo is None:
                instant = instant.replace(tzinfo=timezone.utc)
            return Cutoff(raw, instant)

        m = _YEAR.match(raw)
        if m:
            return Cutoff(raw, _period_end(relativedelta(years=1), int(m[1])))
        m = _MONTH.match(raw)
        if m:
            return Cutoff(raw, _period_end(relativedelta(months=1), int(m[1]), int(m[2])))
        m = _DAY.match(raw)
        if m:
            return Cutoff(raw, _period_end(relativedelta(days=1), int(m[1]), int(m[2]), int(m[3])))

        if _INSTANT.match(raw):
            instant = dtp.isoparse(raw.replace(" ", "T"))
            if instant.tzinfo is None:
                instant = instant.replace(tzinfo=timezone.utc)
            return Cutoff(raw, instant.astimezone(timezone.utc))
    except (ValueError, OverflowError):
        # out-of-range fields, e.g. month 13
        pass
    raise CutoffFormatError(raw, SUPPORTED_FORMATS)
