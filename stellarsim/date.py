"""Calendar dates counted in whole days from 2200-01-01."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


@dataclass(frozen=True)
class YMD:
    """A civil (proleptic Gregorian) year/month/day triple."""

    year: int
    month: int
    day: int


def _days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a civil date."""
    y = year - (1 if month <= 2 else 0)
    era = y // 400
    yoe = y - era * 400
    doy = (153 * (month - 3 if month > 2 else month + 9) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def _civil_from_days(z: int) -> YMD:
    """Civil date for a count of days since 1970-01-01."""
    z += 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    y = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    d = doy - (153 * mp + 2) // 5 + 1
    m = mp + 3 if mp < 10 else mp - 9
    return YMD(y + (1 if m <= 2 else 0), m, d)


_EPOCH = _days_from_civil(2200, 1, 1)


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group(1))


@dataclass(frozen=True, order=True)
class Date:
    """A game date: the number of days since 2200-01-01."""

    days: int = 0

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int) -> Date:
        if month < 1 or month > 12:
            raise ValueError("month out of range")
        if day < 1 or day > 31:
            raise ValueError("day out of range")
        return cls(_days_from_civil(year, month, day) - _EPOCH)

    @classmethod
    def parse_iso_ymd(cls, iso: str) -> Date:
        if len(iso) != 10 or iso[4] != "-" or iso[7] != "-":
            raise ValueError("Invalid date format, expected YYYY-MM-DD: " + iso)
        return cls.from_ymd(_leading_int(iso[0:4]), _leading_int(iso[5:7]), _leading_int(iso[8:10]))

    def days_since_epoch(self) -> int:
        return self.days

    def to_ymd(self) -> YMD:
        return _civil_from_days(self.days + _EPOCH)

    def to_string(self) -> str:
        ymd = self.to_ymd()
        return f"{str(ymd.year).rjust(4, '0')}-{str(ymd.month).rjust(2, '0')}-{str(ymd.day).rjust(2, '0')}"

    def __str__(self) -> str:
        return self.to_string()