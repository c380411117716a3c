from __future__ import annotations

import calendar
import re
from collections.abc import Callable
from datetime import date

from .types import ExtractionOutcome, ParsedDate, Shape, YearBound

# Shapes are only ever matched at the start of the name, in this order. The year range must be
# tried before the full date and the 8-digit run before the 6-digit one, since the shorter shapes
# also match the start of the longer ones.
YEAR_RANGE_RE = re.compile(r"(?P<y1>\d{4})[-_](?P<y2>\d{4})", re.ASCII)
FULL_DATE_RE = re.compile(r"(?P<y>\d{4})(?P<sep>[-_])(?P<m>\d{2})(?P=sep)(?P<d>\d{2})", re.ASCII)
EIGHT_DIGIT_RE = re.compile(r"(?P<y>\d{4})(?P<m>\d{2})(?P<d>\d{2})", re.ASCII)
YEAR_MONTH_RE = re.compile(r"(?P<y>\d{4})[-_](?P<m>\d{2})", re.ASCII)
SIX_DIGIT_RE = re.compile(r"(?P<y>\d{4})(?P<m>\d{2})", re.ASCII)

Resolver = Callable[["re.Match[str]", YearBound], "date | None"]

DEFAULT_BOUND = YearBound()


def _calendar_date(y: int, m: int, d: int) -> date | None:
    try:
        return date(y, m, d)
    except ValueError:
        return None


def _range_end(y1: int, y2: int, bound: YearBound) -> date | None:
    if y1 not in bound or y2 not in bound:
        return None
    return _calendar_date(y2, 12, 31)


def _month_end(y: int, m: int, bound: YearBound) -> date | None:
    if y not in bound or not 1 <= m <= 12:
        return None
    return _calendar_date(y, m, calendar.monthrange(y, m)[1])


def _resolve_year_range(m: re.Match[str], bound: YearBound) -> date | None:
    return _range_end(int(m.group("y1")), int(m.group("y2")), bound)


def _resolve_full_date(m: re.Match[str], bound: YearBound) -> date | None:
    y = int(m.group("y"))
    if y not in bound:
        return None
    return _calendar_date(y, int(m.group("m")), int(m.group("d")))


def _resolve_eight_digit(m: re.Match[str], bound: YearBound) -> date | None:
    """YYYYMMDD wins; only a calendar-invalid (or out-of-bound) reading falls back to YYYYYYYY."""
    y = int(m.group("y"))
    if y in bound:
        d = _calendar_date(y, int(m.group("m")), int(m.group("d")))
        if d:
            return d
    digits = m.group(0)
    return _range_end(int(digits[:4]), int(digits[4:]), bound)


def _resolve_year_month(m: re.Match[str], bound: YearBound) -> date | None:
    return _month_end(int(m.group("y")), int(m.group("m")), bound)


SHAPES: list[tuple[Shape, re.Pattern[str], Resolver]] = [
    ("year-range", YEAR_RANGE_RE, _resolve_year_range),
    ("full-date", FULL_DATE_RE, _resolve_full_date),
    ("eight-digit", EIGHT_DIGIT_RE, _resolve_eight_digit),
    ("year-month", YEAR_MONTH_RE, _resolve_year_month),
    ("six-digit", SIX_DIGIT_RE, _resolve_year_month),
]

RESOLVERS: dict[Shape, Resolver] = {shape: resolver for shape, _, resolver in SHAPES}


def match_prefix(filename: str) -> tuple[Shape, re.Match[str]] | None:
    """Return the first shape (in priority order) matching at the very start of filename."""

    for shape, patt, _ in SHAPES:
        m = patt.match(filename)
        if m:
            return shape, m
    return None


def extract(filename: str, bound: YearBound | None = None) -> ExtractionOutcome:
    """Read the date encoded at the start of a filename.

    Only the leading characters are considered; "report-2023-04-15.txt" is rejected. Whatever
    follows the matched prefix is ignored. Once a shape matches, its verdict is final: a
    calendar-invalid match rejects the name rather than trying a shorter shape.
    """

    bound = bound or DEFAULT_BOUND
    hit = match_prefix(filename)
    if not hit:
        return ExtractionOutcome.rejected()

    shape, m = hit
    d = RESOLVERS[shape](m, bound)
    if not d:
        return ExtractionOutcome.rejected()
    return ExtractionOutcome(parsed=ParsedDate(d), shape=shape, prefix=m.group(0))
