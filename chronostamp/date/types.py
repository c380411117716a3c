from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Literal

from dotenv import load_dotenv

from ..errors import ConfigError

# Accepted year range for any year read from a filename.
MIN_YEAR = 1900
MAX_YEAR = 2200

# Resolved dates are pinned to midday so timezone shifts never move them across a day boundary.
NOON = time(12, 0)

Shape = Literal["year-range", "full-date", "eight-digit", "year-month", "six-digit"]


@dataclass(frozen=True)
class YearBound:
    """Closed interval of plausible years."""

    min_year: int = MIN_YEAR
    max_year: int = MAX_YEAR

    def __post_init__(self) -> None:
        if self.min_year > self.max_year:
            raise ConfigError(f"Year bound is empty: min_year={self.min_year} > max_year={self.max_year}")

    def __contains__(self, year: int) -> bool:
        return self.min_year <= year <= self.max_year

    @classmethod
    def from_env(cls, *, min_year: int | None = None, max_year: int | None = None) -> "YearBound":
        """Build a bound from CHRONOSTAMP_MIN_YEAR/CHRONOSTAMP_MAX_YEAR (or .env).

        Explicit arguments win over the environment; unset values fall back to the defaults.
        """
        load_dotenv()
        if min_year is None:
            min_year = _env_int("CHRONOSTAMP_MIN_YEAR", MIN_YEAR)
        if max_year is None:
            max_year = _env_int("CHRONOSTAMP_MAX_YEAR", MAX_YEAR)
        return cls(min_year=int(min_year), max_year=int(max_year))


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer year, got {raw!r}") from None


@dataclass(frozen=True, order=True)
class ParsedDate:
    """A calendar-valid date read from a filename, placed at noon local time."""

    d: date

    @property
    def at(self) -> datetime:
        return datetime.combine(self.d, NOON)

    def __str__(self) -> str:
        return self.d.isoformat()


@dataclass(frozen=True)
class ExtractionOutcome:
    """Either a resolved date or a rejection (parsed is None)."""

    parsed: ParsedDate | None
    shape: Shape | None = None
    prefix: str | None = None  # the leading text the shape matched

    @property
    def resolved(self) -> bool:
        return self.parsed is not None

    @classmethod
    def rejected(cls) -> "ExtractionOutcome":
        return cls(parsed=None)


@dataclass(frozen=True)
class AttributePlan:
    """Timestamps to write for one file. modification is None when the current one is kept."""

    creation: datetime
    modification: datetime | None = None

    def as_dict(self) -> dict[str, datetime]:
        out = {"creation": self.creation}
        if self.modification is not None:
            out["modification"] = self.modification
        return out
