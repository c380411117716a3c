from __future__ import annotations

import pytest

from chronostamp.date import YearBound
from chronostamp.date.types import MAX_YEAR, MIN_YEAR
from chronostamp.errors import ConfigError


def test_year_bound_defaults() -> None:
    b = YearBound()
    assert (b.min_year, b.max_year) == (MIN_YEAR, MAX_YEAR) == (1900, 2200)
    assert 1900 in b
    assert 2200 in b
    assert 1899 not in b
    assert 2201 not in b


def test_year_bound_rejects_empty_range() -> None:
    with pytest.raises(ConfigError):
        YearBound(2000, 1999)


def test_year_bound_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHRONOSTAMP_MIN_YEAR", "1950")
    monkeypatch.setenv("CHRONOSTAMP_MAX_YEAR", "2999")
    b = YearBound.from_env()
    assert (b.min_year, b.max_year) == (1950, 2999)


def test_year_bound_arguments_override_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHRONOSTAMP_MIN_YEAR", "1950")
    monkeypatch.delenv("CHRONOSTAMP_MAX_YEAR", raising=False)
    b = YearBound.from_env(min_year=1800)
    assert (b.min_year, b.max_year) == (1800, MAX_YEAR)


def test_year_bound_from_env_invalid(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHRONOSTAMP_MIN_YEAR", "nineteen")
    with pytest.raises(ConfigError):
        YearBound.from_env()
