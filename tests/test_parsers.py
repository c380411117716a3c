from __future__ import annotations

from datetime import date, datetime

import pytest

from chronostamp.date import YearBound, extract
from chronostamp.date.parsers import match_prefix


@pytest.mark.parametrize(
    "name, expected",
    [
        ("2023-04-15_x", date(2023, 4, 15)),
        ("2023_04_15 scan.pdf", date(2023, 4, 15)),
        ("2023-04_x", date(2023, 4, 30)),
        ("2024_02 invoice.pdf", date(2024, 2, 29)),
        ("2023-02.txt", date(2023, 2, 28)),
        ("2021-2022_x", date(2022, 12, 31)),
        ("2021_2022 taxes", date(2022, 12, 31)),
        ("20240229_x", date(2024, 2, 29)),
        ("20231231.jpg", date(2023, 12, 31)),
        ("202304_x", date(2023, 4, 30)),
        ("199912 report", date(1999, 12, 31)),
        ("19992005_archive", date(2005, 12, 31)),
        ("1900-01-01", date(1900, 1, 1)),
        ("2200-12-31", date(2200, 12, 31)),
    ],
)
def test_extract_resolves(name: str, expected: date) -> None:
    out = extract(name)
    assert out.resolved
    assert out.parsed is not None
    assert out.parsed.d == expected


@pytest.mark.parametrize(
    "name",
    [
        "",
        "notes.txt",
        "report-2023-04-15.txt",
        "IMG_20230415.jpg",
        " 2023-04-15",
        "20230229_x",  # not a leap year, and 0229 is no year either
        "2023-02-29",
        "2023-04-31",
        "2023-13-01",
        "2023-13_x",
        "202300_x",
        "202313",
        "1899-01-01",
        "2201-01-01",
        "1899-2000",
        "2000-2201",
        "18991231",
        "2023-0415_x",  # year range 2023..0415
        "123",
        "２０２３-04-15",  # fullwidth digits
    ],
)
def test_extract_rejects(name: str) -> None:
    out = extract(name)
    assert not out.resolved
    assert out.parsed is None
    assert out.shape is None


def test_extract_time_is_noon() -> None:
    out = extract("2023-04-15_x")
    assert out.parsed is not None
    assert out.parsed.at == datetime(2023, 4, 15, 12, 0)


def test_extract_records_shape_and_prefix() -> None:
    out = extract("2023-04-15_holiday.jpg")
    assert out.shape == "full-date"
    assert out.prefix == "2023-04-15"

    out = extract("20240229_x")
    assert out.shape == "eight-digit"
    assert out.prefix == "20240229"


def test_trailing_characters_are_ignored() -> None:
    # The date is the first shape matching at position 0; anything after it does not matter.
    assert extract("2023-04-15x").parsed.d == date(2023, 4, 15)  # type: ignore[union-attr]
    assert extract("2023-04-159").parsed.d == date(2023, 4, 15)  # type: ignore[union-attr]
    assert extract("202304151234").parsed.d == date(2023, 4, 15)  # type: ignore[union-attr]
    assert extract("2023041").parsed.d == date(2023, 4, 30)  # type: ignore[union-attr]


def test_mixed_separators_fall_through_to_year_month() -> None:
    out = extract("2023-04_15")
    assert out.shape == "year-month"
    assert out.parsed is not None
    assert out.parsed.d == date(2023, 4, 30)


def test_eight_digits_prefer_full_date_over_year_range() -> None:
    # 2000-12-01 is a valid date, so the 2000..1201 range reading is never tried.
    out = extract("20001201")
    assert out.parsed is not None
    assert out.parsed.d == date(2000, 12, 1)


def test_match_prefix_priority() -> None:
    hit = match_prefix("2021-2022-03")
    assert hit is not None
    assert hit[0] == "year-range"

    hit = match_prefix("2021-03-04")
    assert hit is not None
    assert hit[0] == "full-date"

    assert match_prefix("x2021-03-04") is None


def test_custom_year_bound() -> None:
    wide = YearBound(1900, 2999)
    assert extract("2500-06-01", wide).parsed.d == date(2500, 6, 1)  # type: ignore[union-attr]
    assert not extract("2500-06-01").resolved

    narrow = YearBound(2000, 2010)
    assert not extract("1999-01-01", narrow).resolved
    assert not extract("2005-2011", narrow).resolved
    assert extract("2005-2010", narrow).parsed.d == date(2010, 12, 31)  # type: ignore[union-attr]


def test_extract_is_idempotent() -> None:
    for name in ("2023-04-15_x", "20230229_x", "notes.txt", "19992005"):
        assert extract(name) == extract(name)
