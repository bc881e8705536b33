from datetime import date, datetime

from timecard_exports.backend.filenames import (
    build_csv_filename,
    build_filename,
    build_pdf_filename,
    week_ending_label,
)
from timecard_exports.backend.parsers import format_short_date, format_week_label, parse_week_start


def test_build_filename_with_job_code():
    assert build_filename("2024-02-04", "J100", "csv") == "2024-02-10 J100.csv"


def test_build_filename_with_unparseable_week():
    assert build_filename("not-a-date", "", "pdf") == "not-a-date.pdf"
    assert build_filename("  ", None, "pdf") == "timecards.pdf"
    assert build_filename(None, " J7 ", "csv") == "timecards J7.csv"


def test_csv_and_pdf_filenames_share_the_date():
    assert build_csv_filename("2023-12-31", "J1") == "2024-01-06 J1.csv"
    assert build_pdf_filename("2023-12-31", "J1") == "2024-01-06 J1.pdf"
    assert build_pdf_filename("2023-12-31") == "2024-01-06.pdf"


def test_week_ending_label():
    assert week_ending_label("2024-02-25") == "2024-03-02"
    assert week_ending_label("garbage") is None


def test_parse_week_start_formats():
    expected = date(2024, 2, 4)
    assert parse_week_start("2024-02-04") == expected
    assert parse_week_start("2024-02-04T00:00:00Z") == expected
    assert parse_week_start("2/4/2024") == expected
    assert parse_week_start("February 4, 2024") == expected
    assert parse_week_start("4 Feb 2024") == expected
    assert parse_week_start(datetime(2024, 2, 4, 13, 30)) == expected
    assert parse_week_start(expected) == expected


def test_parse_week_start_rejects_bad_values():
    assert parse_week_start("not-a-date") is None
    assert parse_week_start("") is None
    assert parse_week_start(None) is None
    assert parse_week_start("2023-02-29") is None
    assert parse_week_start("13/1/2024") is None


def test_short_date_and_week_label():
    assert format_short_date(date(2024, 2, 5)) == "2/5/2024"
    assert format_week_label("2024-02-04") == "2/4/2024 - 2/10/2024"
    assert format_week_label("next week") == "next week"
    assert format_week_label(None) == "-"
