import csv
import io
import logging

from timecard_exports.backend.exporters.csv import CSV_HEADERS, build_csv, render_csv
from timecard_exports.backend.normalize import normalize

HEADER = "Employee Name,Employee Code,Job Code,DETAIL_DATE,Sub-Section,Activity Code,Cost Code,H_Hours,P_HOURS,,"
BLANK = ",,,,,,,,,,"


def _legacy_example():
    return normalize(
        {
            "employeeName": "Ana Ruiz",
            "employeeCode": "E100",
            "jobs": [
                {
                    "jobNumber": "J1",
                    "area": "North",
                    "acct": "400",
                    "difC": "C7",
                    "days": [{"dayOfWeek": 1, "hours": 8, "production": 40, "unitCost": 2}],
                }
            ],
        }
    )


def test_empty_export_is_header_and_blank_row():
    assert build_csv([], "2024-02-04") == f"{HEADER}\n{BLANK}"
    assert build_csv(None, "2024-02-04") == f"{HEADER}\n{BLANK}"
    assert len(CSV_HEADERS) == 11


def test_legacy_example_produces_one_monday_row():
    out = build_csv([_legacy_example()], "2024-02-04")
    rows = out.split("\n")
    assert rows[0] == HEADER
    assert rows[1] == BLANK
    assert rows[2:] == ["Ana Ruiz,E100,J1,2/5/2024,North,400,C7,8,40,,"]


def test_zero_days_are_suppressed():
    tc = normalize(
        {
            "employeeName": "Bo",
            "jobs": [
                {"jobNumber": "IDLE", "days": [{"hours": 0, "production": 0} for _ in range(7)]},
                {"jobNumber": "BUSY", "days": [{"dayOfWeek": 2, "hours": 4}]},
            ],
        }
    )
    out = build_csv([tc], "2024-02-04")
    assert "IDLE" not in out
    assert out.count("BUSY") == 1


def test_production_only_day_leaves_hours_empty():
    tc = {
        "employeeName": "Cy",
        "employeeId": "ID-7",
        "lines": [
            {
                "jobNumber": "J3",
                "subsectionArea": "S1",
                "acct": "410",
                "difC": "C9",
                "sat": 0,
                "production": {"sat": 12.5},
            }
        ],
    }
    out = build_csv([tc], "2024-02-04")
    assert out.split("\n")[2] == "Cy,ID-7,J3,2/10/2024,S1,410,C9,,12.5,,"


def test_rows_follow_sunday_to_saturday_order_and_month_rollover():
    tc = normalize(
        {
            "employeeName": "Di",
            "employeeNumber": 55,
            "jobs": [{"jobNumber": "J4", "days": [{"dayOfWeek": d, "hours": d + 1} for d in (6, 0, 3)]}],
        }
    )
    rows = build_csv([tc], "2024-01-28").split("\n")[2:]
    dates = [r.split(",")[3] for r in rows]
    assert dates == ["1/28/2024", "1/31/2024", "2/3/2024"]
    assert [r.split(",")[7] for r in rows] == ["1", "4", "7"]
    assert rows[0].split(",")[1] == "55"


def test_invalid_week_start_uses_raw_value_and_warns(caplog):
    with caplog.at_level(logging.WARNING):
        out = build_csv([_legacy_example()], "week-of-feb")
    assert out.split("\n")[2].split(",")[3] == "week-of-feb"
    assert any("Invalid weekStart" in r.getMessage() for r in caplog.records)


def test_fields_with_commas_and_quotes_are_escaped():
    tc = normalize(
        {
            "employeeName": 'Doe, "JJ" Jane',
            "jobs": [{"jobNumber": "J,5", "days": [{"dayOfWeek": 0, "hours": 1}]}],
        }
    )
    out = build_csv([tc], "2024-02-04")
    assert '"Doe, ""JJ"" Jane"' in out
    assert '"J,5"' in out
    parsed = list(csv.reader(io.StringIO(out)))
    assert parsed[2][0] == 'Doe, "JJ" Jane'
    assert parsed[2][2] == "J,5"


def test_fields_with_carriage_returns_are_quoted():
    tc = normalize(
        {
            "employeeName": "a\rb",
            "jobs": [{"jobNumber": "J", "area": "N\r1", "days": [{"dayOfWeek": 0, "hours": 1}]}],
        }
    )
    rows = build_csv([tc], "2024-02-04").split("\n")
    assert len(rows) == 3
    assert rows[2] == '"a\rb",,J,2/4/2024,"N\r1",,,1,,,'
    assert render_csv([["x\ry", "z"]]) == '"x\ry",z'


def test_render_csv_blanks_none_and_has_no_trailing_newline():
    out = render_csv([["a", None, 3], ["line\nbreak", "", ""]])
    assert out == 'a,,3\n"line\nbreak",,'


def test_multiple_timecards_keep_input_order():
    first = _legacy_example()
    second = normalize({"employeeName": "Zed", "jobs": [{"jobNumber": "J9", "days": [{"dayOfWeek": 0, "hours": 2}]}]})
    rows = build_csv([first, second], "2024-02-04").split("\n")[2:]
    assert [r.split(",")[0] for r in rows] == ["Ana Ruiz", "Zed"]
