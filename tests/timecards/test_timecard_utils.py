from timecard_exports.backend.fields import resolve_field
from timecard_exports.backend.utils import format_amount, format_plain, normalize_recipients, safe_text, to_number


def test_to_number_coercion():
    assert to_number("8") == 8
    assert to_number(" 7.5 ") == 7.5
    assert to_number(None) == 0
    assert to_number("") == 0
    assert to_number("abc") == 0
    assert to_number(float("inf")) == 0
    assert to_number(True) == 1


def test_format_amount():
    assert format_amount(8) == "8"
    assert format_amount(8.0) == "8"
    assert format_amount(7.5) == "7.50"
    assert format_amount(1 / 3) == "0.33"
    assert format_amount(None) == "0"
    assert format_amount("x") == "0"


def test_format_plain():
    assert format_plain(8.0) == "8"
    assert format_plain(7.5) == "7.5"
    assert format_plain(0.25) == "0.25"


def test_safe_text():
    assert safe_text("  Ana ") == "Ana"
    assert safe_text("") == "-"
    assert safe_text(None) == "-"
    assert safe_text(0) == "0"


def test_resolve_field_order():
    assert resolve_field({"employeeId": "I", "employeeNumber": "N"}, "employeeCode") == "I"
    assert resolve_field({"employeeCode": "", "employeeNumber": "N"}, "employeeCode") == "N"
    assert resolve_field({"subsectionArea": "S"}, "area") == "S"
    assert resolve_field({"acct": "A", "account": "B"}, "account") == "B"
    assert resolve_field({"difC": "D"}, "costCode") == "D"
    assert resolve_field({}, "costCode") == ""
    assert resolve_field(None, "area") == ""


def test_normalize_recipients_merges_and_dedupes():
    out = normalize_recipients(["a@x.com", " b@x.com "], None, ["b@x.com", "", 5, "c@x.com"], "not-a-list")
    assert out == ["a@x.com", "b@x.com", "c@x.com"]
