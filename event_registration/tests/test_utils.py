from datetime import date, datetime

import pytest

from event_registration.utils import format_long_date, json_body, parse_id, serialize_row


@pytest.mark.parametrize("val, expected", [
    (5, 5),
    ("5", 5),
    (" 42 ", 42),
    ("-3", -3),
    (7.0, 7),
    ("abc", None),
    ("12abc", None),
    ("", None),
    (None, None),
    (True, None),
    (2.5, None),
])
def test_parse_id(val, expected):
    assert parse_id(val) == expected


@pytest.mark.parametrize("val, expected", [
    (date(2024, 3, 5), "March 5, 2024"),
    (datetime(2023, 12, 25, 18, 30), "December 25, 2023"),
    (None, None),
])
def test_format_long_date(val, expected):
    assert format_long_date(val) == expected


def test_serialize_row_converts_named_fields():
    row = {"when": datetime(2024, 3, 1, 9, 0), "day": date(2024, 3, 5), "name": "x"}
    data = serialize_row(row, ["when"])
    assert data["when"] == "2024-03-01T09:00:00"
    assert data["day"] == date(2024, 3, 5)


def test_serialize_row_converts_all_dates_by_default():
    row = {"when": datetime(2024, 3, 1, 9, 0), "day": date(2024, 3, 5), "name": "x"}
    assert serialize_row(row) == {"when": "2024-03-01T09:00:00", "day": "2024-03-05", "name": "x"}


def test_format_long_date_ignores_locale(mocker):
    # A locale-aware strftime must not leak into the output
    day = mocker.MagicMock(month=3, day=5, year=2024)
    day.strftime.return_value = "März"
    assert format_long_date(day) == "March 5, 2024"


def test_json_body_ignores_non_object(app):
    with app.test_request_context(json=["x"]):
        assert json_body() == {}
    with app.test_request_context(json={"a": 1}):
        assert json_body() == {"a": 1}
    with app.test_request_context(data="not json", content_type="application/json"):
        assert json_body() == {}
