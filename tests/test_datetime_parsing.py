import importlib

import pytest

from barbershop import config
from barbershop.domain.booking.datetime_parsing import (
    calendar_date,
    format_time_label,
    parse_date,
    parse_time,
    time_label_to_minutes,
)


class TestParseDate:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2025-03-15", "2025-03-15"),
            ("2025-3-5", "2025-03-05"),
            ("  2025-03-15  ", "2025-03-15"),
            ("15/03/2025", "2025-03-15"),
            ("15.03.2025", "2025-03-15"),
            ("15-03-25", "2025-03-15"),
            ("03/15/2025", "2025-03-15"),
        ],
    )
    def test_recognised_formats(self, raw, expected):
        assert parse_date(raw) == expected

    def test_ambiguous_date_uses_day_first_by_default(self):
        assert parse_date("05/06/2025") == "2025-06-05"

    def test_ambiguous_date_month_first_when_configured(self):
        assert parse_date("05/06/2025", order="MDY") == "2025-05-06"

    def test_unambiguous_date_ignores_configured_order(self):
        assert parse_date("25/12/2025", order="MDY") == "2025-12-25"

    def test_iso_date_rolls_over_invalid_day(self):
        assert parse_date("2024-02-30") == "2024-03-01"

    def test_iso_date_rolls_over_month_13(self):
        assert parse_date("2024-13-01") == "2025-01-01"

    @pytest.mark.parametrize("raw", ["", "   ", None, "tomorrow", "15/13/2025", "32/01/2025", "2025/03/15"])
    def test_unparseable_dates(self, raw):
        assert parse_date(raw) is None

    def test_unknown_order_rejected(self):
        with pytest.raises(ValueError):
            parse_date("05/06/2025", order="YMD")


class TestParseTime:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("6:30 PM", "6:30 PM"),
            ("6:30pm", "6:30 PM"),
            ("6 pm", "6:00 PM"),
            ("12:00 am", "12:00 AM"),
            ("18:30", "6:30 PM"),
            ("18.30", "6:30 PM"),
            ("00:15", "12:15 AM"),
            ("12:45", "12:45 PM"),
            ("9", "9:00 AM"),
            ("17", "5:00 PM"),
            ("0", "12:00 AM"),
        ],
    )
    def test_recognised_formats(self, raw, expected):
        assert parse_time(raw) == expected

    @pytest.mark.parametrize("raw", ["25:00", "18:75", "13 pm", "24"])
    def test_out_of_range_values(self, raw):
        assert parse_time(raw) is None

    def test_empty_time(self):
        assert parse_time("  ") is None
        assert parse_time(None) is None

    def test_unrecognised_time_passed_through(self):
        assert parse_time("noon", passthrough=True) == "noon"

    def test_unrecognised_time_rejected_without_passthrough(self):
        assert parse_time("noon", passthrough=False) is None

    def test_unrecognised_time_logs_warning(self, caplog):
        parse_time("after lunch", passthrough=True)
        assert "after lunch" in caplog.text


def test_calendar_date_rolls_back_day_zero():
    assert calendar_date(2025, 3, 0).isoformat() == "2025-02-28"


def test_format_time_label_midnight_and_noon():
    assert format_time_label(0, 0) == "12:00 AM"
    assert format_time_label(12, 5) == "12:05 PM"


def test_time_label_to_minutes():
    assert time_label_to_minutes("9:00 AM") == 540
    assert time_label_to_minutes("12:30 AM") == 30
    assert time_label_to_minutes("5:30 PM") == 17 * 60 + 30
    assert time_label_to_minutes("noon") is None


def test_unknown_configured_date_order_falls_back_to_day_first(monkeypatch):
    monkeypatch.setenv("DATE_ORDER", "YMD")
    try:
        with pytest.warns(RuntimeWarning, match="DATE_ORDER"):
            importlib.reload(config)

        assert config.DATE_ORDER == "DMY"
        assert parse_date("03/04/2025") == "2025-04-03"
    finally:
        monkeypatch.setenv("DATE_ORDER", "DMY")
        importlib.reload(config)
