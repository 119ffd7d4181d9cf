"""Money, number, date and size formatting."""

from datetime import datetime, timedelta

import pytest

from gramin_portal.utils.formatting import (
    format_currency,
    format_date,
    format_file_size,
    format_number,
    format_timestamp,
    group_indian,
    time_ago,
)


class TestCurrency:
    """Indian rupee formatting."""

    @pytest.mark.parametrize("amount", [0, None, "abc"])
    def test_zero_like(self, amount):
        assert format_currency(amount) == "₹0.00"

    def test_thousands(self):
        assert format_currency(1234.5, "en") == "₹1,234.50"

    def test_lakhs(self):
        assert format_currency(123456.5) == "₹1,23,456.50"
        assert format_currency("12345678") == "₹1,23,45,678.00"

    def test_negative(self):
        assert format_currency(-50) == "-₹50.00"

    def test_rounds_half_up(self):
        assert format_currency(2.005) == "₹2.01"

    def test_bengali(self):
        assert format_currency(1234.5, "bn") == "১,২৩৪.৫০₹"


class TestNumber:
    def test_none(self):
        assert format_number(None) == "0"

    def test_grouping(self):
        assert format_number(1234567) == "12,34,567"
        assert format_number(2.5) == "2.5"

    def test_bengali_digits(self):
        assert format_number(12, "bn") == "১২"

    def test_group_indian(self):
        assert group_indian("123") == "123"
        assert group_indian("1234") == "1,234"
        assert group_indian("123456") == "1,23,456"


class TestDates:
    def test_format_date(self):
        assert format_date("2025-03-05") == "05 Mar 2025"
        assert format_date("2025-03-05T10:15:00") == "05 Mar 2025"

    @pytest.mark.parametrize("value", [None, "", "yesterday"])
    def test_format_date_missing(self, value):
        assert format_date(value) == "-"

    def test_timestamp_converted_to_ist(self):
        assert format_timestamp("2025-03-05T10:15:00Z") == "05 Mar 2025 03:45 PM IST"

    def test_naive_timestamp_is_already_ist(self):
        assert format_timestamp("2025-03-05T10:15:00") == "05 Mar 2025 10:15 AM IST"


class TestTimeAgo:
    """Relative times on the session list."""

    NOW = datetime(2025, 3, 5, 12, 0, 0)

    @pytest.mark.parametrize("delta, expected", [
        (timedelta(seconds=30), "Just now"),
        (timedelta(minutes=1), "1 min ago"),
        (timedelta(minutes=5), "5 mins ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=2), "2 days ago"),
    ])
    def test_buckets(self, delta, expected):
        assert time_ago(self.NOW - delta, now=self.NOW) == expected

    def test_missing(self):
        assert time_ago(None) == "-"


class TestFileSize:
    def test_sizes(self):
        assert format_file_size(None) == "0 B"
        assert format_file_size(512) == "512 B"
        assert format_file_size(2048) == "2.00 KB"
        assert format_file_size(3 * 1024 * 1024) == "3.00 MB"
