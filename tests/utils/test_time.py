"""Tests for wall-clock helpers."""

from datetime import date, datetime, timedelta, timezone

from rtw_app.utils.time import day_key, reading_streak, utc_now


class TestDayKey:
    """Test calendar-day bucketing."""

    def test_utc_now_is_aware(self):
        """Test utc_now carries a timezone."""
        assert utc_now().tzinfo is not None

    def test_aware_timestamp(self):
        """Test bucketing an aware timestamp."""
        assert day_key(datetime(2024, 1, 2, 23, 59, tzinfo=timezone.utc)) == "2024-01-02"

    def test_converted_to_utc(self):
        """Test other timezones are converted to UTC."""
        tz = timezone(timedelta(hours=5))
        assert day_key(datetime(2024, 1, 3, 2, 0, tzinfo=tz)) == "2024-01-02"

    def test_naive_treated_as_utc(self):
        """Test naive timestamps are treated as UTC."""
        assert day_key(datetime(2024, 1, 2, 1, 0)) == "2024-01-02"


class TestReadingStreak:
    """Test consecutive day counting."""

    def test_streak_ending_today(self):
        """Test consecutive days ending today."""
        days = {"2024-05-01", "2024-05-02", "2024-05-03", "2024-04-28"}
        assert reading_streak(days, date(2024, 5, 3)) == 3

    def test_no_reading_today(self):
        """Test no streak without reading today."""
        assert reading_streak({"2024-05-02"}, date(2024, 5, 3)) == 0

    def test_empty(self):
        """Test no days gives no streak."""
        assert reading_streak(set(), date(2024, 5, 3)) == 0
