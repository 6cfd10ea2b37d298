"""Unit tests for domain model validators."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from src.domain.activity import ActivityCreate, ActivityRecord
from src.domain.rider import RiderProfileCreate


class TestRiderProfileCreate:
    """Tests for the onboarding payload validators."""

    def _data(self, **overrides):
        return {"name": "Ravi", "age": 27, "phone": "9876543210", "weekly_goal": 5000, "hours_per_day": 8, **overrides}

    def test_name_validator_accepts_unicode(self):
        """Test international names are accepted."""
        for name in ["रवि कुमार", "ரவி", "O'Brien", "Mary-Jane"]:
            assert RiderProfileCreate(**self._data(name=name)).name == name

    def test_name_validator_rejects_whitespace_only(self):
        with pytest.raises(ValidationError) as exc_info:
            RiderProfileCreate(**self._data(name="   "))

        assert "Name cannot be empty" in str(exc_info.value)

    def test_name_validator_rejects_too_long(self):
        with pytest.raises(ValidationError, match="Name too long"):
            RiderProfileCreate(**self._data(name="x" * 51))

    def test_phone_must_be_ten_digits(self):
        with pytest.raises(ValidationError, match="Mobile number must be exactly 10 digits"):
            RiderProfileCreate(**self._data(phone="+919876543210"))

    def test_zero_weekly_goal_allowed(self):
        assert RiderProfileCreate(**self._data(weekly_goal=0)).weekly_goal == 0


class TestActivityModels:
    """Tests for activity payload and record parsing."""

    def test_boundaries_accepted(self):
        payload = ActivityCreate(
            rider_profile_id="1",
            earnings=0,
            hours_worked=24,
            primary_platform=" Swiggy ",
            satisfaction_rating=5,
        )

        assert payload.primary_platform == "Swiggy"
        assert payload.activity_date == date.today()

    def test_tiny_positive_hours_accepted(self):
        payload = ActivityCreate(
            rider_profile_id="1", earnings=10, hours_worked=0.25, primary_platform="Zepto", satisfaction_rating=1
        )

        assert payload.hours_worked == 0.25

    def test_record_accepts_timestamp_dates(self):
        record = ActivityRecord(
            id="1",
            rider_profile_id="1",
            activity_date="2024-05-14T00:00:00Z",
            earnings=650,
            hours_worked=8,
            primary_platform="Swiggy",
            satisfaction_rating=4,
        )

        assert record.activity_date == date(2024, 5, 14)

    def test_record_accepts_datetime(self):
        record = ActivityRecord(
            id="1",
            rider_profile_id="1",
            activity_date=datetime(2024, 5, 14, 22, 0),
            earnings=650,
            hours_worked=8,
            primary_platform="Swiggy",
            satisfaction_rating=4,
        )

        assert record.activity_date == date(2024, 5, 14)
