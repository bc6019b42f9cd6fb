"""
Tests for onboarding workout validation.

Tests cover:
- Boundary values of every rule
- All failing rules reported at once
- Purity (same input, same result)
"""

from datetime import date, datetime

import pytest

from training_planner.models.onboarding import DurationInput, WorkoutEntryDraft
from training_planner.onboarding.validator import (
    DATE_IN_FUTURE,
    DATE_REQUIRED,
    DISTANCE_TOO_SMALL,
    DURATION_TOO_SHORT,
    HEART_RATE_OUT_OF_RANGE,
    parse_distance_km,
    validate_workout_draft,
)

TODAY = date(2024, 11, 15)


def make_draft(
    distance_km="5.5",
    duration=("0", "30", "15"),
    avg_hr="145",
    completed_at=date(2024, 11, 10),
) -> WorkoutEntryDraft:
    return WorkoutEntryDraft(
        distance_km=distance_km,
        duration=DurationInput(*duration),
        avg_hr=avg_hr,
        completed_at=completed_at,
    )


class TestValidDraft:
    """A fully valid draft produces no errors."""

    def test_valid_draft(self):
        errors = validate_workout_draft(make_draft(), today=TODAY)
        assert errors.is_valid
        assert errors.to_dict() == {}

    def test_today_is_allowed(self):
        errors = validate_workout_draft(make_draft(completed_at=TODAY), today=TODAY)
        assert errors.completed_at is None


class TestDistanceRule:

    @pytest.mark.parametrize("value", ["0.1", "0.10", " 0.1 ", "42.195"])
    def test_accepts_at_or_above_minimum(self, value):
        errors = validate_workout_draft(make_draft(distance_km=value), today=TODAY)
        assert errors.distance is None

    @pytest.mark.parametrize("value", ["0.09", "0", "-1", "", "abc", "nan", "inf"])
    def test_rejects_below_minimum_or_unparseable(self, value):
        errors = validate_workout_draft(make_draft(distance_km=value), today=TODAY)
        assert errors.distance == DISTANCE_TOO_SMALL

    def test_parse_distance_km(self):
        assert str(parse_distance_km("5.5")) == "5.5"
        assert parse_distance_km("five") is None


class TestDurationRule:

    def test_sixty_seconds_is_enough(self):
        errors = validate_workout_draft(make_draft(duration=("0", "1", "0")), today=TODAY)
        assert errors.duration is None

    def test_fifty_nine_seconds_is_too_short(self):
        errors = validate_workout_draft(make_draft(duration=("0", "0", "59")), today=TODAY)
        assert errors.duration == DURATION_TOO_SHORT

    def test_blank_fields_count_as_zero(self):
        errors = validate_workout_draft(make_draft(duration=("", "", "")), today=TODAY)
        assert errors.duration == DURATION_TOO_SHORT

    def test_fields_are_not_range_checked_individually(self):
        # 90 seconds typed into the seconds box is still 90 seconds
        errors = validate_workout_draft(make_draft(duration=("", "", "90")), today=TODAY)
        assert errors.duration is None

    def test_fractional_text_uses_leading_integer(self):
        assert DurationInput("1.5", "", "").total_seconds == 3600
        assert DurationInput("", "1.5", "").total_seconds == 60
        assert DurationInput("", " 2min", "").total_seconds == 120


class TestHeartRateRule:

    @pytest.mark.parametrize("value", ["40", "220", "150"])
    def test_accepts_inclusive_range(self, value):
        errors = validate_workout_draft(make_draft(avg_hr=value), today=TODAY)
        assert errors.avg_hr is None

    @pytest.mark.parametrize("value", ["39", "221", "", "fast", "145.5"])
    def test_rejects_outside_range(self, value):
        errors = validate_workout_draft(make_draft(avg_hr=value), today=TODAY)
        assert errors.avg_hr == HEART_RATE_OUT_OF_RANGE


class TestDateRule:

    def test_missing_date(self):
        errors = validate_workout_draft(make_draft(completed_at=None), today=TODAY)
        assert errors.completed_at == DATE_REQUIRED

    def test_future_date(self):
        errors = validate_workout_draft(make_draft(completed_at=date(2024, 11, 16)), today=TODAY)
        assert errors.completed_at == DATE_IN_FUTURE

    def test_text_date_is_treated_as_missing(self):
        errors = validate_workout_draft(make_draft(completed_at="2024-11-10"), today=TODAY)
        assert errors.completed_at == DATE_REQUIRED

    def test_datetime_compares_by_day(self):
        errors = validate_workout_draft(
            make_draft(completed_at=datetime(2024, 11, 15, 23, 30)), today=TODAY
        )
        assert errors.completed_at is None


class TestAllRules:

    def test_reports_every_failure_at_once(self):
        draft = make_draft(
            distance_km="0",
            duration=("0", "0", "10"),
            avg_hr="300",
            completed_at=None,
        )
        errors = validate_workout_draft(draft, today=TODAY)

        assert not errors.is_valid
        assert set(errors.to_dict()) == {"distance", "duration", "avg_hr", "completed_at"}

    def test_validation_is_repeatable(self):
        draft = make_draft(distance_km="0.05", avg_hr="39")
        first = validate_workout_draft(draft, today=TODAY)
        second = validate_workout_draft(draft, today=TODAY)
        assert first == second
        assert draft.distance_km == "0.05"
