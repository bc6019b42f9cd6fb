"""
Validation rules for a single onboarding workout.

Every rule is evaluated on each call so the form can show all problems at
once; nothing here touches state outside the returned error record.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..models.onboarding import WorkoutEntryDraft, WorkoutFormErrors

MIN_DISTANCE_KM = Decimal("0.1")
MIN_DURATION_S = 60
MIN_AVG_HR = 40
MAX_AVG_HR = 220

DISTANCE_TOO_SMALL = "Distance must be at least 0.1 km"
DURATION_TOO_SHORT = "Duration must be at least 60 seconds"
HEART_RATE_OUT_OF_RANGE = f"Heart rate must be between {MIN_AVG_HR} and {MAX_AVG_HR} bpm"
DATE_REQUIRED = "Workout date is required"
DATE_IN_FUTURE = "Workout date must be in the past"


def parse_distance_km(value: str) -> Optional[Decimal]:
    """Parse a kilometre string into a finite Decimal, or None."""
    try:
        distance = Decimal(value.strip())
    except (AttributeError, InvalidOperation):
        return None
    return distance if distance.is_finite() else None


def parse_heart_rate(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return None


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def validate_workout_draft(
    draft: WorkoutEntryDraft,
    today: Optional[date] = None,
) -> WorkoutFormErrors:
    """
    Check a workout draft against the onboarding rules.

    Args:
        draft: The values entered in the form
        today: Reference date for the "not in the future" rule. Defaults to
            the current UTC date.

    Returns:
        A WorkoutFormErrors record; ``is_valid`` is True when no rule failed.
    """
    today = today or utc_today()
    errors = WorkoutFormErrors()

    distance = parse_distance_km(draft.distance_km)
    if distance is None or distance < MIN_DISTANCE_KM:
        errors.distance = DISTANCE_TOO_SMALL

    if draft.duration.total_seconds < MIN_DURATION_S:
        errors.duration = DURATION_TOO_SHORT

    heart_rate = parse_heart_rate(draft.avg_hr)
    if heart_rate is None or not MIN_AVG_HR <= heart_rate <= MAX_AVG_HR:
        errors.avg_hr = HEART_RATE_OUT_OF_RANGE

    completed_on = draft.completed_at
    # Compare calendar days only
    if isinstance(completed_on, datetime):
        completed_on = completed_on.date()
    if not isinstance(completed_on, date):
        errors.completed_at = DATE_REQUIRED
    elif completed_on > today:
        errors.completed_at = DATE_IN_FUTURE

    return errors
