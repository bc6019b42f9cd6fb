"""Goal form draft, validation and payload mapping."""

from dataclasses import dataclass, fields
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Optional

from ..models.goals import GoalType
from ..onboarding.validator import utc_today

MIN_TARGET_KM = Decimal("0.1")
MAX_TARGET_KM = Decimal("1000")
MAX_NOTES_LENGTH = 500


class GoalChoice(str, Enum):
    """What the user picked on the goal screen."""
    DISTANCE = "distance"
    HEALTH = "health"  # training for health, no measurable goal


@dataclass
class GoalFormDraft:
    choice: GoalChoice = GoalChoice.DISTANCE
    target_distance_km: str = ""
    due_date: Optional[date] = None
    notes: str = ""

    @classmethod
    def from_goal(cls, goal: Optional[dict]) -> "GoalFormDraft":
        """Prefill the form from a stored goal (None means "health")."""
        if not goal:
            return cls(choice=GoalChoice.HEALTH)
        due_date = goal["due_date"]
        return cls(
            choice=GoalChoice.DISTANCE,
            target_distance_km=str(Decimal(goal["target_distance_m"]) / 1000),
            due_date=date.fromisoformat(due_date) if isinstance(due_date, str) else due_date,
            notes=goal.get("notes") or "",
        )


@dataclass
class GoalFormErrors:
    distance: Optional[str] = None
    due_date: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return not self.to_dict()

    def to_dict(self) -> Dict[str, str]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _parse_km(value: str) -> Optional[Decimal]:
    try:
        km = Decimal(value.strip())
    except (AttributeError, InvalidOperation):
        return None
    return km if km.is_finite() else None


def validate_goal_draft(draft: GoalFormDraft, today: Optional[date] = None) -> GoalFormErrors:
    """Validate a distance goal. A "health" choice has nothing to check."""
    errors = GoalFormErrors()
    if draft.choice == GoalChoice.HEALTH:
        return errors

    today = today or utc_today()

    km = _parse_km(draft.target_distance_km)
    if km is None or not MIN_TARGET_KM <= km <= MAX_TARGET_KM:
        errors.distance = f"Distance must be between {MIN_TARGET_KM} and {MAX_TARGET_KM} km"

    if draft.due_date is None:
        errors.due_date = "Date is required"
    elif draft.due_date < today:
        errors.due_date = "Date cannot be in the past"

    if len(draft.notes) > MAX_NOTES_LENGTH:
        errors.notes = f"Notes can be at most {MAX_NOTES_LENGTH} characters"

    return errors


def to_upsert_payload(draft: GoalFormDraft) -> dict:
    """Map a validated distance draft to the PUT /api/v1/user-goal body."""
    target_m = (_parse_km(draft.target_distance_km) * 1000).to_integral_value(rounding=ROUND_HALF_UP)
    payload = {
        "goal_type": GoalType.DISTANCE_BY_DATE.value,
        "target_distance_m": int(target_m),
        "due_date": draft.due_date.isoformat(),
    }
    notes = draft.notes.strip()
    if notes:
        payload["notes"] = notes
    return payload
