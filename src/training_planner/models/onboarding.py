"""Onboarding data models: form drafts, error records and persist commands."""

import re
from dataclasses import dataclass, field, fields
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple


ONBOARDING_TRAINING_TYPE = "easy"
ONBOARDING_RATING = "just_right"
ONBOARDING_POSITION = 1
TOTAL_STEPS = 3


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _int_or_zero(value: str) -> int:
    """
    Parse the leading integer of a text field, like the form does.

    "1.5" reads as 1; blanks and non-numeric text count as 0.
    """
    match = _LEADING_INT.match(value) if isinstance(value, str) else None
    return int(match.group(1)) if match else 0


class OnboardingState(str, Enum):
    """States of the onboarding wizard."""
    STEP_1 = "step_1"
    STEP_2 = "step_2"
    STEP_3 = "step_3"
    SUBMITTING = "submitting"
    DONE = "done"


@dataclass
class DurationInput:
    """
    Elapsed time as three independent text fields.

    The 0-23 / 0-59 ranges are only hints for the input widgets; only the
    derived total is validated.
    """
    hours: str = ""
    minutes: str = ""
    seconds: str = ""

    @property
    def total_seconds(self) -> int:
        return (
            _int_or_zero(self.hours) * 3600
            + _int_or_zero(self.minutes) * 60
            + _int_or_zero(self.seconds)
        )

    @classmethod
    def from_seconds(cls, total: int) -> "DurationInput":
        hours, rest = divmod(total, 3600)
        minutes, seconds = divmod(rest, 60)
        return cls(str(hours), str(minutes), str(seconds))


@dataclass
class WorkoutEntryDraft:
    """User-entered values for one onboarding workout."""
    distance_km: str = ""
    duration: DurationInput = field(default_factory=DurationInput)
    avg_hr: str = ""
    completed_at: Optional[date] = None


@dataclass
class WorkoutFormErrors:
    """One optional error message per form field."""
    distance: Optional[str] = None
    duration: Optional[str] = None
    avg_hr: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return not self.to_dict()

    def clear(self, field_name: str) -> None:
        """Drop the error for a single field once the user edits it."""
        if field_name not in self.field_names():
            raise KeyError(field_name)
        setattr(self, field_name, None)

    def to_dict(self) -> Dict[str, str]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class WorkoutStep:
    """A single step of a workout as stored in the steps JSON column."""
    part: str
    distance_m: Optional[int] = None
    duration_s: Optional[int] = None

    def to_dict(self) -> dict:
        data: dict = {"part": self.part}
        if self.distance_m is not None:
            data["distance_m"] = self.distance_m
        if self.duration_s is not None:
            data["duration_s"] = self.duration_s
        return data


@dataclass(frozen=True)
class WorkoutPersistCommand:
    """
    API-ready representation of one completed onboarding workout.

    Planned values mirror the actual ones: onboarding workouts are recorded
    after the fact, so the plan is whatever was run.
    """
    distance_m: int
    duration_s: int
    avg_hr_bpm: int
    completed_at: datetime
    training_type_code: str = ONBOARDING_TRAINING_TYPE
    position: int = ONBOARDING_POSITION
    status: str = "completed"
    rating: str = ONBOARDING_RATING

    @property
    def planned_date(self) -> str:
        return self.completed_at.date().isoformat()

    @property
    def steps(self) -> List[WorkoutStep]:
        return [WorkoutStep(part="main", distance_m=self.distance_m, duration_s=self.duration_s)]

    @classmethod
    def for_completed_date(
        cls,
        distance_m: int,
        duration_s: int,
        avg_hr_bpm: int,
        completed_on: date,
    ) -> "WorkoutPersistCommand":
        """Build a command timestamped at midnight UTC of the given day."""
        return cls(
            distance_m=distance_m,
            duration_s=duration_s,
            avg_hr_bpm=avg_hr_bpm,
            completed_at=datetime.combine(completed_on, time.min, tzinfo=timezone.utc),
        )

    def to_dict(self) -> dict:
        """Convert to the JSON body of POST /api/v1/workouts."""
        return {
            "training_type_code": self.training_type_code,
            "planned_date": self.planned_date,
            "position": self.position,
            "planned_distance_m": self.distance_m,
            "planned_duration_s": self.duration_s,
            "steps": [step.to_dict() for step in self.steps],
            "status": self.status,
            "distance_m": self.distance_m,
            "duration_s": self.duration_s,
            "avg_hr_bpm": self.avg_hr_bpm,
            "completed_at": self.completed_at.isoformat(),
            "rating": self.rating,
        }


@dataclass
class OnboardingSession:
    """
    Wizard state for one onboarding run.

    ``commands`` holds ``current_step - 1`` entries while steps 1-2 are in
    progress and exactly ``TOTAL_STEPS`` while a submission is in flight.
    """
    current_step: int = 1
    commands: List[WorkoutPersistCommand] = field(default_factory=list)
    is_submitting: bool = False
    is_done: bool = False

    @property
    def state(self) -> OnboardingState:
        if self.is_done:
            return OnboardingState.DONE
        if self.is_submitting:
            return OnboardingState.SUBMITTING
        return OnboardingState(f"step_{self.current_step}")

    @property
    def is_last_step(self) -> bool:
        return self.current_step == TOTAL_STEPS
