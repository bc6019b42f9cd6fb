"""Workout request/response models for the REST API."""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WorkoutStatus(str, Enum):
    """Lifecycle status of a workout."""
    PLANNED = "planned"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    CANCELED = "canceled"


class WorkoutRating(str, Enum):
    """How the athlete felt the workout went."""
    TOO_EASY = "too_easy"
    JUST_RIGHT = "just_right"
    TOO_HARD = "too_hard"


class StepPart(str, Enum):
    """Parts a workout can be split into."""
    WARMUP = "warmup"
    MAIN = "main"
    COOLDOWN = "cooldown"
    SEGMENT = "segment"


class WorkoutStepInput(BaseModel):
    """One step of a workout; needs a distance, a duration, or both."""
    part: StepPart
    distance_m: Optional[int] = Field(None, ge=100, le=100000)
    duration_s: Optional[int] = Field(None, ge=60, le=21600)
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_distance_or_duration(self) -> "WorkoutStepInput":
        if self.distance_m is None and self.duration_s is None:
            raise ValueError("At least one of distance_m or duration_s is required")
        return self


class CreateWorkoutRequest(BaseModel):
    """Request body of POST /api/v1/workouts (planned or completed)."""
    training_type_code: str = Field(..., min_length=1, max_length=50)
    planned_date: date
    position: int = Field(..., ge=1)
    planned_distance_m: int = Field(..., ge=100, le=100000)
    planned_duration_s: int = Field(..., ge=60, le=21600)
    steps: List[WorkoutStepInput] = Field(..., min_length=1)

    status: Optional[WorkoutStatus] = None
    distance_m: Optional[int] = Field(None, ge=100, le=100000)
    duration_s: Optional[int] = Field(None, ge=60, le=21600)
    avg_hr_bpm: Optional[int] = Field(None, ge=0, le=240)
    completed_at: Optional[datetime] = None
    rating: Optional[WorkoutRating] = None

    @model_validator(mode="after")
    def check_completed_metrics(self) -> "CreateWorkoutRequest":
        if self.status not in (None, WorkoutStatus.PLANNED, WorkoutStatus.COMPLETED):
            raise ValueError("New workouts must be planned or completed")
        if self.status == WorkoutStatus.COMPLETED:
            missing = [
                name
                for name in ("distance_m", "duration_s", "avg_hr_bpm", "completed_at")
                if getattr(self, name) is None
            ]
            if missing:
                raise ValueError(
                    "Completed workouts require distance_m, duration_s, avg_hr_bpm, "
                    f"and completed_at (missing: {', '.join(missing)})"
                )
        return self

    def to_row(self, user_id: str) -> dict:
        """Build the row inserted into the workouts table."""
        return {
            "user_id": user_id,
            "training_type_code": self.training_type_code,
            "planned_date": self.planned_date.isoformat(),
            "position": self.position,
            "planned_distance_m": self.planned_distance_m,
            "planned_duration_s": self.planned_duration_s,
            "steps_jsonb": [step.model_dump(exclude_none=True, mode="json") for step in self.steps],
            "status": (self.status or WorkoutStatus.PLANNED).value,
            "origin": "manual",
            "distance_m": self.distance_m,
            "duration_s": self.duration_s,
            "avg_hr_bpm": self.avg_hr_bpm,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "rating": self.rating.value if self.rating else None,
        }


class WorkoutStep(BaseModel):
    """A stored workout step."""
    part: StepPart
    distance_m: Optional[int] = None
    duration_s: Optional[int] = None
    notes: Optional[str] = None


class WorkoutDetail(BaseModel):
    """Full workout as returned by the API."""
    id: str
    user_id: str
    training_type_code: str
    planned_date: date
    position: int
    planned_distance_m: int
    planned_duration_s: int
    steps: List[WorkoutStep]
    status: WorkoutStatus
    origin: str = "manual"
    distance_m: Optional[int] = None
    duration_s: Optional[int] = None
    avg_hr_bpm: Optional[int] = None
    avg_pace_s_per_km: Optional[float] = None
    completed_at: Optional[datetime] = None
    rating: Optional[WorkoutRating] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "WorkoutDetail":
        """Convert from a workouts table row (steps live in ``steps_jsonb``)."""
        data = dict(row)
        data["steps"] = data.pop("steps_jsonb", None) or data.get("steps") or []
        return cls.model_validate(data)


class WorkoutLast3Item(BaseModel):
    """Minimal payload of the last-three-workouts listing."""
    id: str
    completed_at: Optional[datetime] = None
    training_type_code: str


class WorkoutOrigin(str, Enum):
    """Where a workout came from."""
    MANUAL = "manual"
    AI = "ai"
    IMPORT = "import"


SORTABLE_FIELDS = (
    "planned_date",
    "position",
    "completed_at",
    "created_at",
    "planned_distance_m",
    "planned_duration_s",
    "distance_m",
    "duration_s",
)


class WorkoutListFilters(BaseModel):
    """Filters, sorting and pagination of GET /api/v1/workouts."""
    status: Optional[WorkoutStatus] = None
    training_type_codes: Optional[List[str]] = None
    origin: Optional[WorkoutOrigin] = None
    rating: Optional[WorkoutRating] = None
    planned_date_gte: Optional[date] = None
    planned_date_lte: Optional[date] = None
    completed_at_gte: Optional[datetime] = None
    completed_at_lte: Optional[datetime] = None
    sort: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(20, ge=1, le=100)

    @field_validator("training_type_codes", mode="before")
    @classmethod
    def split_codes(cls, v):
        """Accept the comma-separated form used in the query string."""
        if isinstance(v, str):
            v = [code.strip() for code in v.split(",") if code.strip()]
        return v or None

    @field_validator("sort")
    @classmethod
    def validate_sort(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        for part in v.split(","):
            column, _, direction = part.strip().partition(":")
            if column not in SORTABLE_FIELDS:
                raise ValueError(f"Cannot sort by '{column}'")
            if direction not in ("", "asc", "desc"):
                raise ValueError(f"Sort direction must be asc or desc, got '{direction}'")
        return v

    @property
    def ordering(self) -> List[Tuple[str, bool]]:
        """(column, descending) pairs; the default depends on the status filter."""
        sort = self.sort or (
            "completed_at:desc" if self.status == WorkoutStatus.COMPLETED
            else "planned_date:asc,position:asc"
        )
        ordering = []
        for part in sort.split(","):
            column, _, direction = part.strip().partition(":")
            ordering.append((column, direction == "desc"))
        return ordering

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class WorkoutSummary(BaseModel):
    """Row of the workout listing (no steps)."""
    id: str
    training_type_code: str
    planned_date: date
    position: int
    planned_distance_m: int
    planned_duration_s: int
    status: WorkoutStatus
    origin: WorkoutOrigin = WorkoutOrigin.MANUAL
    rating: Optional[WorkoutRating] = None
    avg_pace_s_per_km: Optional[float] = None


class UpdateWorkoutRequest(BaseModel):
    """Partial update of PATCH /api/v1/workouts/{id}; unknown fields are rejected."""
    model_config = ConfigDict(extra="forbid")

    planned_distance_m: Optional[int] = Field(None, ge=100, le=100000)
    planned_duration_s: Optional[int] = Field(None, ge=60, le=21600)
    steps: Optional[List[WorkoutStepInput]] = Field(None, min_length=1)
    distance_m: Optional[int] = Field(None, ge=100, le=100000)
    duration_s: Optional[int] = Field(None, ge=60, le=21600)
    avg_hr_bpm: Optional[int] = Field(None, ge=0, le=240)
    completed_at: Optional[datetime] = None
    rating: Optional[WorkoutRating] = None
    status: Optional[WorkoutStatus] = None

    def to_changes(self) -> dict:
        """Only the fields the client actually sent, in column form."""
        changes = self.model_dump(exclude_unset=True, mode="json")
        if "steps" in changes:
            changes["steps_jsonb"] = [
                {k: v for k, v in step.items() if v is not None} for step in changes.pop("steps")
            ]
        return changes


class CompleteWorkoutRequest(BaseModel):
    """Body of POST /api/v1/workouts/{id}/complete."""
    distance_m: int = Field(..., ge=100, le=100000)
    duration_s: int = Field(..., ge=60, le=21600)
    avg_hr_bpm: int = Field(..., ge=0, le=240)
    completed_at: datetime
    rating: Optional[WorkoutRating] = None

    def to_changes(self) -> dict:
        return {
            "status": WorkoutStatus.COMPLETED.value,
            "distance_m": self.distance_m,
            "duration_s": self.duration_s,
            "avg_hr_bpm": self.avg_hr_bpm,
            "completed_at": self.completed_at.isoformat(),
            "rating": self.rating.value if self.rating else None,
        }


class RateWorkoutRequest(BaseModel):
    """Body of POST /api/v1/workouts/{id}/rate."""
    rating: WorkoutRating
