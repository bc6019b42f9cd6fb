"""Calendar view models: workouts grouped by planned date."""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, model_validator

from .workouts import WorkoutStatus


class CalendarQuery(BaseModel):
    """Query of GET /api/v1/calendar; both ends are inclusive."""
    start: dt.date
    end: dt.date
    status: Optional[WorkoutStatus] = None

    @model_validator(mode="after")
    def check_range(self) -> "CalendarQuery":
        if self.end < self.start:
            raise ValueError("End date must be >= start date")
        return self


class CalendarWorkoutItem(BaseModel):
    id: str
    training_type_code: str
    status: WorkoutStatus
    position: int


class CalendarDay(BaseModel):
    date: dt.date
    workouts: List[CalendarWorkoutItem]


class CalendarRange(BaseModel):
    start: dt.date
    end: dt.date


class Calendar(BaseModel):
    """Days that have at least one workout, in date order."""
    range: CalendarRange
    days: List[CalendarDay]
