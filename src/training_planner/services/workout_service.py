"""
Workout service: business rules for creating, listing and moving workouts
through their lifecycle.

Lifecycle actions::

    complete: any status except completed -> completed (metrics set)
    skip:     any status except skipped   -> skipped   (metrics cleared)
    cancel:   any status except canceled  -> canceled  (metrics cleared)
    rate:     completed only              -> rating updated
"""

import logging
from itertools import groupby
from typing import List, Optional, Tuple

from postgrest.exceptions import APIError

from ..db.repositories import TrainingTypeRepository, WorkoutRepository
from ..db.repositories.base import FOREIGN_KEY_VIOLATION, UNIQUE_VIOLATION
from ..exceptions import (
    DatabaseError,
    DuplicatePositionError,
    InvalidStatusTransitionError,
    TrainingTypeNotFoundError,
    WorkoutInUseError,
    WorkoutNotFoundError,
)
from ..models.calendar import Calendar, CalendarDay, CalendarQuery, CalendarRange, CalendarWorkoutItem
from ..models.workouts import (
    CompleteWorkoutRequest,
    CreateWorkoutRequest,
    RateWorkoutRequest,
    UpdateWorkoutRequest,
    WorkoutDetail,
    WorkoutLast3Item,
    WorkoutListFilters,
    WorkoutStatus,
    WorkoutSummary,
)

logger = logging.getLogger(__name__)

# Columns cleared when a workout is skipped or canceled
CLEARED_METRICS = {
    "distance_m": None,
    "duration_s": None,
    "avg_hr_bpm": None,
    "completed_at": None,
    "rating": None,
}


class WorkoutService:
    """Creates workouts for a user and answers history queries."""

    def __init__(
        self,
        workouts: WorkoutRepository,
        training_types: TrainingTypeRepository,
    ):
        self.workouts = workouts
        self.training_types = training_types

    def create_workout(self, user_id: str, request: CreateWorkoutRequest) -> WorkoutDetail:
        """
        Create a planned or completed workout.

        Raises:
            TrainingTypeNotFoundError: Unknown ``training_type_code``.
            DuplicatePositionError: The user already has a workout at that
                date and position.
            DatabaseError: Any other database failure.
        """
        if self.training_types.get(request.training_type_code) is None:
            raise TrainingTypeNotFoundError(request.training_type_code)

        try:
            row = self.workouts.insert(request.to_row(user_id))
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicatePositionError(request.planned_date.isoformat(), request.position) from e
            raise

        if row is None:
            raise DatabaseError("Workout insert returned no row", operation="workouts.insert")

        logger.info(
            f"Created {row.get('status')} workout {row.get('id')} "
            f"({request.training_type_code}, {request.planned_date})"
        )
        return WorkoutDetail.from_row(row)

    def list_workouts(
        self,
        user_id: str,
        filters: WorkoutListFilters,
    ) -> Tuple[List[WorkoutSummary], int]:
        """One page of the user's workouts and the total number of matches."""
        rows, total = self.workouts.list(user_id, filters)
        return [WorkoutSummary.model_validate(row) for row in rows], total

    def get_workout(self, user_id: str, workout_id: str) -> WorkoutDetail:
        """
        Raises:
            WorkoutNotFoundError: Missing, or owned by another user.
        """
        return WorkoutDetail.from_row(self._get_row(user_id, workout_id))

    def update_workout(
        self,
        user_id: str,
        workout_id: str,
        request: UpdateWorkoutRequest,
    ) -> WorkoutDetail:
        """Apply a partial update; an empty body returns the workout unchanged."""
        changes = request.to_changes()
        if not changes:
            return self.get_workout(user_id, workout_id)
        self._get_row(user_id, workout_id)
        return self._apply(user_id, workout_id, changes)

    def delete_workout(self, user_id: str, workout_id: str) -> None:
        """
        Raises:
            WorkoutNotFoundError: Missing, or owned by another user.
            WorkoutInUseError: Another record still references the workout.
        """
        self._get_row(user_id, workout_id)
        try:
            self.workouts.delete(user_id, workout_id)
        except APIError as e:
            if e.code == FOREIGN_KEY_VIOLATION:
                raise WorkoutInUseError(workout_id) from e
            raise
        logger.info(f"Deleted workout {workout_id}")

    # ========================================================================
    # Lifecycle actions
    # ========================================================================

    def complete_workout(
        self,
        user_id: str,
        workout_id: str,
        request: CompleteWorkoutRequest,
    ) -> WorkoutDetail:
        self._require_not(user_id, workout_id, WorkoutStatus.COMPLETED)
        return self._apply(user_id, workout_id, request.to_changes())

    def skip_workout(self, user_id: str, workout_id: str) -> WorkoutDetail:
        self._require_not(user_id, workout_id, WorkoutStatus.SKIPPED)
        return self._apply(
            user_id, workout_id, {"status": WorkoutStatus.SKIPPED.value, **CLEARED_METRICS}
        )

    def cancel_workout(self, user_id: str, workout_id: str) -> WorkoutDetail:
        self._require_not(user_id, workout_id, WorkoutStatus.CANCELED)
        return self._apply(
            user_id, workout_id, {"status": WorkoutStatus.CANCELED.value, **CLEARED_METRICS}
        )

    def rate_workout(
        self,
        user_id: str,
        workout_id: str,
        request: RateWorkoutRequest,
    ) -> WorkoutDetail:
        """Only completed workouts can be rated."""
        row = self._get_row(user_id, workout_id)
        if row.get("status") != WorkoutStatus.COMPLETED.value:
            raise InvalidStatusTransitionError(
                "Only completed workouts can be rated", current_status=row.get("status")
            )
        return self._apply(user_id, workout_id, {"rating": request.rating.value})

    # ========================================================================
    # Queries
    # ========================================================================

    def get_last_three(
        self,
        user_id: str,
        training_type_code: Optional[str] = None,
    ) -> List[WorkoutLast3Item]:
        """The user's three most recent completed workouts, newest first."""
        rows = self.workouts.list_last_completed(user_id, training_type_code)
        return [WorkoutLast3Item.model_validate(row) for row in rows]

    def get_calendar(self, user_id: str, query: CalendarQuery) -> Calendar:
        """Workouts in the range grouped by planned date; empty days are omitted."""
        rows = self.workouts.list_between(
            user_id,
            query.start,
            query.end,
            query.status.value if query.status else None,
        )
        days = [
            CalendarDay(
                date=planned_date,
                workouts=[CalendarWorkoutItem.model_validate(row) for row in day_rows],
            )
            for planned_date, day_rows in groupby(rows, key=lambda row: row["planned_date"])
        ]
        return Calendar(range=CalendarRange(start=query.start, end=query.end), days=days)

    # ========================================================================
    # Helpers
    # ========================================================================

    def _get_row(self, user_id: str, workout_id: str) -> dict:
        row = self.workouts.get(user_id, workout_id)
        if row is None:
            raise WorkoutNotFoundError(workout_id)
        return row

    def _require_not(self, user_id: str, workout_id: str, status: WorkoutStatus) -> None:
        row = self._get_row(user_id, workout_id)
        if row.get("status") == status.value:
            raise InvalidStatusTransitionError(
                f"Workout is already {status.value}", current_status=status.value
            )

    def _apply(self, user_id: str, workout_id: str, changes: dict) -> WorkoutDetail:
        row = self.workouts.update(user_id, workout_id, changes)
        if row is None:
            # Deleted between the read and the write
            raise WorkoutNotFoundError(workout_id)
        logger.info(f"Updated workout {workout_id}: {sorted(changes)}")
        return WorkoutDetail.from_row(row)
