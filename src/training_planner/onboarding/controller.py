"""
Onboarding step controller.

Drives the 3-step wizard: each valid draft becomes a persist command; the
first two are only collected, the third triggers one concurrent submission
of the whole batch. Nothing is sent to the server before step 3, so a user
who abandons the wizard leaves no partial onboarding behind.

State machine::

    STEP_1 -> STEP_2 -> STEP_3 -> SUBMITTING -> DONE
                           ^           |
                           +-- failure-+
"""

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from ..clients.workouts import GENERIC_SUBMISSION_ERROR, WorkoutsClient
from ..exceptions import (
    OnboardingCompletedError,
    OnboardingValidationError,
    SubmissionInProgressError,
    WorkoutSubmissionError,
)
from ..models.onboarding import (
    OnboardingSession,
    OnboardingState,
    WorkoutEntryDraft,
    WorkoutPersistCommand,
)
from .validator import utc_today, validate_workout_draft

logger = logging.getLogger(__name__)


def to_persist_command(draft: WorkoutEntryDraft) -> WorkoutPersistCommand:
    """
    Convert a validated draft into the command sent to the workouts API.

    km are converted with decimal arithmetic so "0.1" is exactly 100 m.
    """
    distance_m = (Decimal(draft.distance_km.strip()) * 1000).to_integral_value(rounding=ROUND_HALF_UP)
    return WorkoutPersistCommand.for_completed_date(
        distance_m=int(distance_m),
        duration_s=draft.duration.total_seconds,
        avg_hr_bpm=int(draft.avg_hr.strip()),
        completed_on=draft.completed_at,
    )


class OnboardingController:
    """Holds the onboarding session and applies step transitions."""

    def __init__(
        self,
        client: WorkoutsClient,
        session: Optional[OnboardingSession] = None,
        today: Callable[[], date] = utc_today,
    ):
        self.client = client
        self.session = session or OnboardingSession()
        self._today = today

    @property
    def state(self) -> OnboardingState:
        return self.session.state

    @property
    def current_step(self) -> int:
        return self.session.current_step

    @property
    def is_submitting(self) -> bool:
        return self.session.is_submitting

    async def submit_step(self, draft: WorkoutEntryDraft) -> OnboardingState:
        """
        Handle a form submission for the current step.

        Returns:
            The state after the transition (STEP_2, STEP_3 or DONE).

        Raises:
            OnboardingCompletedError: The wizard already finished.
            SubmissionInProgressError: The batch is in flight (double submit).
            OnboardingValidationError: The draft broke at least one rule.
            WorkoutSubmissionError: The batch could not be saved; the session
                is back on step 3 and may be retried.
        """
        session = self.session
        if session.is_done:
            raise OnboardingCompletedError()
        if session.is_submitting:
            raise SubmissionInProgressError()

        errors = validate_workout_draft(draft, today=self._today())
        if not errors.is_valid:
            raise OnboardingValidationError(errors)

        session.commands.append(to_persist_command(draft))

        if not session.is_last_step:
            session.current_step += 1
            logger.debug(f"Onboarding advanced to step {session.current_step}")
            return session.state

        session.is_submitting = True
        try:
            await self.client.submit_workouts(list(session.commands))
        except WorkoutSubmissionError:
            self._rollback_last_step()
            raise
        except Exception as e:
            self._rollback_last_step()
            logger.exception("Unexpected error during onboarding submission")
            raise WorkoutSubmissionError(GENERIC_SUBMISSION_ERROR) from e
        except BaseException:
            # Cancelled while in flight
            self._rollback_last_step()
            raise

        session.is_submitting = False
        session.is_done = True
        logger.info("Onboarding completed")
        return session.state

    def _rollback_last_step(self) -> None:
        """Return to step 3 with only the first two commands kept."""
        self.session.commands.pop()
        self.session.is_submitting = False
