"""
Onboarding view: the layer a UI binds to.

Owns the per-field error record and the user-visible notices, and performs
the final redirect. Every failure path ends in exactly one notice.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple

from ..clients.workouts import GENERIC_SUBMISSION_ERROR, WorkoutsClient
from ..config import get_settings
from ..exceptions import (
    OnboardingValidationError,
    TrainingPlannerError,
    WorkoutSubmissionError,
)
from ..models.onboarding import (
    TOTAL_STEPS,
    OnboardingState,
    WorkoutEntryDraft,
    WorkoutFormErrors,
)
from .controller import OnboardingController

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Something that can show toast-style messages."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


@dataclass
class NoticeLog:
    """Notifier that records notices in order; used by headless callers."""
    notices: List[Tuple[str, str]] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.notices.append(("success", message))

    def error(self, message: str) -> None:
        self.notices.append(("error", message))

    @property
    def errors(self) -> List[str]:
        return [message for level, message in self.notices if level == "error"]


class OnboardingView:
    """
    Orchestrates the onboarding wizard for one user.

    Args:
        controller: Step controller holding the session
        next_url: Destination after all three workouts are saved
        redirect: Callable performing the navigation
        notifier: Where success/error notices go
    """

    def __init__(
        self,
        controller: OnboardingController,
        next_url: str,
        redirect: Callable[[str], None],
        notifier: Optional[Notifier] = None,
    ):
        self.controller = controller
        self.next_url = next_url
        self.redirect = redirect
        self.notifier = notifier or NoticeLog()
        self.errors = WorkoutFormErrors()

    @property
    def step_title(self) -> str:
        return f"Workout {self.controller.current_step} of {TOTAL_STEPS}"

    @property
    def submit_label(self) -> str:
        if self.controller.is_submitting:
            return "Saving..."
        return "Finish" if self.controller.current_step == TOTAL_STEPS else "Next"

    @property
    def is_submit_enabled(self) -> bool:
        return self.controller.state not in (OnboardingState.SUBMITTING, OnboardingState.DONE)

    def edit_field(self, field_name: str) -> None:
        """Clear a field's error as soon as the user changes it."""
        self.errors.clear(field_name)

    async def handle_submit(self, draft: WorkoutEntryDraft) -> bool:
        """
        Submit the form for the current step.

        Returns:
            True if the draft was accepted (step advanced or onboarding done).
        """
        step = self.controller.current_step
        try:
            state = await self.controller.submit_step(draft)
        except OnboardingValidationError as e:
            self.errors = e.errors
            return False
        except WorkoutSubmissionError as e:
            logger.error(f"Error submitting workouts: {e.message}")
            self.notifier.error(e.message)
            return False
        except TrainingPlannerError as e:
            logger.warning(f"Onboarding submit rejected: {e.message}")
            self.notifier.error(e.message)
            return False
        except Exception:
            logger.exception(f"Unexpected error handling onboarding step {step}")
            self.notifier.error(GENERIC_SUBMISSION_ERROR)
            return False

        self.errors = WorkoutFormErrors()
        if state == OnboardingState.DONE:
            self.redirect(self.next_url)
        else:
            self.notifier.success(f"Workout {step} saved!")
        return True


def create_onboarding_view(
    redirect: Callable[[str], None],
    access_token: Optional[str] = None,
    notifier: Optional[Notifier] = None,
    next_url: Optional[str] = None,
) -> OnboardingView:
    """Build a view wired to the configured API and redirect destination."""
    settings = get_settings()
    controller = OnboardingController(WorkoutsClient(access_token=access_token))
    return OnboardingView(
        controller,
        next_url=next_url or settings.onboarding_next_url,
        redirect=redirect,
        notifier=notifier,
    )
