"""
Goal controller: the upsert-or-delete rule behind the goal screen.

- "health" with a stored goal deletes it,
- "health" without one does nothing,
- a distance goal is validated and then created or replaced.
"""

import logging
from enum import Enum
from typing import Optional

from ..clients.goals import GoalClient
from ..exceptions import GoalValidationError
from .form import GoalChoice, GoalFormDraft, to_upsert_payload, validate_goal_draft

logger = logging.getLogger(__name__)


class GoalAction(str, Enum):
    """What a save ended up doing."""
    SAVED = "saved"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


class GoalController:
    """Keeps the current goal in sync with the API."""

    def __init__(self, client: GoalClient):
        self.client = client
        self.goal: Optional[dict] = None
        self.is_loaded = False
        self.is_submitting = False

    async def load(self) -> Optional[dict]:
        self.goal = await self.client.fetch_goal()
        self.is_loaded = True
        return self.goal

    async def save(self, draft: GoalFormDraft) -> GoalAction:
        """
        Apply the form to the stored goal.

        Raises:
            GoalValidationError: A distance goal failed validation.
            ApiClientError: The API call failed.
        """
        if draft.choice == GoalChoice.HEALTH:
            if self.goal is None:
                return GoalAction.UNCHANGED
            await self.delete()
            return GoalAction.DELETED

        errors = validate_goal_draft(draft)
        if not errors.is_valid:
            raise GoalValidationError(errors)

        self.is_submitting = True
        try:
            self.goal = await self.client.save_goal(to_upsert_payload(draft))
        finally:
            self.is_submitting = False
        logger.info(f"Saved goal: {self.goal.get('target_distance_m')} m by {self.goal.get('due_date')}")
        return GoalAction.SAVED

    async def delete(self) -> None:
        self.is_submitting = True
        try:
            await self.client.delete_goal()
        finally:
            self.is_submitting = False
        self.goal = None
