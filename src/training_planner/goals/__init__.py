"""Single-goal management workflow."""

from ..exceptions import GoalValidationError
from .controller import GoalAction, GoalController
from .form import GoalChoice, GoalFormDraft, GoalFormErrors, to_upsert_payload, validate_goal_draft

__all__ = [
    "GoalAction",
    "GoalChoice",
    "GoalController",
    "GoalFormDraft",
    "GoalFormErrors",
    "GoalValidationError",
    "to_upsert_payload",
    "validate_goal_draft",
]
