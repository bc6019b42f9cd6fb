"""Onboarding wizard: collects a new user's three most recent workouts."""

from .controller import OnboardingController, to_persist_command
from .validator import validate_workout_draft
from .view import NoticeLog, Notifier, OnboardingView, create_onboarding_view

__all__ = [
    "NoticeLog",
    "Notifier",
    "OnboardingController",
    "OnboardingView",
    "create_onboarding_view",
    "to_persist_command",
    "validate_workout_draft",
]
