"""
Tests for the onboarding view.

Tests cover:
- Step title, submit label and button state
- Field errors and clearing them on edit
- Notices and the final redirect
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from training_planner.clients.workouts import GENERIC_SUBMISSION_ERROR
from training_planner.exceptions import WorkoutSubmissionError
from training_planner.models.onboarding import DurationInput, WorkoutEntryDraft
from training_planner.onboarding.controller import OnboardingController
from training_planner.onboarding.validator import DATE_REQUIRED, DISTANCE_TOO_SMALL
from training_planner.onboarding.view import NoticeLog, OnboardingView, create_onboarding_view

TODAY = date(2024, 11, 15)


def make_draft(distance_km="5.5", day=10) -> WorkoutEntryDraft:
    return WorkoutEntryDraft(
        distance_km=distance_km,
        duration=DurationInput("0", "30", "15"),
        avg_hr="145",
        completed_at=date(2024, 11, day),
    )


@pytest.fixture
def client():
    mock = MagicMock()
    mock.submit_workouts = AsyncMock(return_value=[{"id": "w1"}, {"id": "w2"}, {"id": "w3"}])
    return mock


@pytest.fixture
def redirect():
    return MagicMock()


@pytest.fixture
def notices():
    return NoticeLog()


@pytest.fixture
def view(client, redirect, notices):
    controller = OnboardingController(client, today=lambda: TODAY)
    return OnboardingView(controller, next_url="/calendar", redirect=redirect, notifier=notices)


class TestViewState:

    def test_initial_state(self, view):
        assert view.step_title == "Workout 1 of 3"
        assert view.submit_label == "Next"
        assert view.is_submit_enabled
        assert view.errors.is_valid

    @pytest.mark.asyncio
    async def test_last_step_label(self, view):
        await view.handle_submit(make_draft(day=8))
        await view.handle_submit(make_draft(day=9))

        assert view.step_title == "Workout 3 of 3"
        assert view.submit_label == "Finish"

    @pytest.mark.asyncio
    async def test_saving_label_while_submitting(self, view):
        view.controller.session.current_step = 3
        view.controller.session.is_submitting = True

        assert view.submit_label == "Saving..."
        assert not view.is_submit_enabled


class TestHandleSubmit:

    @pytest.mark.asyncio
    async def test_full_flow_redirects_exactly_once(self, view, client, redirect, notices):
        results = [await view.handle_submit(make_draft(day=day)) for day in (8, 9, 10)]

        assert results == [True, True, True]
        redirect.assert_called_once_with("/calendar")
        client.submit_workouts.assert_awaited_once()
        assert notices.notices == [
            ("success", "Workout 1 saved!"),
            ("success", "Workout 2 saved!"),
        ]
        assert not view.is_submit_enabled

    @pytest.mark.asyncio
    async def test_validation_errors_are_shown_per_field(self, view, notices):
        accepted = await view.handle_submit(make_draft(distance_km="0.05"))

        assert not accepted
        assert view.errors.distance == DISTANCE_TOO_SMALL
        assert view.step_title == "Workout 1 of 3"
        assert notices.notices == []

    @pytest.mark.asyncio
    async def test_editing_a_field_clears_only_its_error(self, view):
        draft = make_draft(distance_km="0")
        draft.avg_hr = "300"
        await view.handle_submit(draft)

        view.edit_field("distance")

        assert view.errors.distance is None
        assert view.errors.avg_hr is not None

    def test_editing_unknown_field_raises(self, view):
        with pytest.raises(KeyError):
            view.edit_field("pace")

    @pytest.mark.asyncio
    async def test_submission_failure_shows_one_error_and_no_redirect(
        self, view, client, redirect, notices
    ):
        client.submit_workouts.side_effect = WorkoutSubmissionError(
            "Failed to save workout 2: Server error", step=2, http_status=500
        )
        await view.handle_submit(make_draft(day=8))
        await view.handle_submit(make_draft(day=9))

        accepted = await view.handle_submit(make_draft(day=10))

        assert not accepted
        redirect.assert_not_called()
        assert notices.errors == ["Failed to save workout 2: Server error"]
        assert view.step_title == "Workout 3 of 3"
        assert view.is_submit_enabled

    @pytest.mark.asyncio
    async def test_submit_after_done_shows_error(self, view, redirect, notices):
        for day in (8, 9, 10):
            await view.handle_submit(make_draft(day=day))

        accepted = await view.handle_submit(make_draft())

        assert not accepted
        redirect.assert_called_once()
        assert notices.errors == ["Onboarding is already completed"]

    @pytest.mark.asyncio
    async def test_text_date_is_a_field_error(self, view, redirect, notices):
        draft = make_draft()
        draft.completed_at = "2024-11-10"

        accepted = await view.handle_submit(draft)

        assert not accepted
        assert view.errors.completed_at == DATE_REQUIRED
        assert notices.notices == []
        redirect.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_error_shows_generic_notice(self, view, redirect, notices):
        view.controller.submit_step = AsyncMock(side_effect=TypeError("unsupported operand"))

        accepted = await view.handle_submit(make_draft())

        assert not accepted
        assert notices.notices == [("error", GENERIC_SUBMISSION_ERROR)]
        redirect.assert_not_called()


class TestCreateOnboardingView:

    def test_uses_configured_next_url(self, redirect):
        settings = MagicMock(onboarding_next_url="/plan", api_base_url="http://api", request_timeout_s=5.0)
        with patch("training_planner.onboarding.view.get_settings", return_value=settings), \
             patch("training_planner.clients.base.get_settings", return_value=settings):
            view = create_onboarding_view(redirect, access_token="token")

        assert view.next_url == "/plan"
        assert view.controller.client.base_url == "http://api"
        assert view.controller.client.get_headers()["Authorization"] == "Bearer token"
