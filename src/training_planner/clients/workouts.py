"""Workouts API client, including the batch submission used by onboarding."""

import asyncio
import logging
from typing import Any, Dict, List, Sequence

from ..exceptions import ApiClientError, WorkoutSubmissionError
from ..models.onboarding import WorkoutPersistCommand
from .base import ApiClient

logger = logging.getLogger(__name__)

WORKOUTS_ENDPOINT = "/api/v1/workouts"
GENERIC_SUBMISSION_ERROR = "Could not save your workouts. Please try again."


class WorkoutsClient(ApiClient):
    """Client for the /api/v1/workouts endpoints."""

    async def create_workout(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create one workout.

        Args:
            payload: Request body (see CreateWorkoutRequest)

        Returns:
            The created workout from the ``data`` envelope.

        Raises:
            ApiClientError: On network failure, non-2xx status, or a body
                without a ``data`` member.
        """
        response = await self._send("POST", WORKOUTS_ENDPOINT, json_data=payload)
        self._raise_for_error(response, "save workout")
        data = self._unwrap_data(response)
        if not data:
            raise ApiClientError("Invalid response from server", status_code=response.status_code)
        return data

    async def submit_workouts(
        self,
        commands: Sequence[WorkoutPersistCommand],
    ) -> List[Dict[str, Any]]:
        """
        Send every command as an independent create request, concurrently.

        All requests are awaited before deciding; the outcome is either the
        created workouts in submission order, or one WorkoutSubmissionError
        describing the first failing step.

        Raises:
            WorkoutSubmissionError: If any request failed.
        """
        results = await asyncio.gather(
            *(self.create_workout(command.to_dict()) for command in commands),
            return_exceptions=True,
        )

        created: List[Dict[str, Any]] = []
        for step, result in enumerate(results, start=1):
            if isinstance(result, ApiClientError):
                logger.warning(
                    f"Workout {step}/{len(commands)} was rejected "
                    f"(status={result.status_code}): {result.message}"
                )
                raise WorkoutSubmissionError(
                    f"Failed to save workout {step}: {result.message}",
                    step=step,
                    http_status=result.status_code,
                ) from result
            if isinstance(result, Exception):
                logger.error(f"Unexpected error while saving workout {step}: {result!r}")
                raise WorkoutSubmissionError(GENERIC_SUBMISSION_ERROR, step=step) from result
            if isinstance(result, BaseException):
                raise result
            created.append(result)

        logger.info(f"Saved {len(created)} workouts")
        return created
