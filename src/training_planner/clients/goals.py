"""User goal API client."""

import logging
from typing import Any, Dict, Optional

from .base import ApiClient

logger = logging.getLogger(__name__)

USER_GOAL_ENDPOINT = "/api/v1/user-goal"


class GoalClient(ApiClient):
    """Client for GET/PUT/DELETE /api/v1/user-goal."""

    async def fetch_goal(self) -> Optional[Dict[str, Any]]:
        """Return the current goal, or None when the user has none."""
        response = await self._send("GET", USER_GOAL_ENDPOINT)
        if response.status_code == 404:
            return None
        self._raise_for_error(response, "fetch goal")
        return self._unwrap_data(response)

    async def save_goal(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create or replace the goal; returns the stored goal."""
        response = await self._send("PUT", USER_GOAL_ENDPOINT, json_data=payload)
        self._raise_for_error(response, "save goal")
        return self._unwrap_data(response)

    async def delete_goal(self) -> None:
        response = await self._send("DELETE", USER_GOAL_ENDPOINT)
        self._raise_for_error(response, "delete goal")
        logger.info("Deleted user goal")
