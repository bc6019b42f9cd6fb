"""
Base HTTP client for the Training Planner REST API.

Used by the onboarding and goal workflows to talk to the backend the same
way the browser would: JSON bodies, ``{"data": ...}`` envelopes on success
and ``{"error": {"code", "message"}}`` on failure.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import get_settings
from ..exceptions import ApiClientError

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "No connection to the server. Check your connection and try again."


class ApiClient:
    """
    Thin async wrapper around httpx for the Training Planner API.

    The underlying ``httpx.AsyncClient`` is created lazily and can be
    supplied by the caller (tests pass one with a mock transport).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.access_token = access_token
        self.timeout = timeout if timeout is not None else settings.request_timeout_s
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def get_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def _send(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send a request, turning transport failures into ApiClientError."""
        client = await self._get_client()
        try:
            return await client.request(
                method,
                f"{self.base_url}{endpoint}",
                headers=self.get_headers(),
                json=json_data,
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {endpoint} failed before a response: {e}")
            raise ApiClientError(NETWORK_ERROR_MESSAGE) from e

    @staticmethod
    def _raise_for_error(response: httpx.Response, action: str) -> None:
        """Raise ApiClientError for non-2xx responses, using the error envelope if any."""
        if response.is_success:
            return
        try:
            error = response.json().get("error") or {}
        except (ValueError, AttributeError):
            error = {}
        raise ApiClientError(
            error.get("message") or f"Failed to {action}: {response.status_code}",
            status_code=response.status_code,
            code=error.get("code"),
        )

    @staticmethod
    def _unwrap_data(response: httpx.Response) -> Any:
        """Return the ``data`` member of a success envelope."""
        try:
            body = response.json()
        except ValueError as e:
            raise ApiClientError(
                "Invalid response from server",
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict) or "data" not in body:
            raise ApiClientError(
                "Invalid response from server",
                status_code=response.status_code,
            )
        return body["data"]
