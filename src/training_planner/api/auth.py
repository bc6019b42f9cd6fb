"""Resolve the caller from the bearer token issued by Supabase Auth."""

import logging
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from ..db.client import get_supabase_client
from ..exceptions import AuthenticationError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Represents the currently authenticated user.

    Attributes:
        user_id: Supabase auth user id.
        email: User's email address.
    """

    user_id: str
    email: str = ""


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    client: Client = Depends(get_supabase_client),
) -> CurrentUser:
    """FastAPI dependency to get the current authenticated user.

    Runs in the threadpool; the Supabase auth call is blocking.

    Raises:
        AuthenticationError (401): If no token is provided or Supabase
            rejects it.
    """
    if credentials is None:
        raise AuthenticationError()

    try:
        response = client.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.warning(f"Token validation failed: {e}")
        raise AuthenticationError("Invalid or expired token") from e

    user = getattr(response, "user", None)
    if user is None:
        raise AuthenticationError("Invalid or expired token")
    return CurrentUser(user_id=str(user.id), email=user.email or "")
