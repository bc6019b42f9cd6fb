"""
Training types API route.

The listing is small and rarely changes, so it is served with a strong ETag
and answers conditional requests with 304 Not Modified.
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Response
from fastapi.responses import JSONResponse

from ..deps import get_training_type_service
from ..etag import compute_etag, etag_matches
from ...config import Settings, get_settings
from ...exceptions import AuthenticationError, ForbiddenError
from ...services.training_type_service import TrainingTypeService

logger = logging.getLogger(__name__)

router = APIRouter()

CACHE_CONTROL = "private, max-age=3600, stale-while-revalidate=86400"


def _parse_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


def _require_internal_token(token: Optional[str], settings: Settings) -> None:
    """Only internal callers may see inactive training types."""
    if not token:
        raise AuthenticationError("Missing credentials")
    expected = settings.internal_admin_token
    if not expected or not secrets.compare_digest(token, expected):
        raise ForbiddenError()


@router.get("")
def list_training_types(
    include_inactive: Optional[str] = Query(None),
    x_internal_token: Optional[str] = Header(None),
    if_none_match: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    service: TrainingTypeService = Depends(get_training_type_service),
):
    """
    List training types.

    Active types only unless ``include_inactive=true`` is sent together with
    a valid ``X-Internal-Token`` header (401 when missing, 403 when wrong).
    """
    show_inactive = _parse_flag(include_inactive)
    if show_inactive:
        _require_internal_token(x_internal_token, settings)

    items = [item.model_dump(mode="json") for item in service.list_training_types(show_inactive)]

    # Tag only the data, not the pagination metadata
    etag = compute_etag(items)
    headers = {"ETag": etag, "Cache-Control": CACHE_CONTROL}

    if etag_matches(if_none_match, etag):
        return Response(status_code=304, headers=headers)

    payload = {
        "data": items,
        "page": 1,
        "per_page": 20,
        "total": len(items),
    }
    return JSONResponse(content=payload, headers=headers)
