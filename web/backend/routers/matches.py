#!/usr/bin/env python3
"""
Match endpoints - refresh, view and manage a user's job matches.
"""

import uuid
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.app_context import AppContext
from pipeline.runner import run_on_demand
from ..dependencies import get_db, get_app_context
from ..services.match_service import MatchService
from ..models.responses import (
    MatchesResponse,
    MatchDetailResponse,
    RefreshMatchesResponse,
    MarkViewedResponse,
    DeleteMatchesResponse
)
from ..exceptions import CatalogUnavailableException, ServiceException

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/users/{user_id}/matches", tags=["matches"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": str(exc), "type": "RateLimitExceeded"}
    )


def validate_uuid(match_id: str) -> str:
    """Validate that match_id is a valid UUID format."""
    try:
        uuid.UUID(match_id)
        return match_id
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid match_id format: {match_id}. Must be a valid UUID."
        )


@router.post("/refresh", response_model=RefreshMatchesResponse)
@limiter.limit("30/minute")
def refresh_matches(
    request: Request,
    user_id: str,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Run on-demand matching for the user against the live catalog.

    Returns only matches created by this call; an immediate second call
    with an unchanged catalog returns an empty list. Responds 502 when the
    catalog cannot be reached, so "nothing new" and "could not check" are
    distinguishable.
    """
    result = run_on_demand(ctx, user_id)

    if result.catalog_error:
        raise CatalogUnavailableException(f"Job catalog unavailable: {result.catalog_error}")
    if not result.success:
        raise ServiceException(result.error or "On-demand matching failed")

    matches = MatchService.from_dtos(result.matches)
    return RefreshMatchesResponse(
        success=True,
        count=len(matches),
        matches=matches,
        notified_count=result.notified_count
    )


@router.get("", response_model=MatchesResponse)
def get_matches(user_id: str, db: Session = Depends(get_db)):
    """Match history for the user, newest first."""
    matches = MatchService(db).get_matches(user_id)
    return MatchesResponse(success=True, count=len(matches), matches=matches)


@router.get("/unviewed", response_model=MatchesResponse)
def get_unviewed_matches(user_id: str, db: Session = Depends(get_db)):
    """Matches the user has not opened yet, newest first."""
    matches = MatchService(db).get_unviewed_matches(user_id)
    return MatchesResponse(success=True, count=len(matches), matches=matches)


@router.get("/{match_id}", response_model=MatchDetailResponse)
def get_match(
    user_id: str,
    match_id: str = Depends(validate_uuid),
    db: Session = Depends(get_db)
):
    """One match with its full breakdown (404 if it does not belong to the user)."""
    match = MatchService(db).get_match(user_id, match_id)
    return MatchDetailResponse(success=True, match=match)


@router.post("/{match_id}/viewed", response_model=MarkViewedResponse)
def mark_match_viewed(
    user_id: str,
    match_id: str = Depends(validate_uuid),
    db: Session = Depends(get_db)
):
    """Mark one match as viewed (404 if it does not belong to the user)."""
    match = MatchService(db).mark_viewed(user_id, match_id)
    return MarkViewedResponse(success=True, match=match)


@router.delete("", response_model=DeleteMatchesResponse)
def delete_matches(user_id: str, db: Session = Depends(get_db)):
    """Delete every match for the user."""
    deleted = MatchService(db).delete_all(user_id)
    return DeleteMatchesResponse(success=True, deleted_count=deleted)
