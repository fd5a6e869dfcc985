#!/usr/bin/env python3
"""
Match service - business logic for a user's match history.
"""

import uuid
import logging
from typing import List

from sqlalchemy.orm import Session

from core.matcher import MatchedJobPostDTO
from database.repository import MatchingRepository
from ..models.responses import MatchResponse, ScoreBreakdownResponse
from ..utils import safe_float, safe_datetime_iso
from ..exceptions import MatchNotFoundException

logger = logging.getLogger(__name__)


def to_match_response(match) -> MatchResponse:
    """Build the API view of a match (ORM row or MatchedJobPostDTO)."""
    return MatchResponse(
        match_id=str(match.id),
        user_id=match.user_id,
        job_post_id=match.job_post_id,
        job_title=match.job_title,
        job_description=match.job_description,
        location=match.location,
        employment_types=list(match.employment_types or []),
        required_skills=list(match.required_skills or []),
        matched_skills=list(match.matched_skills or []),
        salary_min=safe_float(match.salary_min),
        salary_max=safe_float(match.salary_max),
        salary_currency=match.salary_currency,
        posted_date=safe_datetime_iso(match.posted_date),
        expiry_date=safe_datetime_iso(match.expiry_date),
        breakdown=ScoreBreakdownResponse(
            composite=match.match_score,
            skills=match.skills_score,
            salary=match.salary_score,
            location=match.location_score,
            employment=match.employment_score,
            title=match.title_score,
        ),
        is_viewed=bool(match.is_viewed),
        is_notified=bool(match.is_notified),
        created_at=safe_datetime_iso(match.created_at),
    )


class MatchService:
    """Service for reading and managing one user's matches."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MatchingRepository(db)

    def get_matches(self, user_id: str) -> List[MatchResponse]:
        """All matches for the user, newest first."""
        return [to_match_response(m) for m in self.repo.matches.get_matches_for_user(user_id)]

    def get_unviewed_matches(self, user_id: str) -> List[MatchResponse]:
        return [to_match_response(m) for m in self.repo.matches.get_unviewed_matches(user_id)]

    def get_match(self, user_id: str, match_id: str) -> MatchResponse:
        """
        One of the user's matches.

        Raises:
            MatchNotFoundException: unknown id, or the match belongs to another user
        """
        match = self.repo.matches.get_by_id(uuid.UUID(match_id))
        if match is None or match.user_id != user_id:
            raise MatchNotFoundException(f"Match {match_id} not found")
        return to_match_response(match)

    def mark_viewed(self, user_id: str, match_id: str) -> MatchResponse:
        """
        Mark one of the user's matches as viewed.

        Raises:
            MatchNotFoundException: unknown id, or the match belongs to another user
        """
        match = self.repo.matches.mark_viewed(user_id, uuid.UUID(match_id))
        if match is None:
            raise MatchNotFoundException(f"Match {match_id} not found")
        response = to_match_response(match)
        self.db.commit()
        return response

    def delete_all(self, user_id: str) -> int:
        count = self.repo.matches.delete_for_user(user_id)
        self.db.commit()
        return count

    @staticmethod
    def from_dtos(matches: List[MatchedJobPostDTO]) -> List[MatchResponse]:
        return [to_match_response(m) for m in matches]
