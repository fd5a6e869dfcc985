#!/usr/bin/env python3
"""
Persistence Operations - Threshold, dedupe and insert-once for matches.

A (user, job post) pair is stored at most once. The existence check
avoids needless writes; the unique constraint on matched_job_post
settles races between concurrent triggers, and a losing insert is
treated as a duplicate rather than an error.
"""

import logging
from typing import Optional

from database.models import MatchedJobPost
from core.scorer.models import ScoreBreakdown

logger = logging.getLogger(__name__)

MIN_MATCH_SCORE = 30.0


def _to_float(value):
    """Convert value to native Python float for database compatibility."""
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def build_matched_job_post(user_id: str, posting, breakdown: ScoreBreakdown) -> MatchedJobPost:
    """Snapshot the posting and the full breakdown into a new match record."""
    salary = posting.salary
    return MatchedJobPost(
        user_id=user_id,
        job_post_id=str(posting.id),
        job_title=posting.title,
        job_description=posting.description,
        location=posting.location,
        employment_types=list(posting.employment_types or []),
        required_skills=list(posting.skills or []),
        salary_min=_to_float(salary.min) if salary else None,
        salary_max=_to_float(salary.max) if salary else None,
        salary_currency=salary.currency if salary else None,
        posted_date=posting.posted_date,
        expiry_date=posting.expiry_date,
        match_score=breakdown.composite,
        skills_score=breakdown.skills,
        salary_score=breakdown.salary,
        location_score=breakdown.location,
        employment_score=breakdown.employment,
        title_score=breakdown.title,
        matched_skills=list(breakdown.matched_skills),
        is_viewed=False,
        is_notified=False,
    )


def try_persist_match(
    repo,
    user_id: str,
    posting,
    breakdown: ScoreBreakdown,
    min_score: float = MIN_MATCH_SCORE
) -> Optional[MatchedJobPost]:
    """
    Persist a scored match if it qualifies and is new.

    Args:
        repo: MatchingRepository bound to the caller's session
        user_id: Owner of the search profile that was scored
        posting: JobPostingDTO that was scored
        breakdown: ScoreBreakdown for the pair
        min_score: Composite threshold below which nothing is written

    Returns:
        The new MatchedJobPost, or None when below threshold or already stored
    """
    if breakdown.composite < min_score:
        logger.debug(
            f"Score {breakdown.composite:.1f} below threshold {min_score} "
            f"for user {user_id}, job post {posting.id}"
        )
        return None

    job_post_id = str(posting.id)
    if repo.matches.exists(user_id, job_post_id):
        logger.debug(f"Match already exists for user {user_id}, job post {job_post_id}")
        return None

    match = build_matched_job_post(user_id, posting, breakdown)
    if not repo.matches.insert_if_absent(match):
        return None

    logger.info(
        f"Saved match for user {user_id}, job post {job_post_id} "
        f"with score {breakdown.composite:.1f}"
    )
    return match
