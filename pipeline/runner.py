"""Shared matching pipeline runner module.

Each trigger (one posting event or one on-demand request) runs as its
own unit of work: matching commits first, then notifications run in a
separate unit of work so a dispatch problem never rolls back matches.
Used by main.py, the web application and the RQ worker.
"""

import time
import uuid
import logging
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from core.app_context import AppContext
from core.config_loader import load_config
from core.matcher import JobPostingDTO, MatchedJobPostDTO
from database.database import get_engine
from database.uow import matching_uow


logger = logging.getLogger(__name__)


@dataclass
class PostingEventResult:
    """Result of processing one posting event (streaming mode)."""
    success: bool
    job_post_id: Optional[str]
    matches_count: int = 0
    notified_count: int = 0
    error: Optional[str] = None
    execution_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'job_post_id': self.job_post_id,
            'matches_count': self.matches_count,
            'notified_count': self.notified_count,
            'error': self.error,
            'execution_time': self.execution_time,
        }


@dataclass
class OnDemandRunResult:
    """Result of one on-demand refresh for a user."""
    success: bool
    user_id: str
    matches: List[MatchedJobPostDTO] = field(default_factory=list)
    notified_count: int = 0
    catalog_error: Optional[str] = None
    error: Optional[str] = None
    execution_time: float = 0.0


def run_posting_event(ctx: AppContext, payload: Dict[str, Any]) -> PostingEventResult:
    """Match one posting event against every search profile and notify.

    Args:
        ctx: Application context with config and wired services
        payload: Posting feed payload (camelCase keys)

    Returns:
        PostingEventResult with counts
    """
    start = time.time()
    posting = JobPostingDTO.from_payload(payload)

    if not ctx.config.matching.enabled:
        logger.info("Matching disabled in config; ignoring posting event")
        return PostingEventResult(success=True, job_post_id=posting.id, error="Matching disabled in config")

    try:
        with matching_uow() as repo:
            created = ctx.matching_service.match_new_posting(repo, posting)
            matches_count = len(created)
    except Exception as e:
        logger.error(f"Posting event {posting.id} failed: {e}", exc_info=True)
        return PostingEventResult(
            success=False,
            job_post_id=posting.id,
            error=str(e),
            execution_time=time.time() - start
        )

    notified_count = 0
    if matches_count:
        notified_count = _notify_for_posting(ctx, posting.id)

    elapsed = time.time() - start
    logger.info(
        f"Posting event {posting.id}: {matches_count} matches, "
        f"{notified_count} notifications in {elapsed:.2f}s"
    )
    return PostingEventResult(
        success=True,
        job_post_id=posting.id,
        matches_count=matches_count,
        notified_count=notified_count,
        execution_time=elapsed
    )


def run_on_demand(ctx: AppContext, user_id: str, timeout: Optional[float] = None) -> OnDemandRunResult:
    """Refresh matches for one user from the catalog and notify.

    Returns only matches created by this call. `catalog_error` is set
    when the catalog could not be queried.
    """
    start = time.time()

    try:
        with matching_uow() as repo:
            outcome = ctx.matching_service.match_for_user(repo, user_id, timeout=timeout)
            matches = [MatchedJobPostDTO.from_orm(m) for m in outcome.matches]
    except Exception as e:
        logger.error(f"On-demand matching for user {user_id} failed: {e}", exc_info=True)
        return OnDemandRunResult(
            success=False,
            user_id=user_id,
            error=str(e),
            execution_time=time.time() - start
        )

    notified_count = 0
    if matches:
        notified_count = _notify_user(ctx, user_id, [m.id for m in matches])

    return OnDemandRunResult(
        success=outcome.catalog_error is None,
        user_id=user_id,
        matches=matches,
        notified_count=notified_count,
        catalog_error=outcome.catalog_error,
        execution_time=time.time() - start
    )


def _notify_for_posting(ctx: AppContext, job_post_id: str) -> int:
    if ctx.notification_service is None:
        logger.info("Notifications disabled; skipping notification step")
        return 0
    try:
        with matching_uow() as repo:
            return ctx.notification_service.notify_for_posting(repo, job_post_id)
    except Exception as e:
        logger.error(f"Notification step failed for job post {job_post_id}: {e}", exc_info=True)
        return 0


def _notify_user(ctx: AppContext, user_id: str, match_ids: List[str]) -> int:
    if ctx.notification_service is None:
        logger.info("Notifications disabled; skipping notification step")
        return 0
    try:
        with matching_uow() as repo:
            matches = repo.matches.get_by_ids([_as_uuid(i) for i in match_ids])
            return ctx.notification_service.notify(repo, user_id, matches)
    except Exception as e:
        logger.error(f"Notification step failed for user {user_id}: {e}", exc_info=True)
        return 0


def _as_uuid(value):
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def process_posting_event_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """RQ task entry point: build a context from config and process one event."""
    config = load_config()
    get_engine(config.database.url)
    ctx = AppContext.build(config)
    try:
        return run_posting_event(ctx, payload).to_dict()
    finally:
        ctx.close()
