#!/usr/bin/env python3
"""
Posting endpoints - ingest posting events from the job catalog.
"""

import logging
from fastapi import APIRouter, Depends

from core.app_context import AppContext
from pipeline.queue import PostingEventQueue
from ..dependencies import get_app_context, get_posting_queue
from ..models.requests import PostingEventRequest
from ..models.responses import PostingEventResponse
from ..exceptions import ServiceException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/postings", tags=["postings"])


@router.post("/events", response_model=PostingEventResponse, status_code=202)
def ingest_posting_event(
    event: PostingEventRequest,
    ctx: AppContext = Depends(get_app_context),
    queue: PostingEventQueue = Depends(get_posting_queue)
):
    """
    Accept a newly published (or updated) posting and match it against
    every search profile.

    Enqueued on Redis when the async queue is available, otherwise
    processed before responding.
    """
    payload = event.model_dump()
    outcome = queue.submit(payload, ctx=ctx)

    result = outcome.get('result')
    if result is not None and not result.get('success'):
        raise ServiceException(
            f"Posting event {event.id} failed: {result.get('error')}"
        )

    return PostingEventResponse(
        success=True,
        mode=outcome['mode'],
        job_id=outcome.get('job_id'),
        result=result
    )
