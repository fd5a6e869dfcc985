"""Posting-event queue with a synchronous fallback.

When async mode is enabled and Redis answers a ping, events are enqueued
on RQ and processed by pipeline.worker; otherwise they are processed
inline in the caller's process.
"""

import logging
from typing import Any, Dict, Optional

from redis import Redis
from rq import Queue, Retry

from core.config_loader import QueueConfig
from pipeline.runner import process_posting_event_task, run_posting_event

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = 'redis://localhost:6379/0'


class PostingEventQueue:
    def __init__(self, config: Optional[QueueConfig] = None):
        self.config = config or QueueConfig()
        self.redis_conn = None
        self.queue = None
        self.async_mode = False

        if not self.config.use_async_queue:
            logger.info("Async queue disabled via config. Using sync mode.")
            return

        redis_url = self.config.redis_url or DEFAULT_REDIS_URL
        try:
            self.redis_conn = Redis.from_url(redis_url)
            self.redis_conn.ping()
            self.queue = Queue(self.config.queue_name, connection=self.redis_conn)
            self.async_mode = True
            logger.info(f"Posting event queue connected to Redis ({self.config.queue_name})")
        except Exception as e:
            logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
            self.redis_conn = None
            self.queue = None

    def submit(self, payload: Dict[str, Any], ctx=None) -> Dict[str, Any]:
        """
        Enqueue a posting event, or process it now in sync mode.

        Args:
            payload: Posting feed payload
            ctx: AppContext used for inline processing

        Returns:
            {"mode": "queued", "job_id": ...} or {"mode": "sync", "result": {...}}
        """
        if self.async_mode:
            job = self.queue.enqueue(
                process_posting_event_task,
                payload,
                job_timeout='5m',
                result_ttl=86400,
                retry=Retry(max=3, interval=[10, 30, 60])
            )
            logger.info(f"Queued posting event {payload.get('id')} as job {job.id}")
            return {'mode': 'queued', 'job_id': job.id}

        if ctx is None:
            return {'mode': 'sync', 'result': process_posting_event_task(payload)}
        return {'mode': 'sync', 'result': run_posting_event(ctx, payload).to_dict()}
