"""Pipeline execution modules for the match engine."""

from .runner import (
    run_posting_event,
    run_on_demand,
    process_posting_event_task,
    PostingEventResult,
    OnDemandRunResult,
)

__all__ = [
    'run_posting_event',
    'run_on_demand',
    'process_posting_event_task',
    'PostingEventResult',
    'OnDemandRunResult',
]
