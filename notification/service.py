#!/usr/bin/env python3
"""
Notification Service - Subscription-gated match notifications.

Given newly persisted matches, decides which users are entitled to a push
notification and dispatches one per un-notified match:
- Only PREMIUM users with an ACTIVE, unexpired subscription are notified
- Each payload carries the stored per-factor breakdown verbatim
- A successful dispatch sets `is_notified`; a failed one is logged and skipped

Usage:
    from notification.service import NotificationService

    service = NotificationService(channel, config.notifications)
    with matching_uow() as repo:
        sent = service.notify(repo, user_id, new_matches)
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional

from core.config_loader import NotificationConfig
from database.models import MatchedJobPost, PlanType, SubscriptionStatus, ensure_utc
from notification.channels import NotificationChannel, NotificationChannelFactory
from notification.message_builder import NotificationMessageBuilder

logger = logging.getLogger(__name__)


def _as_text(value) -> str:
    return str(getattr(value, "value", value) or "").upper()


class NotificationService:
    """
    Notification gate between persisted matches and a delivery channel.

    The repository is passed per call; the service holds only the channel
    and config so it can be shared across units of work.
    """

    def __init__(
        self,
        channel: Optional[NotificationChannel] = None,
        config: Optional[NotificationConfig] = None
    ):
        """
        Initialize notification service.

        Args:
            channel: Delivery channel; built from config when omitted
            config: NotificationConfig (channel type, webhook URL, timeouts)
        """
        self.config = config or NotificationConfig()
        self.channel = channel or NotificationChannelFactory.from_config(self.config)

    def is_eligible(self, repo, user_id: str, now: Optional[datetime] = None) -> bool:
        """True when the user holds an active, unexpired premium subscription."""
        subscription = repo.subscriptions.get_by_user_id(user_id)
        if subscription is None:
            logger.debug(f"User {user_id} has no subscription; skipping notifications")
            return False
        if _as_text(subscription.plan_type) != PlanType.PREMIUM.value:
            logger.debug(f"User {user_id} is on {subscription.plan_type}; skipping notifications")
            return False
        if _as_text(subscription.status) != SubscriptionStatus.ACTIVE.value:
            logger.debug(f"User {user_id} subscription is {subscription.status}; skipping notifications")
            return False

        expires_at = ensure_utc(subscription.expires_at)
        now = now or datetime.now(timezone.utc)
        if expires_at is not None and expires_at < now:
            logger.debug(f"User {user_id} subscription expired at {expires_at}; skipping notifications")
            return False
        return True

    def notify(self, repo, user_id: str, matches: List[MatchedJobPost], now: Optional[datetime] = None) -> int:
        """
        Dispatch one notification per un-notified match of a single user.

        Returns:
            Number of notifications dispatched successfully
        """
        if not self.config.enabled or not matches:
            return 0
        if not self.is_eligible(repo, user_id, now=now):
            return 0

        sent = 0
        for match in matches:
            if match.user_id != user_id:
                logger.warning(f"Match {match.id} belongs to {match.user_id}, not {user_id}; skipping")
                continue
            if match.is_notified:
                continue
            if self._dispatch(match):
                repo.matches.mark_notified(match)
                sent += 1

        logger.info(f"Sent {sent} of {len(matches)} match notifications to user {user_id}")
        return sent

    def notify_for_posting(self, repo, job_post_id: str, now: Optional[datetime] = None) -> int:
        """Notify every user holding an un-notified match for one job post."""
        by_user: Dict[str, List[MatchedJobPost]] = defaultdict(list)
        for match in repo.matches.get_unnotified_for_job_post(job_post_id):
            by_user[match.user_id].append(match)

        total = 0
        for user_id, user_matches in by_user.items():
            total += self.notify(repo, user_id, user_matches, now=now)
        return total

    def _dispatch(self, match: MatchedJobPost) -> bool:
        try:
            payload = NotificationMessageBuilder.build_payload(match, self.config.notification_type)
            delivered = self.channel.send(
                payload.user_id,
                payload.title,
                payload.body,
                payload.type,
                NotificationMessageBuilder.metadata_dict(payload)
            )
        except Exception:
            logger.exception(f"Notification dispatch failed for match {match.id}")
            return False

        if not delivered:
            logger.error(f"Notification dispatch failed for match {match.id} via {self.channel.channel_type}")
            return False
        return True
