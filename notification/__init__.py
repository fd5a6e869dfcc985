"""
Notification Module

Subscription-gated notifications for new job matches.

Usage:
    from notification import NotificationService, NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('in_app')
    service = NotificationService(channel)
    service.notify(repo, user_id, new_matches)
"""

from notification.channels import (
    NotificationChannel,
    WebhookChannel,
    InAppChannel,
    NotificationChannelFactory,
)

from notification.message_builder import (
    NotificationMessageBuilder,
    MatchNotificationPayload,
)

from notification.service import NotificationService

__all__ = [
    # Channels
    'NotificationChannel',
    'WebhookChannel',
    'InAppChannel',
    'NotificationChannelFactory',
    # Payloads
    'NotificationMessageBuilder',
    'MatchNotificationPayload',
    # Service
    'NotificationService',
]
