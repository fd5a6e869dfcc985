#!/usr/bin/env python3
"""
Notification Channels - Delivery transports for match notifications.

Every channel implements the same send() contract so the notification
gate can dispatch without knowing the transport.

Usage:
    from notification.channels import NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('webhook', webhook_url=url)
    channel.send(user_id, title, body, 'JOB_MATCH', metadata)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import logging
import ipaddress
import socket
import urllib.parse

import requests

logger = logging.getLogger(__name__)


def _validate_webhook_url(url: Optional[str]) -> bool:
    """
    Validate webhook URL to prevent SSRF.

    Checks:
    - Scheme is http or https
    - Hostname resolves only to public addresses (not private/loopback/reserved)
    """
    if not url:
        return False
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ('http', 'https'):
        logger.error(f"Invalid URL scheme: {parsed.scheme}")
        return False
    if not parsed.hostname:
        logger.error("URL missing hostname")
        return False

    try:
        addrinfo = socket.getaddrinfo(parsed.hostname, None)
    except socket.gaierror:
        logger.error(f"Could not resolve hostname: {parsed.hostname}")
        return False

    for _, _, _, _, sockaddr in addrinfo:
        ip = ipaddress.ip_address(sockaddr[0])
        if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local:
            logger.error(f"URL resolves to private/reserved IP: {ip}")
            return False
    return True


class NotificationChannel(ABC):
    """
    Abstract base class for all notification channels.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(
        self,
        user_id: str,
        title: str,
        body: str,
        notification_type: str,
        metadata: Dict[str, Any]
    ) -> bool:
        """
        Send a notification through this channel.

        Args:
            user_id: Recipient user
            title: Notification title
            body: Notification body
            notification_type: Notification type tag (e.g. JOB_MATCH)
            metadata: Structured match data carried to the client

        Returns:
            True if sent successfully, False otherwise
        """
        pass

    def validate_config(self) -> bool:
        return True


class InAppChannel(NotificationChannel):
    """In-app notification channel; delivery is handed to the app's inbox."""

    @property
    def channel_type(self) -> str:
        return 'in_app'

    def send(self, user_id, title, body, notification_type, metadata) -> bool:
        logger.info(f"[IN_APP] User: {user_id}, Type: {notification_type}, Title: {title}")
        return True


class WebhookChannel(NotificationChannel):
    """Generic webhook notification channel (HTTP POST with a JSON body)."""

    def __init__(self, webhook_url: Optional[str] = None, timeout: float = 10):
        self.webhook_url = webhook_url
        self.timeout = timeout

    @property
    def channel_type(self) -> str:
        return 'webhook'

    def validate_config(self) -> bool:
        return _validate_webhook_url(self.webhook_url)

    def send(self, user_id, title, body, notification_type, metadata) -> bool:
        if not self.validate_config():
            logger.error(f"Invalid webhook URL: {self.webhook_url}")
            return False

        payload = {
            'user_id': user_id,
            'title': title,
            'body': body,
            'type': notification_type,
            'metadata': metadata,
        }
        headers = {
            'Content-Type': 'application/json',
            'User-Agent': 'JobMatch-Notification-Service/1.0'
        }

        try:
            response = requests.post(
                self.webhook_url,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to send webhook for user {user_id}: {e}")
            return False

        parsed = urllib.parse.urlparse(self.webhook_url)
        logger.info(f"Webhook sent to {parsed.scheme}://{parsed.hostname}{parsed.path}")
        return True


class NotificationChannelFactory:
    """
    Factory for creating notification channels.

    New channels can be registered without modifying the factory.
    """

    _channels: Dict[str, type] = {
        'webhook': WebhookChannel,
        'in_app': InAppChannel,
    }

    @classmethod
    def get_channel(cls, channel_type: str, **kwargs) -> NotificationChannel:
        """
        Get a notification channel instance by type.

        Args:
            channel_type: Type of channel (in_app, webhook, ...)
            **kwargs: Constructor arguments for the channel

        Raises:
            ValueError: If channel type is not registered
        """
        channel_class = cls._channels.get(channel_type.lower())
        if not channel_class:
            raise ValueError(f"Unknown channel type: {channel_type}. "
                             f"Available: {', '.join(cls._channels.keys())}")
        return channel_class(**kwargs)

    @classmethod
    def from_config(cls, notification_config) -> NotificationChannel:
        channel_type = notification_config.channel.lower()
        if channel_type == 'webhook':
            return cls.get_channel(
                channel_type,
                webhook_url=notification_config.webhook_url,
                timeout=notification_config.request_timeout_seconds
            )
        return cls.get_channel(channel_type)

    @classmethod
    def register_channel(cls, channel_type: str, channel_class: type):
        if not issubclass(channel_class, NotificationChannel):
            raise ValueError("Channel class must extend NotificationChannel")
        cls._channels[channel_type.lower()] = channel_class
        logger.info(f"Registered new channel type: {channel_type}")

    @classmethod
    def list_channels(cls) -> list:
        return list(cls._channels.keys())
