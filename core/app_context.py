from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig
from core.catalog_client import JobCatalogClient
from core.matcher import MatchingService
from notification.channels import NotificationChannelFactory
from notification.service import NotificationService


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    DB access should be obtained via matching_uow() inside each unit of
    work; nothing here holds a session.
    """
    config: AppConfig
    catalog_client: JobCatalogClient
    matching_service: MatchingService
    notification_service: Optional[NotificationService] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        catalog_client = JobCatalogClient.from_config(config.catalog)

        matching_service = MatchingService(
            config=config.matching,
            catalog_client=catalog_client
        )

        notification_service = None
        if config.notifications and config.notifications.enabled:
            notification_service = cls._build_notification_service(config)

        return cls(
            config=config,
            catalog_client=catalog_client,
            matching_service=matching_service,
            notification_service=notification_service
        )

    @staticmethod
    def _build_notification_service(config: AppConfig) -> NotificationService:
        channel = NotificationChannelFactory.from_config(config.notifications)
        return NotificationService(channel=channel, config=config.notifications)

    def close(self) -> None:
        self.catalog_client.close()
