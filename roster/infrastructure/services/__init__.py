"""Infrastructure service implementations."""

from roster.infrastructure.services.notification_service import LogOnlyNotificationService

__all__ = ["LogOnlyNotificationService"]
