"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


class INotificationService(Protocol):
    """Protocol for sending a templated notification to one recipient."""

    async def send(self, to_email: str, subject: str, data: dict[str, Any]) -> None:
        """Send the notification. Raises NotificationDeliveryException on failure."""


class IAuthSecurity(Protocol):
    """Protocol for issuing access tokens."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        """Return a signed token carrying data as claims."""
