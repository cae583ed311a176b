"""Invite notifications: log-only sender."""

from __future__ import annotations

import logging
from typing import Any

from roster.shared.telemetry.logging import get_logger
from roster.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# Keys whose values are never written to logs.
_SECRET_KEYS = frozenset({"invite_token"})


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of sending email.

    Use when no SMTP is configured. Production can swap in an SMTP or queue-based implementation.
    """

    async def send(self, to_email: str, subject: str, data: dict[str, Any]) -> None:
        """Log the notification; no actual email sent."""
        logger.info(
            "Notify: would send to 1 recipient (subject=%r)",
            (subject or "")[:80],
        )
        if logger.isEnabledFor(logging.DEBUG):
            safe = {k: v for k, v in data.items() if k not in _SECRET_KEYS}
            logger.debug(
                "Notify recipient: %s data=%s (at %s)",
                to_email,
                safe,
                utc_now().isoformat(),
            )
