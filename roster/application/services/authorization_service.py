"""Authorization guard: checks the acting user's privilege before any command runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roster.domain.enums import Permission
from roster.domain.exceptions import NotOwnerException
from roster.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from roster.infrastructure.persistence.models.user import User

logger = get_logger(__name__)


class AuthorizationService:
    """Centralized permission checking.

    Every permission currently requires the company-creator privilege: the actor
    must be a creator and own a company. Call require() before any lookup so a
    denied actor learns nothing about the target entities.
    """

    def is_allowed(self, actor: User, permission: Permission) -> bool:
        """Return True if actor may perform permission in its own company."""
        return bool(actor.is_creator and actor.own_company_id)

    def require(self, actor: User, permission: Permission) -> str:
        """Raise NotOwnerException if actor lacks permission; else return its company id."""
        if not self.is_allowed(actor, permission):
            logger.warning(
                "Permission denied: actor_id=%s permission=%s",
                actor.id,
                permission.value,
            )
            raise NotOwnerException(actor_id=actor.id, permission=permission.value)
        return str(actor.own_company_id)
