"""DTOs for user use cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from roster.infrastructure.persistence.models.user import User


@dataclass(frozen=True)
class SignupData:
    """Input for creating a company together with its creator."""

    email: str
    password: str
    company_name: str
    is_multi_company: bool = False
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class SettingsData:
    """Profile fields; None means leave unchanged."""

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    city: str | None = None
    language: str | None = None
    birthday: date | None = None

    def provided(self) -> dict[str, Any]:
        """Return only the fields that were set."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class AuthResult:
    """An authenticated user and the access token issued for it."""

    user: User
    token: str


@dataclass(frozen=True)
class InviteOutcome:
    """Result of inviting one email address.

    user_id and invite_token are None when the user could not be created.
    delivered is False when creation or notification failed; error says why.
    """

    email: str
    user_id: str | None
    invite_token: str | None
    delivered: bool
    error: str | None = None
