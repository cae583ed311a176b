"""Application DTOs."""

from roster.application.dtos.user import (
    AuthResult,
    InviteOutcome,
    SettingsData,
    SignupData,
)

__all__ = [
    "AuthResult",
    "InviteOutcome",
    "SettingsData",
    "SignupData",
]
