"""Auth token dependencies (composition root)."""

from __future__ import annotations

from typing import Any

from roster.infrastructure.security.jwt import create_access_token


class AuthSecurity:
    """Token issuing provided via DI (no direct infra imports in routes)."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        return create_access_token(data)


def get_auth_security() -> AuthSecurity:
    """Auth token creation (composition root)."""
    return AuthSecurity()
