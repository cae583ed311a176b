"""ID, token and placeholder credential generators."""

import hashlib
import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# Prefix that can never appear at the start of a bcrypt hash ("$2b$...").
UNUSABLE_PASSWORD_PREFIX = "!"


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2)."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_invite_token() -> str:
    """Return a URL-safe single-use invite token (raw value, sent to the invitee)."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a raw token; only the digest is stored."""
    return hashlib.sha256(token.encode()).hexdigest()


def generate_unusable_password() -> str:
    """Return a random credential placeholder that no password can ever match."""
    return UNUSABLE_PASSWORD_PREFIX + secrets.token_urlsafe(24)
