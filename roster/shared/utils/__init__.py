"""Generic helpers: ids, tokens, UTC time."""

from roster.shared.utils.datetime import utc_now
from roster.shared.utils.generators import (
    generate_cuid,
    generate_invite_token,
    generate_unusable_password,
    hash_token,
)

__all__ = [
    "generate_cuid",
    "generate_invite_token",
    "generate_unusable_password",
    "hash_token",
    "utc_now",
]
