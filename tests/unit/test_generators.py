"""Tests for id, token and credential generators and password hashing."""

from roster.infrastructure.security.password import get_password_hash, verify_password
from roster.shared.utils.generators import (
    UNUSABLE_PASSWORD_PREFIX,
    generate_cuid,
    generate_invite_token,
    generate_unusable_password,
    hash_token,
)


def test_generate_cuid_is_unique_string() -> None:
    ids = {generate_cuid() for _ in range(50)}
    assert len(ids) == 50
    assert all(isinstance(i, str) and i for i in ids)


def test_invite_tokens_are_distinct_and_hash_is_stable() -> None:
    a, b = generate_invite_token(), generate_invite_token()
    assert a != b
    assert len(a) >= 32
    assert hash_token(a) == hash_token(a)
    assert hash_token(a) != hash_token(b)
    assert len(hash_token(a)) == 64


def test_unusable_password_never_verifies() -> None:
    placeholder = generate_unusable_password()
    assert placeholder.startswith(UNUSABLE_PASSWORD_PREFIX)
    assert verify_password("", placeholder) is False
    assert verify_password(placeholder, placeholder) is False


def test_password_hash_round_trip_and_long_passwords() -> None:
    long_password = "p" * 100
    hashed = get_password_hash(long_password)
    assert verify_password(long_password, hashed)
    assert not verify_password("p" * 99, hashed)
