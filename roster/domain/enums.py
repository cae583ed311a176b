"""Domain enumerations for the Roster application."""

from enum import Enum


class Permission(str, Enum):
    """Administrative actions gated by the authorization guard.

    All of them currently require the actor to be a company creator.
    """

    MANAGE_ROLES = "role:manage"
    READ_ROLES = "role:read"
    ASSIGN_ROLES = "role:assign"
    INVITE_USERS = "user:invite"
