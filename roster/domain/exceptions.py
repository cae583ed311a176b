"""Domain exceptions for the Roster application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class RosterException(Exception):
    """Base exception for all Roster application errors.

    All custom exceptions inherit from this class so the presentation layer
    can map them to responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class AuthenticationException(RosterException):
    """Raised when authentication fails (missing, invalid or expired token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class NotOwnerException(RosterException):
    """Raised when the acting user is not the creator of a company.

    Checked before any lookup so it never reveals whether the requested
    entity exists.
    """

    def __init__(self, actor_id: str | None = None, permission: str | None = None) -> None:
        details: dict[str, Any] = {}
        if actor_id:
            details["actor_id"] = actor_id
        if permission:
            details["permission"] = permission
        super().__init__("User is not the company owner", "NOT_OWNER", details)


class RoleNotFoundException(RosterException):
    """Raised when a role is absent or belongs to another company."""

    def __init__(
        self,
        role_id: str,
        message: str | None = None,
        error_code: str = "ROLE_NOT_FOUND",
    ) -> None:
        super().__init__(
            message or f"Role not found: {role_id}",
            error_code,
            {"role_id": role_id},
        )


class SubRoleNotFoundException(RoleNotFoundException):
    """Raised when a sub-role is absent or its parent role belongs to another company."""

    def __init__(self, sub_role_id: str) -> None:
        super().__init__(
            sub_role_id,
            message=f"Sub-role not found: {sub_role_id}",
            error_code="SUB_ROLE_NOT_FOUND",
        )


class UserNotFoundException(RosterException):
    """Raised when a target user is absent or belongs to another company."""

    def __init__(self, user_id: str | None = None) -> None:
        details = {"user_id": user_id} if user_id else {}
        super().__init__("User not found", "USER_NOT_FOUND", details)


class NoParentRoleException(RosterException):
    """Raised when assigning a sub-role to a user who does not hold its parent role."""

    def __init__(self, sub_role_id: str, user_id: str) -> None:
        super().__init__(
            "User does not hold the parent role of this sub-role",
            "NO_PARENT_ROLE",
            {"sub_role_id": sub_role_id, "user_id": user_id},
        )


class InviteNotFoundException(RosterException):
    """Raised when an invite token is unknown, expired or already used."""

    def __init__(self) -> None:
        super().__init__("Invite does not exist", "INVITE_NOT_FOUND", {})


class IncorrectCredentialException(RosterException):
    """Raised when the supplied password does not match."""

    def __init__(self) -> None:
        super().__init__("Incorrect password", "INCORRECT_CREDENTIAL", {})


class UserAlreadyExistsException(RosterException):
    """Raised when creating a user whose email is already registered."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__(
            "Email is already registered",
            "USER_ALREADY_EXISTS",
            details,
        )


class NotificationDeliveryException(RosterException):
    """Raised by notification senders when a message could not be delivered."""

    def __init__(self, recipient: str, reason: str) -> None:
        super().__init__(
            f"Failed to deliver notification to {recipient}",
            "NOTIFICATION_FAILED",
            {"recipient": recipient, "reason": reason},
        )


class SqlNotConfiguredException(RosterException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
