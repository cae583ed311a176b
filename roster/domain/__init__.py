"""Domain layer: permissions and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from roster.domain.enums import Permission
from roster.domain.exceptions import (
    AuthenticationException,
    IncorrectCredentialException,
    InviteNotFoundException,
    NoParentRoleException,
    NotificationDeliveryException,
    NotOwnerException,
    RoleNotFoundException,
    RosterException,
    SqlNotConfiguredException,
    SubRoleNotFoundException,
    UserAlreadyExistsException,
    UserNotFoundException,
)

__all__ = [
    # Enums
    "Permission",
    # Exceptions
    "AuthenticationException",
    "IncorrectCredentialException",
    "InviteNotFoundException",
    "NoParentRoleException",
    "NotificationDeliveryException",
    "NotOwnerException",
    "RoleNotFoundException",
    "RosterException",
    "SqlNotConfiguredException",
    "SubRoleNotFoundException",
    "UserAlreadyExistsException",
    "UserNotFoundException",
]
