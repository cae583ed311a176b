"""User API schemas."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserSettingsUpdate(BaseModel):
    """Request body for PUT /users/settings (partial)."""

    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)
    phone: str | None = Field(default=None, max_length=32)
    city: str | None = Field(default=None, max_length=128)
    language: str | None = Field(default=None, max_length=16)
    birthday: date | None = None


class InviteRequest(BaseModel):
    """Request body for POST /users/invite."""

    emails: list[EmailStr] = Field(..., min_length=1, max_length=100)


class UserResponse(BaseModel):
    """User response (no password, no invite token)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    city: str | None = None
    language: str | None = None
    birthday: date | None = None
    company_id: str | None = None
    own_company_id: str | None = None
    is_creator: bool
    is_active: bool


class UserMembershipResponse(UserResponse):
    """User with the ids of the roles and sub-roles it holds."""

    role_ids: list[str] = Field(default_factory=list)
    sub_role_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, user) -> UserMembershipResponse:
        base = UserResponse.model_validate(user).model_dump()
        return cls(
            **base,
            role_ids=sorted(r.id for r in user.roles),
            sub_role_ids=sorted(s.id for s in user.sub_roles),
        )


class InviteOutcomeResponse(BaseModel):
    """Per-recipient result of POST /users/invite."""

    model_config = ConfigDict(from_attributes=True)

    email: str
    user_id: str | None
    delivered: bool
    error: str | None = None


class InviteLookupResponse(BaseModel):
    """Response for GET /users/invites/{token}."""

    email: str
    company_id: str | None
