"""Auth API schemas: signup, login, invite acceptance, token."""

from pydantic import BaseModel, EmailStr, Field, model_validator

from roster.schemas.user import UserResponse


class SignupRequest(BaseModel):
    """Request body for creating a company together with its owner."""

    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    company_name: str = Field(..., min_length=1, max_length=255)
    is_multi_company: bool = False
    first_name: str | None = Field(default=None, max_length=128)
    last_name: str | None = Field(default=None, max_length=128)
    phone: str | None = Field(default=None, max_length=32)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AcceptInviteRequest(BaseModel):
    """Request body for POST /users/accept-invite."""

    token: str = Field(..., min_length=1, description="Token from the invite message")
    password: str = Field(..., min_length=8, description="New password (min 8 characters)")
    password_confirm: str = Field(..., min_length=8)
    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)

    @model_validator(mode="after")
    def passwords_match(self) -> "AcceptInviteRequest":
        if self.password != self.password_confirm:
            raise ValueError("password and password_confirm must match")
        return self


class TokenResponse(BaseModel):
    """Access token plus the authenticated user."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
