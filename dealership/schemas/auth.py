"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from dealership.services.passwords import MAX_PASSWORD_BYTES, password_too_long


def _check_password_length(value: str) -> str:
    if password_too_long(value):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class UserSignup(BaseModel):
    """User signup request."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    confirm_password: str = Field(..., alias="confirmPassword", max_length=128)

    @field_validator("password", "confirm_password")
    @classmethod
    def hashable_length(cls, value: str) -> str:
        return _check_password_length(value)


class UserLogin(BaseModel):
    """User login request."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)

    @field_validator("password")
    @classmethod
    def hashable_length(cls, value: str) -> str:
        return _check_password_length(value)


class Token(BaseModel):
    """Bearer token response."""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_type: str = Field("bearer", alias="tokenType")  # noqa: S105


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str


class MessageResponse(BaseModel):
    message: str
