"""
User request and response models.

Passwords are accepted as ``SecretStr`` and only ever leave the request model
as an Argon2 hash; ``UserResponse`` has no password field at all.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    StringConstraints,
    field_validator,
    model_validator,
)

from blogging_api.configs.settings import (
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from blogging_api.schemas.common import Envelope

type Name = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=MIN_NAME_LENGTH,
        max_length=MAX_NAME_LENGTH,
    ),
]


def _lower_email(value: str | None) -> str | None:
    return value.lower() if value else value


class UserCreate(BaseModel):
    """Registration payload."""

    model_config = ConfigDict(frozen=True)

    first_name: Name = Field(..., description="User first name", examples=["John"])
    last_name: Name = Field(..., description="User last name", examples=["Doe"])
    email: EmailStr = Field(..., description="Email address", examples=["john@example.com"])
    password: SecretStr = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=MAX_PASSWORD_LENGTH,
        description="Password",
        examples=["password123"],
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are stored and compared lower-cased."""
        return v.lower()


class LoginRequest(BaseModel):
    """Login payload."""

    model_config = ConfigDict(frozen=True)

    email: EmailStr = Field(..., description="Email address", examples=["john@example.com"])
    password: SecretStr = Field(
        ...,
        min_length=1,
        max_length=MAX_PASSWORD_LENGTH,
        description="Password",
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserUpdate(BaseModel):
    """
    Profile update payload.

    ``password`` is declared only so the route can reject it with a clear
    message; it is never applied.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"first_name": "Jane", "email": "jane@example.com"}},
    )

    first_name: Name | None = None
    last_name: Name | None = None
    email: EmailStr | None = None
    password: SecretStr | None = Field(default=None, exclude=True)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return _lower_email(v)

    @model_validator(mode="after")
    def require_one_field(self) -> "UserUpdate":
        """Reject empty updates; explicit nulls do not count."""
        if all(getattr(self, name) is None for name in self.model_fields_set):
            mssg = "At least one field must be provided for update"
            raise ValueError(mssg)
        return self


class UserResponse(BaseModel):
    """Public profile (safe for API responses, without sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime | None = None


class AuthorResponse(BaseModel):
    """Author expanded into a blog response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: str


class UserData(BaseModel):
    user: UserResponse


class UserEnvelope(Envelope):
    """``{status, message?, data: {user}}``."""

    data: UserData
