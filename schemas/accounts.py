"""Pydantic schemas for account request payloads."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from models.account import Role

PASSWORD_MIN_LENGTH = 6


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


NormalizedEmail = Annotated[EmailStr, BeforeValidator(_normalize_email)]


class _Payload(BaseModel):
    """Base for request payloads: camelCase on the wire, unknown fields rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class _PasswordConfirmation(_Payload):
    @model_validator(mode="after")
    def check_passwords_match(self):
        password = getattr(self, "password", None)
        confirm = getattr(self, "confirm_password", None)
        if password is not None and confirm is None:
            raise ValueError("confirmPassword is required when password is provided")
        if confirm is not None and confirm != password:
            raise ValueError("confirmPassword must match password")
        return self


class _ProfileFields(_PasswordConfirmation):
    title: str | None = Field(default=None, min_length=1, max_length=64)
    first_name: str = Field(..., min_length=1, max_length=128)
    last_name: str = Field(..., min_length=1, max_length=128)
    email: NormalizedEmail
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str
    bio: str | None = Field(default=None, min_length=1)
    website: str | None = Field(default=None, min_length=1, max_length=512)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    image_url: str | None = Field(default=None, min_length=1, max_length=1024)

    def account_fields(self) -> dict[str, Any]:
        """Return the persisted profile fields, without password data."""

        return self.model_dump(exclude={"password", "confirm_password"}, exclude_none=True)


class RegisterRequest(_ProfileFields):
    """Payload for self-service registration."""

    accept_terms: bool

    @field_validator("accept_terms")
    @classmethod
    def check_terms_accepted(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("acceptTerms must be true")
        return value


class CreateAccountRequest(_ProfileFields):
    """Payload for an administrator creating an account."""

    role: Role


class TokenRequest(_Payload):
    """Payload carrying a single verification or reset token."""

    token: str = Field(..., min_length=1)


class AuthenticateRequest(_Payload):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(_Payload):
    email: NormalizedEmail


class ResetPasswordRequest(_PasswordConfirmation):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str


class UpdateAccountRequest(_PasswordConfirmation):
    """Partial update of an account; empty strings count as absent."""

    title: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: NormalizedEmail | None = None
    bio: str | None = None
    website: str | None = None
    location: str | None = None
    image_url: str | None = None
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    def changes(self) -> dict[str, Any]:
        """Return the supplied profile fields, without password data."""

        return self.model_dump(exclude={"password", "confirm_password"}, exclude_none=True)


class AdminUpdateAccountRequest(UpdateAccountRequest):
    """Partial update issued by an administrator, who may also change the role."""

    role: Role | None = None
