"""Account model definition."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any

from services.credentials import hash_password, verify_password

from . import db


class Role(str, enum.Enum):
    """The two roles an account can hold."""

    ADMIN = "Admin"
    USER = "User"


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime, matching stored values."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class Account(db.Model):
    """Represents a registered account."""

    __tablename__ = "accounts"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    title = db.Column(db.String(64))
    first_name = db.Column(db.String(128), nullable=False)
    last_name = db.Column(db.String(128), nullable=False)
    location = db.Column(db.String(255))
    bio = db.Column(db.Text)
    website = db.Column(db.String(512))
    image_url = db.Column(db.String(1024))
    accept_terms = db.Column(db.Boolean)
    role = db.Column(
        db.Enum(
            Role,
            name="account_role",
            native_enum=False,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=Role.USER,
    )
    verification_token = db.Column(db.String(128), unique=True)
    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    reset_token = db.Column(db.String(128), unique=True)
    reset_token_expiry = db.Column(db.DateTime)
    date_created = db.Column(db.DateTime, nullable=False, default=utcnow)
    date_updated = db.Column(db.DateTime)

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict[str, Any]:
        """Return the projection exposed to API consumers."""

        return {
            "id": self.id,
            "title": self.title,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "role": self.role.value if self.role else None,
            "location": self.location,
            "bio": self.bio,
            "website": self.website,
            "imageUrl": self.image_url,
            "dateCreated": _isoformat(self.date_created),
            "dateUpdated": _isoformat(self.date_updated),
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Account {self.email}>"
