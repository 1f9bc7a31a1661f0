"""Persisted markers for one-time bootstrap steps."""

from __future__ import annotations

from .account import utcnow
from . import db


ADMIN_BOOTSTRAP_KEY = "admin"


class BootstrapState(db.Model):
    """A completed bootstrap step, keyed so each step can be claimed once."""

    __tablename__ = "bootstrap_state"

    key = db.Column(db.String(64), primary_key=True)
    account_id = db.Column(db.Integer)
    completed_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<BootstrapState {self.key}>"
