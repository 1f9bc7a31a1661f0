"""Database initialization and model exports."""

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

# Import models to register them with SQLAlchemy metadata.
from .account import Account, Role  # noqa: E402,F401
from .bootstrap import BootstrapState  # noqa: E402,F401

__all__ = [
    "db",
    "Account",
    "BootstrapState",
    "Role",
]
