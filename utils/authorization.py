"""Bearer-token identity resolution and access rules for account routes."""

from __future__ import annotations

from functools import wraps
from typing import Callable

from flask_jwt_extended import JWTManager, get_current_user, verify_jwt_in_request
from werkzeug.exceptions import Unauthorized

from models import db
from models.account import Account, Role
from utils.responses import error_response

jwt = JWTManager()


@jwt.user_lookup_loader
def _load_account(_jwt_header: dict, jwt_data: dict) -> Account | None:
    try:
        account_id = int(jwt_data["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return db.session.get(Account, account_id)


@jwt.user_lookup_error_loader
def _account_missing(_jwt_header: dict, _jwt_data: dict):
    return error_response(401, "Unauthorized", "Unauthorized")


@jwt.unauthorized_loader
def _missing_token(reason: str):
    return error_response(401, "Unauthorized", reason)


@jwt.invalid_token_loader
def _invalid_token(reason: str):
    return error_response(401, "Unauthorized", reason)


@jwt.expired_token_loader
def _expired_token(_jwt_header: dict, _jwt_data: dict):
    return error_response(401, "Unauthorized", "Token has expired")


def authorize(role: Role | None = None) -> Callable:
    """Require a valid bearer token and, optionally, a specific role."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            account = current_account()
            if role is not None and account.role != role:
                raise Unauthorized("Unauthorized")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_account() -> Account:
    """Return the account behind the verified bearer token."""

    account = get_current_user()
    if account is None:
        raise Unauthorized("Unauthorized")
    return account


def require_self_or_admin(account_id: str) -> Account:
    """Allow acting on ``account_id`` only as that account or as an Admin."""

    account = current_account()
    if str(account.id) != str(account_id) and not account.is_admin:
        raise Unauthorized("Unauthorized")
    return account
