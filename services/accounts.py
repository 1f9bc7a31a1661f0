"""Account lifecycle: registration, verification, authentication, password
resets and administrative CRUD.

Every operation commits its store mutation before any notification is sent,
so a failed delivery never undoes a state change.
"""

from __future__ import annotations

import sqlalchemy as sa
from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest, Conflict, InternalServerError, NotFound

from models import db
from models.account import Account, Role, utcnow
from models.bootstrap import ADMIN_BOOTSTRAP_KEY, BootstrapState
from schemas.accounts import CreateAccountRequest, RegisterRequest, UpdateAccountRequest

from . import notifications
from .credentials import generate_token, hash_password

TOKEN_ATTEMPTS = 3


class InvalidToken(BadRequest):
    description = "Invalid token"


class InvalidId(BadRequest):
    description = "Account id is not valid"


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _find_by_email(email: str | None) -> Account | None:
    return Account.query.filter_by(email=normalize_email(email)).first()


def _find_by_reset_token(token: str) -> Account | None:
    return Account.query.filter(
        Account.reset_token == token,
        Account.reset_token_expiry > utcnow(),
    ).first()


def _parse_account_id(account_id: int | str) -> int:
    text = str(account_id).strip()
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        raise InvalidId()
    return int(text)


def _get_account(account_id: int | str) -> Account:
    account = db.session.get(Account, _parse_account_id(account_id))
    if account is None:
        raise NotFound("Account does not exist")
    return account


def claim_admin_bootstrap(account: Account) -> bool:
    """Record ``account`` as the bootstrap administrator if none was recorded yet.

    The marker is added to the current transaction; its primary key makes a
    concurrent second claim fail at commit time. ``account`` must be flushed.
    """

    if db.session.get(BootstrapState, ADMIN_BOOTSTRAP_KEY) is not None:
        return False
    db.session.add(BootstrapState(key=ADMIN_BOOTSTRAP_KEY, account_id=account.id))
    return True


def _commit_with_fresh_token(account: Account, token_field: str, **values) -> None:
    for _ in range(TOKEN_ATTEMPTS):
        setattr(account, token_field, generate_token())
        for name, value in values.items():
            setattr(account, name, value)
        try:
            db.session.commit()
            return
        except IntegrityError:
            db.session.rollback()
            current_app.logger.warning("Token collision on %s, regenerating", token_field)
    raise InternalServerError("Could not allocate a unique token.")


def _already_registered(email: str, origin: str | None) -> None:
    current_app.logger.warning("Registration attempted for an existing account")
    notifications.send_already_registered_email(email, origin)


def register(payload: RegisterRequest, origin: str | None = None) -> Account | None:
    """Create an unverified account and send its verification email.

    An address that is already registered gets a notification instead, and
    the call returns ``None`` without signalling an error.
    """

    if _find_by_email(payload.email) is not None:
        _already_registered(payload.email, origin)
        return None

    password_hash = hash_password(payload.password)
    for _ in range(TOKEN_ATTEMPTS):
        account = Account(**payload.account_fields())
        account.password_hash = password_hash
        account.verification_token = generate_token()
        account.is_verified = False
        account.role = Role.USER
        try:
            db.session.add(account)
            db.session.flush()
            if claim_admin_bootstrap(account):
                account.role = Role.ADMIN
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            if _find_by_email(payload.email) is not None:
                _already_registered(payload.email, origin)
                return None
            continue
        break
    else:
        raise InternalServerError("Could not complete registration.")

    current_app.logger.info("Registered account %s as %s", account.id, account.role.value)
    notifications.send_verification_email(account, origin)
    return account


def verify_email(token: str) -> Account:
    account = Account.query.filter_by(verification_token=token, is_verified=False).first()
    if account is None:
        raise NotFound("Verification failed")

    account.is_verified = True
    account.date_updated = utcnow()
    db.session.commit()
    current_app.logger.info("Verified account %s", account.id)
    return account


def authenticate(email: str, password: str) -> tuple[Account, str] | None:
    """Return the account and a bearer token, or ``None`` for bad credentials.

    Only verified accounts can authenticate.
    """

    account = Account.query.filter_by(email=normalize_email(email), is_verified=True).first()
    if account is None or not account.check_password(password):
        return None

    token = create_access_token(identity=str(account.id), additional_claims={"id": account.id})
    return account, token


def forgot_password(email: str, origin: str | None = None) -> None:
    account = _find_by_email(email)
    if account is None:
        current_app.logger.info("Password reset requested for an unknown email")
        return

    now = utcnow()
    _commit_with_fresh_token(
        account,
        "reset_token",
        reset_token_expiry=now + current_app.config["RESET_TOKEN_TTL"],
        date_updated=now,
    )
    current_app.logger.info("Password reset requested for account %s", account.id)
    notifications.send_password_reset_email(account, origin)


def validate_reset_token(token: str) -> None:
    if _find_by_reset_token(token) is None:
        raise InvalidToken()


def reset_password(token: str, password: str) -> Account:
    account = _find_by_reset_token(token)
    if account is None:
        raise InvalidToken()

    account.set_password(password)
    account.is_verified = True
    account.reset_token = None
    account.reset_token_expiry = None
    account.date_updated = utcnow()
    db.session.commit()
    current_app.logger.info("Password reset completed for account %s", account.id)
    return account


def get_accounts() -> list[Account]:
    return Account.query.order_by(Account.id.asc()).all()


def get_account_by_id(account_id: int | str) -> Account:
    return _get_account(account_id)


def create(payload: CreateAccountRequest) -> Account:
    """Create an already verified account with an explicit role."""

    conflict = Conflict(f'Email "{payload.email}" is already registered')
    if _find_by_email(payload.email) is not None:
        raise conflict

    account = Account(**payload.account_fields())
    account.set_password(payload.password)
    account.is_verified = True
    db.session.add(account)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise conflict

    current_app.logger.info("Created account %s as %s", account.id, account.role.value)
    return account


def update(account_id: int | str, payload: UpdateAccountRequest) -> Account:
    """Replace the supplied fields of an account in a single UPDATE."""

    account = _get_account(account_id)
    changes = payload.changes()

    new_email = changes.get("email")
    conflict = Conflict(f'Email "{new_email}" is already taken')
    if new_email and new_email != account.email and _find_by_email(new_email) is not None:
        raise conflict

    if payload.password:
        changes["password_hash"] = hash_password(payload.password)
    changes["date_updated"] = utcnow()

    try:
        db.session.execute(
            sa.update(Account).where(Account.id == account.id).values(**changes)
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise conflict

    db.session.refresh(account)
    current_app.logger.info("Updated account %s", account.id)
    return account


def delete(account_id: int | str) -> None:
    account = _get_account(account_id)
    db.session.delete(account)
    db.session.commit()
    current_app.logger.info("Deleted account %s", account_id)
