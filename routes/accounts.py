"""Accounts blueprint: registration, verification, authentication, password
resets and account administration."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from models.account import Role
from schemas.accounts import (
    AdminUpdateAccountRequest,
    AuthenticateRequest,
    CreateAccountRequest,
    ForgotPasswordRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenRequest,
    UpdateAccountRequest,
)
from services import accounts as account_service
from utils.authorization import authorize, require_self_or_admin
from utils.request_validation import validate_json_request

accounts_bp = Blueprint("accounts", __name__)


def _origin() -> str | None:
    return request.headers.get("Origin") or None


def _message(text: str, status: int = HTTPStatus.OK) -> tuple:
    return jsonify({"message": text}), status


@accounts_bp.route("/register", methods=["POST"])
def register():
    """Register a new account and send verification instructions."""

    payload = validate_json_request(request, RegisterRequest)
    account_service.register(payload, _origin())
    return _message(
        "Registration successful, please check your email for verification instructions"
    )


@accounts_bp.route("/verify-email", methods=["POST"])
def verify_email():
    payload = validate_json_request(request, TokenRequest)
    account_service.verify_email(payload.token)
    return _message("Verification successful, you can now login", HTTPStatus.CREATED)


@accounts_bp.route("/authenticate", methods=["POST"])
def authenticate():
    """Exchange verified credentials for a bearer token."""

    payload = validate_json_request(request, AuthenticateRequest)
    result = account_service.authenticate(payload.email, payload.password)
    if result is None:
        raise BadRequest("Email or password is incorrect")

    account, token = result
    return jsonify({**account.to_public_dict(), "token": token}), HTTPStatus.OK


@accounts_bp.route("/forgot-password", methods=["POST"])
def forgot_password():
    payload = validate_json_request(request, ForgotPasswordRequest)
    account_service.forgot_password(payload.email, _origin())
    return _message("Please check your email for password reset instructions")


@accounts_bp.route("/validate-reset-token", methods=["POST"])
def validate_reset_token():
    payload = validate_json_request(request, TokenRequest)
    account_service.validate_reset_token(payload.token)
    return _message("Token is valid")


@accounts_bp.route("/reset-password", methods=["POST"])
def reset_password():
    payload = validate_json_request(request, ResetPasswordRequest)
    account_service.reset_password(payload.token, payload.password)
    return _message("Password reset successfully, you can now login", HTTPStatus.CREATED)


@accounts_bp.route("", methods=["GET"])
@authorize(Role.ADMIN)
def list_accounts():
    """Return every account; administrators only."""

    accounts = account_service.get_accounts()
    return jsonify([account.to_public_dict() for account in accounts])


@accounts_bp.route("/<account_id>", methods=["GET"])
@authorize()
def get_account(account_id: str):
    require_self_or_admin(account_id)
    account = account_service.get_account_by_id(account_id)
    return jsonify(account.to_public_dict())


@accounts_bp.route("", methods=["POST"])
@authorize(Role.ADMIN)
def create_account():
    """Create a verified account with an explicit role; administrators only."""

    payload = validate_json_request(request, CreateAccountRequest)
    account = account_service.create(payload)
    return jsonify(account.to_public_dict()), HTTPStatus.OK


@accounts_bp.route("/<account_id>", methods=["PUT"])
@authorize()
def update_account(account_id: str):
    """Update an account as its owner or as an administrator.

    Only administrators may change the ``role`` field.
    """

    actor = require_self_or_admin(account_id)
    schema = AdminUpdateAccountRequest if actor.is_admin else UpdateAccountRequest
    payload = validate_json_request(request, schema)
    account = account_service.update(account_id, payload)
    return jsonify(account.to_public_dict())


@accounts_bp.route("/<account_id>", methods=["DELETE"])
@authorize()
def delete_account(account_id: str):
    require_self_or_admin(account_id)
    account_service.delete(account_id)
    return _message("Account deleted successfully")
