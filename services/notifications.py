"""Templated account notifications.

Every notification is sent after the state change it describes has been
committed. Delivery failures are logged and never propagate to the caller.
"""

from __future__ import annotations

from flask import current_app
from markupsafe import escape

from models.account import Account

from .mailer import DeliveryError, mailer

SUBJECT_PREFIX = "Sign-up Verification API"


def _dispatch(to: str, subject: str, html: str) -> bool:
    try:
        mailer.send_email(to, f"{SUBJECT_PREFIX} - {subject}", html)
    except DeliveryError:
        current_app.logger.warning("Email delivery failed: %s", subject, exc_info=True)
        return False
    return True


def send_verification_email(account: Account, origin: str | None) -> bool:
    """Send the link (or raw token) needed to verify a new account."""

    token = escape(account.verification_token)
    if origin:
        verify_url = f"{escape(origin)}/account/verify-email?token={token}"
        message = (
            "<p>Please click the below link to verify your email address:</p>"
            f'<p><a href="{verify_url}">{verify_url}</a></p>'
        )
    else:
        message = (
            "<p>Please use the below token to verify your email address with the "
            "<code>/accounts/verify-email</code> api route:</p>"
            f"<p><code>{token}</code></p>"
        )

    return _dispatch(
        account.email,
        "Verify Email",
        f"<h4>Verify Email</h4><p>Thanks for registering!</p>{message}",
    )


def send_already_registered_email(email: str, origin: str | None) -> bool:
    """Tell the owner of an address that it is already registered."""

    if origin:
        message = (
            "<p>If you don't know your password please visit the "
            f'<a href="{escape(origin)}/account/forgot-password">forgot password</a> page.</p>'
        )
    else:
        message = (
            "<p>If you don't know your password you can reset it via the "
            "<code>/accounts/forgot-password</code> api route.</p>"
        )

    return _dispatch(
        email,
        "Email Already Registered",
        "<h4>Email Already Registered</h4>"
        f"<p>Your email <strong>{escape(email)}</strong> is already registered.</p>"
        f"{message}",
    )


def send_password_reset_email(account: Account, origin: str | None) -> bool:
    """Send the reset link (or raw token) for a pending password reset."""

    token = escape(account.reset_token)
    ttl_hours = int(current_app.config["RESET_TOKEN_TTL"].total_seconds() // 3600)
    if origin:
        reset_url = f"{escape(origin)}/account/reset-password?token={token}"
        message = (
            "<p>Please click the below link to reset your password, "
            f"the link will be valid for {ttl_hours} hours:</p>"
            f'<p><a href="{reset_url}">{reset_url}</a></p>'
        )
    else:
        message = (
            "<p>Please use the below token to reset your password with the "
            "<code>/accounts/reset-password</code> api route:</p>"
            f"<p><code>{token}</code></p>"
        )

    return _dispatch(
        account.email,
        "Reset Password",
        f"<h4>Reset Password Email</h4>{message}",
    )
