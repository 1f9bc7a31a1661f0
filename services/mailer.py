"""SMTP transport for outbound email."""

from __future__ import annotations

import smtplib
from collections import deque
from dataclasses import dataclass
from email.message import EmailMessage

from flask import Flask, current_app

OUTBOX_EXTENSION = "mail_outbox"
OUTBOX_LIMIT = 100


class DeliveryError(Exception):
    """Raised when an email could not be handed to the mail server."""


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    html: str
    sender: str


class Mailer:
    """Send HTML email through the configured SMTP server.

    When ``MAIL_SUPPRESS_SEND`` is enabled (tests and local development),
    messages go to the application's outbox (``app.extensions["mail_outbox"]``)
    instead. The outbox keeps only the most recent ``OUTBOX_LIMIT`` messages.
    """

    def __init__(self, app: Flask | None = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.extensions["mailer"] = self
        app.extensions[OUTBOX_EXTENSION] = deque(maxlen=OUTBOX_LIMIT)

    def send_email(self, to: str, subject: str, html: str) -> None:
        """Deliver a single message, raising ``DeliveryError`` on failure."""

        config = current_app.config
        email = OutgoingEmail(
            to=to,
            subject=subject,
            html=html,
            sender=config.get("MAIL_DEFAULT_SENDER", "no-reply@localhost"),
        )

        if config.get("MAIL_SUPPRESS_SEND"):
            current_app.extensions[OUTBOX_EXTENSION].append(email)
            current_app.logger.debug("Suppressed email to %s: %s", to, subject)
            return

        message = EmailMessage()
        message["From"] = email.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        message.set_content(email.html, subtype="html")

        try:
            with smtplib.SMTP(
                host=config.get("MAIL_SERVER", "localhost"),
                port=int(config.get("MAIL_PORT", 25)),
                timeout=float(config.get("MAIL_TIMEOUT", 10)),
            ) as connection:
                if config.get("MAIL_USE_TLS"):
                    connection.starttls()
                username = config.get("MAIL_USERNAME")
                if username:
                    connection.login(username, config.get("MAIL_PASSWORD") or "")
                connection.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"Could not deliver email to {to}: {exc}") from exc


mailer = Mailer()
