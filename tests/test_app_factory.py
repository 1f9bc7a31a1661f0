"""Tests for the Flask application factory."""
from __future__ import annotations


def test_health_endpoint_returns_ok(client):
    """The health endpoint should respond with an OK payload."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_blueprints_registered(app):
    """Application factory should register the accounts blueprint."""
    assert "accounts" in app.blueprints
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/accounts/register" in rules
    assert "/accounts/<account_id>" in rules


def test_mail_outbox_is_per_application(app):
    assert list(app.extensions["mail_outbox"]) == []
    assert app.extensions["mailer"] is not None
