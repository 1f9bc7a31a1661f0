"""Seed an administrator account."""

import os

from app import create_app
from config import Config
from models import db
from models.account import Account, Role
from services.accounts import claim_admin_bootstrap, normalize_email

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def main(config_class: type[Config] = Config) -> str:
    app = create_app(config_class)
    with app.app_context():
        email = normalize_email(ADMIN_EMAIL)
        admin = Account.query.filter_by(email=email).first()
        if admin is None:
            admin = Account(email=email, first_name="Site", last_name="Administrator")
            db.session.add(admin)
            action = "created"
        else:
            action = "updated"
        admin.role = Role.ADMIN
        admin.is_verified = True
        admin.set_password(ADMIN_PASSWORD)
        db.session.flush()
        claim_admin_bootstrap(admin)
        db.session.commit()
        print(f"Admin account {action}: {email}")
    return action


if __name__ == "__main__":
    main()
