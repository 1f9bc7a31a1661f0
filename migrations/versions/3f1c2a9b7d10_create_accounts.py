"""Create accounts and bootstrap state tables."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1c2a9b7d10"
down_revision = None
branch_labels = None
depends_on = None


ACCOUNT_ROLE_ENUM = "account_role"


def upgrade() -> None:
    """Create the account store."""

    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=64), nullable=True),
        sa.Column("first_name", sa.String(length=128), nullable=False),
        sa.Column("last_name", sa.String(length=128), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=512), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("accept_terms", sa.Boolean(), nullable=True),
        sa.Column(
            "role",
            sa.Enum("Admin", "User", name=ACCOUNT_ROLE_ENUM, native_enum=False),
            nullable=False,
        ),
        sa.Column("verification_token", sa.String(length=128), nullable=True),
        sa.Column(
            "is_verified",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("reset_token", sa.String(length=128), nullable=True),
        sa.Column("reset_token_expiry", sa.DateTime(), nullable=True),
        sa.Column("date_created", sa.DateTime(), nullable=False),
        sa.Column("date_updated", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
        sa.UniqueConstraint("verification_token", name="uq_accounts_verification_token"),
        sa.UniqueConstraint("reset_token", name="uq_accounts_reset_token"),
    )

    op.create_table(
        "bootstrap_state",
        sa.Column("key", sa.String(length=64), primary_key=True),
        sa.Column("account_id", sa.Integer(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    """Drop the account store."""

    op.drop_table("bootstrap_state")
    op.drop_table("accounts")
