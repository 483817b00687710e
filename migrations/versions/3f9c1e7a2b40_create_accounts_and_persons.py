"""Create users, persons, verification tokens and reset pins.

Revision ID: 3f9c1e7a2b40
Revises:
Create Date: 2026-10-16 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1e7a2b40"
down_revision = None
branch_labels = None
depends_on = None


GENDERS = ("m", "f")


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=64), nullable=False),
        sa.Column("salt", sa.String(length=32), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    gender_enum = sa.Enum(*GENDERS, name="person_gender")
    gender_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "persons",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("first_name", sa.String(length=64), nullable=False),
        sa.Column("last_name", sa.String(length=64), nullable=False),
        sa.Column("gender", gender_enum, nullable=False),
        sa.Column("birthday", sa.Date(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.UniqueConstraint("user_id", name="uq_persons_user_id"),
    )

    op.create_table(
        "verification_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("token", sa.String(length=36), nullable=False),
        sa.Column("expiry_date", sa.DateTime(), nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_verification_tokens_token", "verification_tokens", ["token"], unique=True
    )
    op.create_index("ix_verification_tokens_user_id", "verification_tokens", ["user_id"])

    op.create_table(
        "password_reset_pins",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("pin", sa.String(length=8), nullable=False),
        sa.Column("expiry_date", sa.DateTime(), nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_password_reset_pins_pin", "password_reset_pins", ["pin"], unique=True
    )
    op.create_index("ix_password_reset_pins_user_id", "password_reset_pins", ["user_id"])


def downgrade():
    op.drop_index("ix_password_reset_pins_user_id", table_name="password_reset_pins")
    op.drop_index("ix_password_reset_pins_pin", table_name="password_reset_pins")
    op.drop_table("password_reset_pins")

    op.drop_index("ix_verification_tokens_user_id", table_name="verification_tokens")
    op.drop_index("ix_verification_tokens_token", table_name="verification_tokens")
    op.drop_table("verification_tokens")

    op.drop_table("persons")
    sa.Enum(*GENDERS, name="person_gender").drop(op.get_bind(), checkfirst=True)

    op.drop_table("users")
