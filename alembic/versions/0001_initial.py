"""machines and users tables

Revision ID: 0001
Revises:
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

TARGET_TIME_MS = 80 * 60 * 60 * 1000


def upgrade() -> None:
    op.create_table(
        "machines",
        sa.Column("id", sa.String(length=50), primary_key=True),
        sa.Column("display_id", sa.String(length=50), nullable=False),
        sa.Column(
            "status",
            sa.Enum("RUNNING", "PAUSED", "COMPLETED", name="machine_status_enum"),
            nullable=False,
            server_default="PAUSED",
        ),
        sa.Column("start_time", sa.BigInteger(), nullable=True),
        sa.Column("accumulated_time", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("target_time", sa.BigInteger(), nullable=False, server_default=str(TARGET_TIME_MS)),
        sa.Column("was_running_before_outage", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
    op.drop_table("machines")
    sa.Enum(name="machine_status_enum").drop(op.get_bind(), checkfirst=True)
