"""Launcher key-value store for window-state persistence

Revision ID: 20261018_01
Revises: None
Create Date: 2026-10-18
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "launcher_key_value",
        sa.Column("store_key", sa.String(length=255), primary_key=True),
        sa.Column("store_value", sa.Text(), nullable=False),
        sa.Column(
            "updated_at_utc",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index("ix_launcher_key_value_updated_at_utc", "launcher_key_value", ["updated_at_utc"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_launcher_key_value_updated_at_utc", table_name="launcher_key_value")
    op.drop_table("launcher_key_value")
