"""create storage_entries table

Revision ID: 5e2b7c91a0d4
Revises:
Create Date: 2026-10-19 09:14:02.318406

Key-value storage area for saved quotes and the active quote pointer.
Idempotent: databases bootstrapped by Base.metadata.create_all() already
have the table.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5e2b7c91a0d4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if not _table_exists("storage_entries"):
        op.create_table(
            "storage_entries",
            sa.Column("key", sa.String(), primary_key=True),
            sa.Column("value", sa.Text(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )


def downgrade() -> None:
    if _table_exists("storage_entries"):
        op.drop_table("storage_entries")
