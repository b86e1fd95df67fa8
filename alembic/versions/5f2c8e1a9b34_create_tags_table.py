"""create tags table

Revision ID: 5f2c8e1a9b34
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5f2c8e1a9b34"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the tags table with a unique tag column."""
    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tag", sa.String(), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tag"),
    )
    op.create_index(op.f("ix_tags_id"), "tags", ["id"], unique=False)


def downgrade() -> None:
    """Drop the tags table."""
    op.drop_index(op.f("ix_tags_id"), table_name="tags")
    op.drop_table("tags")
