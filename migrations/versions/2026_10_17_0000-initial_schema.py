"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the redirects table and its path index.
    """
    bind = op.get_bind()
    existing_tables = inspect(bind).get_table_names()

    if 'redirects' not in existing_tables:
        op.create_table(
            'redirects',
            sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
            sa.Column('path', sa.String(length=512), nullable=False),
            sa.Column('url', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

        op.create_index(
            'ix_redirects_path',
            'redirects',
            ['path'],
            unique=False
        )


def downgrade() -> None:
    """
    Drop the redirects table.
    """
    op.drop_index('ix_redirects_path', table_name='redirects')
    op.drop_table('redirects')
