"""Create progress_sync_entries table.

Revision ID: 001_progress_sync_entries
Revises:
Create Date: 2026-02-20

Key/value rows with epoch-second expiry backing the SQL sync store.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_progress_sync_entries'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'progress_sync_entries',
        sa.Column('storage_key', sa.String(200), primary_key=True),
        sa.Column('value', sa.JSON(), nullable=False),
        sa.Column('expires_at', sa.BigInteger(), nullable=False),
    )
    op.create_index(
        'ix_progress_sync_entries_expires_at',
        'progress_sync_entries', ['expires_at'],
    )


def downgrade() -> None:
    op.drop_index(
        'ix_progress_sync_entries_expires_at',
        table_name='progress_sync_entries',
    )
    op.drop_table('progress_sync_entries')
