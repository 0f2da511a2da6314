"""Create notes table

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2025-09-20 10:12:05.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from roomnotes.core.models.types import GUID


# revision identifiers, used by Alembic.
revision: str = '4f2a9c1d7e30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'notes',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('room_id', sa.String(length=255), nullable=False),
        sa.Column('created_by', sa.String(length=100), nullable=False),
        sa.Column('last_edited_by', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('length(title) <= 200', name='ck_notes_title_len'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notes_room_id', 'notes', ['room_id'])
    op.create_index('idx_notes_room_created', 'notes', ['room_id', 'created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notes_room_created', table_name='notes')
    op.drop_index('idx_notes_room_id', table_name='notes')
    op.drop_table('notes')
