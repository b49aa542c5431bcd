"""create_entries

Revision ID: 3b9e2c41d7a0
Revises: 
Create Date: 2026-10-17 09:12:30.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b9e2c41d7a0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('entries',
        sa.Column('id', sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column('category', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )

    # One index per listing order, each ending in the id tie-breaker
    op.create_index(
        'entries_created_desc',
        'entries',
        ['created_at', 'id'],
        unique=False,
        postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}
    )
    op.create_index(
        'entries_score_desc',
        'entries',
        ['score', 'id'],
        unique=False,
        postgresql_ops={'score': 'DESC'}
    )
    op.create_index('entries_title', 'entries', ['title', 'id'], unique=False)

    # Category-scoped listings
    op.create_index(
        'entries_category_created_desc',
        'entries',
        ['category', 'created_at', 'id'],
        unique=False,
        postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}
    )
    op.create_index(
        'entries_category_score_desc',
        'entries',
        ['category', 'score', 'id'],
        unique=False,
        postgresql_ops={'score': 'DESC'}
    )
    op.create_index('entries_category_title', 'entries', ['category', 'title', 'id'], unique=False)


def downgrade() -> None:
    op.drop_index('entries_category_title', table_name='entries')
    op.drop_index('entries_category_score_desc', table_name='entries')
    op.drop_index('entries_category_created_desc', table_name='entries')
    op.drop_index('entries_title', table_name='entries')
    op.drop_index('entries_score_desc', table_name='entries')
    op.drop_index('entries_created_desc', table_name='entries')

    op.drop_table('entries')
