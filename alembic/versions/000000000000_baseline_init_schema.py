"""baseline_init_schema

Revision ID: 000000000000
Revises:
Create Date: 2026-10-17 00:00:00.000000

Baseline migration creating users, books, favorites and readings.
All other migrations should depend on this revision.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '000000000000'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'books',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('author', sa.String(), nullable=False),
        sa.Column('number_page', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cover_image_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'number_page > 1 AND number_page <= 50000',
            name='ck_books_number_page_range',
        ),
    )
    op.create_index('ix_books_title', 'books', ['title'])

    op.create_table(
        'favorites',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('book_id', sa.Uuid(), sa.ForeignKey('books.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'book_id', name='uq_favorites_user_book'),
    )
    op.create_index('ix_favorites_user_id', 'favorites', ['user_id'])
    op.create_index('ix_favorites_book_id', 'favorites', ['book_id'])

    readingstatus = sa.Enum('reading', 'finished', name='readingstatus')
    op.create_table(
        'readings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('book_id', sa.Uuid(), sa.ForeignKey('books.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', readingstatus, nullable=False),
        sa.Column('current_page', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'book_id', name='uq_readings_user_book'),
    )
    op.create_index('ix_readings_user_id', 'readings', ['user_id'])
    op.create_index('ix_readings_book_id', 'readings', ['book_id'])


def downgrade() -> None:
    op.drop_index('ix_readings_book_id', table_name='readings')
    op.drop_index('ix_readings_user_id', table_name='readings')
    op.drop_table('readings')
    sa.Enum(name='readingstatus').drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_favorites_book_id', table_name='favorites')
    op.drop_index('ix_favorites_user_id', table_name='favorites')
    op.drop_table('favorites')
    op.drop_index('ix_books_title', table_name='books')
    op.drop_table('books')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
