"""init_consultation_schema

Revision ID: 0001
Revises:
Create Date: 2025-03-01

Schema:
- slot_counter: used free slots per (year, month), created lazily by the app
- booking: consultation requests, UUID7 primary key
- review: customer reviews, pending -> verified -> published
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        'slot_counter',
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('used', sa.Integer(), server_default='0', nullable=False),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint('used >= 0', name='ck_slot_counter_used_non_negative'),
        sa.CheckConstraint('month BETWEEN 1 AND 12', name='ck_slot_counter_month_range'),
        sa.PrimaryKeyConstraint('year', 'month'),
    )

    op.create_table(
        'booking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('discord_name', sa.String(length=100), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("status IN ('new', 'confirmed', 'rejected')", name='ck_booking_status'),
        sa.CheckConstraint('duration_minutes > 0', name='ck_booking_duration_positive'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_booking_status_starts_at', 'booking', ['status', 'starts_at'])

    op.create_table(
        'review',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=True),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('verification_code_hash', sa.String(length=64), nullable=True),
        sa.Column('verification_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating_range'),
        sa.CheckConstraint(
            "status IN ('pending', 'verified', 'published')", name='ck_review_status'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_review_status_published_at', 'review', ['status', 'published_at'])


def downgrade() -> None:
    op.drop_index('ix_review_status_published_at', table_name='review')
    op.drop_table('review')
    op.drop_index('ix_booking_status_starts_at', table_name='booking')
    op.drop_table('booking')
    op.drop_table('slot_counter')
