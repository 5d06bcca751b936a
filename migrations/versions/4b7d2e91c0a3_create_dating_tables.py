"""create_dating_tables

Revision ID: 4b7d2e91c0a3
Revises:
Create Date: 2026-03-09 14:21:37.512904

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b7d2e91c0a3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, swipes, matches, messages and reported_content tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('full_name', sa.String(length=100), server_default='', nullable=False),
        sa.Column('birthdate', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=50), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('interests', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('location', sa.String(length=255), server_default='El Paso, TX', nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('occupation', sa.String(length=255), nullable=True),
        sa.Column('education', sa.String(length=255), nullable=True),
        sa.Column('languages', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('verified', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('settings', postgresql.JSONB(astext_type=sa.Text()), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('swipes',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('swiper_id', sa.UUID(), nullable=False),
        sa.Column('swiped_id', sa.UUID(), nullable=False),
        sa.Column('action', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint("action IN ('like', 'dislike')", name='ck_swipes_action'),
        sa.CheckConstraint('swiper_id != swiped_id', name='ck_swipes_no_self'),
        sa.ForeignKeyConstraint(['swiped_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['swiper_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('swiper_id', 'swiped_id', name='uq_swipes_pair')
    )
    op.create_index(op.f('ix_swipes_swiper_id'), 'swipes', ['swiper_id'], unique=False)
    op.create_index(op.f('ix_swipes_swiped_id'), 'swipes', ['swiped_id'], unique=False)

    op.create_table('matches',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('matched_user_id', sa.UUID(), nullable=False),
        sa.Column('pair_key', sa.String(length=73), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint("status IN ('pending', 'matched', 'unmatched')", name='ck_matches_status'),
        sa.UniqueConstraint('pair_key', name='uq_matches_pair'),
        sa.ForeignKeyConstraint(['matched_user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_matches_user_id'), 'matches', ['user_id'], unique=False)
    op.create_index(op.f('ix_matches_matched_user_id'), 'matches', ['matched_user_id'], unique=False)
    op.create_index('ix_matches_pair', 'matches', ['user_id', 'matched_user_id'], unique=False)

    op.create_table('messages',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('match_id', sa.UUID(), nullable=False),
        sa.Column('sender_id', sa.UUID(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['match_id'], ['matches.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_messages_match_id'), 'messages', ['match_id'], unique=False)

    op.create_table('reported_content',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('reporter_id', sa.UUID(), nullable=False),
        sa.Column('reported_user_id', sa.UUID(), nullable=False),
        sa.Column('reason', sa.String(length=500), nullable=False),
        sa.Column('content_type', sa.String(length=20), nullable=False),
        sa.Column('content', sa.Text(), server_default='', nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint("content_type IN ('profile', 'message')", name='ck_reported_content_type'),
        sa.CheckConstraint("status IN ('pending', 'approved', 'rejected')", name='ck_reported_content_status'),
        sa.ForeignKeyConstraint(['reported_user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reporter_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_reported_content_reported_user_id'), 'reported_content', ['reported_user_id'], unique=False)
    op.create_index(op.f('ix_reported_content_status'), 'reported_content', ['status'], unique=False)


def downgrade() -> None:
    """Drop all dating tables."""
    op.drop_index(op.f('ix_reported_content_status'), table_name='reported_content')
    op.drop_index(op.f('ix_reported_content_reported_user_id'), table_name='reported_content')
    op.drop_table('reported_content')
    op.drop_index(op.f('ix_messages_match_id'), table_name='messages')
    op.drop_table('messages')
    op.drop_index('ix_matches_pair', table_name='matches')
    op.drop_index(op.f('ix_matches_matched_user_id'), table_name='matches')
    op.drop_index(op.f('ix_matches_user_id'), table_name='matches')
    op.drop_table('matches')
    op.drop_index(op.f('ix_swipes_swiped_id'), table_name='swipes')
    op.drop_index(op.f('ix_swipes_swiper_id'), table_name='swipes')
    op.drop_table('swipes')
    op.drop_table('profiles')
