"""add friendships, activity_feed, shared_achievements

Revision ID: 8d4f02c6e1ab
Revises: 3e1c9a7b5d20
Create Date: 2026-09-28 00:25:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d4f02c6e1ab'
down_revision: Union[str, Sequence[str], None] = '3e1c9a7b5d20'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'friendships' not in tables:
        op.create_table(
            'friendships',
            sa.Column('id', sa.String(36), nullable=False),
            sa.Column('requester_id', sa.String(36), nullable=False),
            sa.Column('addressee_id', sa.String(36), nullable=False),
            sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
            sa.ForeignKeyConstraint(['requester_id'], ['users.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['addressee_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_friendships_requester_id', 'friendships', ['requester_id'])
        op.create_index('ix_friendships_addressee_id', 'friendships', ['addressee_id'])

    if 'activity_feed' not in tables:
        op.create_table(
            'activity_feed',
            sa.Column('id', sa.String(36), nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            sa.Column('activity_type', sa.String(50), nullable=False),
            sa.Column('data', sa.JSON(), nullable=True),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_activity_feed_user_id', 'activity_feed', ['user_id'])
        op.create_index('ix_activity_feed_created_at', 'activity_feed', ['created_at'])

    if 'shared_achievements' not in tables:
        op.create_table(
            'shared_achievements',
            sa.Column('id', sa.String(36), nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            sa.Column('achievement_id', sa.String(36), nullable=False),
            sa.Column('shared_with', sa.String(20), nullable=False, server_default='friends'),
            sa.Column('message', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['achievement_id'], ['achievements.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_shared_achievements_user_id', 'shared_achievements', ['user_id'])
        op.create_index('ix_shared_achievements_achievement_id', 'shared_achievements', ['achievement_id'])
        op.create_index('ix_shared_achievements_created_at', 'shared_achievements', ['created_at'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS shared_achievements')
    op.execute('DROP TABLE IF EXISTS activity_feed')
    op.execute('DROP TABLE IF EXISTS friendships')
