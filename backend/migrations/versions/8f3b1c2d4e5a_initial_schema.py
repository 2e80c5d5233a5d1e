"""initial schema: users, videos, subscriptions, watch history

Revision ID: 8f3b1c2d4e5a
Revises:
Create Date: 2024-06-01 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '8f3b1c2d4e5a'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('avatar_url', sa.String(length=512), nullable=False),
        sa.Column('avatar_public_id', sa.String(length=255), nullable=True),
        sa.Column('cover_image_url', sa.String(length=512), server_default='', nullable=False),
        sa.Column('cover_image_public_id', sa.String(length=255), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_username', 'users', ['username'])

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.Column('video_url', sa.String(length=512), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=512), nullable=False),
        sa.Column('duration', sa.Float(), server_default='0', nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_published', sa.Boolean(), server_default='1', nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['users.id'], name='fk_videos_owner_id_users', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_videos'),
    )
    op.create_index('ix_videos_owner_id', 'videos', ['owner_id'])

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('subscriber_id', sa.Integer(), nullable=False),
        sa.Column('channel_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            'subscriber_id <> channel_id', name='ck_subscriptions_no_self_subscription'
        ),
        sa.ForeignKeyConstraint(
            ['subscriber_id'], ['users.id'],
            name='fk_subscriptions_subscriber_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['channel_id'], ['users.id'],
            name='fk_subscriptions_channel_id_users', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_subscriptions'),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_pair'),
    )
    op.create_index('ix_subscriptions_channel_id', 'subscriptions', ['channel_id'])
    op.create_index('ix_subscriptions_subscriber_id', 'subscriptions', ['subscriber_id'])

    op.create_table(
        'watch_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name='fk_watch_history_user_id_users', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['video_id'], ['videos.id'], name='fk_watch_history_video_id_videos', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_watch_history'),
        sa.UniqueConstraint('user_id', 'position', name='uq_watch_history_user_position'),
    )
    op.create_index('ix_watch_history_user_id', 'watch_history', ['user_id'])


def downgrade():
    op.drop_index('ix_watch_history_user_id', table_name='watch_history')
    op.drop_table('watch_history')
    op.drop_index('ix_subscriptions_subscriber_id', table_name='subscriptions')
    op.drop_index('ix_subscriptions_channel_id', table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_index('ix_videos_owner_id', table_name='videos')
    op.drop_table('videos')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
