"""Create users, spiritual gift assessments and drafts tables

Revision ID: 20261018_create_spiritual_gifts_tables
Revises:
Create Date: 2026-10-18 00:00:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20261018_create_spiritual_gifts_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('member', 'church_admin', 'admin', name='userrole'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('spiritual_profile', sa.JSON(), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'spiritual_gift_assessments',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('tier', sa.String(), nullable=False),
        sa.Column('answers', sa.JSON(), nullable=False),
        sa.Column('profile', sa.JSON(), nullable=False),
        sa.Column('gift_scores', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_spiritual_gift_assessments_user_id', 'spiritual_gift_assessments', ['user_id'])
    op.create_index('ix_spiritual_gift_assessments_created_at', 'spiritual_gift_assessments', ['created_at'])

    op.create_table(
        'spiritual_gift_drafts',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('tier', sa.String(), nullable=False),
        sa.Column('answers', sa.JSON(), nullable=False),
        sa.Column('page', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('status', sa.String(), nullable=False, server_default='not_started'),
        sa.Column('assessment_id', sa.String(), sa.ForeignKey('spiritual_gift_assessments.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_spiritual_gift_drafts_user_id', 'spiritual_gift_drafts', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_spiritual_gift_drafts_user_id', table_name='spiritual_gift_drafts')
    op.drop_table('spiritual_gift_drafts')
    op.drop_index('ix_spiritual_gift_assessments_created_at', table_name='spiritual_gift_assessments')
    op.drop_index('ix_spiritual_gift_assessments_user_id', table_name='spiritual_gift_assessments')
    op.drop_table('spiritual_gift_assessments')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
