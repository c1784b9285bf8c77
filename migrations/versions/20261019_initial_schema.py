"""
Initial schema: users, system settings, issues and pickups.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# Alembic revision identifiers
revision: str = '20261019_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='citizen'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'system_settings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('maintenance_mode', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('maintenance_message', sa.String(length=500), nullable=False),
        sa.Column('updated_by', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'issues',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('reporter_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False, server_default='other'),
        sa.Column('location', sa.String(length=300), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='open'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_issues_reporter_created', 'issues', ['reporter_id', 'created_at'])
    op.create_index('idx_issues_status', 'issues', ['status'])

    op.create_table(
        'pickups',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('requester_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('waste_type', sa.String(length=50), nullable=False),
        sa.Column('address', sa.String(length=300), nullable=False),
        sa.Column('preferred_date', sa.Date(), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_pickups_requester_created', 'pickups', ['requester_id', 'created_at'])
    op.create_index('idx_pickups_status', 'pickups', ['status'])


def downgrade() -> None:
    op.drop_index('idx_pickups_status', table_name='pickups')
    op.drop_index('idx_pickups_requester_created', table_name='pickups')
    op.drop_table('pickups')
    op.drop_index('idx_issues_status', table_name='issues')
    op.drop_index('idx_issues_reporter_created', table_name='issues')
    op.drop_table('issues')
    op.drop_table('system_settings')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
