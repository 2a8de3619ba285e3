"""create condo manager schema

Revision ID: a3f1c2d4e5b6
Revises:
Create Date: 2025-11-02 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a3f1c2d4e5b6'
down_revision = None
branch_labels = None
depends_on = None


def _insp():
    return sa.inspect(op.get_bind())


def _has_table(table_name: str) -> bool:
    try:
        return table_name in _insp().get_table_names()
    except Exception:
        return False


def upgrade():
    # Databases created before migrations already have these tables
    if not _has_table('users'):
        op.create_table(
            'users',
            sa.Column('user_id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('username', sa.String(), nullable=False, unique=True),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('created_time', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )

    if not _has_table('properties'):
        op.create_table(
            'properties',
            sa.Column('property_id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.user_id'), nullable=True),
            sa.Column('nickname', sa.String(), nullable=False),
            sa.Column('property_type', sa.String(), nullable=True),
            sa.Column('street', sa.String(), nullable=True),
            sa.Column('city', sa.String(), nullable=True),
            sa.Column('state', sa.String(), nullable=True),
            sa.Column('zip', sa.String(), nullable=True),
        )

    if not _has_table('maintenance_requests'):
        op.create_table(
            'maintenance_requests',
            sa.Column('request_id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.property_id'), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('status', sa.String(), server_default='Pending', nullable=False),
            sa.Column('date_reported', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('date_completed', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_maintenance_requests_status', 'maintenance_requests', ['status'])

    if not _has_table('expenses'):
        op.create_table(
            'expenses',
            sa.Column('expense_id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.property_id'), nullable=False),
            sa.Column('expense_category', sa.String(), nullable=True),
            sa.Column('amount', sa.Numeric(10, 2), nullable=False),
            sa.Column('expense_date', sa.Date(), nullable=False),
            sa.Column('vendor', sa.String(), nullable=True),
        )

    if not _has_table('messages'):
        op.create_table(
            'messages',
            sa.Column('message_id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.user_id'), nullable=False),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('created_time', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )

    if not _has_table('calendar_events'):
        op.create_table(
            'calendar_events',
            sa.Column('event_id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('event_title', sa.String(), nullable=False),
            sa.Column('start_time', sa.DateTime(), nullable=False),
        )


def downgrade():
    # Drop children before parents
    for table_name in ('calendar_events', 'messages', 'expenses', 'maintenance_requests', 'properties', 'users'):
        if _has_table(table_name):
            op.drop_table(table_name)
