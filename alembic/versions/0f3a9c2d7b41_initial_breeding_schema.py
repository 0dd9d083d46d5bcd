"""initial breeding schema

Revision ID: 0f3a9c2d7b41
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0f3a9c2d7b41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create organizations, users, cattle, breeding records, notifications and device tokens."""

    # --- organizations ---
    op.create_table(
        'organizations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_organizations'),
        sa.UniqueConstraint('name', name='ux_organizations_name'),
    )

    # --- users ---
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'USER', name='role', native_enum=False), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.ForeignKeyConstraint(
            ['organization_id'], ['organizations.id'], name='fk_users_organization_id_organizations'
        ),
        sa.UniqueConstraint('email', name='ux_users_email'),
        sa.UniqueConstraint('username', name='ux_users_username'),
    )
    op.create_index('ix_users_organization_id', 'users', ['organization_id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    # --- cattle ---
    op.create_table(
        'cattle',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('tag_number', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('breed', sa.String(length=128), nullable=False),
        sa.Column('gender', sa.String(length=6), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=32), server_default='ACTIVE', nullable=False),
        sa.Column('parent_id', sa.Uuid(), nullable=True),
        sa.Column('assigned_user_id', sa.Uuid(), nullable=True),
        sa.Column('photo_url', sa.String(length=1024), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), server_default='1', nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_cattle'),
        sa.ForeignKeyConstraint(
            ['organization_id'], ['organizations.id'], name='fk_cattle_organization_id_organizations'
        ),
        sa.ForeignKeyConstraint(['parent_id'], ['cattle.id'], name='fk_cattle_parent_id_cattle'),
        sa.ForeignKeyConstraint(
            ['assigned_user_id'], ['users.id'], name='fk_cattle_assigned_user_id_users'
        ),
        sa.UniqueConstraint('organization_id', 'tag_number', name='ux_cattle_organization_tag'),
    )
    op.create_index('ix_cattle_organization_id', 'cattle', ['organization_id'], unique=False)
    op.create_index('ix_cattle_status', 'cattle', ['status'], unique=False)
    op.create_index('ix_cattle_assigned_user_id', 'cattle', ['assigned_user_id'], unique=False)

    # --- semination_records ---
    op.create_table(
        'semination_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('cattle_id', sa.Uuid(), nullable=False),
        sa.Column('semination_date', sa.Date(), nullable=False),
        sa.Column('check_date', sa.Date(), nullable=False),
        sa.Column('is_pregnant', sa.Boolean(), nullable=True),
        sa.Column('checked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.Uuid(), nullable=False),
        sa.Column('last_reminded_on', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_semination_records'),
        sa.ForeignKeyConstraint(
            ['cattle_id'], ['cattle.id'], name='fk_semination_records_cattle_id_cattle'
        ),
        sa.ForeignKeyConstraint(
            ['created_by_id'], ['users.id'], name='fk_semination_records_created_by_id_users'
        ),
    )
    op.create_index(
        'ix_semination_records_org_cattle_date',
        'semination_records',
        ['organization_id', 'cattle_id', 'semination_date'],
        unique=False,
    )
    op.create_index(
        'ix_semination_records_pending',
        'semination_records',
        ['check_date'],
        unique=False,
        postgresql_where=sa.text('is_pregnant IS NULL'),
    )

    # --- pregnancy_records ---
    op.create_table(
        'pregnancy_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('cattle_id', sa.Uuid(), nullable=False),
        sa.Column('semination_record_id', sa.Uuid(), nullable=False),
        sa.Column('expected_delivery_date', sa.Date(), nullable=False),
        sa.Column('actual_delivery_date', sa.Date(), nullable=True),
        sa.Column('calf_id', sa.Uuid(), nullable=True),
        sa.Column('status', sa.String(length=16), server_default='IN_PROGRESS', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.Uuid(), nullable=False),
        sa.Column('last_reminded_on', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_pregnancy_records'),
        sa.ForeignKeyConstraint(
            ['cattle_id'], ['cattle.id'], name='fk_pregnancy_records_cattle_id_cattle'
        ),
        sa.ForeignKeyConstraint(
            ['semination_record_id'],
            ['semination_records.id'],
            name='fk_pregnancy_records_semination_record_id_semination_records',
        ),
        sa.ForeignKeyConstraint(
            ['calf_id'], ['cattle.id'], name='fk_pregnancy_records_calf_id_cattle'
        ),
        sa.ForeignKeyConstraint(
            ['created_by_id'], ['users.id'], name='fk_pregnancy_records_created_by_id_users'
        ),
        sa.UniqueConstraint(
            'semination_record_id', name='ux_pregnancy_records_semination_record_id'
        ),
    )
    op.create_index(
        'ix_pregnancy_records_org_cattle',
        'pregnancy_records',
        ['organization_id', 'cattle_id'],
        unique=False,
    )
    op.create_index(
        'ix_pregnancy_records_status_expected',
        'pregnancy_records',
        ['status', 'expected_delivery_date'],
        unique=False,
    )
    op.create_index(
        'ix_pregnancy_records_status_actual',
        'pregnancy_records',
        ['status', 'actual_delivery_date'],
        unique=False,
    )

    # --- notifications ---
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('cattle_id', sa.Uuid(), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('data', sa.Text(), nullable=True),
        sa.Column('is_read', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_notifications'),
        sa.ForeignKeyConstraint(
            ['organization_id'],
            ['organizations.id'],
            name='fk_notifications_organization_id_organizations',
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name='fk_notifications_user_id_users', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['cattle_id'], ['cattle.id'], name='fk_notifications_cattle_id_cattle', ondelete='SET NULL'
        ),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'], unique=False)
    op.create_index(
        'ix_notifications_org_user_read',
        'notifications',
        ['organization_id', 'user_id', 'is_read'],
        unique=False,
    )
    op.create_index(
        'ix_notifications_org_created', 'notifications', ['organization_id', 'created_at'], unique=False
    )

    # --- device_tokens ---
    op.create_table(
        'device_tokens',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('platform', sa.String(length=20), nullable=False),
        sa.Column('token', sa.String(length=512), nullable=False),
        sa.Column('app_version', sa.String(length=50), nullable=True),
        sa.Column('disabled', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('last_active_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_device_tokens'),
        sa.ForeignKeyConstraint(
            ['organization_id'],
            ['organizations.id'],
            name='fk_device_tokens_organization_id_organizations',
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name='fk_device_tokens_user_id_users', ondelete='CASCADE'
        ),
    )
    op.create_index('uq_device_tokens_token', 'device_tokens', ['token'], unique=True)
    op.create_index('ix_device_tokens_user', 'device_tokens', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_device_tokens_user', table_name='device_tokens')
    op.drop_index('uq_device_tokens_token', table_name='device_tokens')
    op.drop_table('device_tokens')
    op.drop_index('ix_notifications_org_created', table_name='notifications')
    op.drop_index('ix_notifications_org_user_read', table_name='notifications')
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_pregnancy_records_status_actual', table_name='pregnancy_records')
    op.drop_index('ix_pregnancy_records_status_expected', table_name='pregnancy_records')
    op.drop_index('ix_pregnancy_records_org_cattle', table_name='pregnancy_records')
    op.drop_table('pregnancy_records')
    op.drop_index('ix_semination_records_pending', table_name='semination_records')
    op.drop_index('ix_semination_records_org_cattle_date', table_name='semination_records')
    op.drop_table('semination_records')
    op.drop_index('ix_cattle_assigned_user_id', table_name='cattle')
    op.drop_index('ix_cattle_status', table_name='cattle')
    op.drop_index('ix_cattle_organization_id', table_name='cattle')
    op.drop_table('cattle')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_organization_id', table_name='users')
    op.drop_table('users')
    op.drop_table('organizations')
