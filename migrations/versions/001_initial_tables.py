"""Create PlantDaddy tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, households, plant care and notification tables"""

    # 1. Users
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index('ix_users_username', 'users', ['username'])

    # 2. Households and membership
    op.create_table('households',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('invite_code', sa.String(16), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_households'),
        sa.UniqueConstraint('invite_code', name='uq_households_invite_code'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='CASCADE',
                                name='fk_households_created_by_users'),
    )

    op.create_table('household_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('household_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='member'),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_household_members'),
        sa.UniqueConstraint('household_id', 'user_id', name='uq_household_members_household_id'),
        sa.CheckConstraint("role IN ('owner', 'member', 'caretaker')", name='ck_household_members_valid_role'),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE',
                                name='fk_household_members_household_id_households'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE',
                                name='fk_household_members_user_id_users'),
    )
    op.create_index('ix_household_members_household_id', 'household_members', ['household_id'])
    op.create_index('ix_household_members_user_id', 'household_members', ['user_id'])

    # 3. Locations
    op.create_table('locations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('household_id', sa.Integer(), nullable=True),

        sa.PrimaryKeyConstraint('id', name='pk_locations'),
        sa.UniqueConstraint('household_id', 'name', name='uq_locations_household_id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_locations_user_id_users'),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE',
                                name='fk_locations_household_id_households'),
    )
    op.create_index('ix_locations_household_id', 'locations', ['household_id'])

    # 4. Plants
    op.create_table('plants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('species', sa.String(200), nullable=True),
        sa.Column('location', sa.String(100), nullable=False),
        sa.Column('watering_frequency', sa.Integer(), nullable=False),
        sa.Column('last_watered', sa.DateTime(timezone=True), nullable=False),
        sa.Column('snoozed_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('household_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_plants'),
        sa.CheckConstraint('watering_frequency >= 1', name='ck_plants_positive_watering_frequency'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_plants_user_id_users'),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE',
                                name='fk_plants_household_id_households'),
    )
    op.create_index('ix_plants_household_id', 'plants', ['household_id'])

    # 5. Species catalog (household_id NULL = global)
    op.create_table('plant_species',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('scientific_name', sa.String(200), nullable=False),
        sa.Column('family', sa.String(100), nullable=True),
        sa.Column('origin', sa.String(200), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('care_level', sa.String(20), nullable=False),
        sa.Column('light_requirements', sa.String(200), nullable=False),
        sa.Column('watering_frequency', sa.Integer(), nullable=False),
        sa.Column('humidity', sa.String(20), nullable=True),
        sa.Column('soil_type', sa.String(200), nullable=True),
        sa.Column('propagation', sa.Text(), nullable=True),
        sa.Column('toxicity', sa.String(100), nullable=True),
        sa.Column('common_issues', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('household_id', sa.Integer(), nullable=True),

        sa.PrimaryKeyConstraint('id', name='pk_plant_species'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_plant_species_user_id_users'),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE',
                                name='fk_plant_species_household_id_households'),
    )
    op.create_index('ix_plant_species_name', 'plant_species', ['name'])
    op.create_index('ix_plant_species_household_id', 'plant_species', ['household_id'])

    # 6. Care history
    op.create_table('care_activities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('activity_type', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('performed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_care_activities'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE',
                                name='fk_care_activities_plant_id_plants'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_care_activities_user_id_users'),
    )
    op.create_index('ix_care_activities_plant_id', 'care_activities', ['plant_id'])

    op.create_table('plant_health_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_plant_health_records'),
        sa.CheckConstraint("status IN ('thriving', 'struggling', 'sick')",
                           name='ck_plant_health_records_valid_health_status'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE',
                                name='fk_plant_health_records_plant_id_plants'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_plant_health_records_user_id_users'),
    )
    op.create_index('ix_plant_health_records_plant_id', 'plant_health_records', ['plant_id'])

    op.create_table('plant_journal_entries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('caption', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_plant_journal_entries'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE',
                                name='fk_plant_journal_entries_plant_id_plants'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_plant_journal_entries_user_id_users'),
    )
    op.create_index('ix_plant_journal_entries_plant_id', 'plant_journal_entries', ['plant_id'])

    # 7. Notifications
    op.create_table('notification_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('pushover_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('pushover_app_token', sa.String(100), nullable=True),
        sa.Column('pushover_user_key', sa.String(100), nullable=True),
        sa.Column('email_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_address', sa.String(255), nullable=True),
        sa.Column('sendgrid_api_key', sa.String(255), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=True),

        sa.PrimaryKeyConstraint('id', name='pk_notification_settings'),
        sa.UniqueConstraint('user_id', name='uq_notification_settings_user_id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE',
                                name='fk_notification_settings_user_id_users'),
    )

    op.create_table('notification_log',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=True),
        sa.Column('kind', sa.String(20), nullable=False, server_default='reminder'),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('channel', sa.String(20), nullable=False),
        sa.Column('success', sa.Boolean(), nullable=False),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_notification_log'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE',
                                name='fk_notification_log_user_id_users'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='SET NULL',
                                name='fk_notification_log_plant_id_plants'),
    )
    op.create_index('ix_notification_log_user_id', 'notification_log', ['user_id'])
    op.create_index('ix_notification_log_plant_id', 'notification_log', ['plant_id'])
    op.create_index('ix_notification_log_sent_at', 'notification_log', ['sent_at'])


def downgrade() -> None:
    """Drop all PlantDaddy tables"""
    op.drop_table('notification_log')
    op.drop_table('notification_settings')
    op.drop_table('plant_journal_entries')
    op.drop_table('plant_health_records')
    op.drop_table('care_activities')
    op.drop_table('plant_species')
    op.drop_table('plants')
    op.drop_table('locations')
    op.drop_table('household_members')
    op.drop_table('households')
    op.drop_table('users')
