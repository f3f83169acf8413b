"""Initial migration

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Ссылки между таблицами без FOREIGN KEY: целостность держит приложение
    op.create_table(
        'buildings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False, unique=True, comment="lower(trim(name)) с пробелами, заменёнными на '-'"),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
    )
    op.create_index('ix_buildings_id', 'buildings', ['id'])

    op.create_table(
        'floors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('building_id', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False, comment="Номер этажа, уникален в пределах здания"),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
        sa.UniqueConstraint('building_id', 'level', name='uq_floors_building_level'),
    )
    op.create_index('ix_floors_id', 'floors', ['id'])
    op.create_index('ix_floors_building_id', 'floors', ['building_id'])

    op.create_table(
        'maps',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('image', sa.Text(), nullable=True, comment="Изображение плана этажа в base64"),
        sa.Column('building_id', sa.Integer(), nullable=True),
        sa.Column('floor_id', sa.Integer(), nullable=True),
    )
    op.create_index('ix_maps_id', 'maps', ['id'])
    op.create_index('ix_maps_building_id', 'maps', ['building_id'])
    op.create_index('ix_maps_floor_id', 'maps', ['floor_id'])

    op.create_table(
        'sensors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False, unique=True),
        sa.Column('type', sa.String(length=64), nullable=False),
        sa.Column('unit', sa.String(length=32), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('serial_number', sa.String(length=255), nullable=True),
        sa.Column('model', sa.String(length=255), nullable=True),
        sa.Column('manufacturer', sa.String(length=255), nullable=True),
        sa.Column('installed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_maintenance', sa.DateTime(timezone=True), nullable=True),
        sa.Column('building_id', sa.Integer(), nullable=True),
        sa.Column('floor_id', sa.Integer(), nullable=True),
        sa.Column('room_id', sa.String(length=255), nullable=True),
        sa.Column('map_id', sa.Integer(), nullable=True),
        sa.Column('x_percent', sa.Float(), nullable=True),
        sa.Column('y_percent', sa.Float(), nullable=True),
        sa.Column('x_coord', sa.Float(), nullable=True),
        sa.Column('y_coord', sa.Float(), nullable=True),
    )
    op.create_index('ix_sensors_id', 'sensors', ['id'])
    op.create_index('ix_sensors_building_id', 'sensors', ['building_id'])
    op.create_index('ix_sensors_floor_id', 'sensors', ['floor_id'])
    op.create_index('ix_sensors_map_id', 'sensors', ['map_id'])

    op.create_table(
        'plants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('species', sa.String(length=255), nullable=False),
        sa.Column('sensor_id', sa.Integer(), nullable=True),
        sa.Column('watering_threshold', sa.Integer(), nullable=False, server_default='30'),
        sa.Column('last_watered', sa.DateTime(timezone=True), nullable=True),
        sa.Column('location_description', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_plants_id', 'plants', ['id'])
    op.create_index('ix_plants_sensor_id', 'plants', ['sensor_id'])

    op.create_table(
        'measurements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('sensor_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=16), nullable=False, server_default='%'),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
    )
    op.create_index('ix_measurements_id', 'measurements', ['id'])
    op.create_index('ix_measurements_sensor_id', 'measurements', ['sensor_id'])
    op.create_index('ix_measurements_timestamp', 'measurements', ['timestamp'])

    op.create_table(
        'watering_schedules',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('trigger_type', sa.String(length=32), nullable=False, server_default='manual'),
        sa.Column('triggered_by', sa.String(length=64), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_date', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
    )
    op.create_index('ix_watering_schedules_id', 'watering_schedules', ['id'])
    op.create_index('ix_watering_schedules_plant_id', 'watering_schedules', ['plant_id'])


def downgrade():
    for table in ('watering_schedules', 'measurements', 'plants', 'sensors', 'maps', 'floors', 'buildings'):
        op.drop_table(table)
