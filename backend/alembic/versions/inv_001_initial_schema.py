"""Initial inventory schema: geo, hotels, rooms, price tiers, SEO, images

Revision ID: inv_001
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = 'inv_001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONTENT_TYPES = ('hotel', 'room', 'city', 'country', 'page', 'blog')
DAYS = ('sun', 'mon', 'tue', 'wed', 'thu', 'fri', 'sat')


def _day_prices() -> list:
    return [sa.Column(f'price_{day}', sa.Numeric(precision=10, scale=2), nullable=False) for day in DAYS]


def upgrade() -> None:
    content_target_type = postgresql.ENUM(*CONTENT_TYPES, name='enum_content_target_type', create_type=False)
    content_target_type.create(op.get_bind(), checkfirst=True)

    # --- Geo ---
    op.create_table('countries',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name_th', sa.String(length=100), nullable=False),
        sa.Column('name_en', sa.String(length=100), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name_th'),
        sa.UniqueConstraint('name_en'),
    )
    op.create_table('cities',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('country_id', sa.UUID(), nullable=False),
        sa.Column('name_th', sa.String(length=100), nullable=False),
        sa.Column('name_en', sa.String(length=100), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['country_id'], ['countries.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('country_id', 'name_th', name='uq_cities_country_name_th'),
        sa.UniqueConstraint('country_id', 'name_en', name='uq_cities_country_name_en'),
    )
    op.create_index('ix_cities_country_id', 'cities', ['country_id'])

    # --- Hotels ---
    op.create_table('hotels',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name_th', sa.String(length=200), nullable=False),
        sa.Column('name_en', sa.String(length=200), nullable=False),
        sa.Column('excerpt_th', sa.String(length=500), nullable=False),
        sa.Column('excerpt_en', sa.String(length=500), nullable=False),
        sa.Column('description_th', sa.Text(), nullable=False),
        sa.Column('description_en', sa.Text(), nullable=False),
        sa.Column('checkin_time', sa.String(length=5), nullable=False),
        sa.Column('checkout_time', sa.String(length=5), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=False),
        sa.Column('location_txt_th', sa.String(length=500), nullable=False),
        sa.Column('location_txt_en', sa.String(length=500), nullable=False),
        sa.Column('google_map_link', sa.String(length=500), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name_th'),
        sa.UniqueConstraint('name_en'),
    )
    op.create_table('hotel_options',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name_th', sa.String(length=100), nullable=False),
        sa.Column('name_en', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name_en'),
    )
    op.create_table('hotels_cities_map',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('hotel_id', sa.UUID(), nullable=False),
        sa.Column('city_id', sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id']),
        sa.ForeignKeyConstraint(['city_id'], ['cities.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'city_id', name='uq_hotels_cities_map'),
    )
    op.create_index('ix_hotels_cities_map_hotel_id', 'hotels_cities_map', ['hotel_id'])
    op.create_index('ix_hotels_cities_map_city_id', 'hotels_cities_map', ['city_id'])
    op.create_table('hotels_options_map',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('hotel_id', sa.UUID(), nullable=False),
        sa.Column('hotel_option_id', sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id']),
        sa.ForeignKeyConstraint(['hotel_option_id'], ['hotel_options.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'hotel_option_id', name='uq_hotels_options_map'),
    )
    op.create_index('ix_hotels_options_map_hotel_id', 'hotels_options_map', ['hotel_id'])

    # --- Rooms ---
    op.create_table('rooms',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('hotel_id', sa.UUID(), nullable=False),
        sa.Column('name_th', sa.String(length=100), nullable=False),
        sa.Column('name_en', sa.String(length=100), nullable=False),
        sa.Column('room_size', sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column('description_th', sa.Text(), nullable=False),
        sa.Column('description_en', sa.Text(), nullable=False),
        sa.Column('max_adult', sa.Integer(), nullable=False),
        sa.Column('max_children', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_room', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'name_th', name='uq_rooms_hotel_name_th'),
        sa.UniqueConstraint('hotel_id', 'name_en', name='uq_rooms_hotel_name_en'),
    )
    op.create_index('ix_rooms_hotel_id', 'rooms', ['hotel_id'])
    op.create_table('room_options',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name_th', sa.String(length=100), nullable=False),
        sa.Column('name_en', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=100), nullable=True),
        sa.Column('is_bed', sa.Boolean(), nullable=False, server_default='false'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name_en'),
    )
    op.create_table('room_options_map',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('room_id', sa.UUID(), nullable=False),
        sa.Column('room_option_id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id']),
        sa.ForeignKeyConstraint(['room_option_id'], ['room_options.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id', 'room_option_id', name='uq_room_options_map'),
    )
    op.create_index('ix_room_options_map_room_id', 'room_options_map', ['room_id'])

    # --- Price tiers ---
    op.create_table('room_base_prices',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('room_id', sa.UUID(), nullable=False),
        *_day_prices(),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id'),
    )
    op.create_table('room_season_base_prices',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('room_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        *_day_prices(),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('end_date >= start_date', name='ck_season_date_range'),
    )
    op.create_index('ix_room_season_base_prices_room_id', 'room_season_base_prices', ['room_id'])
    op.create_table('room_override_prices',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('room_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_promotion', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('note', sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('end_date >= start_date', name='ck_override_date_range'),
    )
    op.create_index('ix_room_override_prices_room_id', 'room_override_prices', ['room_id'])

    # --- SEO + images ---
    op.create_table('seo_metadata',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('page_type', content_target_type, nullable=False),
        sa.Column('page_id', sa.UUID(), nullable=True),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('lang', sa.String(length=2), nullable=False),
        sa.Column('title', sa.String(length=150), nullable=False),
        sa.Column('description', sa.String(length=250), nullable=False),
        sa.Column('og_image', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('page_type', 'page_id', 'lang', name='uq_seo_page_lang'),
        sa.UniqueConstraint('page_type', 'slug', 'lang', name='uq_seo_slug_lang'),
    )
    op.create_index('ix_seo_metadata_page_id', 'seo_metadata', ['page_id'])
    op.create_index('ix_seo_metadata_slug', 'seo_metadata', ['slug'])
    op.create_table('image_assets',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('content_type', content_target_type, nullable=False),
        sa.Column('content_id', sa.UUID(), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('alt', sa.String(length=255), nullable=True),
        sa.Column('caption', sa.String(length=500), nullable=True),
        sa.Column('is_cover', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('content_type', 'content_id', 'url', name='uq_image_assets_content_url'),
    )
    op.create_index('ix_image_assets_content_id', 'image_assets', ['content_id'])


def downgrade() -> None:
    op.drop_table('image_assets')
    op.drop_table('seo_metadata')
    op.drop_table('room_override_prices')
    op.drop_table('room_season_base_prices')
    op.drop_table('room_base_prices')
    op.drop_table('room_options_map')
    op.drop_table('room_options')
    op.drop_table('rooms')
    op.drop_table('hotels_options_map')
    op.drop_table('hotels_cities_map')
    op.drop_table('hotel_options')
    op.drop_table('hotels')
    op.drop_table('cities')
    op.drop_table('countries')
    postgresql.ENUM(name='enum_content_target_type').drop(op.get_bind(), checkfirst=True)
