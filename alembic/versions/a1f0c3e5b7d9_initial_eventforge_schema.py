"""initial_eventforge_schema

Revision ID: a1f0c3e5b7d9
Revises:
Create Date: 2026-10-19 10:00:00.000000

초기 스키마:
1. users — 조직/관리자 계정 (is_enabled, is_non_locked, is_approved_by_admin)
2. refresh_tokens, verification_tokens — 세션 및 이메일/비밀번호 인증 토큰
3. organisations — 조직 프로필 (name, bullstat 고유)
4. events — 이벤트 (starts_at/ends_at 인덱스)
5. images — 업로드 이미지 메타데이터 (name 고유)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a1f0c3e5b7d9'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── 1. users ──
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('phone_number', sa.String(50), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='ORGANISATION'),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_non_locked', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('is_approved_by_admin', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ── 2. 토큰 테이블 — Token tables ──
    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        'verification_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('token', sa.String(255), nullable=False, unique=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('type', sa.String(20), nullable=False, server_default='email'),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ── 3. organisations ──
    op.create_table(
        'organisations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('bullstat', sa.String(20), nullable=False, unique=True),
        sa.Column('address', sa.String(255), nullable=False),
        sa.Column('website', sa.String(255), nullable=True),
        sa.Column('facebook_link', sa.String(255), nullable=True),
        sa.Column('charity_option', sa.String(255), nullable=True),
        sa.Column('organisation_purpose', sa.Text(), nullable=False),
        sa.Column('logo_url', sa.String(512), nullable=True),
        sa.Column('background_url', sa.String(512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ── 4. events ──
    op.create_table(
        'events',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('organisation_id', UUID(as_uuid=True), sa.ForeignKey('organisations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('image_url', sa.String(512), nullable=True),
        sa.Column('is_online', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default=sa.text('0')),
        sa.Column('min_age', sa.Integer(), nullable=True),
        sa.Column('max_age', sa.Integer(), nullable=True),
        sa.Column('is_one_time', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('reason_for_recurrence', sa.String(255), nullable=True),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ends_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_events_org_starts_at', 'events', ['organisation_id', 'starts_at'])
    op.create_index('ix_events_ends_at', 'events', ['ends_at'])

    # ── 5. images ──
    op.create_table(
        'images',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('url', sa.String(512), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='EVENT_PICTURE'),
        sa.Column('content_type', sa.String(50), nullable=False),
        sa.Column('organisation_id', UUID(as_uuid=True), sa.ForeignKey('organisations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('event_id', UUID(as_uuid=True), sa.ForeignKey('events.id', ondelete='SET NULL'), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table('images')
    op.drop_index('ix_events_ends_at', table_name='events')
    op.drop_index('ix_events_org_starts_at', table_name='events')
    op.drop_table('events')
    op.drop_table('organisations')
    op.drop_table('verification_tokens')
    op.drop_table('refresh_tokens')
    op.drop_table('users')
