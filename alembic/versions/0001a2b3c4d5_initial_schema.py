"""initial_schema

Revision ID: 0001a2b3c4d5
Revises:
Create Date: 2026-10-19 09:00:00.000000

역할별 계정 테이블, 매장/평점, 가입 대기, 리프레시 토큰 테이블 생성.
Create per-role account tables, stores/ratings, pending registrations and
refresh tokens.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001a2b3c4d5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACCOUNT_TABLES: tuple[str, ...] = ('users', 'owners', 'admins')


def upgrade() -> None:
    # users / owners / admins — 역할별 계정 (email unique within each table only)
    for table in ACCOUNT_TABLES:
        op.create_table(
            table,
            sa.Column('id', UUID(as_uuid=True), primary_key=True),
            sa.Column('email', sa.String(255), nullable=False, unique=True),
            sa.Column('name', sa.String(60), nullable=False),
            sa.Column('address', sa.Text(), server_default='', nullable=False),
            sa.Column('password_hash', sa.String(255), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        )

    # stores — 매장과 평점 집계 (denormalized count + sum)
    op.create_table(
        'stores',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(60), nullable=False),
        sa.Column('address', sa.Text(), server_default='', nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('total_rating_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('total_rating_sum', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_stores_email', 'stores', ['email'])

    # user_ratings — 매장별 평가자당 평점 하나 (one rating per store per email)
    op.create_table(
        'user_ratings',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('store_id', 'email', name='uq_rating_store_email'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_rating_range'),
    )

    # pending_registrations — 확인 링크 토큰으로 찾는 가입 대기 레코드
    op.create_table(
        'pending_registrations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('token', sa.String(128), nullable=False, unique=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(60), nullable=False),
        sa.Column('address', sa.Text(), server_default='', nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # refresh_tokens — 역할 + 계정 ID 로 소유자 식별 (no FK: three account tables)
    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('account_id', UUID(as_uuid=True), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_refresh_tokens_account_id', 'refresh_tokens', ['account_id'])


def downgrade() -> None:
    op.drop_index('ix_refresh_tokens_account_id', table_name='refresh_tokens')
    op.drop_table('refresh_tokens')
    op.drop_table('pending_registrations')
    op.drop_table('user_ratings')
    op.drop_index('ix_stores_email', table_name='stores')
    op.drop_table('stores')
    for table in reversed(ACCOUNT_TABLES):
        op.drop_table(table)
