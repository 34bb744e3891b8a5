"""create users and sessions

Revision ID: 001_create_users_and_sessions
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '001_create_users_and_sessions'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Проверяет, существует ли таблица."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    # Таблицы могли быть созданы при старте (DB_AUTOMIGRATE)
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('surname', sa.String(length=100), nullable=False),
            sa.Column('patronymic', sa.String(length=100), nullable=True),
            sa.Column('passport_serie', sa.Integer(), nullable=False),
            sa.Column('passport_number', sa.Integer(), nullable=False),
            sa.Column('address', sa.String(length=255), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('passport_serie', 'passport_number', name='uq_users_passport'),
        )

    if not table_exists('sessions'):
        op.create_table('sessions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('task_id', sa.Integer(), nullable=False),
            sa.Column('sess_begin', sa.DateTime(timezone=True), nullable=False),
            sa.Column('sess_end', sa.DateTime(timezone=True), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(
            'uq_sessions_open_task_user', 'sessions', ['user_id', 'task_id'],
            unique=True,
            sqlite_where=sa.text('sess_end IS NULL'),
            postgresql_where=sa.text('sess_end IS NULL'),
        )
        op.create_index('ix_sessions_task_user_begin', 'sessions', ['task_id', 'user_id', 'sess_begin'])


def downgrade() -> None:
    if table_exists('sessions'):
        op.drop_index('ix_sessions_task_user_begin', table_name='sessions')
        op.drop_index('uq_sessions_open_task_user', table_name='sessions')
        op.drop_table('sessions')
    if table_exists('users'):
        op.drop_table('users')
