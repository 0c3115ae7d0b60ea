"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:12:41.208311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table('servers'):
        op.create_table('servers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
        )

    if not inspector.has_table('maps'):
        op.create_table('maps',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('tier', sa.Integer(), nullable=True),
        sa.Column('wr_time', sa.Float(), nullable=True),
        sa.Column('wr_runner', sa.String(length=255), nullable=True),
        sa.Column('wr_source_record_id', sa.Integer(), nullable=True),
        sa.Column('wr_server_id', sa.Integer(), nullable=True),
        sa.Column('tas_time', sa.Float(), nullable=True),
        sa.Column('tas_runner', sa.String(length=255), nullable=True),
        sa.Column('tas_server_id', sa.Integer(), nullable=True),
        sa.Column('fastdl_hash', sa.String(length=128), nullable=True),
        sa.ForeignKeyConstraint(['wr_server_id'], ['servers.id'], ),
        sa.ForeignKeyConstraint(['tas_server_id'], ['servers.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
        )


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if inspector.has_table('maps'):
        op.drop_table('maps')
    if inspector.has_table('servers'):
        op.drop_table('servers')
