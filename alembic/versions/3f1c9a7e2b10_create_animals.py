"""Create animals table with embedded reproduction and health histories

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the animals table."""
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('tag_id', sa.String(length=128), nullable=False),
        sa.Column('gender', sa.String(length=6), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('breed', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('photo_url', sa.String(length=1024), nullable=True),
        # sire/dam are weak references; no foreign keys
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('dam_id', sa.Uuid(), nullable=True),
        sa.Column('reproduction_records', sa.JSON(), nullable=False),
        sa.Column('health_records', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tag_id', name='ux_animals_tag_id'),
    )
    op.create_index('ix_animals_status', 'animals', ['status'], unique=False)
    op.create_index('ix_animals_sire_id', 'animals', ['sire_id'], unique=False)
    op.create_index('ix_animals_dam_id', 'animals', ['dam_id'], unique=False)


def downgrade() -> None:
    """Drop the animals table."""
    op.drop_index('ix_animals_dam_id', table_name='animals')
    op.drop_index('ix_animals_sire_id', table_name='animals')
    op.drop_index('ix_animals_status', table_name='animals')
    op.drop_table('animals')
