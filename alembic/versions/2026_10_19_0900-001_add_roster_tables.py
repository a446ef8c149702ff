"""Add militaries, processes and process_assignments tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create roster tables."""
    op.create_table('militaries', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('rank', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('branch', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('squadron', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('war_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('formation_year', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('last_process_date', sa.Date(), nullable=True),
        sa.Column('process_history', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_militaries_name'), 'militaries', ['name'], unique=False)
    op.create_index(op.f('ix_militaries_rank'), 'militaries', ['rank'], unique=False)

    op.create_table('processes', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('process_class', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('number', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('material', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_processes_type'), 'processes', ['type'], unique=False)
    op.create_index(op.f('ix_processes_number'), 'processes', ['number'], unique=False)
    op.create_index(op.f('ix_processes_start_date'), 'processes', ['start_date'], unique=False)

    op.create_table('process_assignments', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('process_id', sa.Integer(), nullable=False),
        sa.Column('military_id', sa.Integer(), nullable=False),
        sa.Column('function', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['military_id'], ['militaries.id'], ),
        sa.ForeignKeyConstraint(['process_id'], ['processes.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('process_id', 'military_id', name='uq_assignment_process_military'))
    op.create_index(op.f('ix_process_assignments_process_id'), 'process_assignments', ['process_id'], unique=False)
    op.create_index(op.f('ix_process_assignments_military_id'), 'process_assignments', ['military_id'],
                    unique=False)


def downgrade() -> None:
    """Drop roster tables."""
    op.drop_index(op.f('ix_process_assignments_military_id'), table_name='process_assignments')
    op.drop_index(op.f('ix_process_assignments_process_id'), table_name='process_assignments')
    op.drop_table('process_assignments')
    op.drop_index(op.f('ix_processes_start_date'), table_name='processes')
    op.drop_index(op.f('ix_processes_number'), table_name='processes')
    op.drop_index(op.f('ix_processes_type'), table_name='processes')
    op.drop_table('processes')
    op.drop_index(op.f('ix_militaries_rank'), table_name='militaries')
    op.drop_index(op.f('ix_militaries_name'), table_name='militaries')
    op.drop_table('militaries')
