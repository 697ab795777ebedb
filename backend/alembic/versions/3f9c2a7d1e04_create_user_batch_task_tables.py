"""Create user, upload_batch and task tables

Revision ID: 3f9c2a7d1e04
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1e04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('mobile', sqlmodel.sql.sqltypes.AutoString(), nullable=False, server_default=''),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'AGENT', name='role'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)
    op.create_index(op.f('ix_user_role'), 'user', ['role'], unique=False)

    op.create_table(
        'upload_batch',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('filename', sqlmodel.sql.sqltypes.AutoString(), nullable=False, server_default=''),
        sa.Column('file_format', sqlmodel.sql.sqltypes.AutoString(), nullable=False, server_default=''),
        sa.Column('row_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('agent_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('uploaded_by', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_upload_batch_sequence'), 'upload_batch', ['sequence'], unique=False)
    op.create_index(op.f('ix_upload_batch_created_at'), 'upload_batch', ['created_at'], unique=False)

    op.create_table(
        'task',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('batch_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(), nullable=False, server_default=''),
        sa.Column('assigned_to', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'IN_PROGRESS', 'COMPLETED', name='taskstatus'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['batch_id'], ['upload_batch.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_task_batch_id'), 'task', ['batch_id'], unique=False)
    op.create_index(op.f('ix_task_assigned_to'), 'task', ['assigned_to'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_task_assigned_to'), table_name='task')
    op.drop_index(op.f('ix_task_batch_id'), table_name='task')
    op.drop_table('task')
    op.drop_index(op.f('ix_upload_batch_created_at'), table_name='upload_batch')
    op.drop_index(op.f('ix_upload_batch_sequence'), table_name='upload_batch')
    op.drop_table('upload_batch')
    op.drop_index(op.f('ix_user_role'), table_name='user')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
