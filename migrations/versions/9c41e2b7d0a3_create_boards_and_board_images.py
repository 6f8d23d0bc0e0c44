"""create boards and board_images

Revision ID: 9c41e2b7d0a3
Revises:
Create Date: 2025-11-14 10:21:47.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9c41e2b7d0a3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'boards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('fid', sa.BigInteger(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('slug', name='uq_boards_slug'),
    )
    op.create_index('ix_boards_id', 'boards', ['id'])
    op.create_index('ix_boards_fid', 'boards', ['fid'])

    op.create_table(
        'board_images',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'board_id',
            sa.Integer(),
            sa.ForeignKey('boards.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('caption', sa.String(), nullable=False, server_default=''),
        sa.Column('fid', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_board_images_id', 'board_images', ['id'])
    op.create_index('ix_board_images_fid', 'board_images', ['fid'])


def downgrade():
    op.drop_index('ix_board_images_fid', table_name='board_images')
    op.drop_index('ix_board_images_id', table_name='board_images')
    op.drop_table('board_images')
    op.drop_index('ix_boards_fid', table_name='boards')
    op.drop_index('ix_boards_id', table_name='boards')
    op.drop_table('boards')
