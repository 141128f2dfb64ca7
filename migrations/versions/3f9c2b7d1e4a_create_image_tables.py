"""create images and deleted_images tables

Revision ID: 3f9c2b7d1e4a
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9c2b7d1e4a'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('data', sa.LargeBinary(), nullable=False),
        sa.Column('owner', sa.String(length=255), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_images_owner', 'images', ['owner'])
    op.create_index('ix_images_owner_uploaded_at', 'images', ['owner', 'uploaded_at'])

    op.create_table(
        'deleted_images',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('data', sa.LargeBinary(), nullable=False),
        sa.Column('owner', sa.String(length=255), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_deleted_images_owner', 'deleted_images', ['owner'])


def downgrade():
    op.drop_index('ix_deleted_images_owner', table_name='deleted_images')
    op.drop_table('deleted_images')
    op.drop_index('ix_images_owner_uploaded_at', table_name='images')
    op.drop_index('ix_images_owner', table_name='images')
    op.drop_table('images')
