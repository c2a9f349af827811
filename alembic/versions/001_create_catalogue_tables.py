"""Create catalogue_items and catalogue_categories tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create catalogue_items and catalogue_categories tables."""
    # Catalogue items table
    op.create_table(
        'catalogue_items',
        sa.Column('pk', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('sku', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('type', sa.String(100), nullable=False, index=True),
        sa.Column('price', sa.Integer(), nullable=False, index=True),
        sa.Column('upc', sa.String(100), nullable=False),
        sa.Column('shipping', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('manufacturer', sa.String(200), nullable=False, index=True),
        sa.Column('model', sa.String(200), nullable=False),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('image', sa.String(1000), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Opaque identity and SKU are both unique
    op.create_unique_constraint('uq_catalogue_items_id', 'catalogue_items', ['id'])
    op.create_unique_constraint('uq_catalogue_items_sku', 'catalogue_items', ['sku'])

    # Category entries table
    op.create_table(
        'catalogue_categories',
        sa.Column('pk', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('item_pk', sa.Integer(),
                  sa.ForeignKey('catalogue_items.pk', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('category_id', sa.String(100), nullable=True),
        sa.Column('name', sa.String(200), nullable=True, index=True),
    )


def downgrade() -> None:
    """Drop catalogue_categories and catalogue_items tables."""
    op.drop_table('catalogue_categories')
    op.drop_table('catalogue_items')
