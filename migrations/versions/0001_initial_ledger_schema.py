"""Initial ledger schema: clients, suppliers, inventory

Creates the three ledger entity tables together with their
history tables and, for clients and suppliers, payment tables.
Timestamps are ISO-8601 UTC strings.

Revision ID: 0001_initial_ledger_schema
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_ledger_schema'
down_revision = None
branch_labels = None
depends_on = None


def _party_tables(name: str, owner: str, extra_columns=()):
    """Entity, payment, and history tables for a client-like kind."""
    op.create_table(
        name + 's',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('contact_name', sa.String(200)),
        sa.Column('email', sa.String(255)),
        sa.Column('phone', sa.String(50)),
        sa.Column('address', sa.String(255)),
        sa.Column('notes', sa.Text()),
        *extra_columns,
        sa.Column('credit_balance', sa.Numeric(12, 2)),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.String(40), nullable=False),
        sa.Column('updated_at', sa.String(40), nullable=False),
    )

    op.create_table(
        f'{name}_payments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column(
            owner, sa.String(36),
            sa.ForeignKey(f'{name}s.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('method', sa.String(30), nullable=False),
        sa.Column('date', sa.String(40), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('session_id', sa.String(36)),
        sa.Column('received_by', sa.String(100)),
    )
    op.create_index(
        f'ix_{name}_payments_{owner}', f'{name}_payments', [owner]
    )

    op.create_table(
        f'{name}_history',
        sa.Column('seq', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('id', sa.String(36), nullable=False, unique=True),
        sa.Column(
            owner, sa.String(36),
            sa.ForeignKey(f'{name}s.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('date', sa.String(40), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('related_id', sa.String(36)),
        sa.Column('changed_by', sa.String(100)),
    )
    op.create_index(
        f'ix_{name}_history_{owner}', f'{name}_history', [owner]
    )


def upgrade():
    _party_tables('client', 'client_id')
    _party_tables(
        'supplier', 'supplier_id',
        extra_columns=(sa.Column('preferred_payment_method', sa.String(30)),),
    )

    op.create_table(
        'inventory_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('item_name', sa.String(200), nullable=False),
        sa.Column('phone_brand', sa.String(50), nullable=False),
        sa.Column('item_type', sa.String(50), nullable=False),
        sa.Column('buying_price', sa.Float(), nullable=False),
        sa.Column('selling_price', sa.Float(), nullable=False),
        sa.Column('quantity_in_stock', sa.Integer()),
        sa.Column('low_stock_threshold', sa.Integer()),
        sa.Column('supplier_info', sa.Text()),
        sa.Column('barcode', sa.String(64)),
        sa.Column('created_at', sa.String(40), nullable=False),
        sa.Column('updated_at', sa.String(40), nullable=False),
    )
    op.create_index(
        'ix_inventory_items_barcode', 'inventory_items', ['barcode']
    )

    op.create_table(
        'inventory_history',
        sa.Column('seq', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('id', sa.String(36), nullable=False, unique=True),
        sa.Column(
            'item_id', sa.String(36),
            sa.ForeignKey('inventory_items.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('date', sa.String(40), nullable=False),
        sa.Column('event_type', sa.String(50), nullable=False),
        sa.Column('quantity_change', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('related_id', sa.String(36)),
    )
    op.create_index(
        'ix_inventory_history_item_id', 'inventory_history', ['item_id']
    )


def downgrade():
    op.drop_table('inventory_history')
    op.drop_table('inventory_items')
    for name in ('supplier', 'client'):
        op.drop_table(f'{name}_history')
        op.drop_table(f'{name}_payments')
        op.drop_table(f'{name}s')
