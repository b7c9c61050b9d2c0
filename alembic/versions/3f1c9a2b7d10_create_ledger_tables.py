"""create ledger tables

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 10:12:41.518204
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'])

    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_accounts_id'), 'accounts', ['id'])
    op.create_index(op.f('ix_accounts_user_id'), 'accounts', ['user_id'])

    op.create_table(
        'cards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('card_number', sa.String(length=16), nullable=False),
        sa.Column('balance', sa.Numeric(precision=18, scale=0), nullable=False, server_default='0'),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('balance >= 0', name='ck_cards_balance_non_negative'),
    )
    op.create_index(op.f('ix_cards_id'), 'cards', ['id'])
    op.create_index(op.f('ix_cards_card_number'), 'cards', ['card_number'], unique=True)
    op.create_index(op.f('ix_cards_account_id'), 'cards', ['account_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('source_card_id', sa.Integer(), sa.ForeignKey('cards.id'), nullable=False),
        sa.Column('dest_card_id', sa.Integer(), sa.ForeignKey('cards.id'), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=0), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_transactions_id'), 'transactions', ['id'])
    op.create_index(
        'ix_transactions_source_card_created_at',
        'transactions', ['source_card_id', 'created_at'],
    )


def downgrade() -> None:
    op.drop_index('ix_transactions_source_card_created_at', table_name='transactions')
    op.drop_index(op.f('ix_transactions_id'), table_name='transactions')
    op.drop_table('transactions')

    op.drop_index(op.f('ix_cards_account_id'), table_name='cards')
    op.drop_index(op.f('ix_cards_card_number'), table_name='cards')
    op.drop_index(op.f('ix_cards_id'), table_name='cards')
    op.drop_table('cards')

    op.drop_index(op.f('ix_accounts_user_id'), table_name='accounts')
    op.drop_index(op.f('ix_accounts_id'), table_name='accounts')
    op.drop_table('accounts')

    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
