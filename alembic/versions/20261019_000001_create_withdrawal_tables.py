"""Create investment tier, account and withdrawal request tables

Revision ID: 20261019_000001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


MONEY = sa.DECIMAL(18, 8)
PERCENT = sa.DECIMAL(5, 2)


def upgrade() -> None:
    op.create_table(
        'investment_tiers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('min_investment', MONEY, nullable=False),
        sa.Column('max_investment', MONEY, nullable=True),
        sa.Column('lockup_period_months', sa.Integer(), nullable=False),
        sa.Column('withdrawal_frequency_days', sa.Integer(), nullable=False),
        sa.Column('early_withdrawal_penalty', PERCENT, nullable=True),
        sa.Column('benefits', postgresql.ARRAY(sa.Text()), nullable=False, server_default='{}'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('min_investment >= 0', name='check_tier_min_investment_non_negative'),
        sa.CheckConstraint(
            'max_investment IS NULL OR max_investment >= min_investment',
            name='check_tier_investment_corridor',
        ),
        sa.CheckConstraint('lockup_period_months >= 0', name='check_tier_lockup_non_negative'),
        sa.CheckConstraint('withdrawal_frequency_days >= 0', name='check_tier_frequency_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'user_investment_accounts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('tier_id', sa.Integer(), nullable=False),
        sa.Column('total_invested', MONEY, nullable=False, server_default='0'),
        sa.Column('available_balance', MONEY, nullable=False, server_default='0'),
        sa.Column('locked_balance', MONEY, nullable=False, server_default='0'),
        sa.Column('last_withdrawal_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('next_eligible_withdrawal', sa.DateTime(timezone=True), nullable=True),
        sa.Column('lockup_ends_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('account_status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('available_balance >= 0', name='check_account_available_non_negative'),
        sa.CheckConstraint('locked_balance >= 0', name='check_account_locked_non_negative'),
        sa.CheckConstraint(
            'available_balance + locked_balance <= total_invested',
            name='check_account_balances_within_invested',
        ),
        sa.CheckConstraint(
            "account_status IN ('active', 'suspended', 'closed')",
            name='check_account_status_values',
        ),
        sa.ForeignKeyConstraint(['tier_id'], ['investment_tiers.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_investment_accounts_user_id', 'user_investment_accounts', ['user_id'])
    op.create_index('ix_user_investment_accounts_tier_id', 'user_investment_accounts', ['tier_id'])
    op.create_index('ix_user_investment_accounts_lockup_ends_at', 'user_investment_accounts', ['lockup_ends_at'])
    op.create_index('ix_user_investment_accounts_account_status', 'user_investment_accounts', ['account_status'])
    op.create_index('idx_account_user_status', 'user_investment_accounts', ['user_id', 'account_status'])

    op.create_table(
        'withdrawal_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('requested_amount', MONEY, nullable=False),
        sa.Column('available_amount', MONEY, nullable=False),
        sa.Column('withdrawal_type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('processing_fee', MONEY, nullable=False),
        sa.Column('penalty_amount', MONEY, nullable=False, server_default='0'),
        sa.Column('net_amount', MONEY, nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('approved_by', sa.String(255), nullable=True),
        sa.Column('bank_details', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('requested_amount > 0', name='check_withdrawal_amount_positive'),
        sa.CheckConstraint('net_amount >= 0', name='check_withdrawal_net_non_negative'),
        sa.CheckConstraint(
            'net_amount = requested_amount - processing_fee - penalty_amount',
            name='check_withdrawal_net_matches_fees',
        ),
        sa.CheckConstraint(
            "withdrawal_type IN ('partial', 'full', 'emergency')",
            name='check_withdrawal_type_values',
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'completed')",
            name='check_withdrawal_status_values',
        ),
        sa.ForeignKeyConstraint(['account_id'], ['user_investment_accounts.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_withdrawal_requests_user_id', 'withdrawal_requests', ['user_id'])
    op.create_index('ix_withdrawal_requests_status', 'withdrawal_requests', ['status'])
    op.create_index('idx_withdrawal_account_status', 'withdrawal_requests', ['account_id', 'status'])
    op.create_index('idx_withdrawal_status_created', 'withdrawal_requests', ['status', 'created_at'])


def downgrade() -> None:
    op.drop_index('idx_withdrawal_status_created', 'withdrawal_requests')
    op.drop_index('idx_withdrawal_account_status', 'withdrawal_requests')
    op.drop_index('ix_withdrawal_requests_status', 'withdrawal_requests')
    op.drop_index('ix_withdrawal_requests_user_id', 'withdrawal_requests')
    op.drop_table('withdrawal_requests')

    op.drop_index('idx_account_user_status', 'user_investment_accounts')
    op.drop_index('ix_user_investment_accounts_account_status', 'user_investment_accounts')
    op.drop_index('ix_user_investment_accounts_lockup_ends_at', 'user_investment_accounts')
    op.drop_index('ix_user_investment_accounts_tier_id', 'user_investment_accounts')
    op.drop_index('ix_user_investment_accounts_user_id', 'user_investment_accounts')
    op.drop_table('user_investment_accounts')

    op.drop_table('investment_tiers')
