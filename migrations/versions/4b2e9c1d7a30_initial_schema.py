"""Initial schema: people, accounts, balance history, glide path, income, housing

Revision ID: 4b2e9c1d7a30
Revises:
Create Date: 2026-10-19 09:12:44.517302

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b2e9c1d7a30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'people',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('birth_year', sa.Integer(), nullable=True),
        sa.Column('pension_claim_age', sa.Integer(), nullable=True),
        sa.Column('oas_residence_years', sa.Integer(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('account_type', sa.String(length=30), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('equity_pct', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('fixed_income_pct', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('cash_pct', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['people.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_accounts_owner_id', 'accounts', ['owner_id'], unique=False)

    op.create_table(
        'balance_snapshots',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('balance', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('note', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_balance_snapshots_account_id', 'balance_snapshots', ['account_id'], unique=False)

    op.create_table(
        'return_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('return_percent', sa.Numeric(precision=7, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('account_id', 'year', name='uq_return_account_year')
    )
    op.create_index('ix_return_entries_account_id', 'return_entries', ['account_id'], unique=False)

    op.create_table(
        'glide_path_waypoints',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('equity_pct', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('fixed_income_pct', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('cash_pct', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('year')
    )

    op.create_table(
        'income_sources',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('frequency', sa.String(length=10), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['people.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_income_sources_owner_id', 'income_sources', ['owner_id'], unique=False)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('estimated_value', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('mortgage_balance', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('mortgage_rate', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('properties')
    op.drop_index('ix_income_sources_owner_id', table_name='income_sources')
    op.drop_table('income_sources')
    op.drop_table('glide_path_waypoints')
    op.drop_index('ix_return_entries_account_id', table_name='return_entries')
    op.drop_table('return_entries')
    op.drop_index('ix_balance_snapshots_account_id', table_name='balance_snapshots')
    op.drop_table('balance_snapshots')
    op.drop_index('ix_accounts_owner_id', table_name='accounts')
    op.drop_table('accounts')
    op.drop_table('people')
