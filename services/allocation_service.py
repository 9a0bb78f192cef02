import logging
from decimal import Decimal

from models.accounts import Account, AccountType
from models.people import Person
from utils.db_helpers import commit, get_or_raise
from utils.validation import validate_allocation


logger = logging.getLogger(__name__)


class AllocationService:
    """Per-account equity / fixed income / cash targets."""

    @staticmethod
    def get_allocations():
        """Every non-chequing account, in the same order as the accounts table."""
        return Account.query.join(Person, Account.owner_id == Person.id) \
            .filter(Account.account_type != AccountType.CHEQUING) \
            .order_by(Person.sort_order.asc(), Person.id.asc(), Account.name.asc()) \
            .all()

    @staticmethod
    def set_allocation(account_id, equity_pct, fixed_income_pct, cash_pct):
        """Save an account's allocation; the three values must sum to 100."""
        equity, fixed_income, cash = validate_allocation(equity_pct, fixed_income_pct, cash_pct)
        account = get_or_raise(Account, account_id)
        account.equity_pct = equity
        account.fixed_income_pct = fixed_income
        account.cash_pct = cash
        commit('save allocation')
        logger.info('Saved allocation for %s: %s/%s/%s', account.name, equity, fixed_income, cash)
        return account

    @staticmethod
    def get_portfolio_allocation(accounts):
        """
        Balance-weighted allocation across *accounts*.

        Only accounts with both an allocation and a balance snapshot take
        part.  Returns a dict with equity_pct, fixed_income_pct, cash_pct,
        total_balance and excluded_count (accounts with no allocation), or
        None when nothing qualifies or the qualifying balance is zero.
        """
        configured = [a for a in accounts if a.has_allocation and a.latest_snapshot]
        total_balance = sum((a.latest_snapshot.balance for a in configured), Decimal('0'))

        if not configured or total_balance <= 0:
            return None

        aggregate = {'equity_pct': Decimal('0'), 'fixed_income_pct': Decimal('0'), 'cash_pct': Decimal('0')}
        for account in configured:
            weight = account.latest_snapshot.balance / total_balance
            aggregate['equity_pct'] += account.equity_pct * weight
            aggregate['fixed_income_pct'] += account.fixed_income_pct * weight
            aggregate['cash_pct'] += account.cash_pct * weight

        aggregate['total_balance'] = total_balance
        aggregate['excluded_count'] = len([a for a in accounts if not a.has_allocation])
        return aggregate
