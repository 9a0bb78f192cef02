"""
Account Service
===============
Investment accounts and their history.

Three groups of operations:
  Account          - full CRUD; create can record an opening balance
  BalanceSnapshot  - create / delete only (delete and re-add to correct)
  ReturnEntry      - create / delete only, one entry per account per year

The "current balance" of an account is the snapshot with the most recent
date, regardless of insertion order.

The monthly "update balances" screen writes one snapshot per account with a
shared date.  create_bulk_snapshots() does this in a single transaction: if
any entry fails, none are saved.
"""
import logging
from datetime import date, datetime
from decimal import Decimal

from extensions import db
from models.accounts import Account, AccountType
from models.balances import BalanceSnapshot
from models.people import Person
from models.returns import ReturnEntry
from utils.db_helpers import commit, get_or_raise
from utils.errors import NotFoundError, ValidationError
from utils.validation import require_int, require_name, to_decimal


logger = logging.getLogger(__name__)


def _parse_date(value, field='Date'):
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f'{field} is required')
    try:
        return datetime.strptime(str(value), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f'{field} must be in YYYY-MM-DD format')


def _validate_account_type(account_type):
    if account_type not in AccountType.LABELS:
        raise ValidationError(f'Unknown account type: {account_type}')
    return account_type


def _validate_owner(owner_id):
    owner_id = require_int(owner_id, 'Owner')
    if db.session.get(Person, owner_id) is None:
        raise ValidationError('Owner does not exist')
    return owner_id


def _require_account(account_id):
    account_id = require_int(account_id, 'Account')
    if db.session.get(Account, account_id) is None:
        raise NotFoundError('Account', account_id)
    return account_id


class AccountService:

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    @staticmethod
    def get_accounts():
        """All accounts ordered by owner sort order, then account name."""
        return Account.query.join(Person, Account.owner_id == Person.id) \
            .order_by(Person.sort_order.asc(), Person.id.asc(), Account.name.asc()) \
            .all()

    @staticmethod
    def get_account(account_id):
        return get_or_raise(Account, account_id)

    @staticmethod
    def create_account(name, account_type, owner_id, initial_balance=None, initial_date=None):
        """
        Create an account.  When both initial_balance and initial_date are
        given, the opening BalanceSnapshot is saved in the same commit so the
        account shows a balance straight away.
        """
        name = require_name(name)
        account_type = _validate_account_type(account_type)
        owner_id = _validate_owner(owner_id)

        opening = None
        if initial_balance is not None and initial_date:
            opening = (_parse_date(initial_date, 'Initial date'),
                       to_decimal(initial_balance, 'Initial balance'))

        account = Account(name=name, account_type=account_type, owner_id=owner_id)
        db.session.add(account)

        if opening:
            account.snapshots.append(BalanceSnapshot(date=opening[0], balance=opening[1]))

        commit('create account')
        logger.info('Created account %s (%s)', account.name, account.account_type)
        return account

    @staticmethod
    def update_account(account_id, name, account_type, owner_id):
        """Update the mutable fields (name, type, owner)."""
        account = get_or_raise(Account, account_id)
        name = require_name(name)
        account_type = _validate_account_type(account_type)
        owner_id = _validate_owner(owner_id)

        account.name = name
        account.account_type = account_type
        account.owner_id = owner_id
        commit('update account')
        return account

    @staticmethod
    def delete_account(account_id):
        """Delete an account along with its snapshots and returns."""
        account = get_or_raise(Account, account_id)
        db.session.delete(account)
        commit('delete account')
        logger.info('Deleted account %s', account.name)
        return account

    @staticmethod
    def get_current_balance(account):
        snapshot = account.latest_snapshot
        return snapshot.balance if snapshot else None

    @staticmethod
    def get_total_balance(accounts=None):
        """Sum of current balances; accounts without a snapshot count as 0."""
        if accounts is None:
            accounts = AccountService.get_accounts()
        return sum(
            (AccountService.get_current_balance(a) or Decimal('0') for a in accounts),
            Decimal('0'),
        )

    # ------------------------------------------------------------------
    # Balance snapshots
    # ------------------------------------------------------------------

    @staticmethod
    def get_snapshots(account_id):
        """Snapshots for an account, newest date first."""
        return BalanceSnapshot.query.filter_by(account_id=account_id) \
            .order_by(BalanceSnapshot.date.desc(), BalanceSnapshot.id.desc()).all()

    @staticmethod
    def create_snapshot(account_id, snapshot_date, balance, note=None):
        account_id = _require_account(account_id)
        snapshot = BalanceSnapshot(
            account_id=account_id,
            date=_parse_date(snapshot_date),
            balance=to_decimal(balance, 'Balance'),
            note=(note or None),
        )
        db.session.add(snapshot)
        commit('create snapshot')
        return snapshot

    @staticmethod
    def delete_snapshot(snapshot_id):
        snapshot = get_or_raise(BalanceSnapshot, snapshot_id)
        db.session.delete(snapshot)
        commit('delete snapshot')
        return snapshot

    @staticmethod
    def create_bulk_snapshots(snapshot_date, entries):
        """
        Record balances for several accounts on one date.

        Args:
            snapshot_date: date or 'YYYY-MM-DD' shared by every entry.
            entries:       iterable of {'account_id', 'balance'} dicts.  The
                           caller drops accounts left blank.

        Returns:
            list[BalanceSnapshot] - the saved rows.

        Every entry is validated before anything is added, and all rows are
        committed together.
        """
        snapshot_date = _parse_date(snapshot_date)
        validated = [
            (_require_account(entry['account_id']), to_decimal(entry['balance'], 'Balance'))
            for entry in entries
        ]

        snapshots = [
            BalanceSnapshot(account_id=account_id, date=snapshot_date, balance=balance)
            for account_id, balance in validated
        ]
        db.session.add_all(snapshots)
        commit('create snapshots')
        logger.info('Recorded %d balance snapshots for %s', len(snapshots), snapshot_date)
        return snapshots

    # ------------------------------------------------------------------
    # Return entries
    # ------------------------------------------------------------------

    @staticmethod
    def get_returns(account_id):
        """Return entries for an account, newest year first."""
        return ReturnEntry.query.filter_by(account_id=account_id) \
            .order_by(ReturnEntry.year.desc()).all()

    @staticmethod
    def create_return(account_id, year, return_percent):
        """
        Add the annual return for *year*.  A year that already has an entry is
        rejected; delete the old entry first.
        """
        account_id = _require_account(account_id)
        year = require_int(year, 'Year')
        return_percent = to_decimal(return_percent, 'Return %')

        if ReturnEntry.query.filter_by(account_id=account_id, year=year).first():
            logger.warning('Rejected duplicate return for account %s, %s', account_id, year)
            raise ValidationError(f'A return for {year} already exists for this account')

        entry = ReturnEntry(account_id=account_id, year=year, return_percent=return_percent)
        db.session.add(entry)
        commit('create return')
        return entry

    @staticmethod
    def delete_return(return_id):
        entry = get_or_raise(ReturnEntry, return_id)
        db.session.delete(entry)
        commit('delete return')
        return entry
