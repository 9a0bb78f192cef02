"""
Integration tests for AccountService.

These tests create real database objects (in-memory SQLite) and call the
service methods, asserting on the saved accounts, snapshots and returns.
"""
from datetime import date
from decimal import Decimal

import pytest

from extensions import db
from models.accounts import Account, AccountType
from models.balances import BalanceSnapshot
from models.returns import ReturnEntry
from services.account_service import AccountService
from utils.errors import NotFoundError, ValidationError


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

class TestAccounts:

    def test_create_without_opening_balance(self, person):
        account = AccountService.create_account('Work RRSP', AccountType.RRSP, person.id)
        assert account.id is not None
        assert account.snapshots == []
        assert AccountService.get_current_balance(account) is None

    def test_create_with_opening_balance(self, person):
        account = AccountService.create_account(
            'Work RRSP', AccountType.RRSP, person.id,
            initial_balance='15000.50', initial_date='2025-01-31',
        )
        assert len(account.snapshots) == 1
        assert account.snapshots[0].date == date(2025, 1, 31)
        assert AccountService.get_current_balance(account) == Decimal('15000.50')

    def test_opening_balance_needs_a_date(self, person):
        account = AccountService.create_account('TFSA', AccountType.TFSA, person.id, initial_balance=100)
        assert account.snapshots == []

    def test_blank_name_rejected(self, person):
        with pytest.raises(ValidationError, match='Name is required'):
            AccountService.create_account('  ', AccountType.TFSA, person.id)
        assert Account.query.count() == 0

    def test_unknown_type_rejected(self, person):
        with pytest.raises(ValidationError, match='Unknown account type'):
            AccountService.create_account('LIRA', 'LIRA', person.id)

    def test_unknown_owner_rejected(self, app):
        with pytest.raises(ValidationError, match='Owner does not exist'):
            AccountService.create_account('TFSA', AccountType.TFSA, 42)

    def test_update(self, account, second_person):
        AccountService.update_account(account.id, 'Renamed', AccountType.RRIF, second_person.id)
        db.session.expire_all()
        updated = db.session.get(Account, account.id)
        assert updated.name == 'Renamed'
        assert updated.account_type == AccountType.RRIF
        assert updated.owner.name == 'Sam'

    def test_rejected_update_leaves_account_untouched(self, account, person):
        with pytest.raises(ValidationError, match='Unknown account type'):
            AccountService.update_account(account.id, 'Renamed', 'BOGUS', person.id)

        assert account.name == 'Questrade TFSA'
        assert account not in db.session.dirty
        db.session.commit()
        db.session.expire_all()
        assert db.session.get(Account, account.id).name == 'Questrade TFSA'

    def test_rejected_owner_leaves_account_untouched(self, account):
        with pytest.raises(ValidationError, match='Owner does not exist'):
            AccountService.update_account(account.id, 'Renamed', AccountType.RRSP, 999)

        assert account.name == 'Questrade TFSA'
        assert account.account_type == AccountType.TFSA

    def test_update_missing(self, person):
        with pytest.raises(NotFoundError):
            AccountService.update_account(999, 'X', AccountType.TFSA, person.id)

    def test_delete_cascades(self, account):
        AccountService.create_snapshot(account.id, date(2025, 1, 1), 100)
        AccountService.create_return(account.id, 2024, 7.5)

        AccountService.delete_account(account.id)

        assert Account.query.count() == 0
        assert BalanceSnapshot.query.count() == 0
        assert ReturnEntry.query.count() == 0

    def test_get_accounts_orders_by_owner_then_name(self, person, second_person):
        AccountService.create_account('Zulu', AccountType.TFSA, person.id)
        AccountService.create_account('Alpha', AccountType.TFSA, second_person.id)
        AccountService.create_account('Mike', AccountType.RRSP, person.id)

        names = [a.name for a in AccountService.get_accounts()]
        assert names == ['Mike', 'Zulu', 'Alpha']

    def test_total_balance_skips_accounts_without_snapshots(self, person):
        AccountService.create_account('A', AccountType.TFSA, person.id,
                                      initial_balance=1000, initial_date=date(2025, 1, 1))
        AccountService.create_account('B', AccountType.RRSP, person.id)
        assert AccountService.get_total_balance() == Decimal('1000')

    def test_tracks_returns(self, person):
        tfsa = AccountService.create_account('A', AccountType.TFSA, person.id)
        chequing = AccountService.create_account('B', AccountType.CHEQUING, person.id)
        assert tfsa.tracks_returns is True
        assert chequing.tracks_returns is False


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

class TestSnapshots:

    def test_current_balance_is_latest_date_not_latest_insert(self, account):
        AccountService.create_snapshot(account.id, date(2025, 3, 1), 300)
        AccountService.create_snapshot(account.id, date(2025, 1, 1), 100)
        db.session.expire_all()

        assert AccountService.get_current_balance(account) == Decimal('300')
        assert [s.date for s in AccountService.get_snapshots(account.id)] == [
            date(2025, 3, 1), date(2025, 1, 1)
        ]

    def test_accepts_iso_date_string(self, account):
        snapshot = AccountService.create_snapshot(account.id, '2025-06-30', '1234.56', note='June')
        assert snapshot.date == date(2025, 6, 30)
        assert snapshot.note == 'June'

    def test_bad_date_rejected(self, account):
        with pytest.raises(ValidationError, match='YYYY-MM-DD'):
            AccountService.create_snapshot(account.id, '30/06/2025', 100)

    def test_bad_balance_rejected(self, account):
        with pytest.raises(ValidationError, match='Balance must be a number'):
            AccountService.create_snapshot(account.id, '2025-06-30', 'abc')
        assert BalanceSnapshot.query.count() == 0

    def test_missing_account(self, app):
        with pytest.raises(NotFoundError):
            AccountService.create_snapshot(999, '2025-06-30', 100)

    def test_delete(self, account):
        snapshot = AccountService.create_snapshot(account.id, '2025-06-30', 100)
        AccountService.delete_snapshot(snapshot.id)
        assert BalanceSnapshot.query.count() == 0


class TestBulkSnapshots:

    def test_one_row_per_entry_with_shared_date(self, person, account):
        other = AccountService.create_account('RRSP', AccountType.RRSP, person.id)

        snapshots = AccountService.create_bulk_snapshots('2025-02-28', [
            {'account_id': account.id, 'balance': '5000'},
            {'account_id': other.id, 'balance': '7000.25'},
        ])

        assert len(snapshots) == 2
        assert {s.date for s in snapshots} == {date(2025, 2, 28)}
        assert BalanceSnapshot.query.count() == 2

    def test_one_bad_entry_saves_nothing(self, account):
        with pytest.raises(ValidationError):
            AccountService.create_bulk_snapshots('2025-02-28', [
                {'account_id': account.id, 'balance': '5000'},
                {'account_id': account.id, 'balance': 'not a number'},
            ])
        assert BalanceSnapshot.query.count() == 0

    def test_unknown_account_saves_nothing(self, account):
        with pytest.raises(NotFoundError):
            AccountService.create_bulk_snapshots('2025-02-28', [
                {'account_id': account.id, 'balance': '5000'},
                {'account_id': 999, 'balance': '1'},
            ])
        assert BalanceSnapshot.query.count() == 0


# ---------------------------------------------------------------------------
# Returns
# ---------------------------------------------------------------------------

class TestReturns:

    def test_create_and_list_newest_first(self, account):
        AccountService.create_return(account.id, 2023, '9.8')
        AccountService.create_return(account.id, 2024, '-3.25')

        entries = AccountService.get_returns(account.id)
        assert [e.year for e in entries] == [2024, 2023]
        assert entries[0].return_percent == Decimal('-3.25')

    def test_duplicate_year_rejected(self, account):
        AccountService.create_return(account.id, 2024, 5)
        with pytest.raises(ValidationError, match='already exists'):
            AccountService.create_return(account.id, 2024, 6)
        assert ReturnEntry.query.count() == 1

    def test_same_year_on_another_account_is_fine(self, person, account):
        other = AccountService.create_account('RRSP', AccountType.RRSP, person.id)
        AccountService.create_return(account.id, 2024, 5)
        AccountService.create_return(other.id, 2024, 6)
        assert ReturnEntry.query.count() == 2

    def test_delete(self, account):
        entry = AccountService.create_return(account.id, 2024, 5)
        AccountService.delete_return(entry.id)
        assert ReturnEntry.query.count() == 0
