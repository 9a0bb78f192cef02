"""
Blueprint tests using the Flask test client.

CSRF is disabled in TestingConfig, so forms are posted as plain dicts.
"""
import warnings
from datetime import date
from decimal import Decimal

import pytest
from flask import Flask

from admin_panel import init_admin
from extensions import db

from models.accounts import Account, AccountType
from models.balances import BalanceSnapshot
from models.glide_path import GlidePathWaypoint
from models.income import IncomeSource
from models.people import Person
from models.property import Property
from services.account_service import AccountService
from services.allocation_service import AllocationService


@pytest.mark.parametrize('url', [
    '/',
    '/dashboard',
    '/simulation',
    '/investments',
    '/investments/allocations',
    '/investments/glide-paths',
    '/investments/update-balances',
    '/income',
    '/income/sources',
    '/housing',
    '/expenses',
    '/expenses/categories',
    '/settings',
])
def test_pages_render_empty(client, url):
    assert client.get(url).status_code == 200


def test_pages_render_with_data(client, account, second_person):
    AccountService.create_snapshot(account.id, date(2025, 1, 1), 1000)
    AccountService.create_return(account.id, 2024, 8.5)
    AllocationService.set_allocation(account.id, 80, 15, 5)

    for url in ['/', '/investments', f'/investments?expand={account.id}',
                '/investments/allocations', '/income', '/settings']:
        assert client.get(url).status_code == 200, url


def test_security_headers(client):
    response = client.get('/')
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


def test_unknown_record_is_404(client):
    assert client.get('/investments/accounts/999/edit').status_code == 404
    assert client.get('/housing/999/edit').status_code == 404


def test_admin_index(client):
    assert client.get('/admin/').status_code == 200


def test_admin_views_built_from_db_without_session_warning():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always')
        admin = init_admin(Flask('admin_check'), db)
    assert len(admin._views) == 8
    assert not [w for w in caught if 'session' in str(w.message)]


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def test_add_person(client):
    response = client.post('/settings/people/add', data={
        'name': 'Alex', 'birth_year': '1978', 'pension_claim_age': '67', 'oas_residence_years': '',
    })
    assert response.status_code == 302
    person = Person.query.one()
    assert person.pension_claim_age == 67
    assert person.oas_residence_years is None


def test_add_person_rejects_claim_age(client):
    response = client.post('/settings/people/add', data={
        'name': 'Alex', 'birth_year': '1978', 'pension_claim_age': '80',
    }, follow_redirects=True)
    assert b'Claim age must be between 60 and 75' in response.data
    assert Person.query.count() == 0


# ---------------------------------------------------------------------------
# Investments
# ---------------------------------------------------------------------------

def test_add_account_with_opening_balance(client, person):
    response = client.post('/investments/accounts/add', data={
        'name': 'Work RRSP',
        'account_type': AccountType.RRSP,
        'owner_id': str(person.id),
        'initial_balance': '12000',
        'initial_date': '2025-01-31',
    })
    assert response.status_code == 302
    account = Account.query.one()
    assert account.latest_snapshot.balance == Decimal('12000')


def test_update_balances_skips_blank_rows(client, person, account):
    other = AccountService.create_account('RRSP', AccountType.RRSP, person.id)

    response = client.post('/investments/update-balances', data={
        'date': '2025-03-31',
        f'balance_{account.id}': '1,234.50',
        f'balance_{other.id}': '',
    })

    assert response.status_code == 302
    snapshots = BalanceSnapshot.query.all()
    assert len(snapshots) == 1
    assert snapshots[0].account_id == account.id
    assert snapshots[0].balance == Decimal('1234.50')


def test_update_balances_bad_value_saves_nothing(client, person, account):
    other = AccountService.create_account('RRSP', AccountType.RRSP, person.id)

    response = client.post('/investments/update-balances', data={
        'date': '2025-03-31',
        f'balance_{account.id}': '100',
        f'balance_{other.id}': 'oops',
    })

    assert response.status_code == 200
    assert BalanceSnapshot.query.count() == 0


def test_duplicate_return_is_flashed(client, account):
    AccountService.create_return(account.id, 2024, 5)
    response = client.post(f'/investments/accounts/{account.id}/returns/add',
                           data={'year': '2024', 'return_percent': '6'},
                           follow_redirects=True)
    assert b'already exists' in response.data


def test_allocation_must_sum_to_100(client, account):
    response = client.post(f'/investments/allocations/{account.id}',
                           data={'equity_pct': '60', 'fixed_income_pct': '30', 'cash_pct': '20'},
                           follow_redirects=True)
    assert b'Allocation percentages must sum to 100' in response.data
    assert Account.query.one().equity_pct is None


def test_allocation_saved(client, account):
    client.post(f'/investments/allocations/{account.id}',
                data={'equity_pct': '60', 'fixed_income_pct': '30', 'cash_pct': '10'})
    assert Account.query.one().equity_pct == Decimal('60')


# ---------------------------------------------------------------------------
# Glide path
# ---------------------------------------------------------------------------

def test_glide_path_preview(client, person, fixed_year):
    response = client.get('/investments/glide-paths?retirement_age=65')
    assert response.status_code == 200
    assert b'Save these waypoints' in response.data
    assert b'2043' in response.data


def test_glide_path_preview_rejects_out_of_range_age(client, person):
    response = client.get('/investments/glide-paths?retirement_age=40')
    assert b'Retirement age must be between 55 and 75' in response.data


def test_glide_path_preview_needs_a_birth_year(client, app):
    response = client.get('/investments/glide-paths?retirement_age=65')
    assert b'Add a birth year in Settings' in response.data


def test_generate_glide_path(client, person, fixed_year):
    response = client.post('/investments/glide-paths/generate', data={'retirement_age': '65'})
    assert response.status_code == 302
    years = [w.year for w in GlidePathWaypoint.query.order_by(GlidePathWaypoint.year).all()]
    assert years == [2025, 2043, 2048, 2053, 2058, 2063]


def test_save_waypoint(client):
    client.post('/investments/glide-paths/waypoints',
                data={'year': '2030', 'equity_pct': '70', 'fixed_income_pct': '20', 'cash_pct': '10'})
    assert GlidePathWaypoint.query.one().year == 2030


# ---------------------------------------------------------------------------
# Income / housing
# ---------------------------------------------------------------------------

def test_income_page_shows_pension_estimates(client, person):
    response = client.get('/income')
    assert b'1,055.36' in response.data


def test_add_income_source(client, person):
    client.post('/income/sources/add', data={
        'name': 'Salary', 'owner_id': str(person.id), 'amount': '5000', 'frequency': 'MONTHLY',
    })
    assert IncomeSource.query.one().annual_amount == Decimal('60000')


def test_add_and_delete_property(client):
    client.post('/housing/add', data={
        'name': 'Main residence', 'estimated_value': '700000', 'mortgage_balance': '300000',
        'mortgage_rate': '4.5',
    })
    prop = Property.query.one()
    assert prop.equity == Decimal('400000')

    response = client.post(f'/housing/{prop.id}/delete')
    assert response.status_code == 302
    assert Property.query.count() == 0
