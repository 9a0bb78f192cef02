"""
Shared pytest fixtures for the Retirement Planner test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  After each test, clean_db wipes all
rows so tests are fully independent.
"""
import pytest
from app import create_app
from extensions import db as _db


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Wipe every table after each test so tests never share state."""
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fixed_year(monkeypatch):
    """Pin the calculators' notion of 'this year' to 2025."""
    monkeypatch.setattr('utils.dates.current_year', lambda: 2025)
    return 2025


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def person(app):
    from models.people import Person
    p = Person(name='Alex', birth_year=1978, sort_order=1)
    _db.session.add(p)
    _db.session.commit()
    return p


@pytest.fixture
def second_person(app):
    from models.people import Person
    p = Person(name='Sam', birth_year=1981, pension_claim_age=70, oas_residence_years=20, sort_order=2)
    _db.session.add(p)
    _db.session.commit()
    return p


@pytest.fixture
def account(app, person):
    from models.accounts import Account, AccountType
    a = Account(name='Questrade TFSA', account_type=AccountType.TFSA, owner_id=person.id)
    _db.session.add(a)
    _db.session.commit()
    return a
