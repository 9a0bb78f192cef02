# Models package - Import all models for Flask-SQLAlchemy

from models.people import Person
from models.accounts import Account, AccountType
from models.balances import BalanceSnapshot
from models.returns import ReturnEntry
from models.glide_path import GlidePathWaypoint
from models.income import IncomeSource, IncomeFrequency
from models.property import Property

__all__ = [
    'Person',
    'Account',
    'AccountType',
    'BalanceSnapshot',
    'ReturnEntry',
    'GlidePathWaypoint',
    'IncomeSource',
    'IncomeFrequency',
    'Property',
]
