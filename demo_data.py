"""
Sample household for demos and local development.

Used by ``flask seed-demo``.  Rows are created in foreign-key order:
people first, then the accounts, income sources and properties they own,
then balance history, returns and a recommended glide path.
"""
from datetime import date

from models.accounts import AccountType
from models.income import IncomeFrequency
from services.account_service import AccountService
from services.allocation_service import AllocationService
from services.glide_path_service import GlidePathService
from services.income_service import IncomeService
from services.people_service import PeopleService
from services.property_service import PropertyService
from utils import dates


PEOPLE = [
    {'name': 'Alex', 'birth_year': 1978, 'pension_claim_age': 65, 'oas_residence_years': 40},
    {'name': 'Sam', 'birth_year': 1981, 'pension_claim_age': 70, 'oas_residence_years': 32},
]

ACCOUNTS = [
    # owner index, name, type, allocation (equity, fixed income, cash)
    (0, 'Questrade TFSA', AccountType.TFSA, (80, 15, 5)),
    (0, 'Work RRSP', AccountType.RRSP, (70, 25, 5)),
    (1, 'Wealthsimple TFSA', AccountType.TFSA, (90, 10, 0)),
    (1, 'Spousal RRSP', AccountType.RRSP, None),
    (1, 'High Interest Savings', AccountType.REGULAR_SAVINGS, (0, 0, 100)),
    (0, 'Everyday Chequing', AccountType.CHEQUING, None),
]

# Year-end balances, oldest first
BALANCE_HISTORY = {
    'Questrade TFSA': [61500, 70200, 81400],
    'Work RRSP': [142000, 158300, 171900],
    'Wealthsimple TFSA': [38800, 45100, 52600],
    'Spousal RRSP': [22400, 26900, 30100],
    'High Interest Savings': [18000, 19500, 21000],
    'Everyday Chequing': [4200, 3900, 5100],
}

RETURNS = {
    'Questrade TFSA': [9.8, 12.4],
    'Work RRSP': [7.1, 6.3],
    'Wealthsimple TFSA': [11.2, 10.5],
}


def populate_demo_data():
    """Create the sample household; returns a dict of row counts."""
    year = dates.current_year()
    counts = {'people': 0, 'accounts': 0, 'snapshots': 0, 'returns': 0,
              'income sources': 0, 'properties': 0, 'waypoints': 0}

    people = [PeopleService.create_person(**data) for data in PEOPLE]
    counts['people'] = len(people)

    for owner_index, name, account_type, allocation in ACCOUNTS:
        account = AccountService.create_account(name, account_type, people[owner_index].id)
        counts['accounts'] += 1

        history = BALANCE_HISTORY[name]
        first_year = year - len(history)
        for offset, balance in enumerate(history):
            AccountService.create_snapshot(account.id, date(first_year + offset, 12, 31), balance)
            counts['snapshots'] += 1

        for offset, pct in enumerate(RETURNS.get(name, [])):
            AccountService.create_return(account.id, year - len(RETURNS[name]) + offset, pct)
            counts['returns'] += 1

        if allocation:
            AllocationService.set_allocation(account.id, *allocation)

    IncomeService.create_income_source('Acme Corp salary', people[0].id, 98000, IncomeFrequency.ANNUAL)
    IncomeService.create_income_source('Consulting', people[1].id, 4500, IncomeFrequency.MONTHLY)
    counts['income sources'] = 2

    PropertyService.create_property('Main residence', 725000, 312000, 4.79)
    counts['properties'] = 1

    oldest = GlidePathService.get_oldest_person(people)
    waypoints = GlidePathService.generate_recommended_glide_path(oldest.birth_year, 65)
    counts['waypoints'] = GlidePathService.batch_create_waypoints(waypoints)

    return counts
