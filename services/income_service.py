"""
Income Service
==============
CRUD for income sources plus the annual totals shown on the income page.

Monthly sources are annualised as amount × 12; annual sources are taken as-is.
"""
import logging
from decimal import Decimal

from extensions import db
from models.income import IncomeSource, IncomeFrequency
from models.people import Person
from utils.db_helpers import commit, get_or_raise, next_sort_order
from utils.errors import ValidationError
from utils.validation import require_int, require_name, require_non_negative


logger = logging.getLogger(__name__)


class IncomeService:

    @staticmethod
    def get_income_sources():
        """Sources grouped by owner order, then their own sort order."""
        return IncomeSource.query.join(Person, IncomeSource.owner_id == Person.id) \
            .order_by(Person.sort_order.asc(), Person.id.asc(),
                      IncomeSource.sort_order.asc(), IncomeSource.created_at.asc()) \
            .all()

    @staticmethod
    def _validate(name, owner_id, amount, frequency):
        name = require_name(name)
        owner_id = require_int(owner_id, 'Owner')
        if db.session.get(Person, owner_id) is None:
            raise ValidationError('Owner does not exist')
        amount = require_non_negative(amount, 'Amount')
        if frequency not in IncomeFrequency.LABELS:
            raise ValidationError(f'Unknown frequency: {frequency}')
        return name, owner_id, amount, frequency

    @staticmethod
    def create_income_source(name, owner_id, amount, frequency):
        name, owner_id, amount, frequency = IncomeService._validate(name, owner_id, amount, frequency)
        source = IncomeSource(
            name=name,
            owner_id=owner_id,
            amount=amount,
            frequency=frequency,
            sort_order=next_sort_order(IncomeSource),
        )
        db.session.add(source)
        commit('create income source')
        logger.info('Created income source %s', source.name)
        return source

    @staticmethod
    def update_income_source(source_id, name, owner_id, amount, frequency):
        source = get_or_raise(IncomeSource, source_id)
        source.name, source.owner_id, source.amount, source.frequency = \
            IncomeService._validate(name, owner_id, amount, frequency)
        commit('update income source')
        return source

    @staticmethod
    def delete_income_source(source_id):
        source = get_or_raise(IncomeSource, source_id)
        db.session.delete(source)
        commit('delete income source')
        return source

    @staticmethod
    def get_totals_by_person(sources):
        """
        Annual income per owner.

        Returns:
            dict - owner_id -> {'name', 'annual'}, in first-seen order.
        """
        totals = {}
        for source in sources:
            entry = totals.setdefault(source.owner_id, {'name': source.owner.name, 'annual': Decimal('0')})
            entry['annual'] += source.annual_amount
        return totals

    @staticmethod
    def get_total_annual_income(sources):
        return sum((s.annual_amount for s in sources), Decimal('0'))
