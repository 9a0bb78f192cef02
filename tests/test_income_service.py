"""Integration tests for IncomeService."""
from decimal import Decimal

import pytest

from models.income import IncomeFrequency, IncomeSource
from services.income_service import IncomeService
from utils.errors import NotFoundError, ValidationError


class TestIncomeSources:

    def test_create(self, person):
        source = IncomeService.create_income_source('Salary', person.id, '98000', IncomeFrequency.ANNUAL)
        assert source.id is not None
        assert source.owner.name == 'Alex'
        assert source.annual_amount == Decimal('98000')

    def test_monthly_is_annualised(self, person):
        source = IncomeService.create_income_source('Consulting', person.id, 4500, IncomeFrequency.MONTHLY)
        assert source.annual_amount == Decimal('54000')

    def test_negative_amount_rejected(self, person):
        with pytest.raises(ValidationError, match='cannot be negative'):
            IncomeService.create_income_source('Salary', person.id, -1, IncomeFrequency.ANNUAL)
        assert IncomeSource.query.count() == 0

    def test_unknown_frequency_rejected(self, person):
        with pytest.raises(ValidationError, match='Unknown frequency'):
            IncomeService.create_income_source('Salary', person.id, 100, 'WEEKLY')

    def test_unknown_owner_rejected(self, app):
        with pytest.raises(ValidationError, match='Owner does not exist'):
            IncomeService.create_income_source('Salary', 7, 100, IncomeFrequency.ANNUAL)

    def test_update(self, person, second_person):
        source = IncomeService.create_income_source('Salary', person.id, 100, IncomeFrequency.ANNUAL)
        IncomeService.update_income_source(source.id, 'Pension', second_person.id, 200, IncomeFrequency.MONTHLY)
        assert source.name == 'Pension'
        assert source.owner_id == second_person.id
        assert source.annual_amount == Decimal('2400')

    def test_delete(self, person):
        source = IncomeService.create_income_source('Salary', person.id, 100, IncomeFrequency.ANNUAL)
        IncomeService.delete_income_source(source.id)
        assert IncomeSource.query.count() == 0

    def test_delete_missing(self, app):
        with pytest.raises(NotFoundError):
            IncomeService.delete_income_source(123)


class TestTotals:

    def test_totals_by_person_and_household(self, person, second_person):
        IncomeService.create_income_source('Salary', person.id, 90000, IncomeFrequency.ANNUAL)
        IncomeService.create_income_source('Rental', person.id, 500, IncomeFrequency.MONTHLY)
        IncomeService.create_income_source('Consulting', second_person.id, 2000, IncomeFrequency.MONTHLY)

        sources = IncomeService.get_income_sources()
        by_person = IncomeService.get_totals_by_person(sources)

        assert by_person[person.id] == {'name': 'Alex', 'annual': Decimal('96000')}
        assert by_person[second_person.id]['annual'] == Decimal('24000')
        assert list(by_person) == [person.id, second_person.id]
        assert IncomeService.get_total_annual_income(sources) == Decimal('120000')

    def test_no_sources(self, app):
        assert IncomeService.get_totals_by_person([]) == {}
        assert IncomeService.get_total_annual_income([]) == 0
