"""Integration tests for PropertyService."""
from decimal import Decimal

import pytest

from models.property import Property
from services.property_service import PropertyService
from utils.errors import NotFoundError, ValidationError


def test_create_and_equity(app):
    prop = PropertyService.create_property('Main residence', 725000, 312000, '4.79')
    assert prop.equity == Decimal('413000')
    assert round(prop.equity_percent, 1) == Decimal('57.0')
    assert prop.mortgage_rate == Decimal('4.79')


def test_mortgage_rate_is_optional(app):
    prop = PropertyService.create_property('Cottage', 300000, 0)
    assert prop.mortgage_rate is None
    assert prop.equity == Decimal('300000')


def test_rate_out_of_range_rejected(app):
    with pytest.raises(ValidationError, match='Mortgage rate'):
        PropertyService.create_property('Condo', 500000, 100000, 45)
    assert Property.query.count() == 0


def test_negative_value_rejected(app):
    with pytest.raises(ValidationError, match='Estimated value cannot be negative'):
        PropertyService.create_property('Condo', -1, 0)


def test_sort_order_appends(app):
    first = PropertyService.create_property('A', 1, 0)
    second = PropertyService.create_property('B', 1, 0)
    assert second.sort_order == first.sort_order + 1
    assert [p.name for p in PropertyService.get_properties()] == ['A', 'B']


def test_update(app):
    prop = PropertyService.create_property('Condo', 500000, 100000, 5)
    PropertyService.update_property(prop.id, 'Condo', 520000, 90000, None)
    assert prop.estimated_value == Decimal('520000')
    assert prop.mortgage_rate is None


def test_delete(app):
    prop = PropertyService.create_property('Condo', 500000, 100000)
    PropertyService.delete_property(prop.id)
    assert Property.query.count() == 0
    with pytest.raises(NotFoundError):
        PropertyService.delete_property(prop.id)


def test_housing_totals(app):
    PropertyService.create_property('House', 700000, 300000)
    PropertyService.create_property('Cottage', 250000, 50000)
    totals = PropertyService.get_housing_totals(PropertyService.get_properties())
    assert totals == {
        'total_value': Decimal('950000'),
        'total_mortgage': Decimal('350000'),
        'total_equity': Decimal('600000'),
    }


def test_zero_value_equity_percent(app):
    prop = PropertyService.create_property('Lot', 0, 0)
    assert prop.equity_percent == 0
