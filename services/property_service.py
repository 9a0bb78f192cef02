import logging
from decimal import Decimal

from extensions import db
from models.property import Property
from utils.db_helpers import commit, get_or_raise, next_sort_order
from utils.validation import require_in_range, require_name, require_non_negative


logger = logging.getLogger(__name__)

MAX_MORTGAGE_RATE = 30


class PropertyService:
    """Housing assets and their mortgages."""

    @staticmethod
    def get_properties():
        return Property.query.order_by(
            Property.sort_order.asc(), Property.created_at.asc(), Property.id.asc()
        ).all()

    @staticmethod
    def _validate(name, estimated_value, mortgage_balance, mortgage_rate):
        if mortgage_rate is not None and mortgage_rate != '':
            mortgage_rate = require_in_range(mortgage_rate, 0, MAX_MORTGAGE_RATE, 'Mortgage rate')
        else:
            mortgage_rate = None
        return (
            require_name(name),
            require_non_negative(estimated_value, 'Estimated value'),
            require_non_negative(mortgage_balance, 'Mortgage balance'),
            mortgage_rate,
        )

    @staticmethod
    def create_property(name, estimated_value, mortgage_balance, mortgage_rate=None):
        name, value, balance, rate = PropertyService._validate(
            name, estimated_value, mortgage_balance, mortgage_rate
        )
        prop = Property(
            name=name,
            estimated_value=value,
            mortgage_balance=balance,
            mortgage_rate=rate,
            sort_order=next_sort_order(Property),
        )
        db.session.add(prop)
        commit('create property')
        logger.info('Created property %s', prop.name)
        return prop

    @staticmethod
    def update_property(property_id, name, estimated_value, mortgage_balance, mortgage_rate=None):
        prop = get_or_raise(Property, property_id)
        prop.name, prop.estimated_value, prop.mortgage_balance, prop.mortgage_rate = \
            PropertyService._validate(name, estimated_value, mortgage_balance, mortgage_rate)
        commit('update property')
        return prop

    @staticmethod
    def delete_property(property_id):
        prop = get_or_raise(Property, property_id)
        db.session.delete(prop)
        commit('delete property')
        return prop

    @staticmethod
    def get_housing_totals(properties):
        """Total estimated value, mortgage balance and equity."""
        total_value = sum((p.estimated_value or Decimal('0') for p in properties), Decimal('0'))
        total_mortgage = sum((p.mortgage_balance or Decimal('0') for p in properties), Decimal('0'))
        return {
            'total_value': total_value,
            'total_mortgage': total_mortgage,
            'total_equity': total_value - total_mortgage,
        }
