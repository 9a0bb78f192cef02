"""
Input validation rules used at the data-access boundary.

Every service function validates its arguments with these helpers before it
touches the session, so a rejected write never leaves partial rows behind.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from utils.errors import ValidationError


logger = logging.getLogger(__name__)


ALLOCATION_SUM_MESSAGE = 'Allocation percentages must sum to 100'


def to_decimal(value, field):
    """Coerce *value* to Decimal, raising ValidationError on garbage."""
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f'{field} must be a number')
    if not number.is_finite():
        raise ValidationError(f'{field} must be a number')
    return number


def require_name(name, field='Name'):
    """Return the stripped name, or raise if it is blank."""
    if name is None or not str(name).strip():
        raise ValidationError(f'{field} is required')
    return str(name).strip()


def require_int(value, field):
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a whole number')
    if isinstance(value, int):
        return value
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f'{field} must be a whole number')
    if parsed != parsed.to_integral_value():
        raise ValidationError(f'{field} must be a whole number')
    return int(parsed)


def require_in_range(value, low, high, field):
    """Return *value* as Decimal if ``low <= value <= high``."""
    number = to_decimal(value, field)
    if number < low or number > high:
        raise ValidationError(f'{field} must be between {low} and {high}')
    return number


def require_non_negative(value, field):
    number = to_decimal(value, field)
    if number < 0:
        raise ValidationError(f'{field} cannot be negative')
    return number


def require_percent(value, field):
    """Return *value* as a Decimal percentage in [0, 100] with at most 2 decimals."""
    number = require_in_range(value, 0, 100, field)
    if number != number.quantize(Decimal('0.01')):
        raise ValidationError(f'{field} can have at most 2 decimal places')
    return number


def validate_allocation(equity_pct, fixed_income_pct, cash_pct):
    """
    Check an equity / fixed income / cash split.

    Each percentage must lie in [0, 100] with at most two decimal places, and
    the three must round to exactly 100.  Returns the three values as Decimals.
    """
    equity = require_percent(equity_pct, 'Equity %')
    fixed_income = require_percent(fixed_income_pct, 'Fixed income %')
    cash = require_percent(cash_pct, 'Cash %')

    total = equity + fixed_income + cash
    if total.quantize(Decimal('1'), rounding=ROUND_HALF_UP) != 100:
        logger.warning('Rejected allocation %s/%s/%s (total %s)', equity, fixed_income, cash, total)
        raise ValidationError(ALLOCATION_SUM_MESSAGE)
    return equity, fixed_income, cash
