import logging

from extensions import db
from models.people import Person
from utils import dates
from utils.db_helpers import commit, get_or_raise, next_sort_order
from utils.errors import ValidationError
from utils.validation import require_int, require_name


logger = logging.getLogger(__name__)

MIN_BIRTH_YEAR = 1900
CLAIM_AGE_RANGE = (60, 75)
RESIDENCE_YEARS_RANGE = (0, 60)


def _optional_int_in_range(value, low, high, field):
    if value is None or value == '':
        return None
    number = require_int(value, field)
    if number < low or number > high:
        raise ValidationError(f'{field} must be between {low} and {high}')
    return number


class PeopleService:
    """Household members (settings page)."""

    @staticmethod
    def get_people():
        return Person.query.order_by(
            Person.sort_order.asc(), Person.created_at.asc(), Person.id.asc()
        ).all()

    @staticmethod
    def _validate(name, birth_year, pension_claim_age, oas_residence_years):
        return (
            require_name(name),
            _optional_int_in_range(birth_year, MIN_BIRTH_YEAR, dates.current_year(), 'Birth year'),
            _optional_int_in_range(pension_claim_age, *CLAIM_AGE_RANGE, 'Pension claim age'),
            _optional_int_in_range(oas_residence_years, *RESIDENCE_YEARS_RANGE, 'OAS residence years'),
        )

    @staticmethod
    def create_person(name, birth_year=None, pension_claim_age=None, oas_residence_years=None):
        """Add a person at the end of the display order."""
        name, birth_year, claim_age, residence_years = PeopleService._validate(
            name, birth_year, pension_claim_age, oas_residence_years
        )
        person = Person(
            name=name,
            birth_year=birth_year,
            pension_claim_age=claim_age,
            oas_residence_years=residence_years,
            sort_order=next_sort_order(Person),
        )
        db.session.add(person)
        commit('create person')
        logger.info('Created person %s', person.name)
        return person

    @staticmethod
    def update_person(person_id, name, birth_year=None, pension_claim_age=None, oas_residence_years=None):
        person = get_or_raise(Person, person_id)
        name, birth_year, claim_age, residence_years = PeopleService._validate(
            name, birth_year, pension_claim_age, oas_residence_years
        )
        person.name = name
        person.birth_year = birth_year
        person.pension_claim_age = claim_age
        person.oas_residence_years = residence_years
        commit('update person')
        return person

    @staticmethod
    def delete_person(person_id):
        """Delete a person together with their accounts and income sources."""
        person = get_or_raise(Person, person_id)
        db.session.delete(person)
        commit('delete person')
        logger.info('Deleted person %s', person.name)
        return person
