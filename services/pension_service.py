"""
Pension Service
===============
Government pension (CPP / OAS) estimates for each household member.

Projections are recomputed on every request from the Person row and the
current calendar year; nothing is stored.

CPP model
---------
The age-65 estimate is 70% of the maximum monthly benefit:

    cpp_at_65 = CPP_MAX_MONTHLY_AT_65 × CPP_ESTIMATE_MULTIPLIER

Claiming early reduces it by 0.6% per month before 65; claiming late raises
it by 0.7% per month after 65 (both linear):

    claim_age < 65:  monthly = cpp_at_65 × (1 − 0.006 × months_early)
    claim_age > 65:  monthly = cpp_at_65 × (1 + 0.007 × months_late)

OAS model
---------
    residence_fraction = min(residence_years / 40, 1)
    monthly = (OAS_MAX_75_PLUS if age ≥ 75 or claim_age ≥ 75 else OAS_MAX_65_TO_74)
              × residence_fraction

Monetary outputs are Decimals rounded half-up to cents.

People without a birth year produce {'person': p, 'has_birth_year': False}
and no numeric fields; callers must check has_birth_year first.

Primary entry points
--------------------
  get_pension_projection()   - one person, pure
  get_pension_projections()  - every person in display order
"""
from decimal import Decimal, ROUND_HALF_UP

from models.people import Person, DEFAULT_CLAIM_AGE, DEFAULT_OAS_RESIDENCE_YEARS
from utils import dates


CPP_MAX_MONTHLY_AT_65 = Decimal('1507.65')
CPP_ESTIMATE_MULTIPLIER = Decimal('0.7')
CPP_EARLY_REDUCTION_PER_MONTH = Decimal('0.006')
CPP_LATE_INCREASE_PER_MONTH = Decimal('0.007')

OAS_MAX_MONTHLY_65_TO_74 = Decimal('742.31')
OAS_MAX_MONTHLY_75_PLUS = Decimal('816.54')
OAS_FULL_RESIDENCE_YEARS = 40

STANDARD_CLAIM_AGE = 65
OAS_INCREASE_AGE = 75

CENTS = Decimal('0.01')


def _money(value):
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class PensionService:
    """CPP / OAS estimates. All methods are pure apart from the DB read in
    get_pension_projections() when no people are passed in."""

    @staticmethod
    def estimate_cpp_monthly(claim_age):
        """Unrounded monthly CPP estimate for a given claim age."""
        base = CPP_MAX_MONTHLY_AT_65 * CPP_ESTIMATE_MULTIPLIER
        if claim_age < STANDARD_CLAIM_AGE:
            months_early = (STANDARD_CLAIM_AGE - claim_age) * 12
            return base * (1 - CPP_EARLY_REDUCTION_PER_MONTH * months_early)
        if claim_age > STANDARD_CLAIM_AGE:
            months_late = (claim_age - STANDARD_CLAIM_AGE) * 12
            return base * (1 + CPP_LATE_INCREASE_PER_MONTH * months_late)
        return base

    @staticmethod
    def residence_fraction(residence_years):
        """Share of the full OAS benefit earned by *residence_years* (capped at 1)."""
        return min(Decimal(residence_years) / OAS_FULL_RESIDENCE_YEARS, Decimal('1'))

    @staticmethod
    def estimate_oas_monthly(age, claim_age, residence_years):
        """Unrounded monthly OAS estimate."""
        if age >= OAS_INCREASE_AGE or claim_age >= OAS_INCREASE_AGE:
            maximum = OAS_MAX_MONTHLY_75_PLUS
        else:
            maximum = OAS_MAX_MONTHLY_65_TO_74
        return maximum * PensionService.residence_fraction(residence_years)

    @staticmethod
    def get_pension_projection(person, current_year=None):
        """
        Project CPP and OAS for a single person.

        Args:
            person:       Person (or anything with birth_year,
                          pension_claim_age and oas_residence_years).
            current_year: Year to project from (defaults to this year).

        Returns:
            dict - {'person', 'has_birth_year': False} when the birth year is
            unknown, otherwise also age, claim_age, claim_year,
            years_until_claim, is_over_65, is_over_75,
            cpp {monthly, annual} and
            oas {monthly, annual, residence_years, residence_fraction}.
        """
        if not person.birth_year:
            return {'person': person, 'has_birth_year': False}

        if current_year is None:
            current_year = dates.current_year()

        claim_age = person.pension_claim_age
        if claim_age is None:
            claim_age = DEFAULT_CLAIM_AGE
        residence_years = person.oas_residence_years
        if residence_years is None:
            residence_years = DEFAULT_OAS_RESIDENCE_YEARS

        age = current_year - person.birth_year
        cpp_monthly = PensionService.estimate_cpp_monthly(claim_age)
        oas_monthly = PensionService.estimate_oas_monthly(age, claim_age, residence_years)

        return {
            'person': person,
            'has_birth_year': True,
            'age': age,
            'claim_age': claim_age,
            'claim_year': person.birth_year + claim_age,
            'years_until_claim': max(0, claim_age - age),
            'is_over_65': age >= STANDARD_CLAIM_AGE,
            'is_over_75': age >= OAS_INCREASE_AGE,
            'cpp': {
                'monthly': _money(cpp_monthly),
                'annual': _money(cpp_monthly * 12),
            },
            'oas': {
                'monthly': _money(oas_monthly),
                'annual': _money(oas_monthly * 12),
                'residence_years': residence_years,
                'residence_fraction': PensionService.residence_fraction(residence_years),
            },
        }

    @staticmethod
    def get_pension_projections(people=None, current_year=None):
        """Projections for *people*, or for every Person in display order."""
        if people is None:
            people = Person.query.order_by(
                Person.sort_order.asc(), Person.created_at.asc(), Person.id.asc()
            ).all()
        if current_year is None:
            current_year = dates.current_year()
        return [PensionService.get_pension_projection(p, current_year) for p in people]
