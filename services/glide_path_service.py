"""
Glide Path Service
==================
Recommended asset-allocation trajectories and the stored glide-path waypoints.

Equity rule
-----------
The recommended equity share is a straight "115 minus age" line clamped to
the range 30-90%:

    equity_pct = clamp(115 - age, 30, 90)

Whatever is not in equities is split 60/40 between fixed income and cash,
each rounded to one decimal place, so a waypoint always sums to 100 within
0.1.

Recommended path
----------------
Waypoints are produced for the current year, the retirement year and 5, 10
and 15 years after retirement, plus the year the person turns 85 when that
is still in the future.  The list is sorted by year with no duplicates, and
equity never increases from one waypoint to the next.

Stored waypoints
----------------
GlidePathWaypoint rows are edited by the user (one per year).  Every write is
checked with validate_allocation() first; batch writes validate all items
before anything is deleted or inserted.

Primary entry points
--------------------
  calculate_equity_pct()             - equity % for an age (pure)
  generate_recommended_glide_path()  - recommended waypoints (pure)
  get_oldest_person()                - whose birth year drives the path (pure)
  interpolate_glide_path()           - yearly points between waypoints (pure)
  get_waypoints() / upsert_waypoint() / delete_waypoint() / batch_create_waypoints()
"""
import logging

from extensions import db
from models.glide_path import GlidePathWaypoint
from models.people import Person
from utils import dates
from utils.db_helpers import commit, get_or_raise
from utils.errors import ValidationError
from utils.validation import require_int, validate_allocation


logger = logging.getLogger(__name__)

EQUITY_FLOOR = 30
EQUITY_CEILING = 90
FINAL_AGE = 85
YEARS_AFTER_RETIREMENT = (5, 10, 15)
FIXED_INCOME_SHARE = 0.6
CASH_SHARE = 0.4
MIN_WAYPOINT_YEAR = 1900
MAX_WAYPOINT_YEAR = 2200


def _birth_year_of(person):
    if isinstance(person, dict):
        return person.get('birth_year')
    return person.birth_year


def _pct(value):
    return float(value) if value is not None else None


class GlidePathService:
    """Glide-path calculators and waypoint persistence."""

    # ------------------------------------------------------------------
    # Pure calculations
    # ------------------------------------------------------------------

    @staticmethod
    def calculate_equity_pct(age):
        """Recommended equity percentage for *age*: 115 - age, clamped to 30-90."""
        return max(EQUITY_FLOOR, min(EQUITY_CEILING, 115 - age))

    @staticmethod
    def generate_recommended_glide_path(birth_year, retirement_age, current_year=None):
        """
        Build the recommended waypoints for someone born in *birth_year* who
        plans to retire at *retirement_age*.

        Args:
            birth_year:     Year of birth.
            retirement_age: Target retirement age; must not be below the
                            person's current age.
            current_year:   Year to generate from (defaults to this year).

        Returns:
            list[dict] - one dict per year, ascending, with keys year,
            equity_pct, fixed_income_pct, cash_pct.

        Raises:
            ValidationError if retirement_age is below the current age.
        """
        if current_year is None:
            current_year = dates.current_year()

        current_age = current_year - birth_year
        retirement_year = birth_year + retirement_age

        if retirement_age < current_age:
            logger.warning('Rejected glide path: retirement age %s below current age %s', retirement_age, current_age)
            raise ValidationError('Retirement age cannot be less than current age')

        years = {current_year, retirement_year}
        years.update(retirement_year + offset for offset in YEARS_AFTER_RETIREMENT)

        final_year = birth_year + FINAL_AGE
        if final_year > current_year:
            years.add(final_year)

        waypoints = []
        for year in sorted(years):
            equity_pct = GlidePathService.calculate_equity_pct(year - birth_year)
            non_equity = 100 - equity_pct
            waypoints.append({
                'year': year,
                'equity_pct': equity_pct,
                'fixed_income_pct': round(non_equity * FIXED_INCOME_SHARE, 1),
                'cash_pct': round(non_equity * CASH_SHARE, 1),
            })

        return waypoints

    @staticmethod
    def get_oldest_person(people):
        """
        Return the person with the earliest birth year, or None.

        People without a birth year are ignored.  Accepts model instances or
        dicts with a 'birth_year' key.
        """
        with_birth_year = [p for p in people if _birth_year_of(p) is not None]
        if not with_birth_year:
            return None
        return min(with_birth_year, key=_birth_year_of)

    @staticmethod
    def interpolate_glide_path(waypoints, current_year=None):
        """
        Linearly interpolate one point per year between consecutive waypoints.

        *waypoints* may be GlidePathWaypoint rows or generated dicts.  Each
        returned point carries year, equity_pct, fixed_income_pct, cash_pct
        and is_past (year <= current_year).
        """
        if current_year is None:
            current_year = dates.current_year()

        def as_tuple(w):
            if isinstance(w, dict):
                return (w['year'], _pct(w['equity_pct']), _pct(w['fixed_income_pct']), _pct(w['cash_pct']))
            return (w.year, _pct(w.equity_pct), _pct(w.fixed_income_pct), _pct(w.cash_pct))

        ordered = sorted((as_tuple(w) for w in waypoints), key=lambda t: t[0])
        if not ordered:
            return []

        points = []
        for start, end in zip(ordered, ordered[1:]):
            span = end[0] - start[0]
            for year in range(start[0], end[0]):
                t = (year - start[0]) / span
                points.append((
                    year,
                    start[1] + t * (end[1] - start[1]),
                    start[2] + t * (end[2] - start[2]),
                    start[3] + t * (end[3] - start[3]),
                ))
        points.append(ordered[-1])

        return [
            {
                'year': year,
                'equity_pct': round(equity, 1),
                'fixed_income_pct': round(fixed_income, 1),
                'cash_pct': round(cash, 1),
                'is_past': year <= current_year,
            }
            for year, equity, fixed_income, cash in points
        ]

    # ------------------------------------------------------------------
    # Stored waypoints
    # ------------------------------------------------------------------

    @staticmethod
    def get_waypoints():
        """All stored waypoints, ascending by year."""
        return GlidePathWaypoint.query.order_by(GlidePathWaypoint.year.asc()).all()

    @staticmethod
    def get_people_with_birth_years():
        """People in display order; the generator picks from these."""
        return Person.query.order_by(Person.sort_order.asc(), Person.created_at.asc(), Person.id.asc()).all()

    @staticmethod
    def _validate_waypoint(year, equity_pct, fixed_income_pct, cash_pct):
        year = require_int(year, 'Year')
        if year < MIN_WAYPOINT_YEAR or year > MAX_WAYPOINT_YEAR:
            raise ValidationError(f'Year must be between {MIN_WAYPOINT_YEAR} and {MAX_WAYPOINT_YEAR}')
        return (year,) + validate_allocation(equity_pct, fixed_income_pct, cash_pct)

    @staticmethod
    def upsert_waypoint(year, equity_pct, fixed_income_pct, cash_pct):
        """Create the waypoint for *year*, or overwrite the existing one."""
        year, equity, fixed_income, cash = GlidePathService._validate_waypoint(
            year, equity_pct, fixed_income_pct, cash_pct
        )

        waypoint = GlidePathWaypoint.query.filter_by(year=year).first()
        if waypoint is None:
            waypoint = GlidePathWaypoint(year=year)
            db.session.add(waypoint)

        waypoint.equity_pct = equity
        waypoint.fixed_income_pct = fixed_income
        waypoint.cash_pct = cash

        commit('save waypoint')
        logger.info('Saved glide path waypoint %s: %s/%s/%s', year, equity, fixed_income, cash)
        return waypoint

    @staticmethod
    def delete_waypoint(waypoint_id):
        waypoint = get_or_raise(GlidePathWaypoint, waypoint_id)
        db.session.delete(waypoint)
        commit('delete waypoint')
        logger.info('Deleted glide path waypoint %s', waypoint.year)
        return waypoint

    @staticmethod
    def batch_create_waypoints(waypoints):
        """
        Replace the waypoints for every year in *waypoints* in one transaction.

        All items are validated before the session is touched, so one bad
        item rejects the whole batch.

        Returns:
            int - number of waypoints written.
        """
        validated = [
            GlidePathService._validate_waypoint(
                w['year'], w['equity_pct'], w['fixed_income_pct'], w['cash_pct']
            )
            for w in waypoints
        ]

        years = {item[0] for item in validated}
        if len(years) != len(validated):
            logger.warning('Rejected waypoint batch with duplicate years')
            raise ValidationError('Each year may only appear once')

        if years:
            GlidePathWaypoint.query.filter(GlidePathWaypoint.year.in_(years)).delete(
                synchronize_session='fetch'
            )
        for year, equity, fixed_income, cash in validated:
            db.session.add(GlidePathWaypoint(
                year=year,
                equity_pct=equity,
                fixed_income_pct=fixed_income,
                cash_pct=cash,
            ))

        commit('create waypoints')
        logger.info('Replaced %d glide path waypoints', len(validated))
        return len(validated)
