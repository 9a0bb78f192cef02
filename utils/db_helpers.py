"""
Database helpers shared by the service layer.

Every service write goes through ``commit()`` so that a failed flush rolls the
session back and surfaces as a ``DataAccessError`` naming the operation:

    from utils.db_helpers import commit, get_or_raise

    account = get_or_raise(Account, account_id)
    account.name = 'RRSP'
    commit('update account')
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from utils.errors import DataAccessError, NotFoundError


logger = logging.getLogger(__name__)


def get_or_raise(model, record_id):
    """Fetch *model* by primary key or raise ``NotFoundError``."""
    record = db.session.get(model, record_id)
    if record is None:
        raise NotFoundError(model.__name__, record_id)
    return record


def commit(action):
    """Commit the session; on failure roll back and raise ``DataAccessError``.

    *action* is a short verb phrase such as ``'save waypoint'`` and becomes the
    start of the error message: ``Failed to save waypoint: <cause>``.
    """
    try:
        db.session.commit()
    except SQLAlchemyError as err:
        db.session.rollback()
        logger.exception('Failed to %s', action)
        raise DataAccessError(f'Failed to {action}: {err}') from err


def next_sort_order(model):
    """Return ``max(sort_order) + 1`` for *model* (1 for an empty table)."""
    current = db.session.query(db.func.max(model.sort_order)).scalar()
    return (current or 0) + 1
