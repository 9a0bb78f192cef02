"""
Flask-Admin data browser for the Retirement Planner
Accessible at /admin when ADMIN_ENABLED is set (on by default outside production)
"""
from flask import current_app, redirect, url_for, flash
from flask_admin import Admin, AdminIndexView, expose
from flask_admin.contrib.sqla import ModelView
from flask_admin.theme import Bootstrap4Theme
from wtforms.validators import ValidationError as FormValidationError

from utils.errors import ValidationError
from utils.validation import validate_allocation


def _admin_enabled():
    return bool(current_app.config.get('ADMIN_ENABLED'))


# ---------------------------------------------------------------------------
# Base views
# ---------------------------------------------------------------------------

class PlannerAdminIndexView(AdminIndexView):
    """Admin home page - only served while ADMIN_ENABLED is on."""

    @expose('/')
    def index(self):
        if not _admin_enabled():
            flash('The admin panel is disabled.', 'danger')
            return redirect(url_for('dashboard.index'))
        return super().index()

    def is_accessible(self):
        return _admin_enabled()

    def inaccessible_callback(self, name, **kwargs):
        return redirect(url_for('dashboard.index'))


class PlannerModelView(ModelView):
    """Full CRUD model view."""

    can_export = True
    page_size = 50
    column_display_pk = True

    def __init__(self, model, session, **kwargs):
        # Prefix endpoints with 'admin_' so they never clash with app blueprints
        if 'endpoint' not in kwargs:
            kwargs['endpoint'] = f'admin_{model.__name__.lower()}'
        super().__init__(model, session, **kwargs)

    def is_accessible(self):
        return _admin_enabled()

    def inaccessible_callback(self, name, **kwargs):
        return redirect(url_for('dashboard.index'))


class ReadOnlyModelView(PlannerModelView):
    """Read-only view for history tables."""

    can_create = False
    can_edit = False
    can_delete = False


class AllocationCheckedView(PlannerModelView):
    """Rejects edits whose equity / fixed income / cash do not sum to 100."""

    def on_model_change(self, form, model, is_created):
        if model.equity_pct is None and model.fixed_income_pct is None and model.cash_pct is None:
            return
        try:
            validate_allocation(model.equity_pct, model.fixed_income_pct, model.cash_pct)
        except ValidationError as e:
            raise FormValidationError(str(e))


# ---------------------------------------------------------------------------
# Customised model views
# ---------------------------------------------------------------------------

class PersonAdminView(PlannerModelView):
    column_searchable_list = ['name']
    column_default_sort = 'sort_order'
    form_excluded_columns = ['accounts', 'income_sources']


class AccountAdminView(AllocationCheckedView):
    column_searchable_list = ['name']
    column_filters = ['account_type', 'owner_id']
    form_excluded_columns = ['snapshots', 'returns']


class SnapshotAdminView(ReadOnlyModelView):
    column_filters = ['account_id', 'date']
    column_default_sort = ('date', True)


class WaypointAdminView(AllocationCheckedView):
    column_default_sort = 'year'


class IncomeSourceAdminView(PlannerModelView):
    column_searchable_list = ['name']
    column_filters = ['frequency', 'owner_id']


# ---------------------------------------------------------------------------
# Admin factory
# ---------------------------------------------------------------------------

def init_admin(app, db):
    """Create the Flask-Admin instance and register all model views."""

    admin = Admin(
        app,
        name='Retirement Planner Admin',
        theme=Bootstrap4Theme(),
        index_view=PlannerAdminIndexView(),
        url='/admin',
    )

    from models.people import Person
    from models.accounts import Account
    from models.balances import BalanceSnapshot
    from models.returns import ReturnEntry
    from models.glide_path import GlidePathWaypoint
    from models.income import IncomeSource
    from models.property import Property

    # Household
    admin.add_view(PersonAdminView(Person, db, name='People', category='Household'))
    admin.add_view(IncomeSourceAdminView(IncomeSource, db, name='Income Sources', category='Household'))
    admin.add_view(PlannerModelView(Property, db, name='Properties', category='Household'))

    # Investments
    admin.add_view(AccountAdminView(Account, db, name='Accounts', category='Investments'))
    admin.add_view(SnapshotAdminView(BalanceSnapshot, db, name='Balance Snapshots', category='Investments'))
    admin.add_view(ReadOnlyModelView(ReturnEntry, db, name='Returns', category='Investments'))
    admin.add_view(WaypointAdminView(GlidePathWaypoint, db, name='Glide Path', category='Investments'))

    return admin
