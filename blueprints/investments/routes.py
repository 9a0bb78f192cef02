from flask import render_template, request, redirect, url_for, flash
from . import investments_bp
from .forms import AccountForm, SnapshotForm, ReturnForm
from extensions import limiter
from services.account_service import AccountService
from services.people_service import PeopleService
from utils.errors import ValidationError, DataAccessError
from utils.forms import flash_form_errors, owner_choices
from datetime import date


def _account_form(people, **kwargs):
    form = AccountForm(**kwargs)
    form.owner_id.choices = owner_choices(people)
    return form


@investments_bp.route('/investments')
def index():
    """Accounts table with expandable balance / return history"""
    accounts = AccountService.get_accounts()
    people = PeopleService.get_people()
    expanded_id = request.args.get('expand', type=int)

    return render_template('investments/index.html',
                         accounts=accounts,
                         people=people,
                         expanded_id=expanded_id,
                         total_balance=AccountService.get_total_balance(accounts),
                         account_form=_account_form(people),
                         snapshot_form=SnapshotForm(formdata=None, date=date.today()),
                         return_form=ReturnForm(formdata=None, year=date.today().year - 1))


@investments_bp.route('/investments/accounts/add', methods=['POST'])
def add_account():
    """Add a new account, optionally with an opening balance"""
    form = _account_form(PeopleService.get_people())

    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for('investments.index'))

    try:
        account = AccountService.create_account(
            name=form.name.data,
            account_type=form.account_type.data,
            owner_id=form.owner_id.data,
            initial_balance=form.initial_balance.data,
            initial_date=form.initial_date.data,
        )
        flash(f'Account added: {account.name}', 'success')
    except (ValidationError, DataAccessError) as e:
        flash(f'Error adding account: {e}', 'danger')

    return redirect(url_for('investments.index'))


@investments_bp.route('/investments/accounts/<int:id>/edit', methods=['GET', 'POST'])
def edit_account(id):
    """Edit an account's name, type and owner"""
    account = AccountService.get_account(id)
    form = _account_form(PeopleService.get_people(), obj=account)

    if request.method == 'POST':
        if form.validate_on_submit():
            try:
                AccountService.update_account(id, form.name.data, form.account_type.data, form.owner_id.data)
                flash('Account updated successfully!', 'success')
                return redirect(url_for('investments.index'))
            except (ValidationError, DataAccessError) as e:
                flash(f'Error updating account: {e}', 'danger')
        else:
            flash_form_errors(form)

    return render_template('investments/edit_account.html', account=account, form=form)


@investments_bp.route('/investments/accounts/<int:id>/delete', methods=['POST'])
def delete_account(id):
    """Delete an account and its history"""
    try:
        account = AccountService.delete_account(id)
        flash(f'Account deleted: {account.name}', 'success')
    except DataAccessError as e:
        flash(f'Error deleting account: {e}', 'danger')

    return redirect(url_for('investments.index'))


@investments_bp.route('/investments/accounts/<int:id>/snapshots/add', methods=['POST'])
def add_snapshot(id):
    """Add a dated balance to an account"""
    form = SnapshotForm()

    if form.validate_on_submit():
        try:
            snapshot = AccountService.create_snapshot(id, form.date.data, form.balance.data, form.note.data)
            flash(f'Balance recorded: ${snapshot.balance:,.2f} on {snapshot.date}', 'success')
        except (ValidationError, DataAccessError) as e:
            flash(f'Error adding snapshot: {e}', 'danger')
    else:
        flash_form_errors(form)

    return redirect(url_for('investments.index', expand=id))


@investments_bp.route('/investments/snapshots/<int:id>/delete', methods=['POST'])
def delete_snapshot(id):
    """Delete a balance snapshot"""
    try:
        snapshot = AccountService.delete_snapshot(id)
        flash('Snapshot deleted.', 'success')
        return redirect(url_for('investments.index', expand=snapshot.account_id))
    except DataAccessError as e:
        flash(f'Error deleting snapshot: {e}', 'danger')

    return redirect(url_for('investments.index'))


@investments_bp.route('/investments/accounts/<int:id>/returns/add', methods=['POST'])
def add_return(id):
    """Record an account's return for a year"""
    form = ReturnForm()

    if form.validate_on_submit():
        try:
            entry = AccountService.create_return(id, form.year.data, form.return_percent.data)
            flash(f'Return recorded for {entry.year}: {entry.return_percent:+.1f}%', 'success')
        except (ValidationError, DataAccessError) as e:
            flash(f'Error adding return: {e}', 'danger')
    else:
        flash_form_errors(form)

    return redirect(url_for('investments.index', expand=id))


@investments_bp.route('/investments/returns/<int:id>/delete', methods=['POST'])
def delete_return(id):
    """Delete a return entry"""
    try:
        entry = AccountService.delete_return(id)
        flash('Return deleted.', 'success')
        return redirect(url_for('investments.index', expand=entry.account_id))
    except DataAccessError as e:
        flash(f'Error deleting return: {e}', 'danger')

    return redirect(url_for('investments.index'))


@investments_bp.route('/investments/update-balances', methods=['GET', 'POST'])
@limiter.limit('30 per minute', methods=['POST'])
def update_balances():
    """Monthly bulk balance update: one shared date, one balance per account"""
    accounts = AccountService.get_accounts()

    if request.method == 'POST':
        snapshot_date = request.form.get('date') or date.today().isoformat()

        # Accounts left blank are skipped
        entries = []
        for account in accounts:
            raw = request.form.get(f'balance_{account.id}', '').strip()
            if raw:
                entries.append({'account_id': account.id, 'balance': raw.replace(',', '')})

        if not entries:
            flash('Enter at least one balance.', 'warning')
            return redirect(url_for('investments.update_balances'))

        try:
            snapshots = AccountService.create_bulk_snapshots(snapshot_date, entries)
            flash(f'Updated {len(snapshots)} balance(s) for {snapshot_date}.', 'success')
            return redirect(url_for('investments.index'))
        except (ValidationError, DataAccessError) as e:
            flash(f'Error updating balances: {e}', 'danger')

    return render_template('investments/update_balances.html',
                         accounts=accounts,
                         today=date.today().isoformat())
