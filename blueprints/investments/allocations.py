from flask import render_template, redirect, url_for, flash
from . import investments_bp
from .forms import AllocationForm
from services.allocation_service import AllocationService
from utils.errors import ValidationError, DataAccessError
from utils.forms import flash_form_errors


@investments_bp.route('/investments/allocations')
def allocations():
    """Per-account target allocations and the balance-weighted portfolio mix"""
    accounts = AllocationService.get_allocations()

    return render_template('investments/allocations.html',
                         accounts=accounts,
                         aggregate=AllocationService.get_portfolio_allocation(accounts),
                         form=AllocationForm(formdata=None))


@investments_bp.route('/investments/allocations/<int:account_id>', methods=['POST'])
def set_allocation(account_id):
    """Save an account's allocation"""
    form = AllocationForm()

    if form.validate_on_submit():
        try:
            account = AllocationService.set_allocation(
                account_id,
                form.equity_pct.data,
                form.fixed_income_pct.data,
                form.cash_pct.data,
            )
            flash(f'Allocation saved for {account.name}', 'success')
        except (ValidationError, DataAccessError) as e:
            flash(f'Error saving allocation: {e}', 'danger')
    else:
        flash_form_errors(form)

    return redirect(url_for('investments.allocations'))
