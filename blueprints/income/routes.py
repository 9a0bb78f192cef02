from flask import render_template, request, redirect, url_for, flash
from . import income_bp
from .forms import IncomeSourceForm
from models.income import IncomeSource
from services.income_service import IncomeService
from services.pension_service import PensionService
from services.people_service import PeopleService
from utils.db_helpers import get_or_raise
from utils.errors import ValidationError, DataAccessError
from utils.forms import flash_form_errors, owner_choices


def _source_form(**kwargs):
    form = IncomeSourceForm(**kwargs)
    form.owner_id.choices = owner_choices(PeopleService.get_people())
    return form


@income_bp.route('/income')
def index():
    """Income overview: sources, totals and government pension estimates"""
    sources = IncomeService.get_income_sources()
    projections = PensionService.get_pension_projections()

    return render_template('income/index.html',
                         sources=sources,
                         totals_by_person=IncomeService.get_totals_by_person(sources),
                         total_annual_income=IncomeService.get_total_annual_income(sources),
                         projections=projections,
                         has_any_birth_year=any(p['has_birth_year'] for p in projections))


@income_bp.route('/income/sources')
def sources():
    """Manage income sources"""
    return render_template('income/sources.html',
                         sources=IncomeService.get_income_sources(),
                         form=_source_form())


@income_bp.route('/income/sources/add', methods=['POST'])
def add_source():
    """Add an income source"""
    form = _source_form()

    if form.validate_on_submit():
        try:
            source = IncomeService.create_income_source(
                form.name.data, form.owner_id.data, form.amount.data, form.frequency.data
            )
            flash(f'Income source added: {source.name}', 'success')
        except (ValidationError, DataAccessError) as e:
            flash(f'Error adding income source: {e}', 'danger')
    else:
        flash_form_errors(form)

    return redirect(url_for('income.sources'))


@income_bp.route('/income/sources/<int:id>/edit', methods=['GET', 'POST'])
def edit_source(id):
    """Edit an income source"""
    source = get_or_raise(IncomeSource, id)
    form = _source_form(obj=source)

    if request.method == 'POST':
        if form.validate_on_submit():
            try:
                IncomeService.update_income_source(
                    id, form.name.data, form.owner_id.data, form.amount.data, form.frequency.data
                )
                flash('Income source updated successfully!', 'success')
                return redirect(url_for('income.sources'))
            except (ValidationError, DataAccessError) as e:
                flash(f'Error updating income source: {e}', 'danger')
        else:
            flash_form_errors(form)

    return render_template('income/edit_source.html', source=source, form=form)


@income_bp.route('/income/sources/<int:id>/delete', methods=['POST'])
def delete_source(id):
    """Delete an income source"""
    try:
        source = IncomeService.delete_income_source(id)
        flash(f'Income source deleted: {source.name}', 'success')
    except DataAccessError as e:
        flash(f'Error deleting income source: {e}', 'danger')

    return redirect(url_for('income.sources'))
