from flask import render_template, request, redirect, url_for, flash
from . import settings_bp
from .forms import PersonForm
from models.people import Person
from services.people_service import PeopleService
from utils.db_helpers import get_or_raise
from utils.errors import ValidationError, DataAccessError
from utils.forms import flash_form_errors


@settings_bp.route('/settings')
def index():
    """Household members"""
    return render_template('settings/index.html',
                         people=PeopleService.get_people(),
                         form=PersonForm(formdata=None))


@settings_bp.route('/settings/people/add', methods=['POST'])
def add_person():
    """Add a household member"""
    form = PersonForm()

    if form.validate_on_submit():
        try:
            person = PeopleService.create_person(
                form.name.data,
                form.birth_year.data,
                form.pension_claim_age.data,
                form.oas_residence_years.data,
            )
            flash(f'Added {person.name}', 'success')
        except (ValidationError, DataAccessError) as e:
            flash(f'Error adding person: {e}', 'danger')
    else:
        flash_form_errors(form)

    return redirect(url_for('settings.index'))


@settings_bp.route('/settings/people/<int:id>/edit', methods=['GET', 'POST'])
def edit_person(id):
    """Edit a household member"""
    person = get_or_raise(Person, id)
    form = PersonForm(obj=person)

    if request.method == 'POST':
        if form.validate_on_submit():
            try:
                PeopleService.update_person(
                    id,
                    form.name.data,
                    form.birth_year.data,
                    form.pension_claim_age.data,
                    form.oas_residence_years.data,
                )
                flash('Person updated successfully!', 'success')
                return redirect(url_for('settings.index'))
            except (ValidationError, DataAccessError) as e:
                flash(f'Error updating person: {e}', 'danger')
        else:
            flash_form_errors(form)

    return render_template('settings/edit_person.html', person=person, form=form)


@settings_bp.route('/settings/people/<int:id>/delete', methods=['POST'])
def delete_person(id):
    """Delete a household member and everything they own"""
    try:
        person = PeopleService.delete_person(id)
        flash(f'Deleted {person.name} and their accounts and income sources.', 'success')
    except DataAccessError as e:
        flash(f'Error deleting person: {e}', 'danger')

    return redirect(url_for('settings.index'))
