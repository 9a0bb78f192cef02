from flask import render_template, request, redirect, url_for, flash
from . import housing_bp
from .forms import PropertyForm
from models.property import Property
from services.property_service import PropertyService
from utils.db_helpers import get_or_raise
from utils.errors import ValidationError, DataAccessError
from utils.forms import flash_form_errors


@housing_bp.route('/housing')
def index():
    """Properties with value, mortgage and equity totals"""
    properties = PropertyService.get_properties()

    return render_template('housing/index.html',
                         properties=properties,
                         totals=PropertyService.get_housing_totals(properties),
                         form=PropertyForm(formdata=None))


@housing_bp.route('/housing/add', methods=['POST'])
def add():
    """Add a property"""
    form = PropertyForm()

    if form.validate_on_submit():
        try:
            prop = PropertyService.create_property(
                form.name.data,
                form.estimated_value.data,
                form.mortgage_balance.data,
                form.mortgage_rate.data,
            )
            flash(f'Property added: {prop.name}', 'success')
        except (ValidationError, DataAccessError) as e:
            flash(f'Error adding property: {e}', 'danger')
    else:
        flash_form_errors(form)

    return redirect(url_for('housing.index'))


@housing_bp.route('/housing/<int:id>/edit', methods=['GET', 'POST'])
def edit(id):
    """Edit a property"""
    prop = get_or_raise(Property, id)
    form = PropertyForm(obj=prop)

    if request.method == 'POST':
        if form.validate_on_submit():
            try:
                PropertyService.update_property(
                    id,
                    form.name.data,
                    form.estimated_value.data,
                    form.mortgage_balance.data,
                    form.mortgage_rate.data,
                )
                flash('Property updated successfully!', 'success')
                return redirect(url_for('housing.index'))
            except (ValidationError, DataAccessError) as e:
                flash(f'Error updating property: {e}', 'danger')
        else:
            flash_form_errors(form)

    return render_template('housing/edit.html', property=prop, form=form)


@housing_bp.route('/housing/<int:id>/delete', methods=['POST'])
def delete(id):
    """Delete a property"""
    try:
        prop = PropertyService.delete_property(id)
        flash(f'Property deleted: {prop.name}', 'success')
    except DataAccessError as e:
        flash(f'Error deleting property: {e}', 'danger')

    return redirect(url_for('housing.index'))
