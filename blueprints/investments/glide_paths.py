from flask import render_template, request, redirect, url_for, flash
from . import investments_bp
from .forms import WaypointForm, GenerateGlidePathForm
from services.glide_path_service import GlidePathService
from utils import dates
from utils.errors import ValidationError, DataAccessError
from utils.forms import flash_form_errors


def _preview(oldest, retirement_age):
    """Recommended waypoints for the oldest person, or ([], reason)."""
    if oldest is None:
        return [], 'Add a birth year in Settings to generate a recommended glide path.'
    try:
        return GlidePathService.generate_recommended_glide_path(oldest.birth_year, retirement_age), None
    except ValidationError as e:
        return [], str(e)


@investments_bp.route('/investments/glide-paths')
def glide_paths():
    """Stored waypoints, the interpolated path and the recommended-path generator"""
    year = dates.current_year()
    waypoints = GlidePathService.get_waypoints()
    oldest = GlidePathService.get_oldest_person(GlidePathService.get_people_with_birth_years())

    generate_form = GenerateGlidePathForm(request.args, meta={'csrf': False})
    preview, preview_error = [], None
    if 'retirement_age' in request.args:
        if generate_form.validate():
            preview, preview_error = _preview(oldest, generate_form.retirement_age.data)
        else:
            preview_error = '; '.join(generate_form.retirement_age.errors)

    return render_template('investments/glide_paths.html',
                         waypoints=waypoints,
                         path=GlidePathService.interpolate_glide_path(waypoints, year),
                         current_year=year,
                         oldest=oldest,
                         waypoint_form=WaypointForm(formdata=None, year=year),
                         generate_form=generate_form,
                         preview=preview,
                         preview_error=preview_error)


@investments_bp.route('/investments/glide-paths/waypoints', methods=['POST'])
def save_waypoint():
    """Create or replace the waypoint for a year"""
    form = WaypointForm()

    if form.validate_on_submit():
        try:
            waypoint = GlidePathService.upsert_waypoint(
                form.year.data,
                form.equity_pct.data,
                form.fixed_income_pct.data,
                form.cash_pct.data,
            )
            flash(f'Waypoint saved for {waypoint.year}', 'success')
        except (ValidationError, DataAccessError) as e:
            flash(f'Error saving waypoint: {e}', 'danger')
    else:
        flash_form_errors(form)

    return redirect(url_for('investments.glide_paths'))


@investments_bp.route('/investments/glide-paths/waypoints/<int:id>/delete', methods=['POST'])
def delete_waypoint(id):
    """Delete a waypoint"""
    try:
        waypoint = GlidePathService.delete_waypoint(id)
        flash(f'Waypoint for {waypoint.year} deleted.', 'success')
    except DataAccessError as e:
        flash(f'Error deleting waypoint: {e}', 'danger')

    return redirect(url_for('investments.glide_paths'))


@investments_bp.route('/investments/glide-paths/generate', methods=['POST'])
def generate_glide_path():
    """Save the recommended path for the oldest person, replacing those years"""
    form = GenerateGlidePathForm()

    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for('investments.glide_paths'))

    oldest = GlidePathService.get_oldest_person(GlidePathService.get_people_with_birth_years())
    waypoints, error = _preview(oldest, form.retirement_age.data)
    if error:
        flash(error, 'danger')
        return redirect(url_for('investments.glide_paths'))

    try:
        count = GlidePathService.batch_create_waypoints(waypoints)
        flash(f'Generated {count} waypoints for {oldest.name}.', 'success')
    except (ValidationError, DataAccessError) as e:
        flash(f'Error generating glide path: {e}', 'danger')

    return redirect(url_for('investments.glide_paths'))
