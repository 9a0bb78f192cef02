from flask import flash


def flash_form_errors(form):
    """Flash the first error of every invalid field as a 'danger' message."""
    for field_name, errors in form.errors.items():
        field = getattr(form, field_name, None)
        label = field.label.text if field is not None else field_name
        flash(f'{label}: {errors[0]}', 'danger')


def owner_choices(people):
    return [(p.id, p.name) for p in people]
