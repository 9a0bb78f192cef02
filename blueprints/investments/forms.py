"""
Investment forms
CSRF-protected forms for accounts, balances, returns, allocations and the glide path
"""
from flask import current_app
from flask_wtf import FlaskForm
from wtforms import DateField, DecimalField, IntegerField, SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional, ValidationError

from models.accounts import AccountType


class AccountForm(FlaskForm):
    """Add / edit an account; initial balance fields are only used on add."""
    name = StringField('Name', validators=[
        DataRequired(message='Account name is required'),
        Length(max=100)
    ])
    account_type = SelectField('Type', choices=AccountType.choices(), default=AccountType.TFSA)
    owner_id = SelectField('Owner', coerce=int)
    initial_balance = DecimalField('Initial balance', validators=[Optional()])
    initial_date = DateField('As of', validators=[Optional()])
    submit = SubmitField('Save Account')


class SnapshotForm(FlaskForm):
    date = DateField('Date', validators=[DataRequired(message='Date is required')])
    balance = DecimalField('Balance', validators=[InputRequired(message='Balance is required')])
    note = StringField('Note', validators=[Optional(), Length(max=255)])
    submit = SubmitField('Add Snapshot')


class ReturnForm(FlaskForm):
    year = IntegerField('Year', validators=[
        InputRequired(message='Year is required'),
        NumberRange(min=1900, max=2200)
    ])
    return_percent = DecimalField('Return %', validators=[InputRequired(message='Return is required')])
    submit = SubmitField('Add Return')


class AllocationForm(FlaskForm):
    """Equity / fixed income / cash split; the sum is checked by the service."""
    equity_pct = DecimalField('Equity %', validators=[InputRequired(), NumberRange(min=0, max=100)])
    fixed_income_pct = DecimalField('Fixed income %', validators=[InputRequired(), NumberRange(min=0, max=100)])
    cash_pct = DecimalField('Cash %', validators=[InputRequired(), NumberRange(min=0, max=100)])
    submit = SubmitField('Save Allocation')


class WaypointForm(AllocationForm):
    year = IntegerField('Year', validators=[
        InputRequired(message='Year is required'),
        NumberRange(min=1900, max=2200)
    ])
    submit = SubmitField('Save Waypoint')


class GenerateGlidePathForm(FlaskForm):
    retirement_age = IntegerField('Retirement age', validators=[InputRequired()], default=65)
    submit = SubmitField('Generate')

    def validate_retirement_age(self, field):
        low = current_app.config.get('RETIREMENT_AGE_MIN', 55)
        high = current_app.config.get('RETIREMENT_AGE_MAX', 75)
        if field.data is not None and not low <= field.data <= high:
            raise ValidationError(f'Retirement age must be between {low} and {high}')
