from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField, SubmitField
from wtforms.validators import DataRequired, Length, NumberRange, Optional


class PersonForm(FlaskForm):
    """Household member with the inputs used by the pension estimates"""
    name = StringField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=100)
    ])
    birth_year = IntegerField('Birth year', validators=[Optional(), NumberRange(min=1900)])
    pension_claim_age = IntegerField('Pension claim age', validators=[
        Optional(),
        NumberRange(min=60, max=75, message='Claim age must be between 60 and 75')
    ])
    oas_residence_years = IntegerField('Years in Canada after 18', validators=[
        Optional(),
        NumberRange(min=0, max=60)
    ])
    submit = SubmitField('Save')
