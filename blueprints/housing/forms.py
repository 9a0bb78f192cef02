from flask_wtf import FlaskForm
from wtforms import DecimalField, StringField, SubmitField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional


class PropertyForm(FlaskForm):
    name = StringField('Name', validators=[
        DataRequired(message='Property name is required'),
        Length(max=255)
    ])
    estimated_value = DecimalField('Estimated value', validators=[
        InputRequired(message='Estimated value is required'),
        NumberRange(min=0)
    ])
    mortgage_balance = DecimalField('Mortgage balance', default=0, validators=[
        InputRequired(message='Mortgage balance is required'),
        NumberRange(min=0)
    ])
    mortgage_rate = DecimalField('Mortgage rate %', validators=[
        Optional(),
        NumberRange(min=0, max=30, message='Mortgage rate must be between 0 and 30')
    ])
    submit = SubmitField('Save Property')
