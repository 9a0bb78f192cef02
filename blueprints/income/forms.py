from flask_wtf import FlaskForm
from wtforms import DecimalField, SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange

from models.income import IncomeFrequency


class IncomeSourceForm(FlaskForm):
    name = StringField('Source', validators=[
        DataRequired(message='Source name is required'),
        Length(max=100)
    ])
    owner_id = SelectField('Owner', coerce=int)
    amount = DecimalField('Amount', validators=[
        InputRequired(message='Amount is required'),
        NumberRange(min=0, message='Amount cannot be negative')
    ])
    frequency = SelectField('Frequency', choices=IncomeFrequency.choices(), default=IncomeFrequency.ANNUAL)
    submit = SubmitField('Save Source')
