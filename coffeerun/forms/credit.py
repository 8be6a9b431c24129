"""Apply-for-credit form."""

from decimal import Decimal
from flask_wtf import FlaskForm
from wtforms import StringField, DecimalField, BooleanField
from wtforms.validators import (DataRequired, InputRequired, Email, EqualTo,
                                Length, Regexp, ValidationError)

REQUIRED = 'This field is required.'


def strip(value):
    return value.strip() if isinstance(value, str) else value


class CreditApplicationForm(FlaskForm):
    """Every rule a credit submission must pass before it is stored."""
    email = StringField('Email', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
        Email(message='Please enter a valid email address'),
    ])
    re_enter_email = StringField('Re-Enter Email', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
        EqualTo('email', message='must match the email address'),
    ])
    first_name = StringField('First Name', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
        Length(min=2, message='is too short (minimum is 2 characters)'),
    ])
    last_name = StringField('Last Name', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
        Length(min=2, message='is too short (minimum is 2 characters)'),
    ])
    city = StringField('City', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
    ])
    state = StringField('State', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
        Length(min=2, max=2, message='must be exactly 2 characters'),
    ])
    zip = StringField('ZIP Code', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
        Regexp(r'^\d{5}(-\d{4})?$', message='must be 5 digits or ZIP+4'),
    ])
    gross_income = DecimalField('Gross Income', places=2, validators=[
        InputRequired(message=REQUIRED),
    ])
    ssn_last_four = StringField('Last 4 digits of SSN', filters=[strip], validators=[
        DataRequired(message=REQUIRED),
        Regexp(r'^\d{4}$', message='must be exactly 4 digits'),
    ])
    apply_for_credit = BooleanField('Apply for Credit', validators=[
        DataRequired(message='must be checked to proceed'),
    ])

    def validate_gross_income(self, field):
        if field.data is not None and field.data <= Decimal('0'):
            raise ValidationError('must be greater than 0')

    def populate_application(self, application):
        """Copy submitted values onto a CreditApplication."""
        for name in ('email', 're_enter_email', 'first_name', 'last_name', 'city',
                     'zip', 'gross_income', 'ssn_last_four', 'apply_for_credit'):
            setattr(application, name, getattr(self, name).data)
        application.state = self.state.data.upper()
        return application
