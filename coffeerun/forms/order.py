"""Checkout and admin order forms."""

from flask_wtf import FlaskForm
from wtforms import TextAreaField, DecimalField, SelectField
from wtforms.validators import Optional, NumberRange, Length, DataRequired
from coffeerun.models import ORDER_STATUSES


class CheckoutForm(FlaskForm):
    """Notes and optional Titan Fund donation submitted with the cart."""
    notes = TextAreaField('Notes', validators=[Optional(), Length(max=1000)])
    titan_fund_donation = DecimalField('Titan Fund Donation', places=2, validators=[
        Optional(),
        NumberRange(min=0, message='must be greater than or equal to 0')
    ])


class OrderStatusForm(FlaskForm):
    status = SelectField('Status', validators=[DataRequired()],
                         choices=[(s, s.title()) for s in ORDER_STATUSES])
