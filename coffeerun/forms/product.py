"""Admin product form."""

from decimal import Decimal
from flask_wtf import FlaskForm
from wtforms import StringField, DecimalField, BooleanField, SelectMultipleField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, ValidationError
from wtforms.widgets import ListWidget, CheckboxInput
from coffeerun.models import Product, SIZES


class ProductForm(FlaskForm):
    name = StringField('Name', validators=[
        DataRequired(message="Name can't be blank"),
        Length(max=150)
    ])
    price = DecimalField('Price', places=2, validators=[
        InputRequired(message="Price can't be blank"),
        NumberRange(min=Decimal('0.01'), message='Price must be greater than 0')
    ])
    available_sizes = SelectMultipleField(
        'Available Sizes',
        choices=[(size, size) for size in SIZES],
        option_widget=CheckboxInput(),
        widget=ListWidget(prefix_label=False),
        validators=[DataRequired(message='Select at least one size')]
    )
    active = BooleanField('Active', default=True)

    def __init__(self, *args, product=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._product = product

    @classmethod
    def for_product(cls, product):
        """Edit form pre-filled from an existing product."""
        return cls(product=product, data={
            'name': product.name,
            'price': product.price,
            'available_sizes': product.available_sizes_list,
            'active': product.active,
        })

    def validate_name(self, field):
        """Product names are unique."""
        existing = Product.query.filter(Product.name == field.data.strip()).first()
        if existing and (self._product is None or existing.id != self._product.id):
            raise ValidationError('Name has already been taken')

    def populate_product(self, product):
        product.name = self.name.data.strip()
        product.price = self.price.data
        product.available_sizes_list = self.available_sizes.data
        product.active = self.active.data
        return product
