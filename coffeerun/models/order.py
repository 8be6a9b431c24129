"""Order models."""

from decimal import Decimal, ROUND_HALF_UP
from coffeerun.extensions import db
from coffeerun.utils.dates import utcnow
from .product import SIZES

CENTS = Decimal('0.01')

ORDER_STATUSES = ('pending', 'confirmed', 'preparing', 'ready', 'completed', 'cancelled')
CANCELLABLE_STATUSES = ('pending', 'confirmed')


def to_money(value):
    """Quantize a numeric value to cents."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


class Order(db.Model):
    """Order model."""
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # Pricing
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    titan_fund_donation = db.Column(db.Numeric(10, 2))

    status = db.Column(db.String(20), nullable=False, default='pending')
    notes = db.Column(db.Text)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    items = db.relationship('OrderItem', backref='order', cascade='all, delete-orphan',
                            order_by='OrderItem.id')

    @property
    def order_number(self):
        return f'TCR-{str(self.id or 0).rjust(6, "0")}'

    @property
    def items_count(self):
        return sum(item.quantity or 0 for item in self.items)

    @property
    def subtotal(self):
        """Sum of line subtotals."""
        return sum((Decimal(item.subtotal) for item in self.items if item.subtotal is not None),
                   Decimal('0.00'))

    @property
    def donation_amount(self):
        if self.titan_fund_donation is None:
            return Decimal('0.00')
        return Decimal(self.titan_fund_donation)

    def can_be_cancelled(self):
        """Check if order can be cancelled."""
        return (self.status or 'pending') in CANCELLABLE_STATUSES

    def calculate_total(self):
        """Recompute total_amount from the line items and donation."""
        self.total_amount = to_money(self.subtotal + self.donation_amount)
        return self.total_amount

    def validate(self):
        """Return a dict of field -> error messages for the order and its items."""
        errors = {}
        if self.user_id is None and self.user is None:
            errors.setdefault('user', []).append('must exist')
        if self.total_amount is None:
            errors.setdefault('total_amount', []).append("can't be blank")
        elif Decimal(self.total_amount) <= 0:
            errors.setdefault('total_amount', []).append('must be greater than 0')
        if self.status not in ORDER_STATUSES:
            errors.setdefault('status', []).append('is not included in the list')
        if self.titan_fund_donation is not None and Decimal(self.titan_fund_donation) < 0:
            errors.setdefault('titan_fund_donation', []).append(
                'must be greater than or equal to 0')

        for index, item in enumerate(self.items):
            for field, messages in item.validate().items():
                errors.setdefault(f'items[{index}].{field}', []).extend(messages)
        return errors

    @classmethod
    def recent(cls):
        return cls.query.order_by(cls.created_at.desc(), cls.id.desc())

    @classmethod
    def by_status(cls, status):
        return cls.query.filter_by(status=status)

    @classmethod
    def with_donation(cls):
        return cls.query.filter(cls.titan_fund_donation.isnot(None),
                                cls.titan_fund_donation != 0)

    def __repr__(self):
        return f'<Order {self.order_number}>'


class OrderItem(db.Model):
    """Order item model."""
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    size = db.Column(db.String(10), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    subtotal = db.Column(db.Numeric(10, 2), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def assign_unit_price(self):
        """Snapshot the product price when no unit price was given."""
        if self.unit_price is None and self.product is not None:
            self.unit_price = self.product.price
        return self.unit_price

    def calculate_subtotal(self):
        if self.quantity is None or self.unit_price is None:
            self.subtotal = None
        else:
            self.subtotal = to_money(self.quantity * Decimal(self.unit_price))
        return self.subtotal

    @property
    def total_price(self):
        return to_money(self.quantity * Decimal(self.unit_price))

    @property
    def formatted_unit_price(self):
        return f'${Decimal(self.unit_price):.2f}'

    @property
    def formatted_subtotal(self):
        return f'${Decimal(self.subtotal):.2f}'

    def validate(self):
        errors = {}
        if self.product_id is None and self.product is None:
            errors.setdefault('product', []).append('must exist')
        if self.size not in SIZES:
            errors.setdefault('size', []).append('is not included in the list')

        if self.quantity is None:
            errors.setdefault('quantity', []).append("can't be blank")
        elif isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            errors.setdefault('quantity', []).append('must be an integer')
        elif not 0 < self.quantity < 100:
            errors.setdefault('quantity', []).append('must be between 1 and 99')

        for field in ('unit_price', 'subtotal'):
            value = getattr(self, field)
            if value is None:
                errors.setdefault(field, []).append("can't be blank")
            elif Decimal(value) <= 0:
                errors.setdefault(field, []).append('must be greater than 0')
        return errors

    def __repr__(self):
        return f'<OrderItem {self.product_id} {self.size} x {self.quantity}>'
