"""Product model."""

import json
from decimal import Decimal
from sqlalchemy import func
from coffeerun.extensions import db
from coffeerun.utils.dates import utcnow

SIZES = ('Small', 'Medium', 'Large')


class Product(db.Model):
    """Menu item sold in one or more sizes."""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), unique=True, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    available_sizes = db.Column(db.Text, nullable=False)  # JSON list of SIZES
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    order_items = db.relationship('OrderItem', backref='product', lazy='dynamic')

    @property
    def available_sizes_list(self):
        """Deserialize the stored size list."""
        return json.loads(self.available_sizes or '[]')

    @available_sizes_list.setter
    def available_sizes_list(self, sizes):
        self.available_sizes = json.dumps([s for s in SIZES if s in sizes])

    @property
    def formatted_price(self):
        return f'${Decimal(self.price):.2f}'

    @property
    def total_orders_count(self):
        """Total quantity ordered across all orders."""
        from .order import OrderItem
        return db.session.query(func.sum(OrderItem.quantity)).filter(
            OrderItem.product_id == self.id
        ).scalar() or 0

    @property
    def total_revenue(self):
        from .order import OrderItem
        return db.session.query(func.sum(OrderItem.subtotal)).filter(
            OrderItem.product_id == self.id
        ).scalar() or Decimal('0.00')

    def offers_size(self, size):
        return size in self.available_sizes_list

    def validate(self):
        """Return a dict of field -> error messages; empty when valid."""
        if self.active is None:
            self.active = True

        errors = {}
        if not (self.name or '').strip():
            errors.setdefault('name', []).append("can't be blank")
        if self.price is None:
            errors.setdefault('price', []).append("can't be blank")
        elif Decimal(self.price) <= 0:
            errors.setdefault('price', []).append('must be greater than 0')

        sizes = self.available_sizes_list
        if not sizes:
            errors.setdefault('available_sizes', []).append("can't be blank")
        elif any(size not in SIZES for size in sizes):
            errors.setdefault('available_sizes', []).append('is not included in the list')
        return errors

    @classmethod
    def active_products(cls):
        return cls.query.filter_by(active=True).order_by(cls.name)

    @classmethod
    def by_popularity(cls):
        """Products ordered by how many order lines reference them."""
        from .order import OrderItem
        return db.session.query(
            cls, func.sum(OrderItem.quantity).label('quantity')
        ).join(OrderItem).group_by(cls.id).order_by(
            func.sum(OrderItem.quantity).desc()
        )

    def __repr__(self):
        return f'<Product {self.name}>'
