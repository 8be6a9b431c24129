"""Session-held shopping cart."""

from dataclasses import dataclass, asdict
from decimal import Decimal
from flask import session
from coffeerun.extensions import db
from coffeerun.models import Product, SIZES
from coffeerun.models.order import to_money

SESSION_KEY = 'cart'
MAX_QUANTITY = 99


class CartError(ValueError):
    """Rejected cart mutation."""


@dataclass
class CartLine:
    product_id: int
    size: str
    quantity: int

    @classmethod
    def from_dict(cls, data):
        return cls(product_id=int(data['product_id']),
                   size=str(data['size']),
                   quantity=int(data['quantity']))


def _check_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise CartError('Quantity must be a whole number')
    if quantity > MAX_QUANTITY:
        raise CartError(f'Quantity cannot exceed {MAX_QUANTITY}')


class Cart:
    """Lines keyed by (product_id, size), serialized into the Flask session."""

    def __init__(self, lines=None):
        self.lines = list(lines or [])

    @classmethod
    def from_session(cls):
        raw = session.get(SESSION_KEY) or []
        lines = []
        for entry in raw:
            try:
                lines.append(CartLine.from_dict(entry))
            except (KeyError, TypeError, ValueError):
                continue  # drop malformed entries
        return cls(lines)

    def save(self):
        session[SESSION_KEY] = [asdict(line) for line in self.lines]
        session.modified = True

    @staticmethod
    def discard():
        session.pop(SESSION_KEY, None)

    def find(self, product_id, size):
        for line in self.lines:
            if line.product_id == product_id and line.size == size:
                return line
        return None

    def add(self, product_id, size, quantity=1):
        _check_quantity(quantity)
        if quantity < 1:
            raise CartError('Quantity must be at least 1')
        line = self.find(product_id, size)
        if line is None:
            line = CartLine(product_id, size, quantity)
            self.lines.append(line)
        else:
            _check_quantity(line.quantity + quantity)
            line.quantity += quantity
        return line

    def update(self, product_id, size, quantity):
        """Set a line's quantity; zero or less removes it."""
        _check_quantity(quantity)
        line = self.find(product_id, size)
        if line is None:
            raise CartError('Item not in cart')
        if quantity <= 0:
            self.lines.remove(line)
            return None
        line.quantity = quantity
        return line

    def remove(self, product_id, size=None):
        """Remove one size of a product, or every line for it when size is None."""
        before = len(self.lines)
        self.lines = [line for line in self.lines
                      if not (line.product_id == product_id and (size is None or line.size == size))]
        return before - len(self.lines)

    def clear(self):
        self.lines = []

    @property
    def total_items(self):
        return sum(line.quantity for line in self.lines)

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def snapshot(self):
        """Price the cart against current products.

        Lines whose product is gone or inactive are left out.
        """
        ids = {line.product_id for line in self.lines}
        products = {}
        if ids:
            products = {p.id: p for p in db.session.scalars(
                db.select(Product).where(Product.id.in_(ids), Product.active.is_(True))
            )}

        items = []
        total = Decimal('0.00')
        for line in self.lines:
            product = products.get(line.product_id)
            if product is None:
                continue
            unit_price = to_money(product.price)
            subtotal = to_money(unit_price * line.quantity)
            total += subtotal
            items.append({
                'product_id': product.id,
                'name': product.name,
                'size': line.size,
                'quantity': line.quantity,
                'unit_price': f'{unit_price:.2f}',
                'subtotal': f'{subtotal:.2f}',
            })

        return {
            'items': items,
            'total_items': sum(item['quantity'] for item in items),
            'total_amount': f'{total:.2f}',
        }


def validate_line(product, size):
    """Raise CartError unless ``product`` can be ordered in ``size``."""
    if product is None:
        raise CartError('Product not available')
    if not product.active:
        raise CartError(f'{product.name} is no longer available')
    if size not in SIZES or not product.offers_size(size):
        raise CartError(f'{product.name} is not available in size {size}')
