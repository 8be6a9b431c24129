"""Order write path."""

from flask import abort, current_app
from coffeerun.exceptions import ModelValidationError
from coffeerun.extensions import db
from coffeerun.models import Order, OrderItem, Product
from .cart import validate_line
from .mailers import notify_order_placed


def prepare_order(order):
    """Recompute derived fields and validate; raise ModelValidationError."""
    if order.status is None:
        order.status = 'pending'
    for item in order.items:
        item.assign_unit_price()
        item.calculate_subtotal()
    order.calculate_total()

    errors = order.validate()
    if errors:
        raise ModelValidationError(errors)
    return order


def save_order(order):
    """Validate and commit ``order`` with its items in one transaction."""
    try:
        prepare_order(order)
        db.session.add(order)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return order


def place_order(user, cart, notes=None, donation=None):
    """Build an order from the cart lines and persist it atomically.

    Unknown product ids abort with 404 before anything is written. Lines the
    cart can no longer price (inactive product, size withdrawn) raise
    CartError, also before anything is written.
    """
    products = {}
    for line in cart:
        product = db.session.get(Product, line.product_id)
        if product is None:
            abort(404)
        validate_line(product, line.size)
        products[line.product_id] = product

    order = Order(user_id=user.id, notes=notes, titan_fund_donation=donation, status='pending')
    for line in cart:
        order.items.append(OrderItem(product=products[line.product_id],
                                     size=line.size, quantity=line.quantity))

    save_order(order)
    current_app.logger.info('Order placed', extra={
        'order_id': order.id,
        'user_id': user.id,
        'items': len(order.items),
        'total_amount': str(order.total_amount),
    })
    notify_order_placed(order)
    return order


def change_status(order, status):
    previous = order.status
    order.status = status
    save_order(order)
    current_app.logger.info('Order status changed', extra={
        'order_id': order.id,
        'from_status': previous,
        'to_status': status,
    })
    return order


def cancel_order(order):
    return change_status(order, 'cancelled')
