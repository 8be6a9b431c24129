"""Order routes."""

from flask import Blueprint, render_template, redirect, url_for, flash
from flask_login import login_required, current_user
from coffeerun.exceptions import ModelValidationError
from coffeerun.extensions import db
from coffeerun.forms.order import CheckoutForm
from coffeerun.models import Order
from coffeerun.services import orders as order_service
from coffeerun.services.cart import Cart, CartError
from coffeerun.services.policies import enforce

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('')
@login_required
def index():
    """Order history."""
    orders = Order.recent().filter(Order.user_id == current_user.id).all()
    return render_template('orders/index.html', orders=orders)


@orders_bp.route('/<int:order_id>')
@login_required
def show(order_id):
    """Order detail page."""
    order = db.get_or_404(Order, order_id)
    enforce(current_user, order, 'show')
    return render_template('orders/show.html', order=order)


@orders_bp.route('', methods=['POST'])
@login_required
def create():
    """Place an order from the session cart."""
    enforce(current_user, Order, 'create')
    form = CheckoutForm()
    if not form.validate_on_submit():
        for field, messages in form.errors.items():
            for message in messages:
                flash(f'{form[field].label.text} {message}', 'danger')
        return redirect(url_for('products.index'))

    cart = Cart.from_session()
    if not len(cart):
        flash('Your cart is empty.', 'warning')
        return redirect(url_for('products.index'))

    try:
        order = order_service.place_order(
            current_user,
            cart,
            notes=form.notes.data or None,
            donation=form.titan_fund_donation.data,
        )
    except CartError as e:
        flash(f'{e}. Please update your cart.', 'warning')
        return redirect(url_for('products.index'))
    except ModelValidationError:
        flash('There was an error creating your order.', 'danger')
        return redirect(url_for('products.index'))

    Cart.discard()
    flash('Order was successfully created.', 'success')
    return redirect(url_for('orders.show', order_id=order.id))


@orders_bp.route('/<int:order_id>/cancel', methods=['POST'])
@login_required
def cancel(order_id):
    """Cancel an order while it is still pending or confirmed."""
    order = db.get_or_404(Order, order_id)
    enforce(current_user, order, 'cancel')
    order_service.cancel_order(order)
    flash('Order cancelled successfully.', 'success')
    return redirect(url_for('orders.show', order_id=order.id))
