"""JSON API endpoints for AJAX operations."""

import re
from flask import Blueprint, jsonify, request
from flask_login import login_required
from coffeerun.extensions import db
from coffeerun.models import Product
from coffeerun.services import sales as sales_service
from coffeerun.services.cart import Cart, CartError, validate_line
from coffeerun.utils.decorators import admin_required

api_bp = Blueprint('api', __name__)

WHOLE_NUMBER = re.compile(r'-?\d+')


def _payload():
    """Merge JSON body, form data and query args."""
    data = dict(request.args.items())
    data.update(request.form.items())
    if request.is_json:
        data.update(request.get_json(silent=True) or {})
    return data


def _int(value, default=None):
    if value is None or value == '':
        return default
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and WHOLE_NUMBER.fullmatch(value.strip()):
        return int(value)
    raise CartError(f'Invalid number: {value}')


def _cart_response(cart, status=200, **extra):
    body = {'success': status < 400, 'cart': cart.snapshot()}
    body.update(extra)
    return jsonify(body), status


@api_bp.route('/cart_items', methods=['POST'])
@login_required
def create_cart_item():
    """Add a product/size to the cart."""
    data = _payload()
    cart = Cart.from_session()
    try:
        product_id = _int(data.get('product_id'))
        if product_id is None:
            raise CartError('product_id is required')
        product = db.session.get(Product, product_id)
        if product is None:
            return _cart_response(cart, 404, message='Product not found')
        size = data.get('size')
        validate_line(product, size)
        cart.add(product.id, size, _int(data.get('quantity'), 1))
    except CartError as e:
        return _cart_response(cart, 400, message=str(e))

    cart.save()
    return _cart_response(cart, 201, message=f'{product.name} added to cart')


@api_bp.route('/cart_items/<int:product_id>', methods=['PATCH', 'PUT'])
@login_required
def update_cart_item(product_id):
    """Set the quantity of one cart line; zero removes it."""
    data = _payload()
    cart = Cart.from_session()
    try:
        quantity = _int(data.get('quantity'))
        if quantity is None:
            raise CartError('quantity is required')
        size = data.get('size')
        if cart.find(product_id, size) is None:
            return _cart_response(cart, 404, message='Item not found')
        cart.update(product_id, size, quantity)
    except CartError as e:
        return _cart_response(cart, 400, message=str(e))

    cart.save()
    return _cart_response(cart)


@api_bp.route('/cart_items/<int:product_id>', methods=['DELETE'])
@login_required
def destroy_cart_item(product_id):
    """Remove one size of a product, or all of its lines when no size is given."""
    data = _payload()
    cart = Cart.from_session()
    if not cart.remove(product_id, data.get('size') or None):
        return _cart_response(cart, 404, message='Item not found')

    cart.save()
    return _cart_response(cart)


@api_bp.route('/sales')
@admin_required
def sales():
    """Sales figures for the dashboard graph."""
    days = min(max(request.args.get('days', 30, type=int), 1), 365)
    return jsonify({
        'summary': sales_service.serialize_summary(sales_service.sales_summary()),
        'daily_revenue': sales_service.daily_revenue(days=days),
        'top_products': sales_service.top_products(),
    })
