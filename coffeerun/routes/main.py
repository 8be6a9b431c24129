"""Main public routes."""

from flask import Blueprint, render_template, jsonify
from coffeerun.models import Product

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Landing page."""
    featured_products = Product.active_products().limit(3).all()
    return render_template('main/index.html', featured_products=featured_products)


@main_bp.route('/up')
def health():
    """Liveness probe."""
    return jsonify({'status': 'ok'})
