"""Product listing routes."""

from flask import Blueprint, render_template
from flask_login import login_required
from coffeerun.models import Product
from coffeerun.services.cart import Cart

products_bp = Blueprint('products', __name__)


@products_bp.route('')
@login_required
def index():
    """Active products with the current cart."""
    products = Product.active_products().all()
    cart = Cart.from_session().snapshot()
    return render_template('products/index.html', products=products, cart=cart)
