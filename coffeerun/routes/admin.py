"""Admin panel routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import current_user
from sqlalchemy.exc import IntegrityError
from coffeerun.exceptions import ModelValidationError
from coffeerun.extensions import db
from coffeerun.forms.order import OrderStatusForm
from coffeerun.forms.product import ProductForm
from coffeerun.models import Order, Product
from coffeerun.services import orders as order_service
from coffeerun.services import sales as sales_service
from coffeerun.services.policies import scope_orders
from coffeerun.utils.decorators import admin_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/sales')
@admin_required
def sales():
    """Sales dashboard."""
    orders = Order.recent().limit(50).all()
    return render_template('admin/sales.html',
                           orders=orders,
                           sales_data=sales_service.sales_summary(),
                           top_products=sales_service.top_products())


# --- Product Management ---
@admin_bp.route('/products')
@admin_required
def products():
    """All products, active or not."""
    all_products = Product.query.order_by(Product.name).all()
    return render_template('admin/products/index.html', products=all_products)


def _save_product(product, form):
    """Persist a product from the form; returns False and annotates the form on failure."""
    form.populate_product(product)
    errors = product.validate()
    if errors:
        db.session.rollback()
        for field, messages in errors.items():
            getattr(form, field).errors.extend(messages)
        return False

    db.session.add(product)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        form.name.errors.append('Name has already been taken')
        return False
    return True


@admin_bp.route('/products/new', methods=['GET', 'POST'])
@admin_required
def new_product():
    """Create a product."""
    form = ProductForm()
    if form.validate_on_submit():
        product = Product()
        if _save_product(product, form):
            flash(f'Product "{product.name}" was successfully created.', 'success')
            return redirect(url_for('admin.product_detail', product_id=product.id))

    return render_template('admin/products/form.html', form=form, product=None)


@admin_bp.route('/products/<int:product_id>')
@admin_required
def product_detail(product_id):
    product = db.get_or_404(Product, product_id)
    return render_template('admin/products/show.html', product=product)


@admin_bp.route('/products/<int:product_id>/edit', methods=['GET', 'POST'])
@admin_required
def edit_product(product_id):
    """Update a product."""
    product = db.get_or_404(Product, product_id)
    if request.method == 'POST':
        form = ProductForm(product=product)
    else:
        form = ProductForm.for_product(product)

    if form.validate_on_submit():
        if _save_product(product, form):
            flash(f'Product "{product.name}" was successfully updated.', 'success')
            return redirect(url_for('admin.product_detail', product_id=product.id))

    return render_template('admin/products/form.html', form=form, product=product)


@admin_bp.route('/products/<int:product_id>/delete', methods=['POST'])
@admin_required
def delete_product(product_id):
    """Delete a product that has never been ordered."""
    product = db.get_or_404(Product, product_id)
    if product.order_items.count():
        flash('This product has been ordered and cannot be deleted. Deactivate it instead.', 'warning')
        return redirect(url_for('admin.product_detail', product_id=product.id))

    name = product.name
    db.session.delete(product)
    db.session.commit()
    flash(f'Product "{name}" was deleted.', 'info')
    return redirect(url_for('admin.products'))


# --- Order Monitoring ---
@admin_bp.route('/orders')
@admin_required
def orders():
    """All orders."""
    return render_template('admin/orders/index.html', orders=scope_orders(current_user).all())


@admin_bp.route('/orders/<int:order_id>', methods=['GET', 'POST'])
@admin_required
def order_detail(order_id):
    """Order detail with status update."""
    order = db.get_or_404(Order, order_id)
    form = OrderStatusForm(data={'status': order.status})

    if form.validate_on_submit():
        try:
            order_service.change_status(order, form.status.data)
        except ModelValidationError as e:
            current_app.logger.warning('Order update rejected', extra={
                'order_id': order.id, 'errors': e.errors,
            })
            flash('Order could not be updated.', 'danger')
        else:
            flash(f'Order {order.order_number} is now {order.status}.', 'success')
        return redirect(url_for('admin.order_detail', order_id=order.id))

    return render_template('admin/orders/show.html', order=order, form=form)
