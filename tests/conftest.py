"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from coffeerun import create_app
from coffeerun.extensions import db as _db
from coffeerun.models import User, Product, Order, OrderItem, SIZES


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database"""
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def app_ctx(app):
    """Pushed application context for tests that talk to the database directly"""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user and return its id"""
    def _make_user(email='customer@example.com', password='password123', admin=False):
        with app.app_context():
            user = User(email=email, admin=admin)
            user.set_password(password)
            _db.session.add(user)
            _db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def make_product(app):
    """Create a product and return its id"""
    def _make_product(name='Cappuccino', price='9.00', sizes=SIZES, active=True):
        with app.app_context():
            product = Product(name=name, price=Decimal(price), active=active)
            product.available_sizes_list = sizes
            _db.session.add(product)
            _db.session.commit()
            return product.id
    return _make_product


@pytest.fixture
def make_order(app):
    """Persist an order for ``user_id`` with (product_id, size, quantity) lines"""
    def _make_order(user_id, lines, donation=None, status='pending'):
        from coffeerun.services.orders import save_order
        with app.app_context():
            order = Order(user_id=user_id, titan_fund_donation=donation, status=status)
            for product_id, size, quantity in lines:
                product = _db.session.get(Product, product_id)
                order.items.append(OrderItem(product=product, size=size, quantity=quantity))
            save_order(order)
            return order.id
    return _make_order


@pytest.fixture
def login(client):
    """Log the test client in"""
    def _login(email='customer@example.com', password='password123'):
        response = client.post('/login', data={'email': email, 'password': password})
        assert response.status_code == 302
        return response
    return _login


@pytest.fixture
def customer(make_user, login):
    user_id = make_user()
    login()
    return user_id


@pytest.fixture
def admin(make_user, login):
    user_id = make_user(email='admin@example.com', admin=True)
    login(email='admin@example.com')
    return user_id
