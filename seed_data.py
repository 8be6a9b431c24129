"""Seed script to populate database with sample data."""

from coffeerun import create_app
from coffeerun.extensions import db
from coffeerun.models import User, Product, SIZES

ADMIN = {'email': 'admin@titanscoffee.com', 'password': 'test123', 'admin': True}
REGULAR_USER = {'email': 'user@titanscoffee.com', 'password': 'password123', 'admin': False}

PRODUCTS = [
    {'name': 'Cappuccino', 'price': '9.00'},
    {'name': 'Macaroons', 'price': '4.00'},
    {'name': 'Donuts', 'price': '5.00'},
]


def ensure_user(email, password, admin):
    user = User.query.filter_by(email=email).first()
    if user:
        print(f'User already exists: {email}')
        return user

    user = User(email=email, admin=admin)
    user.set_password(password)
    db.session.add(user)
    print(f'Created {"admin" if admin else "regular"} user: {email}')
    return user


def ensure_product(name, price):
    product = Product.query.filter_by(name=name).first()
    if product:
        print(f'Product already exists: {name}')
        return product

    product = Product(name=name, price=price, active=True)
    product.available_sizes_list = SIZES
    db.session.add(product)
    print(f'Created product: {name} (${price})')
    return product


def seed_database():
    """Seed the database with sample data."""
    app = create_app()

    with app.app_context():
        db.create_all()

        print('Seeding Titans Coffee Run data...')
        ensure_user(**ADMIN)
        for data in PRODUCTS:
            ensure_product(**data)
        ensure_user(**REGULAR_USER)
        db.session.commit()

        print()
        print('Database summary:')
        print(f'   Users: {User.query.count()} '
              f'({User.admins().count()} admin, {User.regular_users().count()} regular)')
        print(f'   Products: {Product.query.count()}')
        print()
        print('Login credentials:')
        print(f'   Admin: {ADMIN["email"]} / {ADMIN["password"]}')
        print(f'   User:  {REGULAR_USER["email"]} / {REGULAR_USER["password"]}')


if __name__ == '__main__':
    seed_database()
