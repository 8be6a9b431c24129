"""User model."""

from decimal import Decimal
from flask_login import UserMixin
from sqlalchemy import func
from coffeerun.extensions import db, bcrypt
from coffeerun.utils.dates import utcnow


class User(UserMixin, db.Model):
    """Storefront account; ``admin`` unlocks the admin area."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    admin = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    orders = db.relationship('Order', backref='user', lazy='dynamic', cascade='all, delete-orphan')

    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if password matches."""
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_admin(self):
        """Check if user is admin."""
        return bool(self.admin)

    @property
    def full_name(self):
        """Display name derived from the email's local part."""
        local = self.email.split('@')[0]
        return local.replace('.', ' ').replace('_', ' ').title()

    @property
    def total_orders_count(self):
        return self.orders.count()

    @property
    def total_spent(self):
        from .order import Order
        total = db.session.query(func.sum(Order.total_amount)).filter(
            Order.user_id == self.id
        ).scalar()
        return total or Decimal('0.00')

    @classmethod
    def admins(cls):
        return cls.query.filter_by(admin=True)

    @classmethod
    def regular_users(cls):
        return cls.query.filter_by(admin=False)

    def __repr__(self):
        return f'<User {self.email}>'
