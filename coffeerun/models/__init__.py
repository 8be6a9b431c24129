"""Database models package."""

from .user import User
from .product import Product, SIZES
from .order import Order, OrderItem, ORDER_STATUSES, CANCELLABLE_STATUSES
from .credit_application import CreditApplication
from .submission_counter import SubmissionCounter

__all__ = [
    'User',
    'Product',
    'SIZES',
    'Order',
    'OrderItem',
    'ORDER_STATUSES',
    'CANCELLABLE_STATUSES',
    'CreditApplication',
    'SubmissionCounter',
]
