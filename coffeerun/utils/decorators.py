"""Role-based access decorators."""

from functools import wraps
from flask import current_app
from flask_login import current_user
from coffeerun.exceptions import NotAuthorizedError


def admin_required(f):
    """Decorator to require admin role."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return current_app.login_manager.unauthorized()
        if not current_user.is_admin():
            raise NotAuthorizedError(action=f.__name__)
        return f(*args, **kwargs)
    return decorated_function
