"""Flask application factory."""

import os
from urllib.parse import urlparse
from flask import Flask, render_template, redirect, url_for, flash, request, jsonify
from .config import config
from .extensions import db, migrate, login_manager, bcrypt, csrf, mail
from .exceptions import NotAuthorizedError
from .utils.logging_config import setup_logging


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    os.makedirs(app.instance_path, exist_ok=True)

    setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)
    mail.init_app(app)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    # User loader for Flask-Login
    from .models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        if _wants_json():
            return jsonify({'success': False, 'message': 'Authentication required'}), 401
        flash(login_manager.login_message, login_manager.login_message_category)
        return redirect(url_for('auth.login', next=request.full_path))

    # Error handlers
    @app.errorhandler(NotAuthorizedError)
    def not_authorized(error):
        app.logger.warning('Authorization denied', extra={
            'path': request.path,
            'action': error.action,
        })
        if _wants_json():
            return jsonify({'success': False, 'message': error.message}), 403
        flash(error.message, 'danger')
        return redirect(_safe_referrer() or url_for('main.index'))

    @app.errorhandler(404)
    def not_found_error(error):
        if _wants_json():
            return jsonify({'success': False, 'message': 'Not found'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(403)
    def forbidden_error(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return render_template('errors/500.html'), 500

    # Context processors
    @app.context_processor
    def inject_globals():
        from .services.cart import Cart
        cart = Cart.from_session()
        # Count only what the cart panel shows
        return dict(cart_count=cart.snapshot()['total_items'] if len(cart) else 0)

    return app


def _wants_json():
    return request.blueprint == 'api' or request.is_json


def _safe_referrer():
    """Return the referrer only when it points back at this host."""
    referrer = request.referrer
    if not referrer:
        return None
    target = urlparse(referrer)
    if target.netloc and target.netloc != urlparse(request.host_url).netloc:
        return None
    if target.path == request.path:
        return None
    return referrer
