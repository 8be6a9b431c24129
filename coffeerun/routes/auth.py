"""Authentication routes."""

from urllib.parse import urlparse
from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, login_required, current_user
from coffeerun.extensions import db
from coffeerun.models import User
from coffeerun.forms.auth import LoginForm, RegistrationForm

auth_bp = Blueprint('auth', __name__)


def _landing_for(user):
    if user.is_admin():
        return url_for('admin.sales')
    return url_for('products.index')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login."""
    if current_user.is_authenticated:
        return redirect(_landing_for(current_user))

    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data.strip().lower()).first()

        if user and user.check_password(form.password.data):
            login_user(user, remember=form.remember.data)
            flash('Signed in successfully.', 'success')

            next_page = request.args.get('next')
            if next_page and not urlparse(next_page).netloc:
                return redirect(next_page)
            return redirect(_landing_for(user))
        else:
            flash('Invalid email or password.', 'danger')

    return render_template('auth/login.html', form=form)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Customer registration."""
    if current_user.is_authenticated:
        return redirect(_landing_for(current_user))

    form = RegistrationForm()
    if form.validate_on_submit():
        user = User(email=form.email.data.strip().lower(), admin=False)
        user.set_password(form.password.data)

        db.session.add(user)
        db.session.commit()

        login_user(user)
        flash('Welcome! You have signed up successfully.', 'success')
        return redirect(url_for('products.index'))

    return render_template('auth/register.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    """User logout."""
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('main.index'))
