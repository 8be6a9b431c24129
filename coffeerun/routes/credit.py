"""Apply-for-credit routes (no login required)."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import current_user
from coffeerun.exceptions import RateLimitExceededError
from coffeerun.extensions import db
from coffeerun.forms.credit import CreditApplicationForm
from coffeerun.models import CreditApplication
from coffeerun.services.mailers import deliver_credit_notifications
from coffeerun.services.qualification import qualify
from coffeerun.services.rate_limiter import SubmissionRateLimiter

credit_bp = Blueprint('credit', __name__)


@credit_bp.route('', methods=['GET'])
def index():
    return redirect(url_for('credit.new'))


@credit_bp.route('/new', methods=['GET'])
def new():
    """Credit application form."""
    return render_template('credit/new.html', form=CreditApplicationForm())


def _reject_rate_limited(key):
    current_app.logger.warning('Credit application rate limited', extra={
        'identity': key[:12],
    })
    flash(RateLimitExceededError.message, 'danger')
    return redirect(url_for('credit.new'))


@credit_bp.route('', methods=['POST'])
def create():
    """Validate, throttle, store and decide a credit application."""
    limiter = SubmissionRateLimiter.from_config()
    key = limiter.identity_key(request.form.get('email'),
                               request.form.get('first_name'),
                               request.form.get('last_name'))
    try:
        limiter.check(key)
    except RateLimitExceededError:
        return _reject_rate_limited(key)

    form = CreditApplicationForm()
    if not form.validate_on_submit():
        flash('Please correct the errors below and ensure all required fields are completed.',
              'danger')
        return render_template('credit/new.html', form=form)

    qualification = qualify(form.gross_income.data)
    application = form.populate_application(CreditApplication())
    application.apply_decision(qualification)

    db.session.add(application)
    try:
        limiter.register(key)
    except RateLimitExceededError:
        db.session.rollback()
        return _reject_rate_limited(key)
    db.session.commit()

    current_app.logger.info('Credit application accepted', extra={
        'application_id': application.id,
        'identity': key[:12],
        'qualified': qualification.qualified,
        'credit_limit': str(qualification.credit_limit),
    })
    deliver_credit_notifications(application, qualification)

    flash(qualification.message, 'success' if qualification.qualified else 'info')
    if current_user.is_authenticated:
        return redirect(url_for('orders.index'))
    return redirect(url_for('main.index'))
