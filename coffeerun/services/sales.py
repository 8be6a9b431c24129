"""Sales figures for the admin dashboard and JSON API."""

from datetime import datetime, time, timedelta
from decimal import Decimal
from sqlalchemy import func
from coffeerun.extensions import db
from coffeerun.models import Order, Product
from coffeerun.utils.dates import utcnow, month_bounds


def _revenue(*criteria):
    total = db.session.query(func.sum(Order.total_amount)).filter(*criteria).scalar()
    return Decimal(total or 0).quantize(Decimal('0.01'))


def sales_summary(now=None):
    """Order counts and revenue, overall and for the current calendar month."""
    now = now or utcnow()
    month_start, month_end = month_bounds(now)
    in_month = (Order.created_at >= month_start, Order.created_at < month_end)

    return {
        'total_orders': Order.query.count(),
        'total_revenue': _revenue(),
        'this_month_orders': Order.query.filter(*in_month).count(),
        'this_month_revenue': _revenue(*in_month),
    }


def daily_revenue(days=30, now=None):
    """Revenue per day for the last ``days`` days, oldest first, zero-filled."""
    now = now or utcnow()
    first_day = (now - timedelta(days=days - 1)).date()
    since = datetime.combine(first_day, time.min)
    day = func.date(Order.created_at)

    rows = db.session.query(day, func.sum(Order.total_amount)).filter(
        Order.created_at >= since
    ).group_by(day).all()
    totals = {str(row_day): Decimal(total or 0) for row_day, total in rows}

    series = []
    for offset in range(days):
        current = first_day + timedelta(days=offset)
        amount = totals.get(current.isoformat(), Decimal('0'))
        series.append({'date': current.isoformat(), 'revenue': f'{amount:.2f}'})
    return series


def top_products(limit=5):
    return [
        {'product_id': product.id, 'name': product.name, 'quantity': int(quantity or 0)}
        for product, quantity in Product.by_popularity().limit(limit).all()
    ]


def serialize_summary(summary):
    return {key: (f'{value:.2f}' if isinstance(value, Decimal) else value)
            for key, value in summary.items()}
