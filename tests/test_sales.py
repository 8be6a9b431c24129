"""Sales figures"""

from datetime import datetime
from decimal import Decimal
from coffeerun.extensions import db
from coffeerun.models import Order
from coffeerun.services.sales import sales_summary, daily_revenue, top_products, serialize_summary
from coffeerun.utils.dates import month_bounds

NOW = datetime(2026, 10, 16, 12, 0, 0)


def _backdate(app, order_id, when):
    with app.app_context():
        order = db.session.get(Order, order_id)
        order.created_at = when
        db.session.commit()


def test_empty_store(app_ctx):
    summary = sales_summary(NOW)

    assert summary == {
        "total_orders": 0,
        "total_revenue": Decimal("0.00"),
        "this_month_orders": 0,
        "this_month_revenue": Decimal("0.00"),
    }
    assert serialize_summary(summary)["total_revenue"] == "0.00"


def test_month_figures_exclude_older_orders(app, make_user, make_product, make_order):
    buyer = make_user()
    product_id = make_product(price="9.00")
    this_month = make_order(buyer, [(product_id, "Small", 1)])
    last_month = make_order(buyer, [(product_id, "Small", 2)])
    _backdate(app, this_month, datetime(2026, 10, 1, 0, 0, 0))
    _backdate(app, last_month, datetime(2026, 9, 30, 23, 59, 59))

    with app.app_context():
        summary = sales_summary(NOW)

    assert summary["total_orders"] == 2
    assert summary["total_revenue"] == Decimal("27.00")
    assert summary["this_month_orders"] == 1
    assert summary["this_month_revenue"] == Decimal("9.00")


def test_cancelled_orders_still_count_toward_revenue(app, make_user, make_product, make_order):
    make_order(make_user(), [(make_product(price="5.00"), "Small", 1)], status="cancelled")

    with app.app_context():
        assert sales_summary()["total_revenue"] == Decimal("5.00")


def test_daily_revenue_is_zero_filled(app, make_user, make_product, make_order):
    buyer = make_user()
    product_id = make_product(price="4.00")
    order_id = make_order(buyer, [(product_id, "Small", 3)])
    _backdate(app, order_id, datetime(2026, 10, 14, 9, 30, 0))

    with app.app_context():
        series = daily_revenue(days=3, now=NOW)

    assert series == [
        {"date": "2026-10-14", "revenue": "12.00"},
        {"date": "2026-10-15", "revenue": "0.00"},
        {"date": "2026-10-16", "revenue": "0.00"},
    ]


def test_top_products_by_quantity(app, make_user, make_product, make_order):
    buyer = make_user()
    donuts = make_product(name="Donuts", price="5.00")
    macaroons = make_product(name="Macaroons", price="4.00")
    make_order(buyer, [(donuts, "Small", 1), (macaroons, "Small", 4)])

    with app.app_context():
        ranking = top_products(limit=1)

    assert ranking == [{"product_id": macaroons, "name": "Macaroons", "quantity": 4}]


def test_month_bounds_wrap_december():
    start, end = month_bounds(datetime(2026, 12, 31, 23, 0, 0))
    assert start == datetime(2026, 12, 1)
    assert end == datetime(2027, 1, 1)
