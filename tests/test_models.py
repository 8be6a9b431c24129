"""Unit tests for order pricing and model validation"""

import pytest
from decimal import Decimal
from coffeerun.exceptions import ModelValidationError
from coffeerun.models import Order, OrderItem, Product, User
from coffeerun.services.orders import prepare_order


def _product(name="Cappuccino", price="9.00"):
    product = Product(name=name, price=Decimal(price), active=True)
    product.available_sizes_list = ["Small", "Medium", "Large"]
    return product


def _order(*items, donation=None):
    order = Order(user=User(email="owner@example.com"), titan_fund_donation=donation)
    for item in items:
        order.items.append(item)
    return order


def test_order_total_is_items_plus_donation():
    order = _order(
        OrderItem(product=_product(), size="Small", quantity=2, unit_price=Decimal("9.00")),
        OrderItem(product=_product("Donuts", "5.00"), size="Large", quantity=1,
                  unit_price=Decimal("5.00")),
        donation=Decimal("3.00"),
    )

    prepare_order(order)

    assert order.total_amount == Decimal("26.00")
    assert order.subtotal == Decimal("23.00")
    assert order.donation_amount == Decimal("3.00")


def test_order_total_without_donation():
    order = _order(OrderItem(product=_product(), size="Medium", quantity=1))

    prepare_order(order)

    assert order.total_amount == Decimal("9.00")
    assert order.donation_amount == Decimal("0.00")


def test_order_total_recomputed_after_quantity_change():
    item = OrderItem(product=_product("Macaroons", "4.00"), size="Small", quantity=3)
    order = _order(item)
    prepare_order(order)
    assert item.subtotal == Decimal("12.00")

    item.quantity = 5
    prepare_order(order)

    assert item.subtotal == Decimal("20.00")
    assert order.total_amount == Decimal("20.00")


def test_unit_price_defaults_from_product():
    item = OrderItem(product=_product("Macaroons", "4.00"), size="Small", quantity=3)

    item.assign_unit_price()
    item.calculate_subtotal()

    assert item.unit_price == Decimal("4.00")
    assert item.subtotal == Decimal("12.00")


def test_existing_unit_price_survives_product_price_change():
    product = _product("Macaroons", "4.00")
    item = OrderItem(product=product, size="Small", quantity=1, unit_price=Decimal("4.00"))

    product.price = Decimal("6.50")
    item.assign_unit_price()

    assert item.unit_price == Decimal("4.00")


def test_new_order_defaults_to_pending():
    order = _order(OrderItem(product=_product(), size="Small", quantity=1))
    prepare_order(order)
    assert order.status == "pending"


@pytest.mark.parametrize("size", ["Tiny", "", None, "small"])
def test_item_rejects_unknown_size(size):
    item = OrderItem(product=_product(), size=size, quantity=1, unit_price=Decimal("1.00"),
                     subtotal=Decimal("1.00"))
    assert "size" in item.validate()


@pytest.mark.parametrize("quantity", [0, -1, 100, None])
def test_item_rejects_out_of_range_quantity(quantity):
    item = OrderItem(product=_product(), size="Small", quantity=quantity,
                     unit_price=Decimal("1.00"), subtotal=Decimal("1.00"))
    assert "quantity" in item.validate()


def test_item_accepts_quantity_bounds():
    for quantity in (1, 99):
        item = OrderItem(product=_product(), size="Small", quantity=quantity,
                         unit_price=Decimal("1.00"), subtotal=Decimal("1.00"))
        assert item.validate() == {}


def test_order_with_no_items_is_invalid():
    order = _order()

    with pytest.raises(ModelValidationError) as excinfo:
        prepare_order(order)

    assert "total_amount" in excinfo.value.errors


def test_negative_donation_is_invalid():
    order = _order(OrderItem(product=_product(), size="Small", quantity=1),
                   donation=Decimal("-1.00"))

    with pytest.raises(ModelValidationError) as excinfo:
        prepare_order(order)

    assert "titan_fund_donation" in excinfo.value.errors


def test_item_errors_are_reported_per_line():
    order = _order(
        OrderItem(product=_product(), size="Small", quantity=1),
        OrderItem(product=_product(), size="Huge", quantity=1),
    )

    with pytest.raises(ModelValidationError) as excinfo:
        prepare_order(order)

    assert list(excinfo.value.errors) == ["items[1].size"]


@pytest.mark.parametrize("status,cancellable", [
    ("pending", True),
    ("confirmed", True),
    ("preparing", False),
    ("completed", False),
    ("cancelled", False),
])
def test_can_be_cancelled(status, cancellable):
    assert Order(status=status).can_be_cancelled() is cancellable


def test_order_number_is_zero_padded():
    assert Order(id=42).order_number == "TCR-000042"


def test_product_validation():
    product = Product(name="", price=Decimal("0"), available_sizes="[]")
    errors = product.validate()

    assert set(errors) == {"name", "price", "available_sizes"}
    assert product.active is True


def test_product_sizes_round_trip_in_canonical_order():
    product = _product()
    product.available_sizes_list = ["Large", "Small"]

    assert product.available_sizes_list == ["Small", "Large"]
    assert product.offers_size("Large")
    assert not product.offers_size("Medium")


def test_user_full_name_from_email():
    assert User(email="jane.doe@example.com").full_name == "Jane Doe"
