"""Unit tests for the credit qualification decision"""

import pytest
from decimal import Decimal
from coffeerun.services.qualification import (
    qualify,
    credit_limit_for,
    QUALIFIED_MESSAGE,
    DECLINED_MESSAGE,
)


@pytest.mark.parametrize("income,expected_limit", [
    (20000, Decimal("2000")),
    (25000, Decimal("2500")),
    (49999, Decimal("5000")),
    (50000, Decimal("5000")),
    (100000, Decimal("5000")),
])
def test_qualified_incomes_get_capped_ten_percent_limit(income, expected_limit):
    result = qualify(income)

    assert result.qualified is True
    assert result.credit_limit == expected_limit
    assert result.message == QUALIFIED_MESSAGE


@pytest.mark.parametrize("income", [0, 1, 15000, Decimal("19999.99")])
def test_incomes_below_threshold_are_declined(income):
    result = qualify(income)

    assert result.qualified is False
    assert result.credit_limit == 0
    assert result.message == DECLINED_MESSAGE


def test_threshold_is_inclusive():
    assert qualify(Decimal("20000.00")).qualified is True
    assert qualify(Decimal("19999.99")).qualified is False


def test_limit_rounds_half_up_to_whole_dollars():
    # 10% of 20005 = 2000.5
    assert credit_limit_for(Decimal("20005")) == Decimal("2001")
    # 10% of 20004.99 = 2000.499
    assert credit_limit_for(Decimal("20004.99")) == Decimal("2000")


def test_accepts_string_and_float_income():
    assert qualify("30000").credit_limit == Decimal("3000")
    assert qualify(30000.0).credit_limit == Decimal("3000")


def test_result_is_immutable():
    result = qualify(25000)
    with pytest.raises(AttributeError):
        result.qualified = False
