"""Unit tests for currency helpers"""

from decimal import Decimal
from budget_gateway.domain.money import percentage, to_money, total


def test_to_money_quantizes_half_up():
    assert to_money("10.005") == Decimal("10.01")
    assert to_money(0.1) == Decimal("0.10")
    assert to_money(7) == Decimal("7.00")


def test_total_of_nothing_is_zero():
    assert total([]) == Decimal("0.00")


def test_total_avoids_float_drift():
    assert total([0.1, 0.2]) == Decimal("0.30")


def test_percentage():
    assert percentage(Decimal("1"), Decimal("8")) == 12.5
    assert percentage(Decimal("1"), Decimal("0")) == 0.0
