from __future__ import annotations

from decimal import Decimal

import pytest

from vortex_rewards.units import to_asset_id, to_decimal


def test_to_decimal_int():
    assert to_decimal(17057307006875) == Decimal(17057307006875)


def test_to_decimal_float_uses_shortest_repr():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(0.0213) == Decimal("0.0213")


def test_to_decimal_strings():
    assert to_decimal("1000") == Decimal(1000)
    assert to_decimal("1,000.5") == Decimal("1000.5")
    assert to_decimal(" 2.25 ") == Decimal("2.25")


def test_to_decimal_hex_string():
    assert to_decimal("0x0000000000000000000000e8d4a51000") == Decimal(10**12)


def test_to_decimal_passes_decimal_through():
    value = Decimal("3.14")
    assert to_decimal(value) is value


@pytest.mark.parametrize(
    "value",
    [None, True, "abc", "", [1], Decimal("NaN"), Decimal("Infinity")],
)
def test_to_decimal_rejects_non_numeric(value):
    with pytest.raises(ValueError):
        to_decimal(value)


def test_to_decimal_rejects_negative():
    with pytest.raises(ValueError, match="price must be non-negative"):
        to_decimal(-1, field="price")


def test_to_asset_id():
    assert to_asset_id(3) == 3
    assert to_asset_id("1124") == 1124
    assert to_asset_id(2.0) == 2


@pytest.mark.parametrize("value", [None, False, "x1", 1.5, -1.5])
def test_to_asset_id_rejects_invalid(value):
    with pytest.raises(ValueError):
        to_asset_id(value)
