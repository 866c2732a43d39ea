"""Tests for model serialization and code canonicalization."""

import dataclasses

import pytest

from supplyscan.models import CartItem, Order, Product, canonical_code


@pytest.mark.parametrize(
    "raw,expected",
    [("npc123", "NPC123"), ("  abc-9 ", "ABC-9"), ("ALREADY", "ALREADY"), ("", "")],
)
def test_canonical_code(raw, expected):
    assert canonical_code(raw) == expected


def test_product_from_browser_record():
    product = Product.from_dict({"code": " npc1 ", "description": "Tube"})
    assert product == Product("NPC1", "Tube", None)


def test_cart_item_accepts_string_quantity():
    item = CartItem.from_dict({"code": "A1", "description": "Tube", "quantity": "3"})
    assert item.quantity == 3


def test_order_to_dict_shape():
    order = Order("o1", "2025-01-15T10:00:00.000Z", (CartItem("A1", "Tube", 2),))
    assert order.to_dict() == {
        "id": "o1",
        "date": "2025-01-15T10:00:00.000Z",
        "items": [{"code": "A1", "description": "Tube", "quantity": 2}],
    }
    assert order.total_quantity == 2


def test_order_from_dict_rejects_bad_date():
    with pytest.raises(ValueError):
        Order.from_dict({"id": "o1", "date": "garbage", "items": []})


def test_order_from_dict_accepts_naive_date():
    order = Order.from_dict({"id": "o1", "date": "2025-01-15T10:00:00", "items": []})
    assert order.date == "2025-01-15T10:00:00"


def test_order_is_frozen():
    order = Order("o1", "2025-01-15T10:00:00.000Z", (CartItem("A1", "Tube", 2),))
    with pytest.raises(dataclasses.FrozenInstanceError):
        order.items[0].quantity = 5
