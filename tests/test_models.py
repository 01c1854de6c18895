from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import timezone
from decimal import Decimal

import pytest

from restobar.models import Order, OrderItem, Table, status_rank, to_money
from tests.helpers import item, product


def test_order_item_is_a_snapshot_of_the_product():
    tequenos = product("Tequeños", "28.50", "entrada", product_id="1")
    snapshot = OrderItem.from_product(tequenos, quantity=2)

    tequenos.price = Decimal("99.00")
    tequenos.name = "Renamed"

    assert snapshot.product_name == "Tequeños"
    assert snapshot.price == Decimal("28.50")
    assert snapshot.line_total == Decimal("57.00")
    with pytest.raises(FrozenInstanceError):
        snapshot.quantity = 5  # type: ignore[misc]


def test_order_round_trips_through_the_stored_layout():
    food = item("Tequeños", "28.50", "entrada", quantity=2)
    drink = item("Coca Cola", "8.50", "bebida")
    order = Order(
        id="abc",
        table_number=5,
        items=[food, drink],
        status="pending",
        timestamp="2026-10-19T12:00:00+00:00",
        total=Decimal("65.50"),
        food_items=[food],
        drink_items=[drink],
        waiter_name="Juan Pérez",
    )

    raw = order.to_dict()

    assert raw["tableNumber"] == 5
    assert raw["foodItems"][0]["productName"] == "Tequeños"
    assert raw["drinkItems"][0]["price"] == 8.5
    assert raw["total"] == 65.5
    assert Order.from_dict(raw) == order


def test_legacy_order_without_split_is_partitioned_on_load():
    raw = {
        "id": "x",
        "tableNumber": 2,
        "items": [
            {"productId": "7", "productName": "Cerveza Polar", "quantity": 1, "price": 12, "category": "bebida"},
            {"productId": "4", "productName": "Pabellón Criollo", "quantity": 1, "price": 50, "category": "plato"},
        ],
        "status": "ready",
        "timestamp": "2026-10-19T12:00:00.000Z",
    }

    order = Order.from_dict(raw)

    assert [i.product_name for i in order.food_items] == ["Pabellón Criollo"]
    assert [i.product_name for i in order.drink_items] == ["Cerveza Polar"]
    assert order.total == Decimal("62")
    assert order.created_at.tzinfo == timezone.utc


def test_table_ignores_stored_status():
    assert Table.from_dict({"number": 3, "status": "occupied"}).to_dict() == {"number": 3}


def test_status_rank_follows_lifecycle():
    assert [status_rank(s) for s in ("pending", "in-kitchen", "ready", "paid")] == [0, 1, 2, 3]
    assert status_rank("cancelled") == -1


def test_to_money_rejects_junk():
    assert to_money(28.5) == Decimal("28.5")
    assert to_money(" 12 ") == Decimal("12")
    with pytest.raises(ValueError):
        to_money("twelve")
    with pytest.raises(ValueError):
        to_money(True)


def test_legacy_preparing_status_loads_as_in_kitchen():
    raw = {
        "id": "y",
        "tableNumber": 4,
        "items": [{"productId": "4", "productName": "Pabellón Criollo", "quantity": 1, "price": 50, "category": "plato"}],
        "status": "preparing",
        "timestamp": "2026-10-19T12:00:00.000Z",
    }

    order = Order.from_dict(raw)

    assert order.status == "in-kitchen"
    assert status_rank(order.status) == 1


def test_legacy_partition_skips_unknown_categories():
    raw = {
        "id": "z",
        "tableNumber": 4,
        "items": [{"productId": "s", "productName": "Mystery", "quantity": 1, "price": 10, "category": "snack"}],
        "status": "pending",
        "timestamp": "2026-10-19T12:00:00+00:00",
    }

    order = Order.from_dict(raw)

    assert order.food_items == []
    assert order.drink_items == []


def test_prices_are_coerced_to_decimal():
    snapshot = OrderItem("1", "Tequeños", 2, 28.5, "entrada")  # type: ignore[arg-type]

    assert snapshot.price == Decimal("28.5")
    assert snapshot.line_total == Decimal("57.0")
    assert product("Coca Cola", "8.50", "bebida").price == Decimal("8.50")
