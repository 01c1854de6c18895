from __future__ import annotations

from decimal import Decimal

import pytest

from restobar.orders import create_order, kitchen_queue
from tests.helpers import item, product


def test_defaults_when_nothing_is_stored(repo):
    products = repo.get_products()

    assert [p.name for p in products][:3] == ["Tequeños", "Empanadas", "Patacones"]
    assert all(p.available for p in products)
    assert [t.number for t in repo.get_tables()] == list(range(1, 21))
    assert repo.get_orders() == []


def test_product_crud(sqlite_repo):
    sqlite_repo.add_product(product("Chicha Morada", "9.00", "bebida", product_id="p1"))

    assert sqlite_repo.update_product("p1", price=Decimal("10.00")) is True
    assert sqlite_repo.toggle_product_availability("p1") is True
    stored = next(p for p in sqlite_repo.get_products() if p.id == "p1")
    assert stored.price == Decimal("10.00")
    assert stored.available is False

    assert sqlite_repo.delete_product("p1") is True
    assert all(p.id != "p1" for p in sqlite_repo.get_products())


def test_lookup_misses_are_silent_no_ops(repo):
    before = repo.get_products()

    assert repo.update_product("missing", name="x") is False
    assert repo.delete_product("missing") is False
    assert repo.toggle_product_availability("missing") is False
    assert repo.update_order("missing", status="paid") is False
    assert repo.get_products() == before
    assert repo.get_orders() == []


def test_orders_by_table(repo, now):
    create_order(repo, 5, [item("Tequeños", "28.50", "entrada")], now=now)
    create_order(repo, 7, [item("Coca Cola", "8.50", "bebida")], now=now)
    create_order(repo, 5, [item("Quesillo", "15.00", "postre")], now=now)

    assert len(repo.get_orders_by_table(5)) == 2
    assert len(repo.get_orders_by_table(7)) == 1
    assert repo.get_orders_by_table(1) == []


def test_order_snapshots_cannot_be_rewritten(repo, now):
    order = create_order(repo, 5, [item("Tequeños", "28.50", "entrada")], now=now)

    with pytest.raises(ValueError):
        repo.update_order(order.id, food_items=[])
    with pytest.raises(ValueError):
        repo.update_order(order.id, total=Decimal("0"))
    assert repo.get_order(order.id) == order


def test_tables_round_trip(sqlite_repo):
    sqlite_repo.save_tables(sqlite_repo.get_tables()[:4])

    assert [t.number for t in sqlite_repo.get_tables()] == [1, 2, 3, 4]


def test_update_order_cannot_lower_the_status(repo, now):
    order = create_order(repo, 5, [item("Tequeños", "28.50", "entrada")], now=now)
    assert repo.update_order(order.id, status="paid") is True

    assert repo.update_order(order.id, status="pending") is False
    assert repo.get_order(order.id).status == "paid"
    assert kitchen_queue(repo.get_orders()) == []


def test_update_order_rejects_unknown_status(repo, now):
    order = create_order(repo, 5, [item("Tequeños", "28.50", "entrada")], now=now)

    with pytest.raises(ValueError):
        repo.update_order(order.id, status="cancelled")
    assert repo.get_order(order.id).status == "pending"


def test_update_order_keeps_status_while_changing_other_fields(repo, now):
    order = create_order(repo, 5, [item("Tequeños", "28.50", "entrada")], now=now)

    assert repo.update_order(order.id, status="pending", waiter_name="Juan Pérez") is True
    assert repo.get_order(order.id).waiter_name == "Juan Pérez"
