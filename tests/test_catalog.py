from __future__ import annotations

from decimal import Decimal

import pytest

from restobar.catalog import (
    create_product,
    edit_product,
    filter_by_availability,
    parse_price,
    products_by_category,
    remove_product,
    toggle_availability,
    validate_product_form,
)
from restobar.errors import CatalogError
from restobar.orders import create_order
from restobar.models import OrderItem
from tests.helpers import product


@pytest.mark.parametrize("raw", ["", "abc", "0", "-3", "nan", "inf"])
def test_parse_price_rejects_bad_values(raw):
    with pytest.raises(CatalogError):
        parse_price(raw)


def test_parse_price_accepts_positive_numbers():
    assert parse_price("12.5") == Decimal("12.5")


def test_form_requires_all_fields():
    with pytest.raises(CatalogError, match="fill in all fields"):
        validate_product_form("  ", "10", "plato")
    with pytest.raises(CatalogError, match="fill in all fields"):
        validate_product_form("Lomo", "", "plato")
    with pytest.raises(CatalogError):
        validate_product_form("Lomo", "10", "sopa")

    assert validate_product_form(" Lomo ", "10", "plato") == ("Lomo", Decimal("10"), "plato")


def test_create_and_edit_product(repo):
    created = create_product(repo, "Lomo Saltado", "45", "plato")

    assert created.available is True
    assert any(p.id == created.id for p in repo.get_products())

    assert edit_product(repo, created.id, "Lomo Saltado XL", "55", "plato") is True
    edited = next(p for p in repo.get_products() if p.id == created.id)
    assert (edited.name, edited.price) == ("Lomo Saltado XL", Decimal("55"))


def test_editing_a_product_leaves_existing_orders_alone(repo, now):
    tequenos = next(p for p in repo.get_products() if p.name == "Tequeños")
    order = create_order(repo, 5, [OrderItem.from_product(tequenos, 2)], now=now)

    edit_product(repo, tequenos.id, "Tequeños grandes", "40", "entrada")

    stored = repo.get_order(order.id)
    assert stored.items[0].product_name == "Tequeños"
    assert stored.items[0].price == Decimal("28.50")


def test_remove_and_toggle(repo):
    assert toggle_availability(repo, "1") is True
    assert next(p for p in repo.get_products() if p.id == "1").available is False
    assert remove_product(repo, "1") is True
    assert remove_product(repo, "1") is False


def test_grouping_and_availability_filter():
    products = [
        product("Tequeños", "28.50", "entrada"),
        product("Coca Cola", "8.50", "bebida", available=False),
        product("Quesillo", "15.00", "postre"),
    ]

    grouped = products_by_category(products, ("entrada", "postre"))
    assert list(grouped) == ["entrada", "postre"]
    assert [p.name for p in grouped["postre"]] == ["Quesillo"]

    assert [p.name for p in filter_by_availability(products, "available")] == ["Tequeños", "Quesillo"]
    assert [p.name for p in filter_by_availability(products, "unavailable")] == ["Coca Cola"]
    assert len(filter_by_availability(products, "all")) == 3
