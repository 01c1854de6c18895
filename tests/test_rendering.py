from __future__ import annotations

from datetime import timedelta

from restobar.orders import create_order, table_details
from restobar.payment import quote_payment
from restobar.rendering import format_kitchen_order, format_order_summary, format_quote, format_table_cell
from tests.helpers import item


def test_table_cell_shows_open_orders(repo, now):
    create_order(repo, 4, [item("Empanadas", "20.00", "entrada")], now=now)

    busy = format_table_cell(table_details(repo.get_orders(), 4)).plain
    free = format_table_cell(table_details(repo.get_orders(), 5)).plain

    assert "Occupied" in busy
    assert "1 open" in busy
    assert "S/ 20.00" in busy
    assert "Available" in free


def test_kitchen_card_hides_drinks(repo, now):
    order = create_order(
        repo,
        2,
        [item("Asado Negro", "60.00", "plato"), item("Coca Cola", "8.50", "bebida")],
        now=now - timedelta(minutes=40),
    )

    card = format_kitchen_order(order, now).plain

    assert "High" in card
    assert "40 minutes" in card
    assert "Asado Negro" in card
    assert "Coca Cola" not in card


def test_order_summary_for_drinks_cashier(repo, now):
    order = create_order(
        repo,
        2,
        [item("Asado Negro", "60.00", "plato"), item("Coca Cola", "8.50", "bebida")],
        now=now,
    )

    summary = format_order_summary(order, show_food=False).plain

    assert "Drinks:" in summary
    assert "Coca Cola" in summary
    assert "Asado Negro" not in summary


def test_quote_text_shows_change(repo, now):
    order = create_order(repo, 5, [item("Tequeños", "28.50", "entrada", quantity=2)], now=now)

    text = format_quote(quote_payment(order, 0, 0, "cash", "60")).plain

    assert "Subtotal:         S/ 57.00" in text
    assert "Change:           S/ 3.00" in text
    assert "Discount" not in text
