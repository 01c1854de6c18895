"""Default catalog, tables and label lookups."""

from __future__ import annotations

from restobar.config import DEFAULT_TABLE_COUNT
from restobar.constant import CATEGORY_LABELS, DEFAULT_MENU_ROWS, PRIORITY_LABELS, STATUS_LABELS
from restobar.models import Product, Table, to_money


def default_products() -> list[Product]:
    """Fresh copies of the built-in menu, all available."""
    return [
        Product(id=product_id, name=name, price=to_money(price), category=category, available=True)  # type: ignore[arg-type]
        for product_id, name, price, category in DEFAULT_MENU_ROWS
    ]


def default_tables(count: int = DEFAULT_TABLE_COUNT) -> list[Table]:
    return [Table(number=n) for n in range(1, count + 1)]


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def priority_label(priority: str) -> str:
    return PRIORITY_LABELS.get(priority, priority)
