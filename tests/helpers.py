from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from restobar.models import OrderItem, Product

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def item(name: str, price: str, category: str, quantity: int = 1, product_id: str | None = None) -> OrderItem:
    return OrderItem(
        product_id=product_id or name.lower().replace(" ", "-"),
        product_name=name,
        quantity=quantity,
        price=Decimal(price),
        category=category,  # type: ignore[arg-type]
    )


def product(name: str, price: str, category: str, available: bool = True, product_id: str | None = None) -> Product:
    return Product(
        id=product_id or name.lower().replace(" ", "-"),
        name=name,
        price=Decimal(price),
        category=category,  # type: ignore[arg-type]
        available=available,
    )
