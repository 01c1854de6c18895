"""Domain models for restobar."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Literal
from uuid import uuid4

Category = Literal["entrada", "plato", "bebida", "postre"]
OrderStatus = Literal["pending", "in-kitchen", "ready", "paid"]

CATEGORIES: tuple[Category, ...] = ("entrada", "plato", "bebida", "postre")
FOOD_CATEGORIES: frozenset[str] = frozenset({"entrada", "plato", "postre"})
DRINK_CATEGORIES: frozenset[str] = frozenset({"bebida"})

# Forward-only order lifecycle.
STATUS_FLOW: tuple[OrderStatus, ...] = ("pending", "in-kitchen", "ready", "paid")
# Status names written by older builds.
_LEGACY_STATUSES: dict[str, str] = {"preparing": "in-kitchen"}
ACTIVE_STATUSES: frozenset[str] = frozenset({"pending", "in-kitchen", "ready"})
KITCHEN_STATUSES: frozenset[str] = frozenset({"pending", "in-kitchen"})


def status_rank(status: str) -> int:
    """Position of a status in the lifecycle, -1 when unknown."""
    try:
        return STATUS_FLOW.index(status)  # type: ignore[arg-type]
    except ValueError:
        return -1


def generate_id() -> str:
    return uuid4().hex


def to_money(value: Any) -> Decimal:
    """Coerce a stored or typed amount into a Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"not an amount: {value!r}")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"not an amount: {value!r}") from exc


def _json_number(amount: Decimal) -> float | int:
    # JSON has no decimal type; two-decimal prices survive the float round trip.
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


@dataclass
class Product:
    """A catalog entry the admin manages and the kitchen can switch off."""

    id: str
    name: str
    price: Decimal
    category: Category
    available: bool = True

    def __post_init__(self) -> None:
        self.price = to_money(self.price)

    @property
    def is_food(self) -> bool:
        return self.category in FOOD_CATEGORIES

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": _json_number(self.price),
            "category": self.category,
            "available": self.available,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Product:
        return cls(
            id=str(raw["id"]),
            name=str(raw["name"]),
            price=to_money(raw["price"]),
            category=raw["category"],
            available=bool(raw.get("available", True)),
        )


@dataclass(frozen=True)
class OrderItem:
    """A value copy of a product taken when it was added to an order."""

    product_id: str
    product_name: str
    quantity: int
    price: Decimal
    category: Category

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_money(self.price))

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> OrderItem:
        return cls(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            price=product.price,
            category=product.category,
        )

    @property
    def is_food(self) -> bool:
        return self.category in FOOD_CATEGORIES

    @property
    def is_drink(self) -> bool:
        return self.category in DRINK_CATEGORIES

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
            "price": _json_number(self.price),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> OrderItem:
        return cls(
            product_id=str(raw["productId"]),
            product_name=str(raw["productName"]),
            quantity=int(raw["quantity"]),
            price=to_money(raw["price"]),
            category=raw["category"],
        )


def sum_items(items: Iterable[OrderItem]) -> Decimal:
    """Sum of price * quantity over item snapshots."""
    return sum((item.line_total for item in items), Decimal("0"))


@dataclass
class Order:
    """One waiter-submitted request for a table.

    ``food_items`` and ``drink_items`` partition ``items`` and are fixed when
    the order is created; ``total`` is the creation-time sum and is never
    rewritten by discounts or tips.
    """

    id: str
    table_number: int
    items: list[OrderItem]
    status: OrderStatus
    timestamp: str
    total: Decimal
    food_items: list[OrderItem] = field(default_factory=list)
    drink_items: list[OrderItem] = field(default_factory=list)
    waiter_name: str | None = None

    @property
    def created_at(self) -> datetime:
        created = datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return created

    @property
    def is_active(self) -> bool:
        return self.status != "paid"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tableNumber": self.table_number,
            "items": [item.to_dict() for item in self.items],
            "status": self.status,
            "timestamp": self.timestamp,
            "total": _json_number(self.total),
            "foodItems": [item.to_dict() for item in self.food_items],
            "drinkItems": [item.to_dict() for item in self.drink_items],
            "waiterName": self.waiter_name,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Order:
        items = [OrderItem.from_dict(row) for row in raw.get("items", [])]
        if "foodItems" in raw or "drinkItems" in raw:
            food = [OrderItem.from_dict(row) for row in raw.get("foodItems", [])]
            drink = [OrderItem.from_dict(row) for row in raw.get("drinkItems", [])]
        else:
            food = [item for item in items if item.is_food]
            drink = [item for item in items if item.is_drink]
        return cls(
            id=str(raw["id"]),
            table_number=int(raw["tableNumber"]),
            items=items,
            status=_LEGACY_STATUSES.get(raw["status"], raw["status"]),
            timestamp=str(raw["timestamp"]),
            total=to_money(raw.get("total", sum_items(items))),
            food_items=food,
            drink_items=drink,
            waiter_name=raw.get("waiterName"),
        )


@dataclass(frozen=True)
class Table:
    """A numbered table. Occupancy is derived from orders, never stored here."""

    number: int

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Table:
        return cls(number=int(raw["number"]))
