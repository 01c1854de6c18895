"""Order lifecycle and the views derived from it.

Orders move strictly forward: pending -> in-kitchen -> ready -> paid. Table
occupancy, the kitchen queue and its priorities are never stored; they are
recomputed from the current orders on every read.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Literal

from restobar.config import PRIORITY_HIGH_AFTER_MINUTES, PRIORITY_MEDIUM_AFTER_MINUTES, UNASSIGNED_WAITER
from restobar.errors import OrderError
from restobar.models import (
    CATEGORIES,
    KITCHEN_STATUSES,
    STATUS_FLOW,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    Table,
    generate_id,
    status_rank,
    sum_items,
)
from restobar.repository import RestobarRepository

logger = logging.getLogger(__name__)

TableStatus = Literal["available", "occupied"]
Priority = Literal["low", "medium", "high"]
KitchenFilter = Literal["all", "pending", "in-kitchen"]
KitchenSort = Literal["time", "table"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def split_items(items: Iterable[OrderItem]) -> tuple[list[OrderItem], list[OrderItem]]:
    """Partition items into (food, drink) by category. Unknown categories land in neither."""
    food: list[OrderItem] = []
    drink: list[OrderItem] = []
    for item in items:
        if item.is_food:
            food.append(item)
        elif item.is_drink:
            drink.append(item)
    return food, drink


def create_order(
    repo: RestobarRepository,
    table_number: int,
    items: Iterable[OrderItem],
    waiter_name: str | None = None,
    now: datetime | None = None,
) -> Order:
    """Validate and store a new pending order for a table."""
    if isinstance(table_number, bool) or not isinstance(table_number, int) or table_number < 1:
        raise OrderError("Table number must be a positive whole number.")
    snapshot = list(items)
    if not snapshot:
        raise OrderError("Add at least one item before sending the order.")
    for item in snapshot:
        if item.category not in CATEGORIES:
            raise OrderError(f"Unknown category for {item.product_name}: {item.category}")
        if item.quantity < 1:
            raise OrderError(f"Quantity for {item.product_name} must be at least 1.")
        if item.price < 0:
            raise OrderError(f"Price for {item.product_name} cannot be negative.")

    food, drink = split_items(snapshot)
    order = Order(
        id=generate_id(),
        table_number=table_number,
        items=snapshot,
        status="pending",
        timestamp=(now or _utc_now()).isoformat(),
        total=sum_items(snapshot),
        food_items=food,
        drink_items=drink,
        waiter_name=(waiter_name or "").strip() or UNASSIGNED_WAITER,
    )
    repo.add_order(order)
    logger.info(
        "order created id=%s table=%d items=%d total=%s waiter=%r",
        order.id,
        table_number,
        len(snapshot),
        order.total,
        order.waiter_name,
    )
    return order


class OrderDraft:
    """A waiter's item list for one table before it is sent."""

    def __init__(self, table_number: int, waiter_name: str | None = None) -> None:
        self.table_number = table_number
        self.waiter_name = waiter_name
        self.lines: list[OrderItem] = []

    def add(self, product: Product) -> None:
        if not product.available:
            raise OrderError(f"{product.name} is not available right now.")
        for idx, line in enumerate(self.lines):
            if line.product_id == product.id:
                self.lines[idx] = replace(line, quantity=line.quantity + 1)
                return
        self.lines.append(OrderItem.from_product(product))

    def remove(self, product_id: str) -> None:
        for idx, line in enumerate(self.lines):
            if line.product_id != product_id:
                continue
            if line.quantity > 1:
                self.lines[idx] = replace(line, quantity=line.quantity - 1)
            else:
                del self.lines[idx]
            return

    def quantity_of(self, product_id: str) -> int:
        for line in self.lines:
            if line.product_id == product_id:
                return line.quantity
        return 0

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self) -> Decimal:
        return sum_items(self.lines)

    @property
    def food_total(self) -> Decimal:
        return sum_items(split_items(self.lines)[0])

    @property
    def drink_total(self) -> Decimal:
        return sum_items(split_items(self.lines)[1])

    def submit(self, repo: RestobarRepository, now: datetime | None = None) -> Order:
        order = create_order(repo, self.table_number, self.lines, waiter_name=self.waiter_name, now=now)
        self.lines = []
        return order


# -------------------- Transitions --------------------


def next_status(status: str) -> OrderStatus | None:
    """The single forward step after ``status``, or None at the end."""
    rank = status_rank(status)
    if rank < 0 or rank + 1 >= len(STATUS_FLOW):
        return None
    return STATUS_FLOW[rank + 1]


def advance_order(repo: RestobarRepository, order_id: str, new_status: str) -> bool:
    """Overwrite an order's status if it moves the order forward.

    Unknown ids and moves that would keep or lower the status change
    nothing and return False.
    """
    if new_status not in STATUS_FLOW:
        raise ValueError(f"unknown order status: {new_status!r}")
    order = repo.get_order(order_id)
    if order is None:
        logger.debug("advance_order miss id=%s", order_id)
        return False
    if status_rank(new_status) <= status_rank(order.status):
        logger.info("advance_order ignored id=%s %s -> %s", order_id, order.status, new_status)
        return False
    repo.update_order(order_id, status=new_status)
    logger.info("order status id=%s %s -> %s", order_id, order.status, new_status)
    return True


def mark_paid(repo: RestobarRepository, order_id: str) -> bool:
    return advance_order(repo, order_id, "paid")


# -------------------- Table occupancy --------------------


@dataclass(frozen=True)
class TableDetails:
    number: int
    status: TableStatus
    active_orders: int
    pending: int
    in_kitchen: int
    ready: int
    active_total: Decimal

    @property
    def needs_attention(self) -> bool:
        return self.ready > 0


def index_by_table(orders: Iterable[Order]) -> dict[int, list[Order]]:
    index: dict[int, list[Order]] = defaultdict(list)
    for order in orders:
        index[order.table_number].append(order)
    return index


def _details_for(number: int, table_orders: Iterable[Order]) -> TableDetails:
    active = [order for order in table_orders if order.is_active]
    return TableDetails(
        number=number,
        status="occupied" if active else "available",
        active_orders=len(active),
        pending=sum(1 for order in active if order.status == "pending"),
        in_kitchen=sum(1 for order in active if order.status == "in-kitchen"),
        ready=sum(1 for order in active if order.status == "ready"),
        active_total=sum((order.total for order in active), Decimal("0")),
    )


def table_status(orders: Iterable[Order], table_number: int) -> TableStatus:
    """occupied while any order for the table is unpaid, else available."""
    return "occupied" if any(o.table_number == table_number and o.is_active for o in orders) else "available"


def table_details(orders: Iterable[Order], table_number: int) -> TableDetails:
    return _details_for(table_number, (order for order in orders if order.table_number == table_number))


def tables_overview(tables: Iterable[Table], orders: Iterable[Order]) -> list[TableDetails]:
    index = index_by_table(orders)
    return [_details_for(table.number, index.get(table.number, [])) for table in tables]


# -------------------- Kitchen --------------------


def minutes_waiting(order: Order, now: datetime | None = None) -> float:
    elapsed = (now or _utc_now()) - order.created_at
    return elapsed.total_seconds() / 60


def order_priority(order: Order, now: datetime | None = None) -> Priority:
    minutes = minutes_waiting(order, now)
    if minutes > PRIORITY_HIGH_AFTER_MINUTES:
        return "high"
    if minutes > PRIORITY_MEDIUM_AFTER_MINUTES:
        return "medium"
    return "low"


def waiting_label(order: Order, now: datetime | None = None) -> str:
    minutes = int(minutes_waiting(order, now))
    if minutes < 1:
        return "just arrived"
    if minutes == 1:
        return "1 minute"
    return f"{minutes} minutes"


def kitchen_queue(
    orders: Iterable[Order],
    status_filter: KitchenFilter = "all",
    sort_by: KitchenSort = "time",
) -> list[Order]:
    """Orders the kitchen still has to cook, oldest (or lowest table) first."""
    queue = [order for order in orders if order.status in KITCHEN_STATUSES and order.food_items]
    if status_filter != "all":
        queue = [order for order in queue if order.status == status_filter]
    if sort_by == "table":
        queue.sort(key=lambda order: order.table_number)
    else:
        queue.sort(key=lambda order: order.created_at)
    return queue


def kitchen_counts(orders: Iterable[Order]) -> dict[str, int]:
    queue = kitchen_queue(orders)
    return {
        "pending": sum(1 for order in queue if order.status == "pending"),
        "in-kitchen": sum(1 for order in queue if order.status == "in-kitchen"),
    }
