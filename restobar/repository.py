"""Repository over the collection store: the operation set every view uses."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from restobar.config import ORDERS_KEY, PRODUCTS_KEY, TABLES_KEY
from restobar.data import default_products, default_tables
from restobar.models import STATUS_FLOW, Order, Product, Table, status_rank
from restobar.persistence import CollectionStore

logger = logging.getLogger(__name__)

# Item snapshots and their partition never change once an order exists.
FROZEN_ORDER_FIELDS = frozenset({"id", "items", "food_items", "drink_items", "total", "timestamp"})


class RestobarRepository:
    """Products, tables and orders kept as whole collections in one store.

    Every mutation is a read-modify-write of its collection. Update, delete
    and toggle calls with an unknown id change nothing and return ``False``.
    """

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    # -------------------- Products --------------------

    def get_products(self) -> list[Product]:
        rows = self.store.get(PRODUCTS_KEY)
        if rows is None:
            return default_products()
        return [Product.from_dict(row) for row in rows]

    def save_products(self, products: list[Product]) -> None:
        self.store.set(PRODUCTS_KEY, [product.to_dict() for product in products])

    def add_product(self, product: Product) -> None:
        products = self.get_products()
        products.append(product)
        self.save_products(products)
        logger.info("product added id=%s name=%r", product.id, product.name)

    def update_product(self, product_id: str, **changes: Any) -> bool:
        products = self.get_products()
        for idx, product in enumerate(products):
            if product.id == product_id:
                products[idx] = replace(product, **changes)
                self.save_products(products)
                logger.info("product updated id=%s fields=%s", product_id, sorted(changes))
                return True
        logger.debug("update_product miss id=%s", product_id)
        return False

    def delete_product(self, product_id: str) -> bool:
        products = self.get_products()
        remaining = [product for product in products if product.id != product_id]
        if len(remaining) == len(products):
            logger.debug("delete_product miss id=%s", product_id)
            return False
        self.save_products(remaining)
        logger.info("product deleted id=%s", product_id)
        return True

    def toggle_product_availability(self, product_id: str) -> bool:
        products = self.get_products()
        for product in products:
            if product.id == product_id:
                product.available = not product.available
                self.save_products(products)
                logger.info("product availability id=%s available=%s", product_id, product.available)
                return True
        logger.debug("toggle_product_availability miss id=%s", product_id)
        return False

    # -------------------- Tables --------------------

    def get_tables(self) -> list[Table]:
        rows = self.store.get(TABLES_KEY)
        if rows is None:
            return default_tables()
        return [Table.from_dict(row) for row in rows]

    def save_tables(self, tables: list[Table]) -> None:
        self.store.set(TABLES_KEY, [table.to_dict() for table in tables])

    # -------------------- Orders --------------------

    def get_orders(self) -> list[Order]:
        rows = self.store.get(ORDERS_KEY)
        if rows is None:
            return []
        return [Order.from_dict(row) for row in rows]

    def save_orders(self, orders: list[Order]) -> None:
        self.store.set(ORDERS_KEY, [order.to_dict() for order in orders])

    def add_order(self, order: Order) -> None:
        orders = self.get_orders()
        orders.append(order)
        self.save_orders(orders)

    def get_order(self, order_id: str) -> Order | None:
        for order in self.get_orders():
            if order.id == order_id:
                return order
        return None

    def update_order(self, order_id: str, **changes: Any) -> bool:
        """Apply changes to one order. A status change may only move the order forward."""
        frozen = FROZEN_ORDER_FIELDS.intersection(changes)
        if frozen:
            raise ValueError(f"order fields are fixed at creation: {', '.join(sorted(frozen))}")
        new_status = changes.get("status")
        if "status" in changes and new_status not in STATUS_FLOW:
            raise ValueError(f"unknown order status: {new_status!r}")
        orders = self.get_orders()
        for idx, order in enumerate(orders):
            if order.id == order_id:
                if new_status is not None and status_rank(new_status) < status_rank(order.status):
                    logger.info("update_order ignored id=%s %s -> %s", order_id, order.status, new_status)
                    return False
                orders[idx] = replace(order, **changes)
                self.save_orders(orders)
                return True
        logger.debug("update_order miss id=%s", order_id)
        return False

    def get_orders_by_table(self, table_number: int) -> list[Order]:
        return [order for order in self.get_orders() if order.table_number == table_number]
