"""Rendering helpers for the text UI."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from restobar.data import category_label, priority_label, status_label
from restobar.models import Order, OrderItem, Product
from restobar.orders import TableDetails, order_priority, waiting_label
from restobar.payment import PaymentQuote, format_price


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    if category == "bebida":
        return "bold #ffffff on #2f6db5"
    if category == "postre":
        return "bold #ffffff on #8e44ad"
    if category == "entrada":
        return "bold #0b1f0f on #f0b429"
    return "bold #0b1f0f on #5fbf72"


def status_style(status: str) -> str:
    if status == "pending":
        return "bold #ffffff on #b23a48"
    if status == "in-kitchen":
        return "bold #0b1f0f on #f0b429"
    if status == "ready":
        return "bold #0b1f0f on #5fbf72"
    return "dim"


def priority_style(priority: str) -> str:
    if priority == "high":
        return "bold #ffffff on #b23a48"
    if priority == "medium":
        return "bold #0b1f0f on #f0b429"
    return "#dddddd"


def format_item_line(item: OrderItem) -> Text:
    """Render ``2x Tequeños  S/ 57.00`` with a category tag."""
    text = Text()
    text.append(category_label(item.category)[:1], style=badge_style(item.category))
    text.append(f" {item.quantity}x {item.product_name}")
    text.append(f"  {format_price(item.line_total)}", style="dim")
    return text


def format_product_label(product: Product, quantity: int = 0) -> Text:
    text = Text()
    text.append(category_label(product.category)[:1], style=badge_style(product.category))
    text.append(f" {product.name}  {format_price(product.price)}")
    if not product.available:
        text.append("  (unavailable)", style="dim")
    if quantity:
        text.append(f"  x{quantity}", style="bold")
    return text


def format_status(status: str) -> Text:
    return Text(f" {status_label(status)} ", style=status_style(status))


def format_table_cell(details: TableDetails) -> Text:
    """One row of the tables grid."""
    text = Text()
    text.append(f"Table {details.number:>2}  ")
    if details.status == "available":
        text.append(" Available ", style="dim")
        return text
    if details.needs_attention:
        text.append(" Ready ", style=status_style("ready"))
    else:
        text.append(" Occupied ", style=status_style("pending"))
    text.append(
        f"  {details.active_orders} open"
        f" | {details.pending} pending | {details.in_kitchen} cooking | {details.ready} ready"
        f" | {format_price(details.active_total)}",
    )
    return text


def format_kitchen_order(order: Order, now: datetime | None = None) -> Text:
    """Kitchen card: table, status, priority, waiting time and food items only."""
    priority = order_priority(order, now)
    text = Text()
    text.append(f"Table {order.table_number}  ")
    text.append_text(format_status(order.status))
    text.append("  ")
    text.append(f" {priority_label(priority)} ", style=priority_style(priority))
    text.append(f"  {waiting_label(order, now)}", style="dim")
    if order.waiter_name:
        text.append(f"  ({order.waiter_name})", style="dim")
    for item in order.food_items:
        text.append("\n      ")
        text.append(f"{item.quantity}x {item.product_name}")
    return text


def format_order_summary(order: Order, show_food: bool = True, show_drinks: bool = True) -> Text:
    """Cashier card listing the selected item groups with their subtotals."""
    text = Text()
    text.append(f"Table {order.table_number}  ")
    text.append_text(format_status(order.status))
    stamp = order.created_at.astimezone().strftime("%H:%M")
    text.append(f"  {stamp}", style="dim")
    if order.waiter_name:
        text.append(f"  served by {order.waiter_name}", style="dim")
    groups = []
    if show_food and order.food_items:
        groups.append(("Food", order.food_items))
    if show_drinks and order.drink_items:
        groups.append(("Drinks", order.drink_items))
    for title, items in groups:
        text.append(f"\n    {title}:", style="bold")
        for item in items:
            text.append("\n      ")
            text.append_text(format_item_line(item))
    return text


def format_quote(quote: PaymentQuote) -> Text:
    text = Text()
    if quote.food_total:
        text.append(f"Food subtotal:    {format_price(quote.food_total)}\n")
    if quote.drink_total:
        text.append(f"Drinks subtotal:  {format_price(quote.drink_total)}\n")
    text.append(f"Subtotal:         {format_price(quote.subtotal)}\n")
    if quote.discount_amount:
        text.append(f"Discount {quote.discount_percent}%:  -{format_price(quote.discount_amount)}\n", style="green")
        text.append(f"After discount:   {format_price(quote.after_discount)}\n")
    if quote.tip_amount:
        text.append(f"Tip {quote.tip_percent}%:       +{format_price(quote.tip_amount)}\n", style="cyan")
    text.append(f"Total to pay:     {format_price(quote.final_total)}", style="bold")
    if quote.method == "cash" and quote.change is not None:
        text.append(f"\nChange:           {format_price(quote.change)}")
    return text
