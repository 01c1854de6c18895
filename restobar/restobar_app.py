"""Main Textual app class."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from restobar.catalog import FOOD_MENU_CATEGORIES, products_by_category, remove_product, toggle_availability
from restobar.constant import ROLE_LABELS, VIEW_LABELS
from restobar.data import category_label
from restobar.login_modal import LoginModal
from restobar.models import Order
from restobar.order_modal import OrderModal
from restobar.orders import advance_order, kitchen_counts, kitchen_queue, next_status, tables_overview
from restobar.payment import PaymentQuote, cashier_view, daily_totals, format_price, paid_totals, view_can_pay
from restobar.payment_modal import PaymentModal
from restobar.printer import check_printer_dependencies, print_kitchen_ticket, print_receipt
from restobar.product_modal import ProductModal
from restobar.rendering import format_kitchen_order, format_order_summary, format_product_label, format_table_cell
from restobar.repository import RestobarRepository
from restobar.staff import VIEWS, allowed_views, can_view, home_view

logger = logging.getLogger(__name__)

_KITCHEN_FILTERS = ("all", "pending", "in-kitchen")


class RestobarApp(App):
    """Front and back of house for one restaurant: tables, kitchen, cashier and menu."""

    TITLE = "Restobar"
    SUB_TITLE = "Tables · Kitchen · Cashier"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #view-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #view-summary {
        margin-bottom: 1;
    }

    #view-body {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }
    """

    current_view = reactive("tables")
    selected_index = reactive(0)

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, repo: RestobarRepository) -> None:
        super().__init__()
        self.repo = repo
        self.role: str | None = None
        self.user_name = ""
        self.kitchen_tab = "orders"
        self.kitchen_filter = "all"
        self.kitchen_sort = "time"
        self.pending_delete: str | None = None
        self.printing_ready = False
        self.system_status = ""
        self._row_keys: list[object] = []
        self._paying_order: Order | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-pane"):
            yield Static(id="view-title")
            yield Static(id="view-summary")
            yield Static(id="view-body")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self.printing_ready, msg = check_printer_dependencies()
        self.system_status = msg
        logger.info("app mounted printer_status=%r", msg)
        self._refresh_all()
        self.push_screen(LoginModal(), self._on_login)

    # -------------------- Session --------------------

    def _on_login(self, result: tuple[str, str] | None) -> None:
        if result is None:
            self.push_screen(LoginModal(), self._on_login)
            return
        self.role, self.user_name = result
        self.current_view = home_view(self.role)
        self.selected_index = 0
        self.system_status = f"Welcome, {self.user_name}"
        logger.info("session started role=%s user=%r", self.role, self.user_name)
        self._refresh_all()

    def action_logout(self) -> None:
        logger.info("session ended role=%s user=%r", self.role, self.user_name)
        self.role = None
        self.user_name = ""
        self.system_status = ""
        self._refresh_all()
        self.push_screen(LoginModal(), self._on_login)

    # -------------------- Keys --------------------

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen) or self.role is None:
            return

        key = event.key
        if key in {"down", "j"}:
            self._move_selection(1)
        elif key in {"up", "k"}:
            self._move_selection(-1)
        elif key == "enter":
            self._activate_selected()
        elif key.isdigit() and 1 <= int(key) <= len(VIEWS):
            self._switch_view(VIEWS[int(key) - 1])
        elif key == "l":
            self.action_logout()
            event.stop()
            return
        elif key == "r":
            self.system_status = "Refreshed"
        elif self.current_view == "kitchen" and key in {"f", "s", "a"}:
            self._kitchen_key(key)
        elif self.current_view == "menu" and key in {"a", "e", "d", "t"}:
            self._menu_key(key)
        else:
            return
        if key != "d":
            self.pending_delete = None
        self._refresh_all()
        event.stop()

    def _switch_view(self, view: str) -> None:
        if not can_view(self.role, view):
            self.system_status = f"{VIEW_LABELS[view]} is not available for {ROLE_LABELS.get(self.role or '', '')}"
            return
        self.current_view = view
        self.selected_index = 0
        self.system_status = ""

    def _move_selection(self, delta: int) -> None:
        if not self._row_keys:
            return
        self.selected_index = (self.selected_index + delta) % len(self._row_keys)

    def _selected_key(self) -> object | None:
        if not self._row_keys or not (0 <= self.selected_index < len(self._row_keys)):
            return None
        return self._row_keys[self.selected_index]

    def _activate_selected(self) -> None:
        key = self._selected_key()
        if key is None:
            return
        if self.current_view == "tables":
            self.push_screen(OrderModal(self.repo, int(key), self.user_name or None), self._after_order)
        elif self.current_view == "kitchen" and self.kitchen_tab == "orders":
            self._advance_kitchen_order(str(key))
        elif self.current_view == "kitchen":
            self._toggle_product(str(key))
        elif self.current_view.startswith("cashier-"):
            kind = self.current_view.removeprefix("cashier-")
            if not view_can_pay(kind):
                self.system_status = "Take payments from the general cashier (key 5)."
                return
            order = self.repo.get_order(str(key))
            if order is not None:
                self._paying_order = order
                self.push_screen(PaymentModal(self.repo, order), self._after_payment)
        elif self.current_view == "menu":
            product = next((p for p in self.repo.get_products() if p.id == key), None)
            if product is not None:
                self.push_screen(ProductModal(self.repo, product), self._after_product)

    # -------------------- Actions --------------------

    def _after_order(self, order: Order | None) -> None:
        if order is None:
            self._refresh_all()
            return
        self.system_status = f"Order sent for table {order.table_number}: {format_price(order.total)}"
        if self.printing_ready:
            try:
                print_kitchen_ticket(order)
            except Exception as exc:
                self.system_status = f"Order saved but kitchen ticket failed: {exc}"
                logger.warning("kitchen ticket failed order=%s error=%r", order.id, exc)
        self._refresh_all()

    def _after_payment(self, quote: PaymentQuote | None) -> None:
        if quote is None:
            self._paying_order = None
            self._refresh_all()
            return
        status = f"Paid {format_price(quote.final_total)}"
        if quote.method == "cash" and quote.change is not None:
            status += f", change {format_price(quote.change)}"
        self.system_status = status
        order, self._paying_order = self._paying_order, None
        if self.printing_ready and order is not None:
            try:
                print_receipt(order, quote)
            except Exception as exc:
                self.system_status = f"{status}; receipt failed: {exc}"
                logger.warning("receipt failed error=%r", exc)
        self._refresh_all()

    def _after_product(self, product_id: str | None) -> None:
        if product_id is not None:
            self.system_status = "Menu saved"
        self._refresh_all()

    def _advance_kitchen_order(self, order_id: str) -> None:
        order = self.repo.get_order(order_id)
        if order is None:
            return
        target = next_status(order.status)
        if target is None or target == "paid":
            return
        if advance_order(self.repo, order_id, target):
            self.system_status = f"Table {order.table_number}: {order.status} → {target}"

    def _toggle_product(self, product_id: str) -> None:
        if toggle_availability(self.repo, product_id):
            self.system_status = "Availability updated"

    def _kitchen_key(self, key: str) -> None:
        if key == "a":
            self.kitchen_tab = "availability" if self.kitchen_tab == "orders" else "orders"
            self.selected_index = 0
        elif key == "f":
            idx = _KITCHEN_FILTERS.index(self.kitchen_filter)
            self.kitchen_filter = _KITCHEN_FILTERS[(idx + 1) % len(_KITCHEN_FILTERS)]
            self.selected_index = 0
        elif key == "s":
            self.kitchen_sort = "table" if self.kitchen_sort == "time" else "time"

    def _menu_key(self, key: str) -> None:
        if key == "a":
            self.push_screen(ProductModal(self.repo), self._after_product)
            return
        selected = self._selected_key()
        if selected is None:
            return
        product = next((p for p in self.repo.get_products() if p.id == selected), None)
        if product is None:
            return
        if key == "e":
            self.push_screen(ProductModal(self.repo, product), self._after_product)
        elif key == "t":
            self._toggle_product(product.id)
        elif key == "d":
            if self.pending_delete != product.id:
                self.pending_delete = product.id
                self.system_status = f"Press d again to delete {product.name}"
                return
            self.pending_delete = None
            if remove_product(self.repo, product.id):
                self.system_status = f"{product.name} removed from the menu"

    # -------------------- Rendering --------------------

    def _rows(self, now: datetime) -> tuple[Text, list[tuple[object, Text]]]:
        """Summary line plus (key, label) rows for the current view."""
        orders = self.repo.get_orders()
        summary = Text()

        if self.current_view == "tables":
            overview = tables_overview(self.repo.get_tables(), orders)
            occupied = sum(1 for details in overview if details.status == "occupied")
            summary.append(f"{occupied} of {len(overview)} tables occupied")
            return summary, [(details.number, format_table_cell(details)) for details in overview]

        if self.current_view == "kitchen":
            counts = kitchen_counts(orders)
            summary.append(f" {counts['pending']} new ", style="bold #ffffff on #b23a48")
            summary.append(" ")
            summary.append(f" {counts['in-kitchen']} cooking ", style="bold #0b1f0f on #f0b429")
            if self.kitchen_tab == "availability":
                summary.append("  ·  availability (a: back to orders, Enter: toggle)")
                grouped = products_by_category(self.repo.get_products(), FOOD_MENU_CATEGORIES)
                rows = [(product.id, format_product_label(product)) for items in grouped.values() for product in items]
                return summary, rows
            summary.append(f"  ·  filter {self.kitchen_filter} (f)  ·  sort by {self.kitchen_sort} (s)  ·  a: availability")
            queue = kitchen_queue(orders, self.kitchen_filter, self.kitchen_sort)  # type: ignore[arg-type]
            return summary, [(order.id, format_kitchen_order(order, now)) for order in queue]

        if self.current_view.startswith("cashier-"):
            kind = self.current_view.removeprefix("cashier-")
            today = daily_totals(orders)
            if kind == "food":
                summary.append(f"Today: {format_price(today.food)}")
            elif kind == "drinks":
                summary.append(f"Today: {format_price(today.drinks)}")
            else:
                overall = paid_totals(orders)
                summary.append(
                    f"Today food {format_price(today.food)} · drinks {format_price(today.drinks)}"
                    f" · total {format_price(today.general)}"
                    f"   |   All time {format_price(overall.general)}"
                )
            rows = [
                (
                    order.id,
                    format_order_summary(order, show_food=kind != "drinks", show_drinks=kind != "food"),
                )
                for order in cashier_view(orders, kind)  # type: ignore[arg-type]
            ]
            return summary, rows

        products = self.repo.get_products()
        summary.append(f"{len(products)} products · a add · e edit · t toggle · d delete")
        rows = []
        for category, items in products_by_category(products).items():
            for product in items:
                label = Text(f"{category_label(category)[:3]}  ", style="dim")
                label.append_text(format_product_label(product))
                rows.append((product.id, label))
        return summary, rows

    def _refresh_all(self) -> None:
        try:
            title = self.query_one("#view-title", Static)
            summary_widget = self.query_one("#view-summary", Static)
            body = self.query_one("#view-body", Static)
            status_bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return

        if self.role is None:
            title.update("Not logged in")
            summary_widget.update("")
            body.update("")
            self._row_keys = []
            status_bar.update(self.system_status or "Ready")
            return

        summary, rows = self._rows(datetime.now(timezone.utc))
        self._row_keys = [key for key, _ in rows]
        if self.selected_index >= len(rows):
            self.selected_index = max(0, len(rows) - 1)

        title.update(f"{VIEW_LABELS[self.current_view]}  ·  {self.user_name} ({ROLE_LABELS[self.role]})")
        summary_widget.update(summary)
        body.update(self._render_rows(body, [label for _, label in rows]))

        shortcuts = "  ".join(
            f"{VIEWS.index(view) + 1}:{VIEW_LABELS[view]}" for view in allowed_views(self.role)
        )
        status_bar.update(f"{shortcuts}  j/k move  Enter select  r refresh  l logout\n{self.system_status or 'Ready'}")

    def _render_rows(self, widget: Static, labels: list[Text]) -> Text | str:
        if not labels:
            return "(nothing here yet)"
        start, end = self._window_bounds(len(labels), self._visible_rows(widget), self.selected_index)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(labels[idx])
        if end < len(labels):
            lines.append("\n⋮", style="dim")
        return lines

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        # Kitchen and cashier rows span several lines each.
        multi_line = self.current_view.startswith("cashier-") or (
            self.current_view == "kitchen" and self.kitchen_tab == "orders"
        )
        if multi_line:
            return max(1, height // 4)
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)
