"""Table order entry modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from restobar.catalog import filter_by_availability, products_by_category
from restobar.data import category_label
from restobar.errors import OrderError
from restobar.models import Order, Product
from restobar.orders import OrderDraft
from restobar.payment import format_price
from restobar.rendering import format_item_line, format_product_label, format_status
from restobar.repository import RestobarRepository

_FILTER_CYCLE = ("available", "all", "unavailable")


class OrderModal(ModalScreen[Order | None]):
    """Build a new order for one table from the current menu."""

    CSS = """
    OrderModal {
        align: center middle;
        background: $background 60%;
    }

    #order-dialog {
        width: 110;
        height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #order-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #order-menu {
        width: 3fr;
        border: tall $surface;
        padding: 0 1;
    }

    #order-side {
        width: 2fr;
        padding: 0 1;
    }

    #order-draft {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #order-existing {
        height: auto;
        max-height: 12;
        color: #dddddd;
    }

    #order-error {
        color: #ffb3b3;
    }

    #order-help {
        color: #dddddd;
    }
    """

    def __init__(self, repo: RestobarRepository, table_number: int, waiter_name: str | None = None) -> None:
        super().__init__()
        self.repo = repo
        self.table_number = table_number
        self.draft = OrderDraft(table_number, waiter_name)
        self.products = repo.get_products()
        self.existing = [order for order in repo.get_orders_by_table(table_number) if order.is_active]
        self.availability = "available"
        self.cursor = 0
        self.error = ""

    def compose(self) -> ComposeResult:
        with Vertical(id="order-dialog"):
            yield Static(id="order-title")
            with Horizontal():
                yield Static(id="order-menu")
                with Vertical(id="order-side"):
                    yield Static(id="order-draft")
                    yield Static(id="order-existing")
            yield Static(id="order-error")
            yield Static(
                "j/k move. Enter/+ add. -/Backspace remove. f filter. Ctrl+S send. Esc cancel.",
                id="order-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def _visible_products(self) -> list[Product]:
        shown = filter_by_availability(self.products, self.availability)  # type: ignore[arg-type]
        grouped = products_by_category(shown)
        return [product for products in grouped.values() for product in products]

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key in {"escape", "q"}:
            self.dismiss(None)
            return
        if event.key == "ctrl+s":
            self._submit()
            return

        visible = self._visible_products()
        if event.key in {"down", "j"} and visible:
            self.cursor = (self.cursor + 1) % len(visible)
        elif event.key in {"up", "k"} and visible:
            self.cursor = (self.cursor - 1) % len(visible)
        elif event.key == "f":
            idx = _FILTER_CYCLE.index(self.availability)
            self.availability = _FILTER_CYCLE[(idx + 1) % len(_FILTER_CYCLE)]
            self.cursor = 0
        elif event.key in {"enter", "plus"} or event.character == "+":
            if visible:
                self._add(visible[min(self.cursor, len(visible) - 1)])
        elif event.key in {"minus", "backspace"} or event.character == "-":
            if visible:
                self.draft.remove(visible[min(self.cursor, len(visible) - 1)].id)
                self.error = ""
        self._refresh_content()

    def _add(self, product: Product) -> None:
        try:
            self.draft.add(product)
        except OrderError as exc:
            self.error = str(exc)
            return
        self.error = ""

    def _submit(self) -> None:
        try:
            order = self.draft.submit(self.repo)
        except OrderError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss(order)

    def _refresh_content(self) -> None:
        title = f"Table {self.table_number}"
        if self.draft.waiter_name:
            title += f"  ·  waiter {self.draft.waiter_name}"
        self.query_one("#order-title", Static).update(f"{title}  ·  showing {self.availability}")

        visible = self._visible_products()
        if self.cursor >= len(visible):
            self.cursor = max(0, len(visible) - 1)
        menu = Text()
        current_category = None
        for idx, product in enumerate(visible):
            if product.category != current_category:
                current_category = product.category
                if idx > 0:
                    menu.append("\n")
                menu.append(f"{category_label(product.category)}\n", style="bold")
            pointer = "➤ " if idx == self.cursor else "  "
            menu.append(pointer)
            menu.append_text(format_product_label(product, self.draft.quantity_of(product.id)))
            menu.append("\n")
        if not visible:
            menu.append("No products match this filter.")
        self.query_one("#order-menu", Static).update(menu)

        draft = Text()
        draft.append("New order\n", style="bold")
        if self.draft.is_empty:
            draft.append("(no items yet)")
        else:
            for line in self.draft.lines:
                draft.append_text(format_item_line(line))
                draft.append("\n")
            draft.append(f"\nFood:   {format_price(self.draft.food_total)}\n")
            draft.append(f"Drinks: {format_price(self.draft.drink_total)}\n")
            draft.append(f"Total:  {format_price(self.draft.total)}", style="bold")
        self.query_one("#order-draft", Static).update(draft)

        existing = Text()
        if self.existing:
            existing.append("Open orders\n", style="bold")
            for order in self.existing:
                existing.append_text(format_status(order.status))
                existing.append(f" {len(order.items)} items  {format_price(order.total)}\n")
        self.query_one("#order-existing", Static).update(existing)
        self.query_one("#order-error", Static).update(self.error or "")
