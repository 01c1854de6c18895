"""Cashier payment modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from restobar.config import MAX_DISCOUNT_PERCENT, MAX_TIP_PERCENT
from restobar.errors import PaymentError
from restobar.models import Order
from restobar.payment import PaymentQuote, clamp_percent, quote_payment, settle_payment
from restobar.rendering import format_order_summary, format_quote
from restobar.repository import RestobarRepository

_METHOD_LABELS = {"cash": "Cash", "mobile-wallet": "Mobile wallet"}


class PaymentModal(ModalScreen[PaymentQuote | None]):
    """Charge one ready order with optional discount and tip."""

    CSS = """
    PaymentModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #payment-order {
        margin-bottom: 1;
    }

    #payment-form {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
    }

    #payment-quote {
        margin-bottom: 1;
    }

    #payment-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #payment-help {
        color: #dddddd;
    }
    """

    def __init__(self, repo: RestobarRepository, order: Order) -> None:
        super().__init__()
        self.repo = repo
        self.order = order
        self.values = {"discount": "0", "tip": "0", "received": ""}
        self.method = "cash"
        self.active_field = "discount"
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static(f"Payment · Table {self.order.table_number}", id="payment-title")
            yield Static(id="payment-order")
            yield Static(id="payment-form")
            yield Static(id="payment-quote")
            yield Static(id="payment-error")
            yield Static(
                "Tab next field. m switch method. Enter charge. Esc cancel.",
                id="payment-help",
            )

    def on_mount(self) -> None:
        self.query_one("#payment-order", Static).update(format_order_summary(self.order))
        self._refresh_content()

    def _fields(self) -> list[str]:
        if self.method == "cash":
            return ["discount", "tip", "received"]
        return ["discount", "tip"]

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key in {"escape", "q"}:
            self.dismiss(None)
            return
        if event.key == "enter":
            self._confirm()
            return

        fields = self._fields()
        if event.key in {"tab", "down"}:
            self.active_field = fields[(fields.index(self.active_field) + 1) % len(fields)]
        elif event.key in {"shift+tab", "up"}:
            self.active_field = fields[(fields.index(self.active_field) - 1) % len(fields)]
        elif event.key == "m":
            self.method = "mobile-wallet" if self.method == "cash" else "cash"
            if self.active_field not in self._fields():
                self.active_field = "discount"
        elif event.key == "backspace":
            self.values[self.active_field] = self.values[self.active_field][:-1]
        elif event.character and (event.character.isdigit() or event.character == "."):
            if len(self.values[self.active_field]) < 10:
                self.values[self.active_field] += event.character
        else:
            return
        self.error = ""
        self._refresh_content()

    def _inputs(self) -> tuple[object, object, object | None]:
        discount = clamp_percent(self.values["discount"], MAX_DISCOUNT_PERCENT)
        tip = clamp_percent(self.values["tip"], MAX_TIP_PERCENT)
        received = self.values["received"] if self.method == "cash" and self.values["received"] else None
        return discount, tip, received

    def _confirm(self) -> None:
        discount, tip, received = self._inputs()
        try:
            quote = settle_payment(self.repo, self.order, discount, tip, self.method, received)
        except PaymentError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss(quote)

    def _refresh_content(self) -> None:
        form = Text()
        form.append(f"Method: {_METHOD_LABELS[self.method]}\n", style="bold")
        labels = {"discount": "Discount %", "tip": "Tip %", "received": "Received"}
        for field in self._fields():
            pointer = "➤ " if field == self.active_field else "  "
            form.append(f"{pointer}{labels[field]:<11} {self.values[field]}\n")
        self.query_one("#payment-form", Static).update(form)

        discount, tip, received = self._inputs()
        quote_widget = self.query_one("#payment-quote", Static)
        try:
            quote_widget.update(format_quote(quote_payment(self.order, discount, tip, self.method, received)))
        except PaymentError as exc:
            quote_widget.update(str(exc))
        self.query_one("#payment-error", Static).update(self.error or "")
