"""Add/edit product modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from restobar.catalog import create_product, edit_product
from restobar.data import category_label
from restobar.errors import CatalogError
from restobar.models import CATEGORIES, Product
from restobar.repository import RestobarRepository

_FIELDS = ("name", "price", "category")


class ProductModal(ModalScreen[str | None]):
    """Menu admin form. Dismisses with the saved product id."""

    CSS = """
    ProductModal {
        align: center middle;
        background: $background 60%;
    }

    #product-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #product-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #product-form {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
    }

    #product-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #product-help {
        color: #dddddd;
    }
    """

    def __init__(self, repo: RestobarRepository, product: Product | None = None) -> None:
        super().__init__()
        self.repo = repo
        self.product = product
        self.name_value = product.name if product else ""
        self.price_value = str(product.price) if product else ""
        self.category_index = CATEGORIES.index(product.category) if product else 0
        self.active_field = "name"
        self.error = ""

    def compose(self) -> ComposeResult:
        title = f"Edit {self.product.name}" if self.product else "New product"
        with Container(id="product-dialog"):
            yield Static(title, id="product-title")
            yield Static(id="product-form")
            yield Static(id="product-error")
            yield Static("Tab next field. ←/→ change category. Enter save. Esc cancel.", id="product-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key == "escape":
            self.dismiss(None)
            return
        if event.key == "enter":
            self._save()
            return
        if event.key in {"tab", "down"}:
            self.active_field = _FIELDS[(_FIELDS.index(self.active_field) + 1) % len(_FIELDS)]
        elif event.key in {"shift+tab", "up"}:
            self.active_field = _FIELDS[(_FIELDS.index(self.active_field) - 1) % len(_FIELDS)]
        elif self.active_field == "category":
            if event.key in {"right", "space"}:
                self.category_index = (self.category_index + 1) % len(CATEGORIES)
            elif event.key == "left":
                self.category_index = (self.category_index - 1) % len(CATEGORIES)
        elif event.key == "backspace":
            if self.active_field == "name":
                self.name_value = self.name_value[:-1]
            else:
                self.price_value = self.price_value[:-1]
        elif event.is_printable and event.character:
            if self.active_field == "name":
                self.name_value += event.character
            elif event.character.isdigit() or event.character == ".":
                self.price_value += event.character
        self.error = ""
        self._refresh_content()

    def _save(self) -> None:
        category = CATEGORIES[self.category_index]
        try:
            if self.product is None:
                product_id = create_product(self.repo, self.name_value, self.price_value, category).id
            else:
                product_id = self.product.id
                edit_product(self.repo, product_id, self.name_value, self.price_value, category)
        except CatalogError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss(product_id)

    def _refresh_content(self) -> None:
        values = {
            "name": self.name_value,
            "price": self.price_value,
            "category": f"◀ {category_label(CATEGORIES[self.category_index])} ▶",
        }
        form = Text()
        for field in _FIELDS:
            pointer = "➤ " if field == self.active_field else "  "
            form.append(f"{pointer}{field.title():<9} {values[field]}\n")
        self.query_one("#product-form", Static).update(form)
        self.query_one("#product-error", Static).update(self.error or "")
