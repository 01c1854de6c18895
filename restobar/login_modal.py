"""Staff login modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from restobar.constant import ROLE_LABELS
from restobar.staff import ROLES, authenticate


class LoginModal(ModalScreen[tuple[str, str] | None]):
    """Pick a role, then type its username and password.

    Dismisses with ``(role, display_name)`` once the credentials match.
    """

    CSS = """
    LoginModal {
        align: center middle;
        background: $background 60%;
    }

    #login-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #login-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #login-body {
        color: white;
        margin-bottom: 1;
    }

    #login-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #login-help {
        color: #dddddd;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.stage = "role"
        self.role_index = 0
        self.username = ""
        self.password = ""
        self.active_field = "username"
        self.error = ""

    @property
    def role(self) -> str:
        return ROLES[self.role_index]

    def compose(self) -> ComposeResult:
        with Container(id="login-dialog"):
            yield Static("Restobar", id="login-title")
            yield Static(id="login-body")
            yield Static(id="login-error")
            yield Static(id="login-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if self.stage == "role":
            self._handle_role_key(event)
        else:
            self._handle_credentials_key(event)
        event.stop()

    def _handle_role_key(self, event: Key) -> None:
        if event.key in {"down", "j", "tab"}:
            self.role_index = (self.role_index + 1) % len(ROLES)
        elif event.key in {"up", "k"}:
            self.role_index = (self.role_index - 1) % len(ROLES)
        elif event.key == "enter":
            self.stage = "credentials"
            self.active_field = "username"
            self.error = ""
        self._refresh_content()

    def _handle_credentials_key(self, event: Key) -> None:
        if event.key == "escape":
            self.stage = "role"
            self.username = ""
            self.password = ""
            self.error = ""
        elif event.key in {"tab", "down", "up"}:
            self.active_field = "password" if self.active_field == "username" else "username"
        elif event.key == "enter":
            self._confirm()
            return
        elif event.key == "backspace":
            if self.active_field == "username":
                self.username = self.username[:-1]
            else:
                self.password = self.password[:-1]
        elif event.is_printable and event.character:
            if self.active_field == "username":
                self.username += event.character
            else:
                self.password += event.character
            self.error = ""
        self._refresh_content()

    def _confirm(self) -> None:
        display_name = authenticate(self.role, self.username, self.password)
        if display_name is None:
            self.error = "Wrong username or password."
            self.password = ""
            self._refresh_content()
            return
        self.dismiss((self.role, display_name))

    def _refresh_content(self) -> None:
        body = self.query_one("#login-body", Static)
        error_widget = self.query_one("#login-error", Static)
        help_widget = self.query_one("#login-help", Static)

        text = Text()
        if self.stage == "role":
            text.append("Who is working?\n\n")
            for idx, role in enumerate(ROLES):
                pointer = "➤ " if idx == self.role_index else "  "
                text.append(f"{pointer}{ROLE_LABELS[role]}\n", style="bold" if idx == self.role_index else "")
            help_widget.update("j/k move. Enter choose. Ctrl+Q quit.")
        else:
            text.append(f"{ROLE_LABELS[self.role]} login\n\n", style="bold")
            for field, value in (("username", self.username), ("password", "*" * len(self.password))):
                pointer = "➤ " if field == self.active_field else "  "
                text.append(f"{pointer}{field.title()}: {value}\n")
            help_widget.update("Tab switch field. Enter log in. Esc back.")
        body.update(text)
        error_widget.update(self.error or "")
