"""Staff roles and the screens each one may open."""

from __future__ import annotations

import logging
from typing import Literal

from restobar.constant import STAFF_CREDENTIALS

logger = logging.getLogger(__name__)

Role = Literal["admin", "mesero", "cocina", "caja"]
View = Literal["tables", "kitchen", "cashier-food", "cashier-drinks", "cashier-general", "menu"]

ROLES: tuple[Role, ...] = ("mesero", "cocina", "caja", "admin")
VIEWS: tuple[View, ...] = ("tables", "kitchen", "cashier-food", "cashier-drinks", "cashier-general", "menu")

_ROLE_VIEWS: dict[str, frozenset[str]] = {
    "mesero": frozenset({"tables"}),
    "cocina": frozenset({"kitchen"}),
    "caja": frozenset({"cashier-food", "cashier-drinks", "cashier-general"}),
}

_HOME_VIEWS: dict[str, View] = {
    "mesero": "tables",
    "cocina": "kitchen",
    "caja": "cashier-general",
    "admin": "tables",
}


def authenticate(role: str, username: str, password: str) -> str | None:
    """Return the staff display name when the demo credentials match."""
    account = STAFF_CREDENTIALS.get(role)
    if account is None:
        return None
    if username.strip() == account["username"] and password == account["password"]:
        logger.info("login role=%s user=%s", role, account["username"])
        return account["display_name"]
    logger.info("login rejected role=%s user=%r", role, username)
    return None


def can_view(role: str | None, view: str) -> bool:
    if role == "admin":
        return view in VIEWS
    return view in _ROLE_VIEWS.get(role or "", frozenset())


def allowed_views(role: str | None) -> list[View]:
    return [view for view in VIEWS if can_view(role, view)]


def home_view(role: str) -> View:
    return _HOME_VIEWS.get(role, "tables")
