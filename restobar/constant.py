"""Raw static data: default menu, display labels and staff accounts."""

from __future__ import annotations

# (id, name, price, category)
DEFAULT_MENU_ROWS: tuple[tuple[str, str, str, str], ...] = (
    # Starters
    ("1", "Tequeños", "28.50", "entrada"),
    ("2", "Empanadas", "20.00", "entrada"),
    ("3", "Patacones", "23.00", "entrada"),
    # Mains
    ("4", "Pabellón Criollo", "50.00", "plato"),
    ("5", "Asado Negro", "60.00", "plato"),
    ("6", "Pollo a la Plancha", "40.00", "plato"),
    # Drinks
    ("7", "Cerveza Polar", "12.00", "bebida"),
    ("8", "Coca Cola", "8.50", "bebida"),
    ("9", "Jugo Natural", "13.00", "bebida"),
    # Desserts
    ("10", "Tres Leches", "18.50", "postre"),
    ("11", "Quesillo", "15.00", "postre"),
)

CATEGORY_LABELS: dict[str, str] = {
    "entrada": "Starters",
    "plato": "Mains",
    "bebida": "Drinks",
    "postre": "Desserts",
}

STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "in-kitchen": "In kitchen",
    "ready": "Ready",
    "paid": "Paid",
}

PRIORITY_LABELS: dict[str, str] = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
}

ROLE_LABELS: dict[str, str] = {
    "admin": "Administrator",
    "mesero": "Waiter",
    "cocina": "Kitchen",
    "caja": "Cashier",
}

# Demo accounts; there is no real authentication behind these.
STAFF_CREDENTIALS: dict[str, dict[str, str]] = {
    "admin": {"username": "admin", "password": "admin123", "display_name": "Administrador"},
    "mesero": {"username": "mesero", "password": "mesero123", "display_name": "Juan Pérez"},
    "cocina": {"username": "cocina", "password": "cocina123", "display_name": "Chef María"},
    "caja": {"username": "caja", "password": "caja123", "display_name": "Ana García"},
}

VIEW_LABELS: dict[str, str] = {
    "tables": "Tables",
    "kitchen": "Kitchen",
    "cashier-food": "Food cashier",
    "cashier-drinks": "Drinks cashier",
    "cashier-general": "General cashier",
    "menu": "Menu admin",
}
