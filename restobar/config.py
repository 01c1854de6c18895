"""Runtime configuration defaults for persistence, logging and printing."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DB_PATH = os.environ.get("RESTOBAR_DB_PATH", "data/restobar.db")

LOG_PATH = os.environ.get("RESTOBAR_LOG_PATH", "/tmp/restobar-debug.log")
LOG_LEVEL = os.environ.get("RESTOBAR_LOG_LEVEL", "INFO").upper()

# Collection names inside the store; exported data uses the same keys.
PRODUCTS_KEY = "restobar_products"
TABLES_KEY = "restobar_tables"
ORDERS_KEY = "restobar_orders"

DEFAULT_TABLE_COUNT = 20
UNASSIGNED_WAITER = "unassigned"
CURRENCY_PREFIX = "S/"

# Kitchen priority thresholds in minutes waited.
PRIORITY_MEDIUM_AFTER_MINUTES = 15
PRIORITY_HIGH_AFTER_MINUTES = 30

MAX_DISCOUNT_PERCENT = 100
MAX_TIP_PERCENT = 50

PRINTING_ENABLED = os.environ.get("RESTOBAR_PRINTING", "0") == "1"
PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70


def configure_logging(path: str | None = None, level: str | None = None) -> None:
    """Send application logs to the debug log file.

    Textual owns the terminal, so nothing goes to stdout. Safe to call twice.
    """
    root = logging.getLogger("restobar")
    if root.handlers:
        return
    root.setLevel(getattr(logging, level or LOG_LEVEL, logging.INFO))
    log_file = Path(path or LOG_PATH)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        # Logging must never interfere with app flow.
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
    root.propagate = False
