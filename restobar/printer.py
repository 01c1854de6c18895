"""Thermal ticket printing for kitchen tickets and customer receipts."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from restobar.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
    PRINTING_ENABLED,
)
from restobar.models import Order
from restobar.payment import PaymentQuote, format_price

logger = logging.getLogger(__name__)

_SEPARATOR_TOKEN = "__SEP__"
_SEPARATOR_HEIGHT_PX = 14
_SEPARATOR_THICKNESS_PX = 3
# Extra vertical headroom so descenders are not clipped on thermal output.
_LINE_EXTRA_PX = 14
_FONT_OVERRIDE_ENV = "RESTOBAR_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def kitchen_ticket_lines(order: Order) -> list[str]:
    """Lines for the kitchen: table, waiter and food items only."""
    if not order.food_items:
        return []
    stamp = order.created_at.astimezone().strftime("%H:%M")
    lines = [f"TABLE {order.table_number}", f"{stamp}  {order.waiter_name or ''}".rstrip(), _SEPARATOR_TOKEN]
    lines.extend(f"{item.quantity} x {item.product_name}" for item in order.food_items)
    return lines


def receipt_lines(order: Order, quote: PaymentQuote) -> list[str]:
    """Lines for the customer receipt of a settled payment."""
    stamp = order.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
    lines = [f"Table {order.table_number}", stamp, _SEPARATOR_TOKEN]
    for item in order.food_items + order.drink_items:
        lines.append(f"{item.quantity} x {item.product_name}")
        lines.append(f"    {format_price(item.line_total)}")
    lines.append(_SEPARATOR_TOKEN)
    lines.append(f"Subtotal {format_price(quote.subtotal)}")
    if quote.discount_amount:
        lines.append(f"Discount -{format_price(quote.discount_amount)}")
    if quote.tip_amount:
        lines.append(f"Tip +{format_price(quote.tip_amount)}")
    lines.append(f"TOTAL {format_price(quote.final_total)}")
    if quote.method == "cash":
        if quote.received_amount is not None:
            lines.append(f"Cash {format_price(quote.received_amount)}")
        if quote.change is not None:
            lines.append(f"Change {format_price(quote.change)}")
    else:
        lines.append("Paid by mobile wallet")
    return lines


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. RESTOBAR_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printing is switched on and its dependencies load."""
    if not PRINTING_ENABLED:
        return (False, "Printing off")
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def _render_line(text: str, font: object) -> object:
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)

    bbox = draw.textbbox((0, 0), text, font=font)
    text_height = bbox[3] - bbox[1]

    x = PRINTER_LEFT_INDENT_PX
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((x, y), text, font=font, fill=0)
    return img


def _render_separator() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _SEPARATOR_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = (_SEPARATOR_HEIGHT_PX - _SEPARATOR_THICKNESS_PX) // 2
    draw.rectangle((0, top, PRINTER_WIDTH_PX - 1, top + _SEPARATOR_THICKNESS_PX - 1), fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def _open_printer() -> tuple[object, object]:
    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    return printer, font


def print_lines(lines: list[str], printer: object | None = None, font: object | None = None) -> None:
    """Print lines top to bottom and cut the ticket at the end."""
    if not lines:
        return
    if printer is None or font is None:
        printer, font = _open_printer()
    for line in lines:
        if line == _SEPARATOR_TOKEN:
            printer.image(_render_separator())
        else:
            printer.image(_render_line(line, font))
    printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
    printer.cut()


def print_kitchen_ticket(order: Order) -> bool:
    """Print the food part of a new order. Returns False when there is nothing to cook."""
    lines = kitchen_ticket_lines(order)
    if not lines:
        return False
    print_lines(lines)
    logger.info("kitchen ticket printed order=%s", order.id)
    return True


def print_receipt(order: Order, quote: PaymentQuote) -> None:
    print_lines(receipt_lines(order, quote))
    logger.info("receipt printed order=%s", order.id)
