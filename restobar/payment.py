"""Payment quotes, settlement and cashier aggregates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, tzinfo
from decimal import Decimal
from typing import Iterable, Literal

from restobar.config import CURRENCY_PREFIX, MAX_DISCOUNT_PERCENT, MAX_TIP_PERCENT
from restobar.errors import PaymentError
from restobar.models import Order, sum_items, to_money
from restobar.orders import mark_paid
from restobar.repository import RestobarRepository

logger = logging.getLogger(__name__)

PaymentMethod = Literal["cash", "mobile-wallet"]
CashierView = Literal["food", "drinks", "general"]

PAYMENT_METHODS: tuple[PaymentMethod, ...] = ("cash", "mobile-wallet")
CASHIER_VIEWS: tuple[CashierView, ...] = ("food", "drinks", "general")

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PaymentQuote:
    food_total: Decimal
    drink_total: Decimal
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    after_discount: Decimal
    tip_percent: Decimal
    tip_amount: Decimal
    final_total: Decimal
    method: PaymentMethod
    received_amount: Decimal | None = None
    change: Decimal | None = None

    @property
    def is_sufficient(self) -> bool:
        """Whether the tender covers the total; always true for wallet payments."""
        if self.method != "cash":
            return True
        return self.received_amount is not None and self.received_amount >= self.final_total


def _percent(raw: object, upper: int, label: str) -> Decimal:
    try:
        value = to_money(raw)
    except ValueError:
        raise PaymentError(f"{label} must be a number.") from None
    if not value.is_finite() or value < 0 or value > upper:
        raise PaymentError(f"{label} must be between 0 and {upper}%.")
    return value


def clamp_percent(raw: str, upper: int) -> Decimal:
    """Read a percent typed into a form, clamped to [0, upper]; junk reads as 0."""
    try:
        value = to_money(raw)
    except ValueError:
        return _ZERO
    if not value.is_finite():
        return _ZERO
    return min(max(value, _ZERO), Decimal(upper))


def quote_payment(
    order: Order,
    discount_percent: object = 0,
    tip_percent: object = 0,
    method: str = "cash",
    received_amount: object | None = None,
) -> PaymentQuote:
    """Work out discount, tip, final total and change for one order.

    The subtotal is taken from the food and drink items, not from the
    stored order total. The tip applies to the discounted amount.
    """
    if method not in PAYMENT_METHODS:
        raise PaymentError(f"Unknown payment method: {method}")
    discount = _percent(discount_percent, MAX_DISCOUNT_PERCENT, "Discount")
    tip = _percent(tip_percent, MAX_TIP_PERCENT, "Tip")

    food_total = sum_items(order.food_items)
    drink_total = sum_items(order.drink_items)
    subtotal = food_total + drink_total
    discount_amount = subtotal * discount / _HUNDRED
    after_discount = subtotal - discount_amount
    tip_amount = after_discount * tip / _HUNDRED
    final_total = after_discount + tip_amount

    received: Decimal | None = None
    change: Decimal | None = None
    if method == "cash" and received_amount is not None and str(received_amount).strip():
        try:
            received = to_money(received_amount)
        except ValueError:
            raise PaymentError("Received amount must be a number.") from None
        if not received.is_finite():
            raise PaymentError("Received amount must be a number.")
        change = max(_ZERO, received - final_total)

    return PaymentQuote(
        food_total=food_total,
        drink_total=drink_total,
        subtotal=subtotal,
        discount_percent=discount,
        discount_amount=discount_amount,
        after_discount=after_discount,
        tip_percent=tip,
        tip_amount=tip_amount,
        final_total=final_total,
        method=method,  # type: ignore[arg-type]
        received_amount=received,
        change=change,
    )


def settle_payment(
    repo: RestobarRepository,
    order: Order,
    discount_percent: object = 0,
    tip_percent: object = 0,
    method: str = "cash",
    received_amount: object | None = None,
) -> PaymentQuote:
    """Quote the payment and, if the tender is enough, mark the order paid.

    Raises PaymentError without touching the order when the inputs are
    invalid or cash received does not cover the final total.
    """
    if order.status == "paid":
        raise PaymentError("This order is already paid.")
    quote = quote_payment(order, discount_percent, tip_percent, method, received_amount)
    if quote.method == "cash" and quote.received_amount is None:
        raise PaymentError("Enter the amount received.")
    if not quote.is_sufficient:
        raise PaymentError("The amount received is not enough.")
    if not mark_paid(repo, order.id):
        logger.warning("settle_payment could not mark order id=%s as paid", order.id)
    logger.info(
        "payment settled order=%s table=%d method=%s final=%s change=%s",
        order.id,
        order.table_number,
        quote.method,
        quote.final_total,
        quote.change,
    )
    return quote


# -------------------- Cashier views --------------------


def cashier_view(orders: Iterable[Order], view: CashierView) -> list[Order]:
    """Orders shown at each cashier screen.

    The food and drinks screens are history lists, newest first. The general
    screen lists orders that are ready to be charged.
    """
    if view == "food":
        selected = [order for order in orders if order.food_items]
    elif view == "drinks":
        selected = [order for order in orders if order.drink_items]
    elif view == "general":
        return [order for order in orders if order.status == "ready"]
    else:
        raise ValueError(f"unknown cashier view: {view!r}")
    selected.sort(key=lambda order: order.created_at, reverse=True)
    return selected


def view_can_pay(view: str) -> bool:
    return view == "general"


@dataclass(frozen=True)
class SalesTotals:
    food: Decimal
    drinks: Decimal

    @property
    def general(self) -> Decimal:
        return self.food + self.drinks


def paid_totals(orders: Iterable[Order]) -> SalesTotals:
    """Food and drink takings over every paid order."""
    paid = [order for order in orders if order.status == "paid"]
    return SalesTotals(
        food=sum((sum_items(order.food_items) for order in paid), _ZERO),
        drinks=sum((sum_items(order.drink_items) for order in paid), _ZERO),
    )


def daily_totals(orders: Iterable[Order], day: date | None = None, tz: tzinfo | None = None) -> SalesTotals:
    """Takings of paid orders created on ``day`` (today by default) in local time."""
    target = day or date.today()
    return paid_totals(order for order in orders if order.created_at.astimezone(tz).date() == target)


def format_price(amount: Decimal | int | float) -> str:
    return f"{CURRENCY_PREFIX} {to_money(amount):.2f}"
