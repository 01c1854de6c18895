"""Menu catalog management and availability filters."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Literal

from restobar.errors import CatalogError
from restobar.models import CATEGORIES, Category, Product, generate_id, to_money
from restobar.repository import RestobarRepository

AvailabilityFilter = Literal["all", "available", "unavailable"]

FOOD_MENU_CATEGORIES: tuple[Category, ...] = ("entrada", "plato", "postre")


def parse_price(raw: object) -> Decimal:
    """Parse a typed price; it must be a number greater than zero."""
    try:
        price = to_money(raw)
    except ValueError:
        raise CatalogError("Price must be a valid number greater than 0.") from None
    if not price.is_finite() or price <= 0:
        raise CatalogError("Price must be a valid number greater than 0.")
    return price


def validate_product_form(name: str, price: str, category: str) -> tuple[str, Decimal, Category]:
    """Validate the add/edit product form and return cleaned values."""
    clean_name = (name or "").strip()
    if not clean_name or not str(price or "").strip():
        raise CatalogError("Please fill in all fields.")
    if category not in CATEGORIES:
        raise CatalogError(f"Unknown category: {category}")
    return clean_name, parse_price(price), category  # type: ignore[return-value]


def create_product(repo: RestobarRepository, name: str, price: str, category: str) -> Product:
    clean_name, clean_price, clean_category = validate_product_form(name, price, category)
    product = Product(id=generate_id(), name=clean_name, price=clean_price, category=clean_category, available=True)
    repo.add_product(product)
    return product


def edit_product(repo: RestobarRepository, product_id: str, name: str, price: str, category: str) -> bool:
    """Rewrite name, price and category. Existing orders keep their snapshots."""
    clean_name, clean_price, clean_category = validate_product_form(name, price, category)
    return repo.update_product(product_id, name=clean_name, price=clean_price, category=clean_category)


def remove_product(repo: RestobarRepository, product_id: str) -> bool:
    return repo.delete_product(product_id)


def toggle_availability(repo: RestobarRepository, product_id: str) -> bool:
    return repo.toggle_product_availability(product_id)


def products_by_category(
    products: Iterable[Product],
    categories: Iterable[Category] = CATEGORIES,
) -> dict[Category, list[Product]]:
    """Group products under each requested category, keeping catalog order."""
    grouped: dict[Category, list[Product]] = {category: [] for category in categories}
    for product in products:
        if product.category in grouped:
            grouped[product.category].append(product)
    return grouped


def filter_by_availability(products: Iterable[Product], mode: AvailabilityFilter = "all") -> list[Product]:
    if mode == "available":
        return [product for product in products if product.available]
    if mode == "unavailable":
        return [product for product in products if not product.available]
    return list(products)
