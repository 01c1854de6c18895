"""Operator-facing validation errors."""

from __future__ import annotations


class RestobarError(Exception):
    """Base class for errors that are shown to the operator as a blocking message."""


class OrderError(RestobarError, ValueError):
    """An order could not be built or submitted."""


class PaymentError(RestobarError, ValueError):
    """A payment could not be quoted or settled."""


class CatalogError(RestobarError, ValueError):
    """A product form is incomplete or invalid."""
