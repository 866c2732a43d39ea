"""Catalogue and order history stores over a :class:`StorageBackend`."""

from __future__ import annotations

import logging

from .models import Order, Product
from .storage import StorageBackend
from .tracking import last_order

logger = logging.getLogger(__name__)

CATALOGUE_KEY = "catalogue"
ORDERS_KEY = "orders"


class CatalogueStore:
    """Loads and saves the whole product catalogue."""

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend

    def load(self) -> list[Product]:
        records = self._backend.get(CATALOGUE_KEY) or []
        products: list[Product] = []
        seen: set[str] = set()
        for record in records:
            try:
                product = Product.from_dict(record)
            except (KeyError, TypeError, AttributeError):
                logger.warning("Skipping malformed catalogue record: %r", record)
                continue
            # First entry wins when stored codes differ only in case
            if product.code in seen:
                logger.warning("Skipping duplicate catalogue code %s: %r", product.code, record)
                continue
            seen.add(product.code)
            products.append(product)
        return products

    def save(self, products: list[Product]) -> None:
        self._backend.set(CATALOGUE_KEY, [p.to_dict() for p in products])
        logger.info("Saved catalogue (%d products)", len(products))


class OrderHistoryStore:
    """Append-only order history."""

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend

    def load(self) -> list[Order]:
        records = self._backend.get(ORDERS_KEY) or []
        orders: list[Order] = []
        for record in records:
            try:
                orders.append(Order.from_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed order record: %r", record)
        return orders

    def append(self, order: Order) -> None:
        # Raw records are kept as-is so unreadable entries survive the rewrite
        records = self._backend.get(ORDERS_KEY) or []
        records.append(order.to_dict())
        self._backend.set(ORDERS_KEY, records)
        logger.info(
            "Saved order %s (%d lines, %d units)",
            order.id,
            len(order.items),
            order.total_quantity,
        )

    def last(self) -> Order:
        """Return the most recent order; raises EmptyHistoryError if none."""
        return last_order(self.load())
