"""Interactive scanning session: pending quantity flow and order finalization."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from . import cart as cart_ops
from .errors import EmptyCartError, NoPendingItemError
from .export import write_export
from .models import CartItem, Order, PendingItem, Product
from .stores import OrderHistoryStore

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """Format as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ScanSession:
    """Holds the cart being built and the item awaiting a quantity.

    Nothing is persisted until :meth:`finalize`; cancelling a pending item
    or discarding the session leaves the stores untouched.
    """

    def __init__(
        self,
        catalogue: list[Product],
        history: OrderHistoryStore,
        *,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.catalogue = catalogue
        self.history = history
        self.cart: list[CartItem] = []
        self.pending: PendingItem | None = None
        self._id_factory = id_factory

    def scan(self, code: str) -> PendingItem:
        self.pending = cart_ops.scan(self.cart, code, self.catalogue)
        logger.debug("Scanned %s (edit_mode=%s)", self.pending.code, self.pending.edit_mode)
        return self.pending

    def select(self, product: Product) -> PendingItem:
        self.pending = cart_ops.select(self.cart, product)
        return self.pending

    def edit(self, code: str) -> PendingItem:
        self.pending = cart_ops.edit(self.cart, code)
        return self.pending

    def confirm(self, quantity: object = None) -> list[CartItem]:
        """Apply the pending item with ``quantity`` (default: the pending quantity).

        On InvalidQuantityError the pending item is kept so the user can
        correct the input.
        """
        if self.pending is None:
            raise NoPendingItemError()
        pending = self.pending
        qty = pending.quantity if quantity is None else quantity
        self.cart = cart_ops.confirm_quantity(
            self.cart, pending.code, pending.description, qty, pending.edit_mode
        )
        self.pending = None
        return self.cart

    def cancel(self) -> None:
        self.pending = None

    def remove(self, code: str) -> None:
        self.cart = cart_ops.remove(self.cart, code)

    def clear(self) -> None:
        self.cart = []
        self.pending = None

    def finalize(
        self, output_dir: str | Path, now: datetime | None = None
    ) -> tuple[Order, Path]:
        """Write the order file, save the order to history and empty the cart.

        Raises:
            EmptyCartError: If nothing has been scanned.
        """
        if not self.cart:
            raise EmptyCartError()

        now = now or datetime.now(timezone.utc)
        export_path = write_export(self.cart, output_dir, now)
        logger.info("Order file written: %s", export_path)

        order = Order(
            id=self._id_factory(),
            date=format_timestamp(now),
            items=tuple(self.cart),
        )
        self.history.append(order)
        self.clear()
        return order, export_path
