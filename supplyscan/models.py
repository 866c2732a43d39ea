"""Data models for catalogue products, cart lines and finalized orders."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

UNKNOWN_ITEM = "Unknown Item"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp. ``Z`` is accepted; naive values are UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def canonical_code(code: str) -> str:
    """Return the stored form of a product code (trimmed, uppercase)."""
    return str(code).strip().upper()


@dataclass(frozen=True)
class Product:
    """A catalogue entry, keyed by its canonical code."""

    code: str
    description: str
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "description": self.description}
        if self.category:
            data["category"] = self.category
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Product:
        return cls(
            code=canonical_code(data["code"]),
            description=str(data.get("description", "")),
            category=data.get("category") or None,
        )


@dataclass(frozen=True)
class CartItem:
    """A product line in the cart being built (or in a saved order)."""

    code: str
    description: str
    quantity: int
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": self.code,
            "description": self.description,
            "quantity": self.quantity,
        }
        if self.category:
            data["category"] = self.category
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartItem:
        # Stored order lines keep the code exactly as it was scanned
        return cls(
            code=str(data["code"]),
            description=str(data.get("description", "")),
            quantity=int(data["quantity"]),
            category=data.get("category") or None,
        )


@dataclass(frozen=True)
class Order:
    """An immutable snapshot of a finalized cart."""

    id: str
    date: str  # ISO-8601 UTC, e.g. 2025-01-15T09:30:00.000Z
    items: tuple[CartItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Order:
        """Build an order from a stored record.

        Raises:
            ValueError: If ``date`` is not an ISO-8601 timestamp.
        """
        date = str(data["date"])
        parse_timestamp(date)
        return cls(
            id=str(data["id"]),
            date=date,
            items=tuple(CartItem.from_dict(i) for i in data.get("items", [])),
        )

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class PendingItem:
    """A scanned code waiting for the user to confirm a quantity.

    ``edit_mode`` is True when the code is already in the cart; confirming
    then overwrites the quantity instead of adding to it.
    """

    code: str
    description: str
    quantity: int
    edit_mode: bool


@dataclass(frozen=True)
class ReportRow:
    """One aggregated line of the order tracking report."""

    code: str
    description: str
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "description": self.description,
            "quantity": self.quantity,
        }
