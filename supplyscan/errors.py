"""Exception types raised by the catalogue, cart and history operations."""

from __future__ import annotations


class SupplyScanError(Exception):
    """Base class for all recoverable supplyscan errors."""


class DuplicateCodeError(SupplyScanError):
    """A product code is already used by a different catalogue entry."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Product code {code!r} already exists.")


class InvalidQuantityError(SupplyScanError):
    """A quantity was non-numeric or not a positive integer."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Please enter a valid quantity (got {value!r}).")


class InvalidProductError(SupplyScanError):
    """A product code or description was missing."""


class NoValidItemsError(SupplyScanError):
    """A catalogue import did not contain a single description/code pair."""

    def __init__(self) -> None:
        super().__init__(
            "No valid items found. Ensure format is alternating lines: "
            "Description then Code."
        )


class UnreadableFileError(SupplyScanError):
    """A catalogue import file could not be read."""

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to read or parse file {path}{detail}")


class EmptyHistoryError(SupplyScanError):
    def __init__(self) -> None:
        super().__init__("No order history available.")


class EmptyCartError(SupplyScanError):
    def __init__(self) -> None:
        super().__init__("The cart is empty; scan at least one item first.")


class NoPendingItemError(SupplyScanError):
    def __init__(self) -> None:
        super().__init__("No item is waiting for a quantity.")


class StorageError(SupplyScanError):
    """A persisted collection could not be decoded."""
