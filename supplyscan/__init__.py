"""Barcode-driven supply ordering, order tracking and catalogue management."""

from .cart import confirm_quantity, parse_quantity, remove, scan
from .catalogue import bulk_import, delete, read_import_file, rename_key, upsert
from .config import AppConfig, ExportConfig, StorageConfig, TrackingConfig, load_config
from .errors import (
    DuplicateCodeError,
    EmptyCartError,
    EmptyHistoryError,
    InvalidProductError,
    InvalidQuantityError,
    NoPendingItemError,
    NoValidItemsError,
    StorageError,
    SupplyScanError,
    UnreadableFileError,
)
from .models import CartItem, Order, PendingItem, Product, ReportRow, canonical_code
from .session import ScanSession
from .storage import StorageBackend, create_storage
from .stores import CatalogueStore, OrderHistoryStore
from .tracking import aggregate, last_order

__all__ = [
    "Product",
    "CartItem",
    "Order",
    "PendingItem",
    "ReportRow",
    "canonical_code",
    "upsert",
    "delete",
    "rename_key",
    "bulk_import",
    "read_import_file",
    "scan",
    "confirm_quantity",
    "parse_quantity",
    "remove",
    "aggregate",
    "last_order",
    "ScanSession",
    "StorageBackend",
    "create_storage",
    "CatalogueStore",
    "OrderHistoryStore",
    "AppConfig",
    "StorageConfig",
    "ExportConfig",
    "TrackingConfig",
    "load_config",
    "SupplyScanError",
    "DuplicateCodeError",
    "InvalidQuantityError",
    "InvalidProductError",
    "NoValidItemsError",
    "UnreadableFileError",
    "EmptyHistoryError",
    "EmptyCartError",
    "NoPendingItemError",
    "StorageError",
]
