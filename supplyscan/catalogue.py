"""Catalogue merge operations: upsert, delete, rename and bulk import.

Every function takes the current catalogue and returns a new list; the
input list is never mutated. Codes are compared through
:func:`~supplyscan.models.canonical_code`.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .errors import (
    DuplicateCodeError,
    InvalidProductError,
    NoValidItemsError,
    UnreadableFileError,
)
from .models import Product, canonical_code


def _normalized(product: Product) -> Product:
    code = canonical_code(product.code)
    if code == product.code:
        return product
    return Product(code=code, description=product.description, category=product.category)


def _index_of(catalogue: list[Product], code: str) -> int:
    key = canonical_code(code)
    for i, product in enumerate(catalogue):
        if canonical_code(product.code) == key:
            return i
    return -1


def find(catalogue: list[Product], code: str) -> Product | None:
    """Look up a product by code, ignoring case."""
    idx = _index_of(catalogue, code)
    return catalogue[idx] if idx != -1 else None


def upsert(catalogue: list[Product], product: Product) -> list[Product]:
    """Replace the entry with the same code in place, or append a new one."""
    product = _normalized(product)
    result = list(catalogue)
    idx = _index_of(result, product.code)
    if idx != -1:
        result[idx] = product
    else:
        result.append(product)
    return result


def delete(catalogue: list[Product], code: str) -> list[Product]:
    """Remove the entry matching ``code``. Unknown codes are ignored."""
    key = canonical_code(code)
    return [p for p in catalogue if canonical_code(p.code) != key]


def rename_key(
    catalogue: list[Product], old_code: str, new_product: Product
) -> list[Product]:
    """Replace the entry at ``old_code`` with ``new_product``, keeping its position.

    Raises:
        InvalidProductError: If the new code or description is blank.
        DuplicateCodeError: If the new code differs from ``old_code`` and
            another entry already uses it.
    """
    new_product = _normalized(new_product)
    if not new_product.code or not new_product.description.strip():
        raise InvalidProductError("Please enter both a product code and description.")
    old_key = canonical_code(old_code)

    if new_product.code != old_key and _index_of(catalogue, new_product.code) != -1:
        raise DuplicateCodeError(new_product.code)

    return [
        new_product if canonical_code(p.code) == old_key else p
        for p in catalogue
    ]


def add_product(
    catalogue: list[Product],
    code: str,
    description: str,
    *,
    overwrite: bool = False,
) -> list[Product]:
    """Add a product entered by hand.

    Raises:
        InvalidProductError: If the code or description is blank.
        DuplicateCodeError: If the code exists and ``overwrite`` is False.
    """
    code = canonical_code(code)
    description = description.strip()
    if not code or not description:
        raise InvalidProductError("Please enter both a product code and description.")

    if not overwrite and _index_of(catalogue, code) != -1:
        raise DuplicateCodeError(code)

    return upsert(catalogue, Product(code=code, description=description))


def bulk_import(lines: Iterable[str]) -> list[Product]:
    """Parse alternating ``description`` / ``code`` lines into a new catalogue.

    Blank lines are dropped before pairing and a trailing unpaired line is
    ignored. The result replaces the existing catalogue wholesale.

    Raises:
        NoValidItemsError: If no description/code pair was found.
    """
    stripped = [line.strip() for line in lines]
    stripped = [line for line in stripped if line]

    products: list[Product] = []
    for i in range(0, len(stripped) - 1, 2):
        description, code = stripped[i], stripped[i + 1]
        products.append(Product(code=canonical_code(code), description=description))

    if not products:
        raise NoValidItemsError()
    return products


def read_import_file(path: str | Path) -> list[Product]:
    """Read a whole import file and parse it with :func:`bulk_import`.

    Raises:
        UnreadableFileError: If the file cannot be read or decoded.
        NoValidItemsError: If the file holds no description/code pair.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableFileError(path, str(e)) from e
    return bulk_import(text.splitlines())


def search(catalogue: list[Product], query: str, limit: int = 10) -> list[Product]:
    """Return up to ``limit`` products whose code or description contains ``query``."""
    needle = query.strip().lower()
    if not needle:
        return []
    hits = [
        p for p in catalogue
        if needle in p.description.lower() or needle in p.code.lower()
    ]
    return hits[:limit]
