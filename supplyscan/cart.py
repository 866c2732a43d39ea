"""Cart merge-on-scan rules.

The cart is an ordered list of :class:`CartItem`, most recently added
first. Scanning a code produces a :class:`PendingItem`; confirming it
merges the quantity into the cart: add mode sums with an existing line,
edit mode overwrites it.
"""

from __future__ import annotations

import re
from dataclasses import replace

from .catalogue import find
from .errors import InvalidProductError, InvalidQuantityError
from .models import UNKNOWN_ITEM, CartItem, PendingItem, Product, canonical_code


def _existing(cart: list[CartItem], code: str) -> CartItem | None:
    return next((item for item in cart if item.code == code), None)


def _pending(cart: list[CartItem], code: str, description: str) -> PendingItem:
    existing = _existing(cart, code)
    if existing is not None:
        return PendingItem(code, description, existing.quantity, edit_mode=True)
    return PendingItem(code, description, 1, edit_mode=False)


def scan(cart: list[CartItem], code: str, catalogue: list[Product]) -> PendingItem:
    """Prepare a scanned code for quantity entry.

    Unknown codes are accepted with the ``"Unknown Item"`` description.
    If the code is already in the cart the pending item opens in edit mode
    with the current quantity; otherwise it defaults to 1 in add mode.
    """
    code = canonical_code(code)
    if not code:
        raise InvalidProductError("Scanned code is empty.")
    product = find(catalogue, code)
    description = product.description if product else UNKNOWN_ITEM
    return _pending(cart, code, description)


def select(cart: list[CartItem], product: Product) -> PendingItem:
    """Prepare a product picked from a catalogue search for quantity entry."""
    return _pending(cart, canonical_code(product.code), product.description)


def edit(cart: list[CartItem], code: str) -> PendingItem:
    """Open an existing cart line for editing.

    Raises:
        KeyError: If ``code`` is not in the cart.
    """
    existing = _existing(cart, code)
    if existing is None:
        raise KeyError(code)
    return PendingItem(existing.code, existing.description, existing.quantity, edit_mode=True)


def parse_quantity(value: object) -> int:
    """Validate a user-entered quantity.

    Accepts a positive ``int`` or a string of decimal digits.

    Raises:
        InvalidQuantityError: For anything else, including 0 and negatives.
    """
    if isinstance(value, bool):
        raise InvalidQuantityError(value)
    if isinstance(value, int):
        qty = value
    elif isinstance(value, str):
        text = value.strip()
        if not re.fullmatch(r"[+-]?[0-9]+", text):
            raise InvalidQuantityError(value)
        qty = int(text)
    else:
        raise InvalidQuantityError(value)

    if qty <= 0:
        raise InvalidQuantityError(value)
    return qty


def confirm_quantity(
    cart: list[CartItem],
    code: str,
    description: str,
    qty: object,
    is_edit_mode: bool,
) -> list[CartItem]:
    """Merge a confirmed quantity into the cart and return the new cart.

    Raises:
        InvalidQuantityError: If ``qty`` is not a positive integer. The
            cart is left unchanged.
    """
    quantity = parse_quantity(qty)

    existing = _existing(cart, code)
    if existing is None:
        return [CartItem(code=code, description=description, quantity=quantity), *cart]

    new_quantity = quantity if is_edit_mode else existing.quantity + quantity
    return [
        replace(item, quantity=new_quantity) if item.code == code else item
        for item in cart
    ]


def remove(cart: list[CartItem], code: str) -> list[CartItem]:
    """Drop the line for ``code``; unknown codes are ignored."""
    return [item for item in cart if item.code != code]
