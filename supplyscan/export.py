"""Plain-text order export (one ``CODE quantity`` line per cart item)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from .models import CartItem


def export_lines(items: Iterable[CartItem]) -> list[str]:
    return [f"{item.code} {item.quantity}" for item in items]


def export_filename(moment: datetime | None = None) -> str:
    """Build ``Scanned_Items_dd-mm-yyyy.txt`` from the local date of ``moment``."""
    moment = moment or datetime.now()
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return f"Scanned_Items_{moment:%d-%m-%Y}.txt"


def write_export(
    items: Iterable[CartItem],
    output_dir: str | Path,
    moment: datetime | None = None,
) -> Path:
    """Write the order file into ``output_dir`` and return its path.

    An existing file for the same day is overwritten.
    """
    output_dir = Path(output_dir).expanduser()
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(moment)
    path.write_text("\n".join(export_lines(items)), encoding="utf-8")
    return path
