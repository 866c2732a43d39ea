"""Tests for the plain-text order export."""

from datetime import datetime

from supplyscan.export import export_filename, export_lines, write_export
from supplyscan.models import CartItem


def _items():
    return [
        CartItem("NPC200", "EDTA tube", 12),
        CartItem("NPC100", "Blood culture bottle", 3),
    ]


def test_export_lines_keep_cart_order():
    assert export_lines(_items()) == ["NPC200 12", "NPC100 3"]


def test_export_filename_uses_day_month_year():
    assert export_filename(datetime(2025, 3, 7, 10, 0)) == "Scanned_Items_07-03-2025.txt"


def test_write_export(tmp_path):
    moment = datetime(2025, 11, 2, 14, 5)
    path = write_export(_items(), tmp_path / "orders", moment)

    assert path == tmp_path / "orders" / "Scanned_Items_02-11-2025.txt"
    assert path.read_text(encoding="utf-8") == "NPC200 12\nNPC100 3"


def test_write_export_overwrites_same_day(tmp_path):
    moment = datetime(2025, 11, 2, 9, 0)
    write_export(_items(), tmp_path, moment)
    path = write_export([CartItem("X1", "x", 1)], tmp_path, moment)
    assert path.read_text(encoding="utf-8") == "X1 1"
