"""Tests for PDF generation."""

from unittest.mock import patch

import pytest

from supplyscan.models import CartItem, Order, ReportRow


def _rows():
    return [
        ReportRow("NPC200", "EDTA tube 4ml", 120),
        ReportRow("NPC100", "Blood culture bottle (aerobic) & <anaerobic>", 36),
    ]


def _order():
    return Order(
        id="0f8fad5b-d9cb-469f-a165-70867728950e",
        date="2025-01-15T10:30:00.000Z",
        items=(CartItem("NPC200", "EDTA tube 4ml", 12), CartItem("ZZ9", "Unknown Item", 1)),
    )


class TestPDFGeneration:
    def test_missing_reportlab(self, tmp_path):
        """A helpful ImportError is raised when reportlab is absent."""
        from supplyscan.pdf import generate_report_pdf

        with patch.dict("sys.modules", {"reportlab": None, "reportlab.lib": None}):
            with pytest.raises(ImportError, match="supplyscan\\[pdf\\]"):
                generate_report_pdf(_rows(), tmp_path / "report.pdf")

    def test_report_pdf_creates_file(self, tmp_path):
        pytest.importorskip("reportlab")
        from supplyscan.pdf import generate_report_pdf

        output = tmp_path / "report.pdf"
        result = generate_report_pdf(
            _rows(), output, start_date="2025-01-01", end_date="2025-01-31", text_filter="<tube>"
        )
        assert result == output
        with open(output, "rb") as f:
            assert f.read(4) == b"%PDF"

    def test_report_pdf_creates_parent_dirs(self, tmp_path):
        pytest.importorskip("reportlab")
        from supplyscan.pdf import generate_report_pdf

        output = tmp_path / "subdir" / "nested" / "report.pdf"
        generate_report_pdf([], output)
        assert output.exists()

    def test_order_pdf_creates_file(self, tmp_path):
        pytest.importorskip("reportlab")
        from supplyscan.pdf import generate_order_pdf

        output = tmp_path / "order.pdf"
        generate_order_pdf(_order(), output)
        assert output.stat().st_size > 0
