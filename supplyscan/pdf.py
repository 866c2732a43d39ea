"""PDF rendering of tracking reports and single orders using ReportLab."""

from __future__ import annotations

from pathlib import Path
from xml.sax.saxutils import escape

from .models import Order, ReportRow
from .tracking import parse_timestamp

_HEADER_COLOR = "#005EB8"
_STRIPE_COLOR = "#F0F4F5"


def _import_reportlab():
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.styles import getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError(
            "reportlab is required: pip install 'supplyscan[pdf]'"
        )
    return colors, A4, getSampleStyleSheet, mm, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


def _build(output_path: str | Path, title: str, subtitle_lines: list[str], table_data: list[list]) -> Path:
    (
        colors, A4, getSampleStyleSheet, mm,
        Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle,
    ) = _import_reportlab()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=title,
    )
    styles = getSampleStyleSheet()

    elements: list = [Paragraph(title, styles["Title"])]
    for line in subtitle_lines:
        elements.append(Paragraph(escape(line), styles["Normal"]))
    elements.append(Spacer(1, 6 * mm))

    table_style = TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(_HEADER_COLOR)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor(_STRIPE_COLOR)]),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ])
    t = Table(table_data, colWidths=[40 * mm, 110 * mm, 30 * mm], repeatRows=1)
    t.setStyle(table_style)
    elements.append(t)

    doc.build(elements)
    return output_path


def generate_report_pdf(
    rows: list[ReportRow],
    output_path: str | Path,
    *,
    start_date: str = "",
    end_date: str = "",
    text_filter: str = "",
) -> Path:
    """Render an aggregated tracking report.

    Raises:
        ImportError: If reportlab is not installed.
    """
    if start_date and end_date:
        period = f"Period: {start_date} to {end_date}"
    else:
        period = "Period: all orders"
    subtitle = [period]
    if text_filter:
        subtitle.append(f"Filter: {text_filter}")

    table_data = [["Code", "Description", "Total Qty"]]
    table_data.extend([r.code, r.description, str(r.quantity)] for r in rows)
    return _build(output_path, "Order Tracking", subtitle, table_data)


def generate_order_pdf(order: Order, output_path: str | Path) -> Path:
    """Render one saved order as a picking sheet.

    Raises:
        ImportError: If reportlab is not installed.
    """
    placed = parse_timestamp(order.date).astimezone()
    subtitle = [
        f"Date: {placed:%d/%m/%Y}",
        f"Time: {placed:%H:%M:%S}",
        f"Order ID: {order.id}",
    ]
    table_data = [["Code", "Description", "Qty"]]
    table_data.extend([i.code, i.description, str(i.quantity)] for i in order.items)
    return _build(output_path, "Order Details", subtitle, table_data)
