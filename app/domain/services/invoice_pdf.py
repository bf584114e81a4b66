# app/domain/services/invoice_pdf.py
"""
Generate GST invoice and quotation PDFs with ReportLab.

Rows are split by the paginator first; each Page is then drawn on its own
canvas page:

  +--------------------------------------+  top margin
  | header (full on page 1, one-line     |
  | "continued" banner afterwards)       |
  | table column header                  |  estimated_header_height
  +--------------------------------------+
  | up to max_rows_per_page rows         |
  +--------------------------------------+
  | footer (totals, notes, bank details  |  estimated_footer_height
  | on the last page, "continued" else)  |
  +--------------------------------------+  bottom margin

Table rows use fixed heights equal to estimated_row_height so the drawn
layout matches the paginator's estimate.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Sequence

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from app.domain.models.invoice import BillerInfo, Client, DocumentTotals, Invoice
from app.domain.models.pagination import Page, PaginationConfig
from app.domain.models.quotation import DateCell, ImageCell, NumberCell, Quotation, QuotationRow
from app.domain.services.gst_calculator import (
    compute_invoice,
    determine_inter_state,
    round_paise,
)
from app.domain.services.paginator import paginate
from app.domain.services.quotation_totals import compute_quotation_totals

logger = logging.getLogger("invoice_pdf")

# ---------------------------------------------------------------------------
# Shared constants
# ---------------------------------------------------------------------------
_HEADER_BG = colors.Color(0.2, 0.3, 0.5)
_TOTAL_ROW_BG = colors.Color(0.9, 0.95, 1.0)
_ALT_ROW_BG = colors.Color(0.97, 0.97, 0.98)
_GRID_COLOR = colors.Color(0.8, 0.8, 0.8)
_MUTED = colors.Color(0.42, 0.45, 0.49)

_FONT = "Helvetica"
_FONT_BOLD = "Helvetica-Bold"
_LINE = 4.5 * mm
_CELL_PADDING = 2 * mm


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def document_filename(document_type: str, number: str | None) -> str:
    """``invoice-INV-202501-17.pdf``"""
    return f"{document_type}-{number or 'details'}.pdf"


def _fmt_amount(val: Decimal | None) -> str:
    if val is None:
        return "0.00"
    return f"{round_paise(val):,.2f}"


def _fmt_rate(val: Decimal) -> str:
    return f"{val.normalize():f}"


def _fmt_date(val: date | None) -> str:
    return val.strftime("%d-%b-%Y") if val else "N/A"


def _fit(text: str, width: float, font: str = _FONT, size: float = 8) -> str:
    """Truncate ``text`` with an ellipsis so it fits ``width`` points."""
    if stringWidth(text, font, size) <= width:
        return text
    while text and stringWidth(text + "...", font, size) > width:
        text = text[:-1]
    return text + "..."


def _text(
    c: canvas.Canvas,
    x: float,
    y: float,
    text: str,
    *,
    size: float = 9,
    bold: bool = False,
    color=colors.black,
    align: str = "left",
) -> None:
    c.setFont(_FONT_BOLD if bold else _FONT, size)
    c.setFillColor(color)
    if align == "right":
        c.drawRightString(x, y, text)
    elif align == "center":
        c.drawCentredString(x, y, text)
    else:
        c.drawString(x, y, text)


@dataclass
class _Frame:
    """Page geometry in points."""

    width: float
    height: float
    margin: float
    header_height: float
    footer_height: float
    row_height: float

    @classmethod
    def from_config(cls, config: PaginationConfig) -> _Frame:
        return cls(
            width=config.page_width * mm,
            height=config.page_height * mm,
            margin=config.margin * mm,
            header_height=config.estimated_header_height * mm,
            footer_height=config.estimated_footer_height * mm,
            row_height=config.estimated_row_height * mm,
        )

    @property
    def left(self) -> float:
        return self.margin

    @property
    def right(self) -> float:
        return self.width - self.margin

    @property
    def top(self) -> float:
        return self.height - self.margin

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def table_top(self) -> float:
        # column header row sits in the last row-height of the header block
        return self.top - self.header_height + self.row_height

    @property
    def footer_top(self) -> float:
        return self.margin + self.footer_height


def _column_widths(weights: Sequence[float], total: float) -> list[float]:
    scale = total / sum(weights)
    return [w * scale for w in weights]


def _draw_table(
    c: canvas.Canvas,
    frame: _Frame,
    columns: Sequence[str],
    weights: Sequence[float],
    rows: list[list[str]],
    right_align: Sequence[int] = (),
) -> None:
    """Draw the column header plus ``rows`` at fixed row heights."""
    widths = _column_widths(weights, frame.content_width)
    data = [list(columns)]
    for row in rows:
        data.append([
            _fit(str(val), w - 2 * _CELL_PADDING) for val, w in zip(row, widths)
        ])

    style = [
        ("FONTNAME", (0, 0), (-1, -1), _FONT),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BG),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), _FONT_BOLD),
        ("GRID", (0, 0), (-1, -1), 0.5, _GRID_COLOR),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), _CELL_PADDING),
        ("RIGHTPADDING", (0, 0), (-1, -1), _CELL_PADDING),
        ("TOPPADDING", (0, 0), (-1, -1), 0),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
    ]
    for col in right_align:
        style.append(("ALIGN", (col, 0), (col, -1), "RIGHT"))
    for idx in range(2, len(data), 2):
        style.append(("BACKGROUND", (0, idx), (-1, idx), _ALT_ROW_BG))

    table = Table(data, colWidths=widths, rowHeights=[frame.row_height] * len(data))
    table.setStyle(TableStyle(style))
    _, h = table.wrapOn(c, frame.content_width, frame.height)
    table.drawOn(c, frame.left, frame.table_top - h)


# ---------------------------------------------------------------------------
# Header / footer blocks
# ---------------------------------------------------------------------------

def _draw_party(c: canvas.Canvas, x: float, y: float, label: str | None, party: BillerInfo | Client) -> float:
    """Draw a name + address + GSTIN block; return the y below it."""
    if label:
        _text(c, x, y, label, size=8, bold=True, color=_MUTED)
        y -= _LINE
    _text(c, x, y, party.display_name, size=11, bold=True, color=_HEADER_BG)
    y -= _LINE + 1 * mm
    for line in party.address_lines():
        _text(c, x, y, line, size=8.5, color=_MUTED)
        y -= _LINE
    if party.gstin:
        _text(c, x, y, f"GSTIN: {party.gstin}", size=8.5, bold=True)
        y -= _LINE
    return y


def _draw_full_header(
    c: canvas.Canvas,
    frame: _Frame,
    *,
    title: str,
    number: str,
    meta: list[tuple[str, str]],
    biller: BillerInfo,
    client: Client,
    supply_note: str,
) -> None:
    y = frame.top - 5 * mm
    bottom = _draw_party(c, frame.left, y, None, biller)

    _text(c, frame.right, y, title, size=18, bold=True, align="right")
    ry = y - 7 * mm
    _text(c, frame.right, ry, f"# {number}", size=10, color=_MUTED, align="right")
    for label, value in meta:
        ry -= _LINE
        _text(c, frame.right, ry, f"{label}: {value}", size=8.5, align="right")

    y = min(bottom, ry) - 3 * mm
    c.setStrokeColor(_GRID_COLOR)
    c.line(frame.left, y + 2 * mm, frame.right, y + 2 * mm)
    _draw_party(c, frame.left, y - 2 * mm, "BILL TO", client)
    _text(c, frame.right, y - 2 * mm, f"Place of Supply: {client.state}", size=8.5, align="right")
    _text(c, frame.right, y - 2 * mm - _LINE, supply_note, size=8, color=_MUTED, align="right")


def _draw_continuation_header(
    c: canvas.Canvas, frame: _Frame, *, title: str, number: str, page: Page, party_name: str
) -> None:
    y = frame.top - 5 * mm
    _text(c, frame.left, y, f"{title} # {number} (continued)", size=11, bold=True, color=_HEADER_BG)
    _text(c, frame.right, y, party_name, size=8.5, color=_MUTED, align="right")
    _text(c, frame.left, y - _LINE, f"Page {page.page_number} of {page.total_pages}", size=8, color=_MUTED)


def _totals_rows(totals: DocumentTotals, inter_state: bool) -> list[list[str]]:
    rows = [["Sub Total", _fmt_amount(totals.sub_total)]]
    if inter_state:
        rows.append(["IGST", _fmt_amount(totals.total_igst)])
    else:
        rows.append(["CGST", _fmt_amount(totals.total_cgst)])
        rows.append(["SGST", _fmt_amount(totals.total_sgst)])
    rows.append(["Grand Total (Rs)", _fmt_amount(totals.grand_total)])
    return rows


def _draw_paragraphs(
    c: canvas.Canvas, x: float, y: float, width: float, blocks: list[tuple[str, str]], max_lines: int = 3
) -> float:
    for label, body in blocks:
        _text(c, x, y, label, size=8, bold=True, color=_MUTED)
        y -= _LINE
        lines = simpleSplit(body, _FONT, 8, width)
        if len(lines) > max_lines:
            lines = lines[:max_lines]
            lines[-1] = _fit(lines[-1] + " ...", width)
        for line in lines:
            _text(c, x, y, line, size=8)
            y -= 4 * mm
        y -= 1 * mm
    return y


def _bank_lines(biller: BillerInfo) -> list[str]:
    lines = []
    if biller.bank_name:
        lines.append(f"Bank: {biller.bank_name}")
    if biller.account_number:
        lines.append(f"A/C No: {biller.account_number}")
    if biller.ifsc_code:
        lines.append(f"IFSC: {biller.ifsc_code}")
    if biller.upi_id:
        lines.append(f"UPI: {biller.upi_id}")
    return lines


def _draw_page_number(c: canvas.Canvas, frame: _Frame, page: Page, note: str) -> None:
    y = frame.margin + 2 * mm
    _text(c, frame.left, y, note, size=7.5, color=colors.grey)
    _text(c, frame.right, y, f"Page {page.page_number} of {page.total_pages}", size=7.5, color=colors.grey, align="right")


def _draw_full_footer(
    c: canvas.Canvas,
    frame: _Frame,
    page: Page,
    *,
    totals: DocumentTotals,
    inter_state: bool,
    biller: BillerInfo,
    notes: str | None,
    terms: str | None,
    closing_note: str,
) -> None:
    top = frame.footer_top - 4 * mm
    half = frame.content_width / 2

    rows = _totals_rows(totals, inter_state)
    table = Table(rows, colWidths=[half * 0.55, half * 0.45], rowHeights=[6 * mm] * len(rows))
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), _FONT),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LINEBELOW", (0, 0), (-1, -2), 0.5, _GRID_COLOR),
        ("BACKGROUND", (0, -1), (-1, -1), _TOTAL_ROW_BG),
        ("FONTNAME", (0, -1), (-1, -1), _FONT_BOLD),
    ]))
    _, h = table.wrapOn(c, half, frame.footer_height)
    table.drawOn(c, frame.right - half, top - h)

    blocks = []
    if notes:
        blocks.append(("Notes", notes))
    if terms:
        blocks.append(("Terms & Conditions", terms))
    y = _draw_paragraphs(c, frame.left, top, half - 6 * mm, blocks)

    bank = _bank_lines(biller)
    if bank:
        _text(c, frame.left, y, "Payment Details", size=8, bold=True, color=_MUTED)
        for line in bank:
            y -= 4 * mm
            _text(c, frame.left, y, line, size=8)

    _text(
        c, frame.right, top - h - 10 * mm, f"For {biller.business_name}",
        size=8.5, bold=True, align="right",
    )
    _draw_page_number(c, frame, page, closing_note)


def _draw_continuation_footer(c: canvas.Canvas, frame: _Frame, page: Page) -> None:
    _text(
        c, frame.right, frame.footer_top - 6 * mm,
        f"Continued on page {page.page_number + 1}",
        size=9, color=_MUTED, align="right",
    )
    _draw_page_number(c, frame, page, "")


def _render_pages(
    pages: list[Page],
    config: PaginationConfig,
    draw_page: Callable[[canvas.Canvas, _Frame, Page], None],
    title: str,
) -> bytes:
    buf = io.BytesIO()
    frame = _Frame.from_config(config)
    c = canvas.Canvas(buf, pagesize=(frame.width, frame.height))
    c.setTitle(title)
    for page in pages:
        draw_page(c, frame, page)
        c.showPage()
    c.save()
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Invoice
# ---------------------------------------------------------------------------

_INVOICE_INTRA_COLUMNS = ["#", "Item", "HSN", "Qty", "Rate", "Disc %", "GST %", "Taxable", "CGST", "SGST", "Total"]
_INVOICE_INTRA_WEIGHTS = [5, 34, 11, 8, 13, 9, 9, 15, 12, 12, 16]
_INVOICE_INTER_COLUMNS = ["#", "Item", "HSN", "Qty", "Rate", "Disc %", "GST %", "Taxable", "IGST", "Total"]
_INVOICE_INTER_WEIGHTS = [5, 38, 11, 8, 14, 9, 9, 16, 14, 18]


def generate_invoice_pdf(invoice: Invoice, config: PaginationConfig | None = None) -> bytes:
    """Render ``invoice`` into a (possibly multi-page) PDF and return its bytes."""
    config = config or PaginationConfig()
    computed = compute_invoice(invoice)
    inter_state = computed.is_inter_state
    rows = list(zip(invoice.line_items, computed.line_items))
    pages = paginate(rows, config)

    if inter_state:
        columns, weights = _INVOICE_INTER_COLUMNS, _INVOICE_INTER_WEIGHTS
        supply_note = "Inter-state supply (IGST)"
    else:
        columns, weights = _INVOICE_INTRA_COLUMNS, _INVOICE_INTRA_WEIGHTS
        supply_note = "Intra-state supply (CGST + SGST)"

    def _row(pos: int, item, figures) -> list[str]:
        cells = [
            str(pos),
            item.product_name,
            item.hsn_code or "",
            _fmt_rate(item.quantity),
            _fmt_amount(item.rate),
            _fmt_rate(item.discount_percentage),
            _fmt_rate(item.tax_rate),
            _fmt_amount(figures.amount),
        ]
        if inter_state:
            cells.append(_fmt_amount(figures.igst))
        else:
            cells += [_fmt_amount(figures.cgst), _fmt_amount(figures.sgst)]
        cells.append(_fmt_amount(figures.total_amount))
        return cells

    def _draw(c: canvas.Canvas, frame: _Frame, page: Page) -> None:
        if page.header_variant == "full":
            _draw_full_header(
                c, frame,
                title="TAX INVOICE",
                number=invoice.invoice_number,
                meta=[
                    ("Invoice Date", _fmt_date(invoice.invoice_date)),
                    ("Due Date", _fmt_date(invoice.due_date)),
                ],
                biller=invoice.biller,
                client=invoice.client,
                supply_note=supply_note,
            )
        else:
            _draw_continuation_header(
                c, frame, title="INVOICE", number=invoice.invoice_number,
                page=page, party_name=invoice.client.name,
            )

        table_rows = [
            _row(page.start_index + n, item, figures)
            for n, (item, figures) in enumerate(page.rows, start=1)
        ]
        _draw_table(c, frame, columns, weights, table_rows, right_align=range(3, len(columns)))

        if page.footer_variant == "full":
            _draw_full_footer(
                c, frame, page,
                totals=computed.totals,
                inter_state=inter_state,
                biller=invoice.biller,
                notes=invoice.notes,
                terms=invoice.terms_and_conditions,
                closing_note="This is a computer-generated invoice.",
            )
        else:
            _draw_continuation_footer(c, frame, page)

    pdf = _render_pages(pages, config, _draw, f"Invoice {invoice.invoice_number}")
    logger.info(
        "Rendered invoice %s: %d line items on %d page(s)",
        invoice.invoice_number, len(rows), len(pages),
    )
    return pdf


# ---------------------------------------------------------------------------
# Quotation
# ---------------------------------------------------------------------------

def _cell_text(cell) -> str:
    if isinstance(cell, NumberCell):
        if "amount" in cell.label.lower():
            return _fmt_amount(cell.value)
        return _fmt_rate(cell.value)
    if isinstance(cell, DateCell):
        return _fmt_date(cell.value)
    if isinstance(cell, ImageCell):
        return "[image]" if cell.value else ""
    return cell.value


def _cell_label(cell, position: int) -> str:
    return cell.label or f"Column {position}"


def _quotation_columns(rows: list[QuotationRow]) -> tuple[list[str], set[str]]:
    """Labels across all rows in first-seen order, plus the numeric ones."""
    labels: list[str] = []
    numeric: set[str] = set()
    for row in rows:
        for i, cell in enumerate(row.ordered_cells(), start=1):
            label = _cell_label(cell, i)
            if label not in labels:
                labels.append(label)
            if isinstance(cell, NumberCell):
                numeric.add(label)
    return labels or ["Item"], numeric


def generate_quotation_pdf(quotation: Quotation, config: PaginationConfig | None = None) -> bytes:
    config = config or PaginationConfig()
    inter_state = determine_inter_state(quotation.biller.state, quotation.client.state)
    totals = compute_quotation_totals(quotation, inter_state)
    rows = quotation.ordered_rows()
    pages = paginate(rows, config)

    labels, numeric = _quotation_columns(rows)
    columns = ["#"] + labels
    weights = [5] + [max(10, 100 // len(labels))] * len(labels)
    right_align = [i for i, label in enumerate(labels, start=1) if label in numeric]

    def _row(pos: int, row: QuotationRow) -> list[str]:
        by_label: dict[str, str] = {}
        for i, cell in enumerate(row.ordered_cells(), start=1):
            by_label.setdefault(_cell_label(cell, i), _cell_text(cell))
        return [str(pos)] + [by_label.get(label, "") for label in labels]

    def _draw(c: canvas.Canvas, frame: _Frame, page: Page) -> None:
        if page.header_variant == "full":
            _draw_full_header(
                c, frame,
                title="QUOTATION",
                number=quotation.quotation_number,
                meta=[
                    ("Date", _fmt_date(quotation.quotation_date)),
                    ("Valid Until", _fmt_date(quotation.valid_until)),
                ],
                biller=quotation.biller,
                client=quotation.client,
                supply_note=quotation.title,
            )
        else:
            _draw_continuation_header(
                c, frame, title="QUOTATION", number=quotation.quotation_number,
                page=page, party_name=quotation.client.name,
            )

        table_rows = [_row(page.start_index + n, row) for n, row in enumerate(page.rows, start=1)]
        _draw_table(c, frame, columns, weights, table_rows, right_align=right_align)

        if page.footer_variant == "full":
            _draw_full_footer(
                c, frame, page,
                totals=totals,
                inter_state=inter_state,
                biller=quotation.biller,
                notes=quotation.notes or quotation.description,
                terms=quotation.terms_and_conditions,
                closing_note=f"Prices in {quotation.currency}. GST @ {_fmt_rate(quotation.tax_rate)}%.",
            )
        else:
            _draw_continuation_footer(c, frame, page)

    pdf = _render_pages(pages, config, _draw, f"Quotation {quotation.quotation_number}")
    logger.info(
        "Rendered quotation %s: %d rows on %d page(s)",
        quotation.quotation_number, len(rows), len(pages),
    )
    return pdf
