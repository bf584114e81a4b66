# app/domain/services/quotation_totals.py
"""
Totals for free-form quotations.

Only ``number`` cells whose label mentions "amount" carry money. Text, date
and image cells, and number cells with other labels (qty, sq.ft ...), are
ignored. Each priced row is fed to the GST engine as an amount-only line
item (quantity 1).
"""

from __future__ import annotations

import logging
from decimal import Decimal

from app.domain.models.invoice import DocumentTotals, LineItem
from app.domain.models.quotation import NumberCell, Quotation, QuotationRow, TextCell
from app.domain.services.gst_calculator import compute_document_totals

logger = logging.getLogger("quotation_totals")

AMOUNT_LABEL = "amount"


def amount_cell(row: QuotationRow) -> NumberCell | None:
    """First amount cell in the order the cells were entered, not by ``order``."""
    for cell in row.cells:
        if isinstance(cell, NumberCell) and AMOUNT_LABEL in cell.label.lower():
            return cell
    return None


def row_title(row: QuotationRow, position: int) -> str:
    for cell in row.ordered_cells():
        if isinstance(cell, TextCell) and cell.value.strip():
            return cell.value.strip()
    return f"Row {position}"


def quotation_line_items(quotation: Quotation) -> list[LineItem]:
    items: list[LineItem] = []
    for pos, row in enumerate(quotation.ordered_rows(), start=1):
        cell = amount_cell(row)
        if cell is None:
            continue
        # model_construct: a discount row may carry a negative amount
        items.append(
            LineItem.model_construct(
                id=row.id,
                product_name=row_title(row, pos),
                hsn_code=None,
                quantity=Decimal("1"),
                rate=cell.value,
                discount_percentage=Decimal("0"),
                tax_rate=quotation.tax_rate,
            )
        )
    return items


def compute_quotation_totals(quotation: Quotation, is_inter_state: bool = False) -> DocumentTotals:
    items = quotation_line_items(quotation)
    logger.debug(
        "Quotation %s: %d of %d rows priced",
        quotation.quotation_number, len(items), len(quotation.rows),
    )
    return compute_document_totals(items, is_inter_state)
