# app/domain/services/gst_calculator.py
"""
GST tax & totals engine.

Pure functions turning line items plus the seller/buyer jurisdiction into
per-row and document-level figures:

- intra-state supply: tax split equally into CGST and SGST
- inter-state supply: full tax charged as IGST

All arithmetic is done in Decimal and left unrounded; ``round_paise`` is for
display only. Inputs are assumed validated (see LineItem); values outside
the allowed ranges are not clamped here.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from app.domain.models.invoice import (
    ZERO,
    DocumentTotals,
    Invoice,
    InvoiceComputation,
    LineItem,
    LineItemTotals,
)

HUNDRED = Decimal("100")
TWO = Decimal("2")
PAISA = Decimal("0.01")


def determine_inter_state(seller_state: str, buyer_state: str) -> bool:
    """Inter-state iff the state strings differ. No case/whitespace folding."""
    return seller_state != buyer_state


def compute_line_item(item: LineItem, is_inter_state: bool) -> LineItemTotals:
    amount = item.quantity * item.rate * (1 - item.discount_percentage / HUNDRED)
    tax = amount * item.tax_rate / HUNDRED

    if is_inter_state:
        cgst, sgst, igst = ZERO, ZERO, tax
    else:
        half = tax / TWO
        cgst, sgst, igst = half, half, ZERO

    return LineItemTotals(
        amount=amount,
        tax_amount=tax,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total_amount=amount + tax,
    )


def totals_from_rows(rows: Iterable[LineItemTotals]) -> DocumentTotals:
    """Sum already-computed rows into document totals."""
    sub_total = cgst = sgst = igst = ZERO
    for row in rows:
        sub_total += row.amount
        cgst += row.cgst
        sgst += row.sgst
        igst += row.igst
    return DocumentTotals(
        sub_total=sub_total,
        total_cgst=cgst,
        total_sgst=sgst,
        total_igst=igst,
    )


def compute_document_totals(items: Iterable[LineItem], is_inter_state: bool) -> DocumentTotals:
    """Fold compute_line_item over ``items``. Empty input gives all zeros."""
    return totals_from_rows(compute_line_item(i, is_inter_state) for i in items)


def resolve_inter_state(invoice: Invoice) -> bool:
    if invoice.is_inter_state is not None:
        return invoice.is_inter_state
    return invoice.jurisdiction.is_inter_state


def compute_invoice(invoice: Invoice) -> InvoiceComputation:
    """Recompute every derived figure of an invoice from its inputs."""
    inter_state = resolve_inter_state(invoice)
    rows = [compute_line_item(item, inter_state) for item in invoice.line_items]
    return InvoiceComputation(
        is_inter_state=inter_state,
        line_items=rows,
        totals=totals_from_rows(rows),
    )


def round_paise(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half away from zero."""
    return Decimal(value).quantize(PAISA, rounding=ROUND_HALF_UP)
