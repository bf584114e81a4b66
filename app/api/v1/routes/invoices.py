# app/api/v1/routes/invoices.py
"""
Invoice calculation, page layout, numbering and PDF download endpoints.
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.config.settings import settings
from app.api.v1.deps import attachment_headers, resolve_pagination
from app.api.v1.envelope import ok
from app.api.v1.schemas.invoices import (
    CalculateRequest,
    InvoicePdfRequest,
    PaginateRequest,
)
from app.domain.services.document_numbers import generate_document_number
from app.domain.services.gst_calculator import (
    compute_line_item,
    determine_inter_state,
    totals_from_rows,
)
from app.domain.services.invoice_pdf import document_filename, generate_invoice_pdf
from app.domain.services.paginator import max_rows_per_page, paginate

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


# ---------------------------------------------------------------------------
# Live totals (called on every form change)
# ---------------------------------------------------------------------------

@router.post("/calculate", response_model=dict)
def calculate_invoice(body: CalculateRequest):
    """Recompute per-row GST figures and document totals from scratch."""
    if body.is_inter_state is not None:
        inter_state = body.is_inter_state
    else:
        inter_state = determine_inter_state(body.seller_state, body.buyer_state)

    rows = [compute_line_item(item, inter_state) for item in body.line_items]
    totals = totals_from_rows(rows)
    return ok(data={
        "is_inter_state": inter_state,
        "line_items": [r.model_dump() for r in rows],
        "totals": totals.model_dump(),
    })


# ---------------------------------------------------------------------------
# Page layout preview
# ---------------------------------------------------------------------------

@router.post("/paginate", response_model=dict)
def paginate_rows(body: PaginateRequest):
    """Return the page split for ``row_count`` rows without rendering."""
    config = resolve_pagination(body.pagination)
    pages = paginate(range(body.row_count), config)
    return ok(data={
        "max_rows_per_page": max_rows_per_page(config),
        "config": config.to_dict(),
        "pages": [p.to_dict() for p in pages],
    })


# ---------------------------------------------------------------------------
# Numbering
# ---------------------------------------------------------------------------

@router.get("/next-number", response_model=dict)
def next_invoice_number():
    return ok(data={"invoice_number": generate_document_number(settings.INVOICE_NUMBER_PREFIX)})


# ---------------------------------------------------------------------------
# PDF download
# ---------------------------------------------------------------------------

@router.post("/pdf")
def download_invoice_pdf(body: InvoicePdfRequest):
    """Render the invoice and stream it back as an attachment."""
    config = resolve_pagination(body.pagination)
    pdf = generate_invoice_pdf(body.invoice, config)
    filename = document_filename("invoice", body.invoice.invoice_number)
    logger.info("Invoice PDF %s generated (%d bytes)", filename, len(pdf))
    return StreamingResponse(
        io.BytesIO(pdf),
        media_type="application/pdf",
        headers=attachment_headers(filename, len(pdf)),
    )
