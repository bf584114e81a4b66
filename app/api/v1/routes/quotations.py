# app/api/v1/routes/quotations.py
"""Quotation totals, numbering and PDF download endpoints."""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.config.settings import settings
from app.api.v1.deps import attachment_headers, resolve_pagination, resolve_quotation
from app.api.v1.envelope import ok
from app.api.v1.schemas.invoices import QuotationCalculateRequest, QuotationPdfRequest
from app.domain.services.document_numbers import generate_document_number
from app.domain.services.gst_calculator import determine_inter_state
from app.domain.services.invoice_pdf import document_filename, generate_quotation_pdf
from app.domain.services.quotation_totals import compute_quotation_totals, quotation_line_items

logger = logging.getLogger("api.v1.quotations")

router = APIRouter(prefix="/quotations", tags=["Quotations"])


@router.post("/calculate", response_model=dict)
def calculate_quotation(body: QuotationCalculateRequest):
    quotation = resolve_quotation(body.quotation)
    inter_state = determine_inter_state(quotation.biller.state, quotation.client.state)
    totals = compute_quotation_totals(quotation, inter_state)
    return ok(data={
        "is_inter_state": inter_state,
        "tax_rate": quotation.tax_rate,
        "priced_rows": len(quotation_line_items(quotation)),
        "totals": totals.model_dump(),
    })


@router.get("/next-number", response_model=dict)
def next_quotation_number():
    return ok(data={"quotation_number": generate_document_number(settings.QUOTATION_NUMBER_PREFIX)})


@router.post("/pdf")
def download_quotation_pdf(body: QuotationPdfRequest):
    quotation = resolve_quotation(body.quotation)
    pdf = generate_quotation_pdf(quotation, resolve_pagination(body.pagination))
    filename = document_filename("quotation", quotation.quotation_number)
    logger.info("Quotation PDF %s generated (%d bytes)", filename, len(pdf))
    return StreamingResponse(
        io.BytesIO(pdf),
        media_type="application/pdf",
        headers=attachment_headers(filename, len(pdf)),
    )
