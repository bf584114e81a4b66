# app/api/v1/routes/dashboard.py
"""Dashboard summary figures over caller-supplied invoices / quotations."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1.deps import resolve_quotation
from app.api.v1.envelope import ok
from app.api.v1.schemas.invoices import InvoiceStatsRequest, QuotationStatsRequest
from app.domain.services.dashboard_stats import (
    invoice_stats,
    quotation_stats,
    stats_to_dict,
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.post("/invoices", response_model=dict)
def invoice_dashboard(body: InvoiceStatsRequest):
    return ok(data=stats_to_dict(invoice_stats(body.invoices, body.today, body.period)))


@router.post("/quotations", response_model=dict)
def quotation_dashboard(body: QuotationStatsRequest):
    quotations = [resolve_quotation(q) for q in body.quotations]
    return ok(data=stats_to_dict(quotation_stats(quotations, body.today, body.period)))
