# app/api/v1/schemas/invoices.py
"""Request and response schemas for invoice, quotation and dashboard endpoints."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.models.invoice import Invoice, LineItem
from app.domain.models.pagination import PaginationConfig
from app.domain.models.quotation import Quotation
from app.domain.services.dashboard_stats import StatsPeriod


class PaginationOverrides(BaseModel):
    """Per-request page geometry; unset fields fall back to settings.

    NaN and infinity are rejected here. Ranges are not checked; the
    paginator reports bad combinations as InvalidPaginationConfig.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    page_height: float | None = None
    page_width: float | None = None
    margin: float | None = None
    estimated_header_height: float | None = None
    estimated_footer_height: float | None = None
    estimated_row_height: float | None = None

    def apply(self, base: PaginationConfig) -> PaginationConfig:
        return replace(base, **self.model_dump(exclude_none=True))


class CalculateRequest(BaseModel):
    """Line items plus jurisdiction, as sent on every form change."""

    line_items: list[LineItem] = Field(default_factory=list)
    seller_state: str
    buyer_state: str
    is_inter_state: bool | None = Field(
        default=None,
        description="Explicit override; derived from the two states when omitted",
    )


class InvoicePdfRequest(BaseModel):
    invoice: Invoice
    pagination: PaginationOverrides | None = None


class PaginateRequest(BaseModel):
    row_count: int = Field(ge=0, le=10000)
    pagination: PaginationOverrides | None = None


class QuotationPayload(Quotation):
    tax_rate: Decimal | None = Field(default=None, ge=0, le=100)


class QuotationCalculateRequest(BaseModel):
    quotation: QuotationPayload


class QuotationPdfRequest(BaseModel):
    quotation: QuotationPayload
    pagination: PaginationOverrides | None = None


class InvoiceStatsRequest(BaseModel):
    invoices: list[Invoice] = Field(default_factory=list)
    today: date | None = None
    period: StatsPeriod = "all_time"


class QuotationStatsRequest(BaseModel):
    quotations: list[QuotationPayload] = Field(default_factory=list)
    today: date | None = None
    period: StatsPeriod = "all_time"
