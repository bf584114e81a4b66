# app/api/v1/deps.py
"""
Shared helpers for v1 routes: application defaults that the pure domain
layer never reads on its own.
"""

from __future__ import annotations

from decimal import Decimal
from urllib.parse import quote

from app.config.settings import settings
from app.domain.models.pagination import PaginationConfig
from app.domain.models.quotation import Quotation
from app.api.v1.schemas.invoices import PaginationOverrides, QuotationPayload


def default_pagination_config() -> PaginationConfig:
    return PaginationConfig.from_settings(settings)


def resolve_pagination(overrides: PaginationOverrides | None) -> PaginationConfig:
    base = default_pagination_config()
    return overrides.apply(base) if overrides else base


def resolve_quotation(payload: QuotationPayload) -> Quotation:
    """Fill the default GST rate and return a plain Quotation."""
    data = payload.model_dump()
    if data["tax_rate"] is None:
        data["tax_rate"] = Decimal(str(settings.DEFAULT_QUOTATION_TAX_RATE))
    return Quotation.model_validate(data)


def attachment_headers(filename: str, size: int) -> dict[str, str]:
    """Download headers; non-ASCII or quote-unsafe names go in ``filename*``."""
    quoted = quote(filename, safe="")
    if quoted != filename:
        disposition = f"attachment; filename*=utf-8''{quoted}"
    else:
        disposition = f'attachment; filename="{filename}"'
    return {"Content-Disposition": disposition, "Content-Length": str(size)}
