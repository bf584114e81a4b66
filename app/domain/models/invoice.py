# app/domain/models/invoice.py
"""
Invoice domain types.

LineItem / JurisdictionContext are the engine inputs; LineItemTotals and
DocumentTotals are its outputs. BillerInfo, Client and Invoice carry the
header content a renderer needs.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.domain.services.gstin_validation import is_valid_gstin

ZERO = Decimal("0")

InvoiceStatus = Literal["draft", "sent", "paid", "overdue", "cancelled"]


class LineItem(BaseModel):
    """One billable row. Derived figures live in LineItemTotals, never here."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    product_name: str = Field(min_length=1)
    hsn_code: Optional[str] = Field(default=None, max_length=8)
    quantity: Decimal = Field(default=Decimal("1"), gt=0)
    rate: Decimal = Field(ge=0)
    discount_percentage: Decimal = Field(default=ZERO, ge=0, le=100)
    tax_rate: Decimal = Field(ge=0, le=100)


class LineItemTotals(BaseModel):
    amount: Decimal = ZERO
    tax_amount: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    total_amount: Decimal = ZERO


class JurisdictionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    seller_state: str
    buyer_state: str

    @property
    def is_inter_state(self) -> bool:
        # Exact match; callers pass canonical state names.
        return self.seller_state != self.buyer_state


class DocumentTotals(BaseModel):
    """Aggregate figures for a whole invoice or quotation."""

    sub_total: Decimal = ZERO
    total_cgst: Decimal = ZERO
    total_sgst: Decimal = ZERO
    total_igst: Decimal = ZERO

    @computed_field
    @property
    def total_tax(self) -> Decimal:
        return self.total_cgst + self.total_sgst + self.total_igst

    @computed_field
    @property
    def grand_total(self) -> Decimal:
        return self.sub_total + self.total_tax

    def __add__(self, other: DocumentTotals) -> DocumentTotals:
        return DocumentTotals(
            sub_total=self.sub_total + other.sub_total,
            total_cgst=self.total_cgst + other.total_cgst,
            total_sgst=self.total_sgst + other.total_sgst,
            total_igst=self.total_igst + other.total_igst,
        )


class _Party(BaseModel):
    """Address block shared by the biller and the client."""

    gstin: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address_line1: str = ""
    address_line2: Optional[str] = None
    city: str = ""
    state: str
    postal_code: str = ""
    country: str = "India"

    @field_validator("gstin")
    @classmethod
    def _check_gstin(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        v = v.strip().upper()
        if not is_valid_gstin(v):
            raise ValueError(f"Invalid GSTIN: {v}")
        return v

    def address_lines(self) -> list[str]:
        lines = [self.address_line1] if self.address_line1 else []
        if self.address_line2:
            lines.append(self.address_line2)
        city_line = ", ".join(p for p in (self.city, self.state) if p)
        if self.postal_code:
            city_line = f"{city_line} - {self.postal_code}"
        if city_line:
            lines.append(city_line)
        return lines


class BillerInfo(_Party):
    business_name: str = Field(min_length=1)
    logo_url: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    upi_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.business_name


class Client(_Party):
    id: Optional[str] = None
    name: str = Field(min_length=1)

    @property
    def display_name(self) -> str:
        return self.name


class Invoice(BaseModel):
    """A complete invoice as handed over by the form layer."""

    invoice_number: str = Field(min_length=1, max_length=50)
    invoice_date: date
    due_date: Optional[date] = None
    biller: BillerInfo
    client: Client
    line_items: list[LineItem] = Field(default_factory=list)
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    status: InvoiceStatus = "draft"

    # None means "derive from biller / client state".
    is_inter_state: Optional[bool] = None

    @property
    def jurisdiction(self) -> JurisdictionContext:
        return JurisdictionContext(
            seller_state=self.biller.state,
            buyer_state=self.client.state,
        )


class InvoiceComputation(BaseModel):
    """Result of recomputing an invoice from its inputs."""

    is_inter_state: bool
    line_items: list[LineItemTotals]
    totals: DocumentTotals
