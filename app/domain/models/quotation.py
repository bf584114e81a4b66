# app/domain/models/quotation.py
"""
Quotation domain types.

A quotation row is a free-form list of typed cells. Cells are a tagged union
on ``type`` so each value keeps its own type; nothing is coerced between
variants.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from app.domain.models.invoice import BillerInfo, Client

QuotationStatus = Literal["draft", "sent", "accepted", "declined", "expired"]


class _Cell(BaseModel):
    id: Optional[str] = None
    label: str = ""
    order: int = 0
    width: Optional[float] = None


class TextCell(_Cell):
    type: Literal["text"] = "text"
    value: str = ""


class NumberCell(_Cell):
    type: Literal["number"] = "number"
    value: Decimal = Decimal("0")


class DateCell(_Cell):
    type: Literal["date"] = "date"
    value: date


class ImageCell(_Cell):
    type: Literal["image"] = "image"
    value: str = ""  # url


QuotationCell = Annotated[
    Union[TextCell, NumberCell, DateCell, ImageCell],
    Field(discriminator="type"),
]


class QuotationRow(BaseModel):
    id: Optional[str] = None
    order: int = 0
    cells: list[QuotationCell] = Field(default_factory=list)

    def ordered_cells(self) -> list:
        return sorted(self.cells, key=lambda c: c.order)


class Quotation(BaseModel):
    quotation_number: str = Field(min_length=1, max_length=50)
    quotation_date: date
    valid_until: date
    title: str = Field(min_length=1)
    description: Optional[str] = None
    biller: BillerInfo
    client: Client
    rows: list[QuotationRow] = Field(default_factory=list)
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    status: QuotationStatus = "draft"
    currency: str = "INR"
    tax_rate: Decimal = Field(default=Decimal("18"), ge=0, le=100)

    def ordered_rows(self) -> list[QuotationRow]:
        return sorted(self.rows, key=lambda r: r.order)
