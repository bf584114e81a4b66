# app/domain/models/pagination.py
"""
Page layout value objects produced by the paginator.

PaginationConfig: physical page geometry and estimated block heights (mm).
Page: one output page with its slice of rows and the header/footer variants
the renderer must use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

HeaderVariant = Literal["full", "continuation"]
FooterVariant = Literal["full", "continuation"]


@dataclass(frozen=True)
class PaginationConfig:
    """All values in one unit (millimetres for the bundled renderer)."""

    page_height: float = 297.0
    page_width: float = 210.0
    margin: float = 15.0
    estimated_header_height: float = 70.0
    estimated_footer_height: float = 75.0
    estimated_row_height: float = 8.0

    @property
    def available_height(self) -> float:
        return self.page_height - 2 * self.margin

    @classmethod
    def from_settings(cls, settings: Any) -> PaginationConfig:
        """Build the application's defaults from a Settings object."""
        return cls(
            page_height=settings.PDF_PAGE_HEIGHT_MM,
            page_width=settings.PDF_PAGE_WIDTH_MM,
            margin=settings.PDF_MARGIN_MM,
            estimated_header_height=settings.PDF_HEADER_HEIGHT_MM,
            estimated_footer_height=settings.PDF_FOOTER_HEIGHT_MM,
            estimated_row_height=settings.PDF_ROW_HEIGHT_MM,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "page_height": self.page_height,
            "page_width": self.page_width,
            "margin": self.margin,
            "estimated_header_height": self.estimated_header_height,
            "estimated_footer_height": self.estimated_footer_height,
            "estimated_row_height": self.estimated_row_height,
        }


@dataclass(frozen=True)
class Page:
    page_number: int
    total_pages: int
    start_index: int                       # position of rows[0] in the document
    rows: list[Any] = field(default_factory=list)
    header_variant: HeaderVariant = "full"
    footer_variant: FooterVariant = "full"

    @property
    def is_first(self) -> bool:
        return self.page_number == 1

    @property
    def is_last(self) -> bool:
        return self.page_number == self.total_pages

    def to_dict(self) -> dict[str, Any]:
        """Layout summary without the row payloads."""
        return {
            "page_number": self.page_number,
            "total_pages": self.total_pages,
            "is_first": self.is_first,
            "is_last": self.is_last,
            "start_index": self.start_index,
            "row_count": len(self.rows),
            "header_variant": self.header_variant,
            "footer_variant": self.footer_variant,
        }
