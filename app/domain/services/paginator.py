# app/domain/services/paginator.py
"""
Document paginator.

Splits a document made of a fixed header block, N table rows and a fixed
footer block across fixed-size pages:

  Sizing → Slicing → PerPageRender → Assembled

The paginator only does the first two steps; rendering each Page and
concatenating the result is the renderer's job (see invoice_pdf.py).
Each call is independent and keeps no state.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from app.domain.models.pagination import Page, PaginationConfig

_CONFIG_FIELDS = (
    "page_height",
    "page_width",
    "margin",
    "estimated_header_height",
    "estimated_footer_height",
    "estimated_row_height",
)


class InvalidPaginationConfig(ValueError):
    """Raised when a config cannot fit at least one row per page."""


def max_rows_per_page(config: PaginationConfig) -> int:
    """Return how many rows fit between the header and the footer."""
    for name in _CONFIG_FIELDS:
        value = getattr(config, name)
        if not math.isfinite(value):
            raise InvalidPaginationConfig(f"{name} must be a finite number, got {value}")
        # margin may legitimately be 0
        if value < 0 or (value == 0 and name != "margin"):
            raise InvalidPaginationConfig(f"{name} must be positive, got {value}")

    usable = (
        config.available_height
        - config.estimated_header_height
        - config.estimated_footer_height
    )
    rows = math.floor(usable / config.estimated_row_height)
    if rows < 1:
        raise InvalidPaginationConfig(
            f"No room for table rows: {usable:g} usable height for "
            f"rows of {config.estimated_row_height:g}"
        )
    return rows


def page_count(row_count: int, per_page: int) -> int:
    """An empty document still produces one page."""
    return max(1, math.ceil(row_count / per_page))


def paginate(rows: Sequence[Any], config: PaginationConfig) -> list[Page]:
    per_page = max_rows_per_page(config)
    total = page_count(len(rows), per_page)

    pages: list[Page] = []
    for i in range(total):
        start = i * per_page
        end = min(start + per_page, len(rows))
        pages.append(
            Page(
                page_number=i + 1,
                total_pages=total,
                start_index=start,
                rows=list(rows[start:end]),
                header_variant="full" if i == 0 else "continuation",
                footer_variant="full" if i == total - 1 else "continuation",
            )
        )
    return pages
