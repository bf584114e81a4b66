"""Tests for the document paginator."""

import math

import pytest

from app.domain.models.pagination import PaginationConfig
from app.domain.services.paginator import (
    InvalidPaginationConfig,
    max_rows_per_page,
    paginate,
)


def ten_rows_config() -> PaginationConfig:
    """(297 - 2*15 - 70 - 77) / 12 = 10 rows per page."""
    return PaginationConfig(
        page_height=297,
        page_width=210,
        margin=15,
        estimated_header_height=70,
        estimated_footer_height=77,
        estimated_row_height=12,
    )


class TestMaxRowsPerPage:

    def test_default_a4(self):
        # (297 - 30 - 70 - 75) / 8 = 15.25
        assert max_rows_per_page(PaginationConfig()) == 15

    def test_floor(self):
        assert max_rows_per_page(ten_rows_config()) == 10

    def test_zero_usable_rows_is_an_error(self):
        config = PaginationConfig(estimated_header_height=150, estimated_footer_height=120)
        with pytest.raises(InvalidPaginationConfig, match="No room"):
            max_rows_per_page(config)

    @pytest.mark.parametrize(
        "field",
        ["page_height", "page_width", "estimated_header_height",
         "estimated_footer_height", "estimated_row_height"],
    )
    def test_non_positive_values_rejected(self, field):
        config = PaginationConfig(**{field: 0})
        with pytest.raises(InvalidPaginationConfig, match=field):
            max_rows_per_page(config)

    def test_negative_margin_rejected(self):
        with pytest.raises(InvalidPaginationConfig, match="margin"):
            max_rows_per_page(PaginationConfig(margin=-1))

    @pytest.mark.parametrize("field,value", [
        ("estimated_row_height", math.nan),
        ("page_height", math.inf),
        ("margin", -math.inf),
        ("estimated_footer_height", math.nan),
    ])
    def test_non_finite_values_rejected(self, field, value):
        with pytest.raises(InvalidPaginationConfig, match=field):
            max_rows_per_page(PaginationConfig(**{field: value}))

    def test_is_a_value_error(self):
        assert issubclass(InvalidPaginationConfig, ValueError)


class TestPaginate:

    def test_twenty_five_rows_over_three_pages(self):
        pages = paginate(list(range(25)), ten_rows_config())
        assert [len(p.rows) for p in pages] == [10, 10, 5]
        assert [p.header_variant for p in pages] == ["full", "continuation", "continuation"]
        assert [p.footer_variant for p in pages] == ["continuation", "continuation", "full"]
        assert [p.page_number for p in pages] == [1, 2, 3]
        assert [p.start_index for p in pages] == [0, 10, 20]

    def test_first_and_last_flags(self):
        pages = paginate(list(range(25)), ten_rows_config())
        assert [p.is_first for p in pages] == [True, False, False]
        assert [p.is_last for p in pages] == [False, False, True]
        assert all(p.total_pages == 3 for p in pages)

    def test_empty_document_has_one_page(self):
        pages = paginate([], ten_rows_config())
        assert len(pages) == 1
        page = pages[0]
        assert page.rows == []
        assert page.is_first and page.is_last
        assert page.header_variant == "full"
        assert page.footer_variant == "full"

    def test_exact_multiple(self):
        pages = paginate(list(range(20)), ten_rows_config())
        assert [len(p.rows) for p in pages] == [10, 10]

    def test_single_page_document(self):
        pages = paginate(["a", "b"], ten_rows_config())
        assert len(pages) == 1
        assert pages[0].header_variant == "full" and pages[0].footer_variant == "full"

    @pytest.mark.parametrize("n", [0, 1, 9, 10, 11, 99, 100, 101])
    def test_partition_and_page_count(self, n):
        rows = [f"row-{i}" for i in range(n)]
        config = ten_rows_config()
        per_page = max_rows_per_page(config)
        pages = paginate(rows, config)

        assert len(pages) == max(1, math.ceil(n / per_page))
        flattened = [r for p in pages for r in p.rows]
        assert flattened == rows
        assert all(len(p.rows) <= per_page for p in pages)

    def test_invalid_config_propagates(self):
        with pytest.raises(InvalidPaginationConfig):
            paginate([1, 2, 3], PaginationConfig(estimated_row_height=-5))

    def test_input_is_not_mutated(self):
        rows = list(range(12))
        pages = paginate(rows, ten_rows_config())
        pages[0].rows.append("extra")
        assert rows == list(range(12))

    def test_to_dict(self):
        page = paginate(list(range(3)), ten_rows_config())[0]
        assert page.to_dict() == {
            "page_number": 1,
            "total_pages": 1,
            "is_first": True,
            "is_last": True,
            "start_index": 0,
            "row_count": 3,
            "header_variant": "full",
            "footer_variant": "full",
        }


class TestConfigFromSettings:

    def test_reads_pdf_settings(self):
        from app.config.settings import Settings

        s = Settings(PDF_PAGE_HEIGHT_MM=279.4, PDF_PAGE_WIDTH_MM=215.9, PDF_ROW_HEIGHT_MM=10)
        config = PaginationConfig.from_settings(s)
        assert config.page_height == pytest.approx(279.4)
        assert config.page_width == pytest.approx(215.9)
        assert config.estimated_row_height == 10
