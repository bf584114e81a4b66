"""Tests for the v1 HTTP endpoints."""

from urllib.parse import quote

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from app.main import app

BILLER = {
    "business_name": "My Awesome Company Pvt Ltd",
    "gstin": "29ABCDE1234F1Z5",
    "address_line1": "789 Main Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "postal_code": "560034",
}
CLIENT = {
    "name": "Acme Corp",
    "address_line1": "123 Business St",
    "city": "Bangalore",
    "state": "Karnataka",
    "postal_code": "560001",
}
ITEMS = [
    {"product_name": "Web Development", "quantity": 1, "rate": 1000, "tax_rate": 18},
    {"product_name": "Hosting", "quantity": 2, "rate": 500, "discount_percentage": 10, "tax_rate": 18},
    {"product_name": "Hardware", "quantity": 1, "rate": 2000, "tax_rate": 28},
]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _invoice(**overrides) -> dict:
    data = {
        "invoice_number": "INV-202501-17",
        "invoice_date": "2025-01-15",
        "due_date": "2025-01-30",
        "biller": BILLER,
        "client": CLIENT,
        "line_items": ITEMS,
    }
    data.update(overrides)
    return data


def _quotation(**overrides) -> dict:
    data = {
        "quotation_number": "QUO-202501-4",
        "quotation_date": "2025-01-10",
        "valid_until": "2025-02-10",
        "title": "Office fit-out",
        "biller": BILLER,
        "client": CLIENT,
        "rows": [
            {"cells": [
                {"type": "text", "label": "Item", "value": "Workstation"},
                {"type": "number", "label": "Amount", "value": 40000, "order": 1},
            ]},
            {"order": 1, "cells": [
                {"type": "text", "label": "Item", "value": "Chairs"},
                {"type": "number", "label": "Amount", "value": 10000, "order": 1},
            ]},
        ],
    }
    data.update(overrides)
    return data


def test_health(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


class TestCalculate:

    def test_intra_state(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/calculate", json={
            "line_items": ITEMS, "seller_state": "Karnataka", "buyer_state": "Karnataka",
        })
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "ok"
        data = body["data"]
        assert data["is_inter_state"] is False
        assert len(data["line_items"]) == 3
        assert float(data["totals"]["sub_total"]) == 3900
        assert float(data["totals"]["total_cgst"]) == 451
        assert float(data["totals"]["total_sgst"]) == 451
        assert float(data["totals"]["grand_total"]) == 4802

    def test_inter_state(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/calculate", json={
            "line_items": ITEMS, "seller_state": "Karnataka", "buyer_state": "Maharashtra",
        })
        totals = response.json()["data"]["totals"]
        assert float(totals["total_igst"]) == 902
        assert float(totals["total_cgst"]) == 0
        assert float(totals["grand_total"]) == 4802

    def test_override(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/calculate", json={
            "line_items": ITEMS, "seller_state": "Karnataka", "buyer_state": "Karnataka",
            "is_inter_state": True,
        })
        assert response.json()["data"]["is_inter_state"] is True

    def test_empty_items(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/calculate", json={
            "line_items": [], "seller_state": "Goa", "buyer_state": "Goa",
        })
        assert float(response.json()["data"]["totals"]["grand_total"]) == 0

    @pytest.mark.parametrize("bad", [
        {"product_name": "", "rate": 10, "tax_rate": 18},
        {"product_name": "X", "quantity": 0, "rate": 10, "tax_rate": 18},
        {"product_name": "X", "rate": -1, "tax_rate": 18},
        {"product_name": "X", "rate": 10, "discount_percentage": 101, "tax_rate": 18},
        {"product_name": "X", "rate": 10, "tax_rate": 120},
    ])
    def test_invalid_line_item_rejected(self, client: TestClient, bad: dict) -> None:
        response = client.post("/api/v1/invoices/calculate", json={
            "line_items": [bad], "seller_state": "Goa", "buyer_state": "Goa",
        })
        assert response.status_code == 422


class TestPaginate:

    def test_twenty_five_rows(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/paginate", json={
            "row_count": 25,
            "pagination": {
                "estimated_header_height": 70,
                "estimated_footer_height": 77,
                "estimated_row_height": 12,
            },
        })
        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["max_rows_per_page"] == 10
        assert [p["row_count"] for p in data["pages"]] == [10, 10, 5]
        assert [p["header_variant"] for p in data["pages"]] == ["full", "continuation", "continuation"]
        assert [p["footer_variant"] for p in data["pages"]] == ["continuation", "continuation", "full"]

    def test_zero_rows(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/paginate", json={"row_count": 0})
        assert len(response.json()["data"]["pages"]) == 1

    def test_invalid_config(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/paginate", json={
            "row_count": 5,
            "pagination": {"estimated_header_height": 250},
        })
        assert response.status_code == 422
        body = response.json()
        assert body["status"] == "error"
        assert body["errors"][0]["type"] == "invalid_pagination_config"

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_override_rejected(self, client: TestClient, token: str) -> None:
        response = client.post(
            "/api/v1/invoices/paginate",
            content='{"row_count": 3, "pagination": {"estimated_row_height": ' + token + '}}',
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 422


class TestInvoicePdf:

    def test_download(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/pdf", json={"invoice": _invoice()})
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="invoice-INV-202501-17.pdf"'
        assert response.content.startswith(b"%PDF")

    def test_non_ascii_number_uses_encoded_filename(self, client: TestClient) -> None:
        number = "बिल-202501-17"
        response = client.post("/api/v1/invoices/pdf", json={"invoice": _invoice(invoice_number=number)})
        assert response.status_code == status.HTTP_200_OK
        expected = quote(f"invoice-{number}.pdf", safe="")
        assert response.headers["content-disposition"] == f"attachment; filename*=utf-8''{expected}"
        assert response.content.startswith(b"%PDF")

    def test_quote_in_number_does_not_break_header(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/pdf", json={"invoice": _invoice(invoice_number='INV "7"')})
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-disposition"] == (
            "attachment; filename*=utf-8''invoice-INV%20%227%22.pdf"
        )

    def test_invalid_gstin_rejected(self, client: TestClient) -> None:
        bad_biller = dict(BILLER, gstin="NOT-A-GSTIN")
        response = client.post("/api/v1/invoices/pdf", json={"invoice": _invoice(biller=bad_biller)})
        assert response.status_code == 422

    def test_invalid_pagination(self, client: TestClient) -> None:
        response = client.post("/api/v1/invoices/pdf", json={
            "invoice": _invoice(),
            "pagination": {"estimated_row_height": 0},
        })
        assert response.status_code == 422


class TestNumbers:

    def test_next_invoice_number(self, client: TestClient) -> None:
        number = client.get("/api/v1/invoices/next-number").json()["data"]["invoice_number"]
        assert number.startswith("INV-")

    def test_next_quotation_number(self, client: TestClient) -> None:
        number = client.get("/api/v1/quotations/next-number").json()["data"]["quotation_number"]
        assert number.startswith("QUO-")


class TestQuotations:

    def test_calculate_uses_default_rate(self, client: TestClient) -> None:
        response = client.post("/api/v1/quotations/calculate", json={"quotation": _quotation()})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["priced_rows"] == 2
        assert float(data["tax_rate"]) == 18
        assert float(data["totals"]["grand_total"]) == 59000

    def test_calculate_custom_rate(self, client: TestClient) -> None:
        response = client.post("/api/v1/quotations/calculate", json={"quotation": _quotation(tax_rate=5)})
        assert float(response.json()["data"]["totals"]["total_tax"]) == 2500

    def test_pdf(self, client: TestClient) -> None:
        response = client.post("/api/v1/quotations/pdf", json={"quotation": _quotation()})
        assert response.status_code == status.HTTP_200_OK
        assert 'filename="quotation-QUO-202501-4.pdf"' in response.headers["content-disposition"]


class TestDashboard:

    def test_invoice_stats_period(self, client: TestClient) -> None:
        response = client.post("/api/v1/dashboard/invoices", json={
            "today": "2025-02-15",
            "period": "last_month",
            "invoices": [
                _invoice(status="paid"),
                _invoice(invoice_number="INV-2", invoice_date="2025-02-02", status="paid"),
            ],
        })
        data = response.json()["data"]
        assert data["invoices_created_count"] == 1
        assert float(data["total_revenue"]) == 4802

    def test_unknown_period_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/dashboard/invoices", json={"period": "last_year"})
        assert response.status_code == 422

    def test_invoice_stats(self, client: TestClient) -> None:
        response = client.post("/api/v1/dashboard/invoices", json={
            "today": "2025-02-15",
            "invoices": [
                _invoice(status="paid"),
                _invoice(invoice_number="INV-2", status="sent"),
            ],
        })
        data = response.json()["data"]
        assert data["invoices_created_count"] == 2
        assert float(data["total_revenue"]) == 4802
        assert data["overdue_invoices_count"] == 1

    def test_quotation_stats(self, client: TestClient) -> None:
        response = client.post("/api/v1/dashboard/quotations", json={
            "today": "2025-01-20",
            "quotations": [_quotation(status="accepted"), _quotation(status="sent")],
        })
        data = response.json()["data"]
        assert data["quotations_created_count"] == 2
        assert data["accepted_quotations_count"] == 1
        assert float(data["conversion_rate"]) == 50
        assert float(data["total_quotation_value"]) == 118000
