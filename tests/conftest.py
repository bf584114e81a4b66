"""Shared test fixtures for the GST invoicing test suite."""

from datetime import date
from decimal import Decimal

import pytest

from app.domain.models.invoice import BillerInfo, Client, Invoice, LineItem
from app.domain.models.quotation import (
    DateCell,
    ImageCell,
    NumberCell,
    Quotation,
    QuotationRow,
    TextCell,
)


@pytest.fixture
def biller() -> BillerInfo:
    return BillerInfo(
        business_name="My Awesome Company Pvt Ltd",
        gstin="29ABCDE1234F1Z5",
        address_line1="789 Main Road, Koramangala",
        city="Bengaluru",
        state="Karnataka",
        postal_code="560034",
        phone="080-12345678",
        email="accounts@myawesomecompany.com",
        bank_name="Awesome Bank",
        account_number="123456789012",
        ifsc_code="AWSM0001234",
        upi_id="myawesomecompany@upi",
    )


@pytest.fixture
def local_client() -> Client:
    return Client(
        id="client-1",
        name="Acme Corp",
        gstin="29AAAAA0000A1Z5",
        address_line1="123 Business St",
        city="Bangalore",
        state="Karnataka",
        postal_code="560001",
    )


@pytest.fixture
def outstation_client() -> Client:
    return Client(
        id="client-2",
        name="Innovate Hub",
        gstin="27BBBBB0000B1Z5",
        address_line1="456 Tech Park",
        city="Mumbai",
        state="Maharashtra",
        postal_code="400001",
    )


@pytest.fixture
def three_items() -> list[LineItem]:
    """1000 @18%, 2 x 500 less 10% @18%, 2000 @28%."""
    return [
        LineItem(product_name="Web Development", quantity=1, rate=1000, tax_rate=18),
        LineItem(product_name="Hosting", quantity=2, rate=500, discount_percentage=10, tax_rate=18),
        LineItem(product_name="Hardware", quantity=1, rate=2000, tax_rate=28),
    ]


@pytest.fixture
def make_items():
    def _make(n: int) -> list[LineItem]:
        return [
            LineItem(product_name=f"Item {i}", quantity=i % 3 + 1, rate=100 * i, tax_rate=18)
            for i in range(1, n + 1)
        ]
    return _make


@pytest.fixture
def make_invoice(biller, local_client):
    def _make(items=None, client=None, **kwargs) -> Invoice:
        return Invoice(
            invoice_number=kwargs.pop("invoice_number", "INV-202501-17"),
            invoice_date=kwargs.pop("invoice_date", date(2025, 1, 15)),
            due_date=kwargs.pop("due_date", date(2025, 1, 30)),
            biller=biller,
            client=client or local_client,
            line_items=items if items is not None else [],
            **kwargs,
        )
    return _make


@pytest.fixture
def make_quotation(biller, local_client):
    def _make(rows=None, client=None, **kwargs) -> Quotation:
        return Quotation(
            quotation_number=kwargs.pop("quotation_number", "QUO-202501-4"),
            quotation_date=kwargs.pop("quotation_date", date(2025, 1, 10)),
            valid_until=kwargs.pop("valid_until", date(2025, 2, 10)),
            title=kwargs.pop("title", "Office fit-out"),
            biller=biller,
            client=client or local_client,
            rows=rows if rows is not None else [],
            **kwargs,
        )
    return _make


@pytest.fixture
def quotation_rows() -> list[QuotationRow]:
    return [
        QuotationRow(order=0, cells=[
            TextCell(label="Item", value="Workstation", order=0),
            NumberCell(label="Qty", value=Decimal("4"), order=1),
            NumberCell(label="Amount", value=Decimal("40000"), order=2),
        ]),
        QuotationRow(order=1, cells=[
            TextCell(label="Item", value="Chairs", order=0),
            ImageCell(label="Photo", value="https://example.com/chair.png", order=1),
            NumberCell(label="Total Amount", value=Decimal("10000"), order=2),
        ]),
        QuotationRow(order=2, cells=[
            TextCell(label="Item", value="Site visit", order=0),
            DateCell(label="Date", value=date(2025, 1, 20), order=1),
        ]),
    ]
