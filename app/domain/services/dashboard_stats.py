# app/domain/services/dashboard_stats.py
"""
Dashboard summary numbers for invoices and quotations.

Grand totals are recomputed from line items / rows rather than trusted from
stored fields. Charts are left to the frontend. An optional period
(this month, last month, all time) filters on the document date.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Literal, Optional

from app.domain.models.invoice import Invoice
from app.domain.models.quotation import Quotation
from app.domain.services.gst_calculator import (
    compute_invoice,
    determine_inter_state,
    round_paise,
)
from app.domain.services.quotation_totals import compute_quotation_totals

logger = logging.getLogger("dashboard_stats")

ZERO = Decimal("0")

StatsPeriod = Literal["this_month", "last_month", "all_time"]


@dataclass
class InvoiceStats:
    total_revenue: Decimal = ZERO          # paid invoices only
    invoices_created_count: int = 0
    paid_invoices_count: int = 0
    active_clients_count: int = 0
    overdue_invoices_count: int = 0
    overdue_invoices_amount: Decimal = ZERO
    total_sent_amount_this_month: Decimal = ZERO


@dataclass
class QuotationStats:
    total_quotation_value: Decimal = ZERO
    quotations_created_count: int = 0
    accepted_quotations_count: int = 0
    pending_quotations_count: int = 0
    expired_quotations_count: int = 0
    conversion_rate: Optional[Decimal] = None     # percent
    average_quotation_value: Optional[Decimal] = None


def period_bounds(period: StatsPeriod, today: date) -> tuple[date, date] | None:
    """Inclusive (first, last) day of the period; None for all time."""
    if period == "all_time":
        return None
    first = today.replace(day=1)
    if period == "last_month":
        first = (first - timedelta(days=1)).replace(day=1)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return first, next_first - timedelta(days=1)


def _in_period(day: date, bounds: tuple[date, date] | None) -> bool:
    return bounds is None or bounds[0] <= day <= bounds[1]


def _is_overdue(inv: Invoice, today: date) -> bool:
    if inv.status == "overdue":
        return True
    if inv.status in ("paid", "cancelled") or inv.due_date is None:
        return False
    return inv.due_date < today


def _client_key(inv: Invoice) -> str:
    return inv.client.id or inv.client.gstin or inv.client.name


def invoice_stats(
    invoices: Iterable[Invoice],
    today: date | None = None,
    period: StatsPeriod = "all_time",
) -> InvoiceStats:
    """Figures over invoices dated within ``period``."""
    today = today or date.today()
    bounds = period_bounds(period, today)
    stats = InvoiceStats()
    clients: set[str] = set()

    for inv in invoices:
        if not _in_period(inv.invoice_date, bounds):
            continue
        grand_total = compute_invoice(inv).totals.grand_total
        stats.invoices_created_count += 1
        clients.add(_client_key(inv))

        if inv.status == "paid":
            stats.total_revenue += grand_total
            stats.paid_invoices_count += 1
        if _is_overdue(inv, today):
            stats.overdue_invoices_count += 1
            stats.overdue_invoices_amount += grand_total
        if (
            inv.status == "sent"
            and (inv.invoice_date.year, inv.invoice_date.month) == (today.year, today.month)
        ):
            stats.total_sent_amount_this_month += grand_total

    stats.active_clients_count = len(clients)
    logger.debug(
        "Invoice stats: %d invoices, %d overdue",
        stats.invoices_created_count, stats.overdue_invoices_count,
    )
    return stats


def _is_expired(quot: Quotation, today: date) -> bool:
    if quot.status == "expired":
        return True
    if quot.status in ("accepted", "declined"):
        return False
    return quot.valid_until < today


def quotation_stats(
    quotations: Iterable[Quotation],
    today: date | None = None,
    period: StatsPeriod = "all_time",
) -> QuotationStats:
    today = today or date.today()
    bounds = period_bounds(period, today)
    stats = QuotationStats()

    for quot in quotations:
        if not _in_period(quot.quotation_date, bounds):
            continue
        inter_state = determine_inter_state(quot.biller.state, quot.client.state)
        stats.total_quotation_value += compute_quotation_totals(quot, inter_state).grand_total
        stats.quotations_created_count += 1
        if quot.status == "accepted":
            stats.accepted_quotations_count += 1
        if quot.status == "sent":
            stats.pending_quotations_count += 1
        if _is_expired(quot, today):
            stats.expired_quotations_count += 1

    count = stats.quotations_created_count
    if count:
        stats.average_quotation_value = round_paise(stats.total_quotation_value / count)
        stats.conversion_rate = round_paise(
            Decimal(stats.accepted_quotations_count) * 100 / count
        )
    else:
        stats.average_quotation_value = ZERO
        stats.conversion_rate = ZERO
    return stats


def stats_to_dict(stats: InvoiceStats | QuotationStats) -> dict[str, Any]:
    return asdict(stats)
