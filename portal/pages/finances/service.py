"""Finances service: fee summary plus one section per tab, all derived from fee_payments."""

from collections import OrderedDict
from typing import Any, Dict, List

from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.core.calculations import completion_percentage, to_date
from portal.core.enums import FeeStatus, FinanceTab
from portal.pages.common import fetch_rows, with_placeholder

from .schemas import (
    FeeTypeTotal,
    FinancesPage,
    FinancialSummary,
    OutstandingFee,
    PaymentRecord,
)

PLACEHOLDERS = {
    FinanceTab.OVERVIEW: "You have no outstanding fees",
    FinanceTab.PAYMENT_HISTORY: "Your payment history will appear here once you make payments.",
    FinanceTab.FEE_STRUCTURE: "No fees have been assigned yet",
}


def _amount(row: Dict[str, Any], column: str) -> float:
    return float(row.get(column) or 0)


def build_summary(rows: List[Dict[str, Any]]) -> FinancialSummary:
    total = sum(_amount(r, "amount_due") for r in rows)
    paid = sum(_amount(r, "amount_paid") for r in rows)
    unpaid = [r for r in rows if r.get("status") != FeeStatus.paid.value and r.get("due_date")]
    upcoming = min(unpaid, key=lambda r: to_date(r["due_date"]), default=None)
    return FinancialSummary(
        total_fees=total,
        paid_amount=paid,
        pending_amount=total - paid,
        completion_percentage=completion_percentage(paid, total),
        next_payment_date=to_date(upcoming["due_date"]) if upcoming else None,
        next_payment_amount=_amount(upcoming, "amount_due") - _amount(upcoming, "amount_paid") if upcoming else None,
    )


def outstanding_fees(rows: List[Dict[str, Any]]) -> List[OutstandingFee]:
    return [
        OutstandingFee(
            id=r["id"],
            description=r.get("description"),
            fee_type=r.get("fee_type"),
            amount_due=_amount(r, "amount_due"),
            amount_paid=_amount(r, "amount_paid"),
            outstanding=_amount(r, "amount_due") - _amount(r, "amount_paid"),
            due_date=to_date(r.get("due_date")),
            status=r.get("status") or FeeStatus.pending.value,
        )
        for r in rows
        if r.get("status") != FeeStatus.paid.value
    ]


def payment_history(rows: List[Dict[str, Any]]) -> List[PaymentRecord]:
    paid = [r for r in rows if _amount(r, "amount_paid") > 0]
    paid.sort(key=lambda r: r.get("last_payment_date") or "", reverse=True)
    return [
        PaymentRecord(
            id=r["id"],
            description=r.get("description"),
            amount=_amount(r, "amount_paid"),
            paid_on=to_date(r.get("last_payment_date")),
            method=r.get("payment_method"),
            status=r.get("status") or "",
        )
        for r in paid
    ]


def fee_structure(rows: List[Dict[str, Any]]) -> List[FeeTypeTotal]:
    groups: "OrderedDict[str, FeeTypeTotal]" = OrderedDict()
    for r in rows:
        fee_type = r.get("fee_type") or "other"
        group = groups.setdefault(fee_type, FeeTypeTotal(fee_type=fee_type, amount_due=0, amount_paid=0, count=0))
        group.amount_due += _amount(r, "amount_due")
        group.amount_paid += _amount(r, "amount_paid")
        group.count += 1
    return list(groups.values())


async def get_finances(backend: Backend, user: CurrentUser, tab: FinanceTab = FinanceTab.OVERVIEW) -> FinancesPage:
    rows = await fetch_rows(
        backend.table("fee_payments").select("*").eq("student_id", user.student_id).order("due_date"),
        "fee payments",
    )
    page = FinancesPage(active_tab=tab, summary=build_summary(rows))

    if tab == FinanceTab.OVERVIEW:
        page.outstanding_fees, page.placeholder = with_placeholder(outstanding_fees(rows), PLACEHOLDERS[tab])
    elif tab == FinanceTab.PAYMENT_HISTORY:
        page.payment_history, page.placeholder = with_placeholder(payment_history(rows), PLACEHOLDERS[tab])
    else:
        structure = fee_structure(rows)
        page.fee_structure, page.placeholder = with_placeholder(structure, PLACEHOLDERS[tab])
        page.fee_structure_total = sum(g.amount_due for g in structure)
    return page
