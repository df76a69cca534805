"""Finances schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from portal.core.enums import FinanceTab


class FinancialSummary(BaseModel):
    total_fees: float
    paid_amount: float
    pending_amount: float
    completion_percentage: float
    next_payment_date: Optional[date] = None
    next_payment_amount: Optional[float] = None


class OutstandingFee(BaseModel):
    id: int
    description: Optional[str] = None
    fee_type: Optional[str] = None
    amount_due: float
    amount_paid: float
    outstanding: float
    due_date: Optional[date] = None
    status: str


class PaymentRecord(BaseModel):
    id: int
    description: Optional[str] = None
    amount: float
    paid_on: Optional[date] = None
    method: Optional[str] = None
    status: str


class FeeTypeTotal(BaseModel):
    """Fees of one type summed together (fee-structure tab)."""

    fee_type: str
    amount_due: float
    amount_paid: float
    count: int


class FinancesPage(BaseModel):
    active_tab: FinanceTab
    summary: FinancialSummary
    outstanding_fees: Optional[List[OutstandingFee]] = None
    payment_history: Optional[List[PaymentRecord]] = None
    fee_structure: Optional[List[FeeTypeTotal]] = None
    fee_structure_total: Optional[float] = None
    placeholder: Optional[str] = None
