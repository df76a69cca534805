"""Dashboard schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class AdmissionStatus(BaseModel):
    status: str
    program: Optional[str] = None
    university: Optional[str] = None
    academic_session: Optional[str] = None
    start_date: Optional[date] = None
    next_step: Optional[str] = None
    last_updated: Optional[datetime] = None


class RecentPayment(BaseModel):
    id: int
    description: Optional[str] = None
    amount: float
    paid_on: Optional[date] = None
    status: str


class UpcomingDeadline(BaseModel):
    id: int
    title: str
    due_date: date
    type: Optional[str] = None
    days_left: int
    is_urgent: bool


class QuickLink(BaseModel):
    title: str
    path: str


class ProgressStep(BaseModel):
    label: str
    completed: bool


class DashboardPage(BaseModel):
    greeting: str
    admission: Optional[AdmissionStatus] = None
    admission_placeholder: Optional[str] = None
    recent_payments: Optional[List[RecentPayment]] = None
    recent_payments_total: float = 0
    payments_placeholder: Optional[str] = None
    upcoming_deadlines: Optional[List[UpcomingDeadline]] = None
    deadlines_placeholder: Optional[str] = None
    quick_links: List[QuickLink]
    progress_steps: List[ProgressStep]
    progress_percentage: float
