"""Visa & residency schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from portal.core.enums import TimelineStatus, VisaTab


class VisaCard(BaseModel):
    visa_type: Optional[str] = None
    visa_status: str
    visa_number: Optional[str] = None
    entry_type: Optional[str] = None
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    days_remaining: Optional[int] = None
    progress_width: float
    renewal_warning: Optional[str] = None


class ResidencyCard(BaseModel):
    registration_status: str
    registration_deadline: Optional[date] = None
    current_address: Optional[str] = None
    local_id_number: Optional[str] = None
    days_remaining: Optional[int] = None
    warning: Optional[str] = None
    message: Optional[str] = None


class TimelineEvent(BaseModel):
    title: str
    event_date: date
    status: TimelineStatus
    description: str


class VisaDeadline(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: date
    deadline_type: Optional[str] = None
    is_completed: bool
    is_mandatory: bool
    days_remaining: int
    is_urgent: bool


class VisaDocument(BaseModel):
    id: int
    document_name: str
    is_available: bool
    document_url: Optional[str] = None


class VisaPage(BaseModel):
    active_tab: VisaTab
    visa: Optional[VisaCard] = None
    visa_placeholder: Optional[str] = None
    residency: Optional[ResidencyCard] = None
    residency_placeholder: Optional[str] = None
    timeline: Optional[List[TimelineEvent]] = None
    deadlines: Optional[List[VisaDeadline]] = None
    documents: Optional[List[VisaDocument]] = None
    requirements: Optional[List[str]] = None
    tips: Optional[List[str]] = None
    placeholder: Optional[str] = None
