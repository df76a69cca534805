"""Visa service: visa and residency cards, timeline, deadlines and documents for one student."""

from datetime import date
from typing import Any, Dict, List, Optional

from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.core.calculations import (
    RESIDENCY_WARNING_DAYS,
    VISA_DEADLINE_URGENT_DAYS,
    VISA_RENEWAL_WARNING_DAYS,
    days_until,
    is_urgent,
    to_date,
    visa_progress_width,
)
from portal.core.enums import TimelineStatus, VisaTab
from portal.pages.common import fetch_row, fetch_rows, with_placeholder

from .schemas import (
    ResidencyCard,
    TimelineEvent,
    VisaCard,
    VisaDeadline,
    VisaDocument,
    VisaPage,
)

REGISTERED = "Registered"

VISA_REQUIREMENTS = [
    "Maintain full-time enrollment (minimum 12 credit hours per semester)",
    "Make satisfactory academic progress",
    "Limited work permission (max 20 hours/week on-campus during semester)",
    "Report any change of address within 10 days",
    "Notify of any program changes or extensions",
    "Request authorization for any employment",
]

TRAVEL_TIPS = [
    "Always carry your passport and I-20/DS-2019 when traveling internationally",
    "Maintain full-time enrollment to keep your visa status valid",
    "Start visa renewal process at least 3 months before expiration",
]


def build_visa_card(row: Dict[str, Any], today: Optional[date] = None) -> VisaCard:
    days = days_until(row.get("expiration_date"), today)
    warning = None
    if days is not None and days <= VISA_RENEWAL_WARNING_DAYS:
        warning = (
            f"Your visa will expire in {days} days. "
            "Please start the renewal process at least 60 days before expiration."
        )
    return VisaCard(
        visa_type=row.get("visa_type"),
        visa_status=row.get("visa_status") or "No Data",
        visa_number=row.get("visa_number"),
        entry_type=row.get("entry_type"),
        issue_date=to_date(row.get("issue_date")),
        expiration_date=to_date(row.get("expiration_date")),
        days_remaining=days,
        progress_width=visa_progress_width(days),
        renewal_warning=warning,
    )


def build_residency_card(row: Dict[str, Any], today: Optional[date] = None) -> ResidencyCard:
    status = row.get("registration_status") or "No Data"
    days = days_until(row.get("registration_deadline"), today)
    warning = message = None
    if days is not None and 0 < days <= RESIDENCY_WARNING_DAYS:
        warning = f"You must complete local residency registration within {days} days."
    elif status == REGISTERED:
        message = "Your residency registration is complete."
    else:
        message = (
            "You will need to complete your residency registration after arrival. "
            "Instructions will be provided during orientation."
        )
    return ResidencyCard(
        registration_status=status,
        registration_deadline=to_date(row.get("registration_deadline")),
        current_address=row.get("current_address"),
        local_id_number=row.get("local_id_number"),
        days_remaining=days,
        warning=warning,
        message=message,
    )


def build_timeline(visa: Optional[Dict[str, Any]], residency: Optional[Dict[str, Any]]) -> List[TimelineEvent]:
    visa = visa or {}
    residency = residency or {}
    candidates = [
        ("Visa Application Submitted", visa.get("application_date"), TimelineStatus.COMPLETED,
         "Application submitted to embassy"),
        ("Visa Interview", visa.get("interview_date"), TimelineStatus.COMPLETED,
         "Interview completed at embassy"),
        ("Visa Approved", visa.get("approval_date"), TimelineStatus.COMPLETED,
         "Visa approved and issued"),
        (
            "Residency Registration",
            residency.get("registration_deadline"),
            TimelineStatus.COMPLETED
            if residency.get("registration_status") == REGISTERED
            else TimelineStatus.UPCOMING,
            "Register with local authorities",
        ),
    ]
    # undated events are left out
    return [
        TimelineEvent(title=title, event_date=to_date(when), status=status, description=description)
        for title, when, status, description in candidates
        if when
    ]


def build_deadlines(rows: List[Dict[str, Any]], today: Optional[date] = None) -> List[VisaDeadline]:
    deadlines = []
    for row in rows:
        days = days_until(row.get("due_date"), today)
        if days is None:
            continue
        completed = bool(row.get("is_completed"))
        deadlines.append(
            VisaDeadline(
                id=row["id"],
                title=row.get("title") or "",
                description=row.get("description"),
                due_date=to_date(row["due_date"]),
                deadline_type=row.get("deadline_type"),
                is_completed=completed,
                is_mandatory=row.get("deadline_type") == "mandatory" and not completed,
                days_remaining=days,
                is_urgent=not completed and is_urgent(days, VISA_DEADLINE_URGENT_DAYS),
            )
        )
    return deadlines


def build_documents(rows: List[Dict[str, Any]]) -> List[VisaDocument]:
    documents = [
        VisaDocument(
            id=row["id"],
            document_name=row.get("document_name") or "",
            is_available=bool(row.get("is_available")),
            document_url=row.get("document_url"),
        )
        for row in rows
    ]
    # available first, then pending; stable within each group
    return sorted(documents, key=lambda d: not d.is_available)


async def get_visa(
    backend: Backend,
    user: CurrentUser,
    tab: VisaTab = VisaTab.OVERVIEW,
    today: Optional[date] = None,
) -> VisaPage:
    student_id = user.student_id
    visa = await fetch_row(backend.table("student_visa").select("*").eq("student_id", student_id), "visa data")
    residency = await fetch_row(
        backend.table("student_residency").select("*").eq("student_id", student_id), "residency data"
    )

    page = VisaPage(
        active_tab=tab,
        visa=build_visa_card(visa, today) if visa else None,
        visa_placeholder=None if visa else "No visa information available",
        residency=build_residency_card(residency, today) if residency else None,
        residency_placeholder=None if residency else "No residency information available",
    )

    if tab == VisaTab.OVERVIEW:
        page.timeline, page.placeholder = with_placeholder(
            build_timeline(visa, residency), "Visa timeline information will appear here once available."
        )
    elif tab == VisaTab.DEADLINES:
        rows = await fetch_rows(
            backend.table("visa_deadlines").select("*").eq("student_id", student_id).order("due_date"),
            "deadlines",
        )
        page.deadlines, page.placeholder = with_placeholder(
            build_deadlines(rows, today), "Your upcoming deadlines will appear here."
        )
        page.requirements = VISA_REQUIREMENTS
    else:
        rows = await fetch_rows(
            backend.table("visa_documents").select("*").eq("student_id", student_id), "visa documents"
        )
        page.documents, page.placeholder = with_placeholder(
            build_documents(rows), "Your visa documents will appear here once available."
        )
        page.tips = TRAVEL_TIPS
    return page
