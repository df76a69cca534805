import logging
from typing import Any, Dict

from fastapi import status

from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.core.calculations import to_date
from portal.core.enums import SupportTab, TicketCategory, TicketStatus
from portal.core.exceptions import BackendError, ServiceError
from portal.pages.common import GENERIC_WRITE_ERROR, fetch_rows, with_placeholder

from .schemas import (
    CategoryOption,
    ContactChannel,
    Faq,
    SupportPage,
    TicketCreate,
    TicketCreated,
    TicketResponse,
)

logger = logging.getLogger(__name__)

CONTACT_CHANNELS = [
    ContactChannel(title="Email Support", detail="support@university.edu", availability="Response time: 24-48 hours"),
    ContactChannel(title="Phone Support", detail="+1 (555) 123-4567", availability="Mon-Fri, 9:00 AM - 5:00 PM"),
    ContactChannel(title="Live Chat", detail="Chat with a representative", availability="Available 24/7"),
]

CATEGORY_LABELS = {
    TicketCategory.ACADEMIC: "Academic",
    TicketCategory.FINANCIAL: "Financial",
    TicketCategory.VISA: "Visa & Immigration",
    TicketCategory.TECHNICAL: "Technical Support",
    TicketCategory.HOUSING: "Housing",
    TicketCategory.OTHER: "Other",
}

FAQS = [
    Faq(
        id=1,
        question="How can I update my personal information?",
        answer="You can update your personal information by navigating to your Profile page. "
        "Click on the edit button next to the information you wish to update.",
    ),
    Faq(
        id=2,
        question="When is the deadline for tuition fee payment?",
        answer="Tuition fee payments are typically due at the beginning of each semester. "
        "Check the Finances page for the due date of your next payment. Late payments may incur additional fees.",
    ),
    Faq(
        id=3,
        question="How do I request an official transcript?",
        answer="To request an official transcript, submit a query under the Academic category. "
        "Processing may take 3-5 business days.",
    ),
    Faq(
        id=4,
        question="What documents do I need for visa renewal?",
        answer="For visa renewal, you will need your current passport, I-20/DS-2019 form, proof of enrollment, "
        "proof of financial support, and recent passport-sized photos. "
        "Visit the Visa & Residency page for detailed information.",
    ),
    Faq(
        id=5,
        question="How can I apply for on-campus housing?",
        answer="On-campus housing applications open 6 months before the start of each semester. "
        "Visit the Services page to view available hostels and submit an application.",
    ),
]


def ticket_reference(row: Dict[str, Any]) -> str:
    created = to_date(row.get("created_at"))
    year = created.year if created else "0000"
    return f"TKT-{year}-{int(row['id']):03d}"


def to_ticket_response(row: Dict[str, Any]) -> TicketResponse:
    return TicketResponse(
        id=row["id"],
        reference=ticket_reference(row),
        subject=row.get("subject") or "",
        category=row.get("category") or TicketCategory.OTHER.value,
        status=row.get("status") or TicketStatus.PENDING.value,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


async def get_support(backend: Backend, user: CurrentUser, tab: SupportTab = SupportTab.SUBMIT_QUERY) -> SupportPage:
    page = SupportPage(active_tab=tab, contact_channels=CONTACT_CHANNELS)
    if tab == SupportTab.SUBMIT_QUERY:
        page.categories = [CategoryOption(value=c, label=label) for c, label in CATEGORY_LABELS.items()]
    elif tab == SupportTab.FAQS:
        page.faqs = FAQS
    else:
        rows = await fetch_rows(
            backend.table("support_tickets")
            .select("*")
            .eq("student_id", user.student_id)
            .order("created_at", ascending=False),
            "support tickets",
        )
        page.tickets, page.placeholder = with_placeholder(
            [to_ticket_response(r) for r in rows], "You haven't submitted any support tickets yet."
        )
    return page


async def create_ticket(backend: Backend, user: CurrentUser, payload: TicketCreate) -> TicketCreated:
    row = {
        "student_id": user.student_id,
        "subject": payload.subject,
        "category": payload.category.value,
        "message": payload.message,
        "status": TicketStatus.PENDING.value,
    }
    try:
        inserted = await backend.table("support_tickets").insert([row]).execute()
    except BackendError as e:
        logger.exception("Error submitting support ticket for student %s", user.student_id)
        raise ServiceError(GENERIC_WRITE_ERROR, status.HTTP_502_BAD_GATEWAY) from e
    created = (inserted or [row])[0]
    if "id" not in created:
        raise ServiceError(GENERIC_WRITE_ERROR, status.HTTP_502_BAD_GATEWAY)
    logger.info("Support ticket %s created for student %s", created["id"], user.student_id)
    return TicketCreated(ticket=to_ticket_response(created))
