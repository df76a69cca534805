"""Campus services: active hostels and the student's hostel application."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import status

from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.core.calculations import occupancy_percentage
from portal.core.enums import HostelRegistrationStatus
from portal.core.exceptions import BackendError, ServiceError
from portal.pages.common import fetch_rows, with_placeholder

from .schemas import (
    HostelApplicationCreate,
    HostelApplicationCreated,
    HostelCard,
    HostelRegistrationResponse,
    ServicesPage,
)

logger = logging.getLogger(__name__)

ACTIVE_HOSTEL_STATUS = "Active"
REQUESTED_BY_STUDENT = "student"
OPEN_STATUSES = [HostelRegistrationStatus.pending.value, HostelRegistrationStatus.approved.value]

APPLY_ERROR = "Failed to submit application. Please try again."

STATUS_LABELS = {
    HostelRegistrationStatus.approved: "Application Approved",
    HostelRegistrationStatus.pending: "Application Under Review",
    HostelRegistrationStatus.rejected: "Application Rejected",
}
STATUS_MESSAGES = {
    HostelRegistrationStatus.pending: (
        "Your hostel application is being reviewed by the administration. "
        "You will be notified once a decision is made."
    ),
    HostelRegistrationStatus.approved: (
        "Congratulations! Your hostel application has been approved. "
        "You will receive further instructions via email."
    ),
}


def to_hostel_card(row: Dict[str, Any]) -> HostelCard:
    capacity = int(row.get("capacity") or 0)
    occupancy = int(row.get("current_occupancy") or 0)
    facilities = [f.strip() for f in (row.get("facilities") or "").split(",") if f.strip()]
    return HostelCard(
        id=row["id"],
        name=row.get("name") or "",
        location=row.get("location"),
        capacity=capacity,
        current_occupancy=occupancy,
        occupancy_percentage=occupancy_percentage(occupancy, capacity),
        monthly_rent=float(row.get("monthly_rent") or 0),
        facilities=facilities,
        is_full=capacity > 0 and occupancy >= capacity,
    )


def to_registration_response(
    row: Dict[str, Any], hostel_names: Optional[Dict[int, str]] = None
) -> HostelRegistrationResponse:
    reg_status = HostelRegistrationStatus(row.get("status") or HostelRegistrationStatus.pending.value)
    return HostelRegistrationResponse(
        id=row["id"],
        hostel_id=row["hostel_id"],
        hostel_name=(hostel_names or {}).get(row["hostel_id"]),
        status=reg_status,
        status_label=STATUS_LABELS[reg_status],
        message=STATUS_MESSAGES.get(reg_status),
        requested_at=row.get("requested_at"),
        notes=row.get("notes"),
    )


async def _open_registration(backend: Backend, student_id: int) -> Optional[Dict[str, Any]]:
    rows = await fetch_rows(
        backend.table("hostel_registrations")
        .select("*")
        .eq("student_id", student_id)
        .in_("status", OPEN_STATUSES)
        .order("requested_at", ascending=False)
        .limit(1),
        "hostel registration",
    )
    return rows[0] if rows else None


async def get_services(backend: Backend, user: CurrentUser) -> ServicesPage:
    hostel_rows = await fetch_rows(
        backend.table("hostels").select("*").eq("status", ACTIVE_HOSTEL_STATUS).order("name"),
        "hostels",
    )
    cards: List[HostelCard] = [to_hostel_card(r) for r in hostel_rows]
    registration = await _open_registration(backend, user.student_id)

    hostels, placeholder = with_placeholder(cards, "No hostels are currently accepting applications")
    return ServicesPage(
        hostels=hostels,
        hostels_placeholder=placeholder,
        registration=to_registration_response(registration, {c.id: c.name for c in cards}) if registration else None,
        can_apply=registration is None and bool(cards),
    )


async def apply_for_hostel(
    backend: Backend, user: CurrentUser, payload: HostelApplicationCreate
) -> HostelApplicationCreated:
    if await _open_registration(backend, user.student_id) is not None:
        raise ServiceError("You already have an active hostel application", status.HTTP_409_CONFLICT)

    row = {
        "student_id": user.student_id,
        "hostel_id": payload.hostel_id,
        "status": HostelRegistrationStatus.pending.value,
        "requested_by": REQUESTED_BY_STUDENT,
        "notes": payload.notes,
    }
    try:
        inserted = await backend.table("hostel_registrations").insert([row]).execute()
    except BackendError as e:
        logger.exception("Error submitting hostel application for student %s", user.student_id)
        raise ServiceError(APPLY_ERROR, status.HTTP_502_BAD_GATEWAY) from e
    if not inserted:
        raise ServiceError(APPLY_ERROR, status.HTTP_502_BAD_GATEWAY)
    logger.info("Hostel application %s submitted by student %s", inserted[0]["id"], user.student_id)
    return HostelApplicationCreated(registration=to_registration_response(inserted[0]))
