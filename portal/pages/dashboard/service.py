"""Dashboard service: admission status, recent payments, upcoming deadlines, application progress."""

from datetime import date
from typing import Any, Dict, List, Optional

from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.core.calculations import (
    DASHBOARD_URGENT_DAYS,
    completion_percentage,
    days_until,
    is_urgent,
    to_date,
)
from portal.pages.common import fetch_row, fetch_rows, with_placeholder

from .schemas import (
    AdmissionStatus,
    DashboardPage,
    ProgressStep,
    QuickLink,
    RecentPayment,
    UpcomingDeadline,
)

RECENT_PAYMENTS_LIMIT = 3

QUICK_LINKS = [
    QuickLink(title="Download Admission Letter", path="/documents"),
    QuickLink(title="My Account", path="/finances"),
    QuickLink(title="Check Visa Status", path="/visa"),
    QuickLink(title="Submit Query", path="/support"),
]


def _first_name(user: CurrentUser) -> str:
    return user.name.split(" ", 1)[0] if user.name else user.username


def build_progress_steps(
    student: Optional[Dict[str, Any]],
    visa: Optional[Dict[str, Any]],
    residency: Optional[Dict[str, Any]],
) -> List[ProgressStep]:
    status = str((student or {}).get("status") or "").lower()
    return [
        ProgressStep(label="Application Submitted", completed=student is not None),
        ProgressStep(label="Documents Verified", completed=status in ("approved", "verified")),
        ProgressStep(label="Application Approved", completed=status == "approved"),
        ProgressStep(label="Visa Application", completed=bool((visa or {}).get("visa_approved"))),
        ProgressStep(
            label="Arrival and Registration",
            completed=bool((residency or {}).get("registration_date"))
            or bool((visa or {}).get("residency_registration")),
        ),
    ]


async def _admission_status(
    backend: Backend, student: Dict[str, Any], next_step: Optional[str]
) -> AdmissionStatus:
    course = None
    if student.get("course_id") is not None:
        course = await fetch_row(backend.table("courses").select("name").eq("id", student["course_id"]), "course")
    university = None
    if student.get("university_id") is not None:
        university = await fetch_row(
            backend.table("universities").select("name").eq("id", student["university_id"]), "university"
        )
    session = None
    if student.get("academic_session_id") is not None:
        session = await fetch_row(
            backend.table("academic_sessions")
            .select("session_name,start_date")
            .eq("id", student["academic_session_id"]),
            "academic session",
        )
    return AdmissionStatus(
        status=student.get("status") or "Pending",
        program=(course or {}).get("name"),
        university=(university or {}).get("name"),
        academic_session=(session or {}).get("session_name"),
        start_date=to_date((session or {}).get("start_date")),
        next_step=next_step,
        last_updated=student.get("updated_at"),
    )


async def get_dashboard(backend: Backend, user: CurrentUser, today: Optional[date] = None) -> DashboardPage:
    student_id = user.student_id

    student = await fetch_row(backend.table("students").select("*").eq("id", student_id), "student")
    visa = await fetch_row(backend.table("student_visa").select("*").eq("student_id", student_id), "visa")
    residency = await fetch_row(
        backend.table("student_residency").select("*").eq("student_id", student_id), "residency"
    )

    steps = build_progress_steps(student, visa, residency)
    next_step = next((s.label for s in steps if not s.completed), None)
    admission = await _admission_status(backend, student, next_step) if student else None

    payment_rows = await fetch_rows(
        backend.table("fee_payments")
        .select("id,description,amount_paid,last_payment_date,status")
        .eq("student_id", student_id)
        .gt("amount_paid", 0)
        .order("last_payment_date", ascending=False)
        .limit(RECENT_PAYMENTS_LIMIT),
        "recent payments",
    )
    payments = [
        RecentPayment(
            id=row["id"],
            description=row.get("description"),
            amount=float(row.get("amount_paid") or 0),
            paid_on=to_date(row.get("last_payment_date")),
            status=row.get("status") or "",
        )
        for row in payment_rows
    ]

    deadline_rows = await fetch_rows(
        backend.table("visa_deadlines")
        .select("id,title,due_date,deadline_type")
        .eq("student_id", student_id)
        .eq("is_completed", False)
        .order("due_date"),
        "upcoming deadlines",
    )
    deadlines = []
    for row in deadline_rows:
        days_left = days_until(row.get("due_date"), today)
        if days_left is None:
            continue
        deadlines.append(
            UpcomingDeadline(
                id=row["id"],
                title=row.get("title") or "",
                due_date=to_date(row["due_date"]),
                type=row.get("deadline_type"),
                days_left=days_left,
                is_urgent=is_urgent(days_left, DASHBOARD_URGENT_DAYS),
            )
        )

    recent_payments, payments_placeholder = with_placeholder(payments, "No payments recorded yet")
    upcoming, deadlines_placeholder = with_placeholder(deadlines, "No upcoming deadlines")
    return DashboardPage(
        greeting=f"Welcome back, {_first_name(user)}",
        admission=admission,
        admission_placeholder=None if admission else "Admission details are not available yet",
        recent_payments=recent_payments,
        recent_payments_total=sum(p.amount for p in payments),
        payments_placeholder=payments_placeholder,
        upcoming_deadlines=upcoming,
        deadlines_placeholder=deadlines_placeholder,
        quick_links=QUICK_LINKS,
        progress_steps=steps,
        progress_percentage=completion_percentage(sum(1 for s in steps if s.completed), len(steps)),
    )
