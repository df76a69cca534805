"""Application (register) service: dropdown options, per-step checks and submission into apply_students."""

import logging

from fastapi import status

from portal.backend.client import Backend
from portal.core.enums import ApplicationStatus
from portal.core.exceptions import BackendError, FormValidationError, ServiceError
from portal.pages.common import fetch_rows

from .schemas import ApplicationSubmitted, FormData, Option, RegisterPage, StepResult
from .wizard import LAST_STEP, step_layout, validate_application, validate_step

logger = logging.getLogger(__name__)

SUBMIT_ERROR = "Failed to submit application"


def _options(rows, label_column: str = "name"):
    return [Option(id=r["id"], name=r.get(label_column) or "") for r in rows if r.get("id") is not None]


async def get_register_page(backend: Backend) -> RegisterPage:
    universities = await fetch_rows(backend.table("universities").select("id,name").order("name"), "universities")
    courses = await fetch_rows(backend.table("courses").select("id,name").order("name"), "courses")
    sessions = await fetch_rows(
        backend.table("academic_sessions").select("id,session_name,is_active").eq("is_active", True),
        "academic sessions",
    )
    return RegisterPage(
        steps=step_layout(),
        universities=_options(universities),
        courses=_options(courses),
        academic_sessions=_options(sessions, "session_name"),
    )


def check_step(step: int, data: FormData) -> StepResult:
    if step < 1 or step > LAST_STEP:
        raise ServiceError(f"Unknown step {step}", status.HTTP_404_NOT_FOUND)
    _, errors = validate_step(step, data)
    if errors:
        raise FormValidationError(errors)
    return StepResult(
        step=step,
        next_step=step + 1 if step < LAST_STEP else None,
        is_last_step=step == LAST_STEP,
    )


async def submit_application(backend: Backend, data: FormData) -> ApplicationSubmitted:
    row, errors = validate_application(data)
    if errors:
        # nothing is written when any field, including the confirmation, is invalid
        raise FormValidationError(errors)

    row["status"] = ApplicationStatus.pending.value
    row["application_status"] = ApplicationStatus.pending.value
    try:
        await backend.table("apply_students").insert([row]).execute()
    except BackendError as e:
        logger.warning("Application insert rejected for %s: %s", row.get("email"), e.message)
        raise ServiceError(e.message or SUBMIT_ERROR, status.HTTP_400_BAD_REQUEST) from e
    logger.info("Application submitted for %s", row.get("email"))
    return ApplicationSubmitted()
