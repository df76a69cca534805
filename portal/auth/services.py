import logging

from fastapi import status

from portal.auth.schemas import AccountRegisterRequest, LoginRequest, SessionUser
from portal.backend.client import Backend
from portal.core.exceptions import BackendError, ServiceError

logger = logging.getLogger(__name__)

LOGIN_FUNCTION = "verify_student_login"
DEFAULT_PROFILE_IMAGE = (
    "https://images.pexels.com/photos/220453/pexels-photo-220453.jpeg"
    "?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=1"
)


async def login_user(backend: Backend, payload: LoginRequest) -> SessionUser:
    # 1. Verify credentials server-side
    try:
        rows = await backend.rpc(
            LOGIN_FUNCTION,
            {"input_username": payload.username, "input_password": payload.password},
        )
    except BackendError as e:
        logger.warning("Credential check failed for %s: %s", payload.username, e.message)
        raise ServiceError(e.message or "Login failed", status.HTTP_401_UNAUTHORIZED) from e

    if not rows:
        raise ServiceError("Invalid username or password", status.HTTP_401_UNAUTHORIZED)

    # 2. Build the session projection from the first matching row
    row = rows[0]
    return SessionUser(
        id=str(row["student_id"]),
        name=f"{row.get('first_name') or ''} {row.get('last_name') or ''}".strip(),
        email=row.get("email") or "",
        application_number=row.get("admission_number") or "",
        username=row.get("username") or payload.username,
        profile_image=DEFAULT_PROFILE_IMAGE,
    )


async def register_user(payload: AccountRegisterRequest) -> SessionUser:
    """Accounts are created from approved applications, never directly."""
    raise ServiceError("Please use the application form to register", status.HTTP_400_BAD_REQUEST)
