from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi import status as http_status

from portal.auth.dependencies import get_optional_user, require_guest
from portal.auth.schemas import (
    AccountRegisterRequest,
    CurrentUser,
    LoginPage,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    SessionResponse,
)
from portal.auth.security import create_session_token
from portal.auth.services import login_user, register_user
from portal.backend.client import Backend
from portal.backend.memory import DEMO_PASSWORD, DEMO_USERNAME
from portal.backend.session import get_backend
from portal.core.config import settings
from portal.core.exceptions import ServiceError

router = APIRouter(tags=["auth"])


@router.get(
    "/login",
    response_model=LoginPage,
    dependencies=[Depends(require_guest)],
)
async def login_page() -> LoginPage:
    demo = None
    if not settings.backend_configured:
        demo = {"username": DEMO_USERNAME, "password": DEMO_PASSWORD}
    return LoginPage(demo_credentials=demo)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    response: Response,
    backend: Backend = Depends(get_backend),
) -> LoginResponse:
    try:
        user = await login_user(backend, payload)
    except ServiceError as e:
        # the existing cookie, if any, is left as it was
        raise HTTPException(status_code=e.status_code, detail=e.message)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user),
        max_age=settings.session_cookie_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        path="/",
    )
    return LoginResponse(user=user)


@router.api_route("/logout", methods=["GET", "POST"], response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return LogoutResponse()


@router.get("/session", response_model=SessionResponse)
async def read_session(
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> SessionResponse:
    return SessionResponse(authenticated=user is not None, user=user)


@router.post("/account/register", status_code=http_status.HTTP_201_CREATED)
async def register_account(payload: AccountRegisterRequest):
    try:
        return await register_user(payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
