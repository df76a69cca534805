"""Root redirect, health check and the catch-all not-found route. Include this router last."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from portal.auth.dependencies import get_optional_user
from portal.auth.schemas import CurrentUser
from portal.core.config import settings
from portal.core.routing import NOT_FOUND, resolve_route

from .schemas import HealthResponse, NotFoundPage

router = APIRouter(tags=["shell"])


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse(backend="supabase" if settings.backend_configured else "sample")


@router.get("/", include_in_schema=False)
async def root(user: Optional[CurrentUser] = Depends(get_optional_user)) -> RedirectResponse:
    decision = resolve_route("/", user is not None)
    return RedirectResponse(decision.location, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{full_path:path}", include_in_schema=False)
async def catch_all(
    request: Request,
    full_path: str,
    user: Optional[CurrentUser] = Depends(get_optional_user),
):
    decision = resolve_route(request.url.path, user is not None)
    if decision.action == NOT_FOUND:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NotFoundPage().model_dump())
    # a known page reached through a variant spelling, e.g. a trailing slash
    return RedirectResponse(decision.location, status_code=status.HTTP_303_SEE_OTHER)
