from fastapi import APIRouter, Depends

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.backend.session import get_backend

from .schemas import DashboardPage
from . import service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardPage)
async def read_dashboard(
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> DashboardPage:
    return await service.get_dashboard(backend, current_user)
