from fastapi import APIRouter, Depends, Query

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser

from .schemas import NavigationResponse
from . import service

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("", response_model=NavigationResponse)
async def read_navigation(
    path: str = Query("/dashboard", description="Path of the page being shown"),
    current_user: CurrentUser = Depends(get_current_user),
) -> NavigationResponse:
    return service.build_navigation(current_user, path)
