from fastapi import APIRouter, Depends

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.backend.session import get_backend

from .schemas import ProfilePage
from . import service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfilePage)
async def read_profile(
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> ProfilePage:
    return await service.get_profile(backend, current_user)
