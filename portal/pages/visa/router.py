from fastapi import APIRouter, Depends, Query

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.backend.session import get_backend
from portal.core.enums import VisaTab

from .schemas import VisaPage
from . import service

router = APIRouter(prefix="/visa", tags=["visa"])


@router.get("", response_model=VisaPage)
async def read_visa(
    tab: VisaTab = Query(VisaTab.OVERVIEW),
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> VisaPage:
    return await service.get_visa(backend, current_user, tab)
