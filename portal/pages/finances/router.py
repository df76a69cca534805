from fastapi import APIRouter, Depends, Query

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.backend.session import get_backend
from portal.core.enums import FinanceTab

from .schemas import FinancesPage
from . import service

router = APIRouter(prefix="/finances", tags=["finances"])


@router.get("", response_model=FinancesPage)
async def read_finances(
    tab: FinanceTab = Query(FinanceTab.OVERVIEW),
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> FinancesPage:
    return await service.get_finances(backend, current_user, tab)
