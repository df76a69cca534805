from fastapi import APIRouter, Depends, HTTPException, Query, status

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.backend.session import get_backend
from portal.core.enums import SupportTab
from portal.core.exceptions import ServiceError

from .schemas import SupportPage, TicketCreate, TicketCreated
from . import service

router = APIRouter(prefix="/support", tags=["support"])


@router.get("", response_model=SupportPage)
async def read_support(
    tab: SupportTab = Query(SupportTab.SUBMIT_QUERY),
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> SupportPage:
    return await service.get_support(backend, current_user, tab)


@router.post("/tickets", response_model=TicketCreated, status_code=status.HTTP_201_CREATED)
async def submit_ticket(
    payload: TicketCreate,
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> TicketCreated:
    try:
        return await service.create_ticket(backend, current_user, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
