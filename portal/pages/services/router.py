from fastapi import APIRouter, Depends, HTTPException, status

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.backend.session import get_backend
from portal.core.exceptions import ServiceError

from .schemas import HostelApplicationCreate, HostelApplicationCreated, ServicesPage
from . import service

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=ServicesPage)
async def read_services(
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> ServicesPage:
    return await service.get_services(backend, current_user)


@router.post(
    "/hostel-applications",
    response_model=HostelApplicationCreated,
    status_code=status.HTTP_201_CREATED,
)
async def submit_hostel_application(
    payload: HostelApplicationCreate,
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> HostelApplicationCreated:
    try:
        return await service.apply_for_hostel(backend, current_user, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
