from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status

from portal.auth.dependencies import require_guest
from portal.backend.client import Backend
from portal.backend.session import get_backend
from portal.core.exceptions import FormValidationError, ServiceError

from .schemas import ApplicationSubmitted, RegisterPage, StepResult
from . import service

router = APIRouter(prefix="/register", tags=["register"])


def _http_error(e: ServiceError) -> HTTPException:
    if isinstance(e, FormValidationError):
        return HTTPException(
            status_code=e.status_code,
            detail={"message": e.message, "field_errors": e.field_errors},
        )
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=RegisterPage, dependencies=[Depends(require_guest)])
async def read_register_page(backend: Backend = Depends(get_backend)) -> RegisterPage:
    return await service.get_register_page(backend)


@router.post("/steps/{step}", response_model=StepResult)
async def validate_register_step(
    step: int,
    form: Dict[str, Any] = Body(...),
) -> StepResult:
    try:
        return service.check_step(step, form)
    except ServiceError as e:
        raise _http_error(e)


@router.post("", response_model=ApplicationSubmitted, status_code=status.HTTP_201_CREATED)
async def submit_application(
    form: Dict[str, Any] = Body(...),
    backend: Backend = Depends(get_backend),
) -> ApplicationSubmitted:
    try:
        return await service.submit_application(backend, form)
    except ServiceError as e:
        raise _http_error(e)
