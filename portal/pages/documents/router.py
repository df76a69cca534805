from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from portal.auth.dependencies import get_current_user
from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.backend.session import get_backend
from portal.core.exceptions import ServiceError

from .schemas import DocumentsPage
from . import service

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentsPage)
async def read_documents(
    q: Optional[str] = Query(None, description="Filter documents by name"),
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> DocumentsPage:
    return await service.list_documents(backend, current_user, q)


@router.get("/{name}/download")
async def download_document(
    name: str,
    backend: Backend = Depends(get_backend),
    current_user: CurrentUser = Depends(get_current_user),
) -> Response:
    try:
        document = await service.download_document(backend, current_user, name)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(document.file_name)}"},
    )
