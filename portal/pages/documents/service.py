"""Documents service: the student's folder in object storage."""

import logging
import mimetypes
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from fastapi import status

from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.core.calculations import human_readable_size
from portal.core.config import settings
from portal.core.exceptions import BackendError, ServiceError
from portal.pages.common import with_placeholder

from .schemas import DocumentDownload, DocumentItem, DocumentsPage

logger = logging.getLogger(__name__)

LIST_ERROR = "Failed to load documents. Please try again."
DOWNLOAD_ERROR = "Failed to download document. Please try again."

# storage keeps this marker object in otherwise empty folders
EMPTY_FOLDER_MARKER = ".emptyFolderPlaceholder"


def to_document_item(entry: Dict[str, Any]) -> DocumentItem:
    file_name = entry["name"]
    stem, dot, extension = file_name.rpartition(".")
    if not dot or not stem:
        stem, extension = file_name, ""
    metadata = entry.get("metadata") or {}
    return DocumentItem(
        id=str(entry.get("id") or file_name),
        name=stem,
        file_name=file_name,
        type=extension.upper() or "FILE",
        size=human_readable_size(metadata.get("size")),
        updated_at=entry.get("updated_at") or entry.get("created_at"),
        download_path=f"/documents/{quote(file_name)}/download",
    )


async def list_documents(backend: Backend, user: CurrentUser, search: Optional[str] = None) -> DocumentsPage:
    term = (search or "").strip()
    try:
        entries = await backend.list_objects(settings.documents_bucket, str(user.student_id))
    except BackendError:
        logger.exception("Error loading documents for student %s", user.student_id)
        return DocumentsPage(search=term, placeholder="No documents found", alert=LIST_ERROR)

    # subfolders are listed with a null id
    items: List[DocumentItem] = [
        to_document_item(e)
        for e in entries
        if e.get("name") and e["name"] != EMPTY_FOLDER_MARKER and e.get("id") is not None
    ]
    if term:
        items = [i for i in items if term.lower() in i.name.lower()]
    documents, placeholder = with_placeholder(
        items, "No documents match your search" if term else "No documents found"
    )
    return DocumentsPage(search=term, documents=documents, placeholder=placeholder)


async def download_document(backend: Backend, user: CurrentUser, file_name: str) -> DocumentDownload:
    if not file_name or "/" in file_name or file_name in (".", ".."):
        raise ServiceError("Invalid document name", status.HTTP_400_BAD_REQUEST)
    try:
        content = await backend.download(settings.documents_bucket, f"{user.student_id}/{file_name}")
    except BackendError as e:
        logger.exception("Error downloading %s for student %s", file_name, user.student_id)
        raise ServiceError(DOWNLOAD_ERROR, status.HTTP_502_BAD_GATEWAY) from e
    media_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
    return DocumentDownload(file_name=file_name, content=content, media_type=media_type)
