from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class DocumentItem(BaseModel):
    """A stored object in the student's folder, shaped for display."""

    id: str
    name: str
    file_name: str
    type: str
    size: str
    updated_at: Optional[datetime] = None
    download_path: str


class DocumentsPage(BaseModel):
    search: str = ""
    documents: Optional[List[DocumentItem]] = None
    placeholder: Optional[str] = None
    alert: Optional[str] = None


class DocumentDownload(BaseModel):
    file_name: str
    content: bytes
    media_type: str
