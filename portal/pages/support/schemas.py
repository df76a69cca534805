"""Support schemas: ticket form, previous tickets, static help content."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator

from portal.core.enums import SupportTab, TicketCategory

MIN_MESSAGE_LENGTH = 20


class TicketCreate(BaseModel):
    subject: str
    category: TicketCategory
    message: str

    @field_validator("subject")
    @classmethod
    def subject_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Subject is required")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def category_known(cls, value: Any) -> Any:
        if value not in {c.value for c in TicketCategory}:
            raise ValueError("Please select a category")
        return value

    @field_validator("message")
    @classmethod
    def message_long_enough(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message is required")
        if len(value) < MIN_MESSAGE_LENGTH:
            raise ValueError(f"Message should be at least {MIN_MESSAGE_LENGTH} characters")
        return value


class TicketResponse(BaseModel):
    id: int
    reference: str
    subject: str
    category: str
    # free text: staff may set statuses beyond the ones a new ticket starts with
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TicketCreated(BaseModel):
    success: bool = True
    message: str = "We have received your query and will respond as soon as possible. Please check your email for updates."
    ticket: TicketResponse


class ContactChannel(BaseModel):
    title: str
    detail: str
    availability: str


class Faq(BaseModel):
    id: int
    question: str
    answer: str


class CategoryOption(BaseModel):
    value: TicketCategory
    label: str


class SupportPage(BaseModel):
    active_tab: SupportTab
    contact_channels: List[ContactChannel]
    categories: Optional[List[CategoryOption]] = None
    faqs: Optional[List[Faq]] = None
    tickets: Optional[List[TicketResponse]] = None
    placeholder: Optional[str] = None
