"""Campus services schemas: hostel catalog and hostel applications."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from portal.core.enums import HostelRegistrationStatus


class HostelCard(BaseModel):
    id: int
    name: str
    location: Optional[str] = None
    capacity: int
    current_occupancy: int
    occupancy_percentage: float
    monthly_rent: float
    facilities: List[str] = Field(default_factory=list)
    is_full: bool


class HostelRegistrationResponse(BaseModel):
    id: int
    hostel_id: int
    hostel_name: Optional[str] = None
    status: HostelRegistrationStatus
    status_label: str
    message: Optional[str] = None
    requested_at: Optional[datetime] = None
    notes: Optional[str] = None


class HostelApplicationCreate(BaseModel):
    hostel_id: int = Field(..., ge=1)
    notes: Optional[str] = None

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class HostelApplicationCreated(BaseModel):
    success: bool = True
    message: str = (
        "Your hostel application has been submitted and is under review. "
        "You will be notified once a decision is made."
    )
    registration: HostelRegistrationResponse


class ServicesPage(BaseModel):
    hostels: Optional[List[HostelCard]] = None
    hostels_placeholder: Optional[str] = None
    registration: Optional[HostelRegistrationResponse] = None
    can_apply: bool
