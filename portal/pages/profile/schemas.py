from datetime import date
from typing import Optional

from pydantic import BaseModel


class ProfilePage(BaseModel):
    """Read-only profile: session identity merged with the students row."""

    name: str
    email: str
    username: str
    application_number: str
    profile_image: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    program: Optional[str] = None
    academic_session: Optional[str] = None
    start_date: Optional[date] = None
    expected_graduation: Optional[date] = None
    status: Optional[str] = None
    placeholder: Optional[str] = None
