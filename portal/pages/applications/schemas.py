"""Application form schemas: one model per wizard step, plus the page and result shapes."""

import re
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
AADHAAR_PATTERN = re.compile(r"^\d{12}$")
MIN_PASSWORD_LENGTH = 6

REQUIRED_MESSAGES = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "father_name": "Father's name is required",
    "mother_name": "Mother's name is required",
    "date_of_birth": "Date of birth is required",
    "phone_number": "Phone number is required",
    "email": "Email is required",
    "address": "Address is required",
    "city": "City is required",
    "country": "Country is required",
    "university_id": "Please select a university",
    "course_id": "Please select a course",
    "academic_session_id": "Please select an academic session",
    "twelfth_marks": "12th grade marks are required",
    "password": "Password is required",
    "confirm_password": "Please confirm your password",
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required(value: Any, info: ValidationInfo) -> Any:
    if _is_blank(value):
        raise ValueError(REQUIRED_MESSAGES[info.field_name])
    return value.strip() if isinstance(value, str) else value


def _optional(value: Any) -> Any:
    if _is_blank(value):
        return None
    return value.strip() if isinstance(value, str) else value


class PersonalDetails(BaseModel):
    """Step 1."""

    first_name: Optional[str] = Field(None, validate_default=True)
    last_name: Optional[str] = Field(None, validate_default=True)
    father_name: Optional[str] = Field(None, validate_default=True)
    mother_name: Optional[str] = Field(None, validate_default=True)
    date_of_birth: Optional[date] = Field(None, validate_default=True)
    phone_number: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)

    @field_validator(
        "first_name", "last_name", "father_name", "mother_name", "date_of_birth", "phone_number", "email",
        mode="before",
    )
    @classmethod
    def required(cls, value: Any, info: ValidationInfo) -> Any:
        return _required(value, info)

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address")
        return value


class AddressDetails(BaseModel):
    """Step 2: address and identity documents."""

    address: Optional[str] = Field(None, validate_default=True)
    city: Optional[str] = Field(None, validate_default=True)
    country: Optional[str] = Field(None, validate_default=True)
    aadhaar_number: Optional[str] = None
    passport_number: Optional[str] = None
    photo_url: Optional[str] = None
    passport_copy_url: Optional[str] = None
    aadhaar_copy_url: Optional[str] = None
    twelfth_certificate_url: Optional[str] = None

    @field_validator("address", "city", "country", mode="before")
    @classmethod
    def required(cls, value: Any, info: ValidationInfo) -> Any:
        return _required(value, info)

    @field_validator(
        "aadhaar_number", "passport_number", "photo_url", "passport_copy_url", "aadhaar_copy_url",
        "twelfth_certificate_url",
        mode="before",
    )
    @classmethod
    def optional(cls, value: Any) -> Any:
        return _optional(value)

    @field_validator("aadhaar_number")
    @classmethod
    def aadhaar_format(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not AADHAAR_PATTERN.match(value):
            raise ValueError("Aadhaar number must be 12 digits")
        return value


class AcademicDetails(BaseModel):
    """Step 3."""

    university_id: Optional[int] = Field(None, validate_default=True)
    course_id: Optional[int] = Field(None, validate_default=True)
    academic_session_id: Optional[int] = Field(None, validate_default=True)
    twelfth_marks: Optional[float] = Field(None, validate_default=True)
    seat_number: Optional[str] = None
    scores: Optional[str] = None

    @field_validator("university_id", "course_id", "academic_session_id", "twelfth_marks", mode="before")
    @classmethod
    def required(cls, value: Any, info: ValidationInfo) -> Any:
        return _required(value, info)

    @field_validator("seat_number", "scores", mode="before")
    @classmethod
    def optional(cls, value: Any) -> Any:
        return _optional(value)

    @field_validator("twelfth_marks")
    @classmethod
    def marks_in_range(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Marks cannot be negative")
        if value > 100:
            raise ValueError("Marks cannot exceed 100%")
        return value


class Credentials(BaseModel):
    """Step 4. Equality of the two fields is checked on final submission only."""

    password: Optional[str] = Field(None, validate_default=True)
    confirm_password: Optional[str] = Field(None, validate_default=True)

    @field_validator("password", "confirm_password", mode="before")
    @classmethod
    def required(cls, value: Any, info: ValidationInfo) -> Any:
        # passwords are not stripped
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return value

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return value


class StepLayout(BaseModel):
    number: int
    title: str
    fields: List[str]


class Option(BaseModel):
    id: int
    name: str


class RegisterPage(BaseModel):
    title: str = "Student Application"
    steps: List[StepLayout]
    universities: List[Option] = Field(default_factory=list)
    courses: List[Option] = Field(default_factory=list)
    academic_sessions: List[Option] = Field(default_factory=list)
    login_path: str = "/login"


class StepResult(BaseModel):
    step: int
    valid: bool = True
    next_step: Optional[int] = None
    is_last_step: bool = False


class ApplicationSubmitted(BaseModel):
    success: bool = True
    message: str = (
        "Application submitted successfully! You will receive an email notification "
        "once your application is reviewed."
    )
    redirect_to: str = "/login"


FormData = Dict[str, Any]
