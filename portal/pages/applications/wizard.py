"""
Four-step application wizard.

Each step validates only its own fields; the final submission validates all of
them and then compares the two password fields.
"""

from typing import Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from .schemas import (
    AcademicDetails,
    AddressDetails,
    Credentials,
    FormData,
    PersonalDetails,
    StepLayout,
)

STEPS: List[Tuple[str, Type[BaseModel]]] = [
    ("Personal Information", PersonalDetails),
    ("Address & Identity", AddressDetails),
    ("Academic Information", AcademicDetails),
    ("Account Setup", Credentials),
]
LAST_STEP = len(STEPS)

PASSWORD_FIELDS = ("password", "confirm_password")
PASSWORD_MISMATCH = "Passwords do not match"

# pydantic prefixes messages raised from validators
_VALUE_ERROR_PREFIX = "Value error, "


def step_layout() -> List[StepLayout]:
    return [
        StepLayout(number=i, title=title, fields=list(model.model_fields))
        for i, (title, model) in enumerate(STEPS, start=1)
    ]


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """First message per field, keyed by the field name."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        message = error["msg"]
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        errors.setdefault(field, message)
    return errors


def validate_step(step: int, data: FormData) -> Tuple[Optional[BaseModel], Dict[str, str]]:
    """Validate one step's fields. Fields belonging to other steps are ignored."""
    _, model = STEPS[step - 1]
    try:
        return model.model_validate(data), {}
    except ValidationError as e:
        return None, field_errors(e)


def validate_application(data: FormData) -> Tuple[FormData, Dict[str, str]]:
    """
    Validate every step, then the password confirmation.

    Returns the cleaned application row (password fields removed) and the field errors.
    The row is only meaningful when there are no errors.
    """
    cleaned: FormData = {}
    errors: Dict[str, str] = {}
    for step in range(1, LAST_STEP + 1):
        validated, step_errors = validate_step(step, data)
        errors.update(step_errors)
        if validated is not None:
            cleaned.update(validated.model_dump(mode="json"))

    if "password" not in errors and "confirm_password" not in errors:
        if cleaned.get("password") != cleaned.get("confirm_password"):
            errors["confirm_password"] = PASSWORD_MISMATCH

    for name in PASSWORD_FIELDS:
        cleaned.pop(name, None)
    return cleaned, errors
