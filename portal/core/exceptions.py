from typing import Dict, Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendError(ServiceError):
    """Error reported by the hosted backend (PostgREST / storage / RPC)."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
    ) -> None:
        super().__init__(message, status_code)
        self.code = code
        self.details = details
        self.hint = hint


class LoginRequired(Exception):
    """Raised by gated routes when no session is present; rendered as a redirect to /login."""


class AlreadyAuthenticated(Exception):
    """Raised by /login and /register when a session is present; rendered as a redirect to /dashboard."""


class FormValidationError(ServiceError):
    """Field-level form errors, keyed by field name."""

    def __init__(self, field_errors: Dict[str, str], message: str = "Please correct the highlighted fields") -> None:
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.field_errors = field_errors
