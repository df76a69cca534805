from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        return value

    @field_validator("password")
    @classmethod
    def password_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class SessionUser(BaseModel):
    """The signed-in student as stored in the session cookie. Built once at login."""

    id: str
    name: str
    email: str = ""
    application_number: str = ""
    username: str
    profile_image: Optional[str] = None


class CurrentUser(SessionUser):
    @property
    def student_id(self) -> int:
        return int(self.id)


class LoginPage(BaseModel):
    title: str = "Sign in to your account"
    register_path: str = "/register"
    demo_credentials: Optional[dict] = Field(None, description="Shown only when running against the sample backend")


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Signed in"
    user: SessionUser
    redirect_to: str = "/dashboard"


class LogoutResponse(BaseModel):
    success: bool = True
    redirect_to: str = "/login"


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[SessionUser] = None


class AccountRegisterRequest(BaseModel):
    application_number: str
    email: EmailStr
    password: str
    name: str
