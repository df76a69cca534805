from typing import Optional

from fastapi import Depends, Request

from portal.auth.schemas import CurrentUser
from portal.auth.security import decode_session_token
from portal.core.config import settings
from portal.core.exceptions import AlreadyAuthenticated, LoginRequired


async def get_optional_user(request: Request) -> Optional[CurrentUser]:
    """Restore the session from the cookie. The payload is trusted as-is; the backend is not consulted."""
    return decode_session_token(request.cookies.get(settings.session_cookie_name))


async def get_current_user(
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    """Gate for authenticated pages: no session means a redirect to /login."""
    if user is None:
        raise LoginRequired()
    return user


async def require_guest(
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> None:
    """Gate for /login and /register: a signed-in student is sent to /dashboard."""
    if user is not None:
        raise AlreadyAuthenticated()
