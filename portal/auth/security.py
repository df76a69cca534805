from datetime import datetime, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from portal.auth.schemas import CurrentUser, SessionUser
from portal.core.config import settings


def create_session_token(user: SessionUser) -> str:
    # no "exp" claim: the session lives until logout
    to_encode = user.model_dump()
    to_encode.update({"sub": user.id, "iat": int(datetime.now(timezone.utc).timestamp())})
    return jwt.encode(to_encode, settings.session_secret_key, algorithm=settings.session_algorithm)


def decode_session_token(token: Optional[str]) -> Optional[CurrentUser]:
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.session_secret_key,
            algorithms=[settings.session_algorithm],
        )
    except JWTError:
        return None
    try:
        user = CurrentUser.model_validate(payload)
    except ValidationError:
        return None
    # pages scope every query by the numeric student id
    if not user.id.isdigit():
        return None
    return user
