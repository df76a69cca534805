"""Route gate: which page a path renders, given only whether a session is present."""

from dataclasses import dataclass
from typing import Optional

LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
DASHBOARD_PATH = "/dashboard"

AUTHENTICATED_PATHS = (
    "/dashboard",
    "/documents",
    "/finances",
    "/visa",
    "/support",
    "/profile",
    "/services",
)
GUEST_PATHS = (LOGIN_PATH, REGISTER_PATH)

RENDER = "render"
REDIRECT = "redirect"
NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteDecision:
    action: str
    location: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.action == REDIRECT


def _normalize(path: str) -> str:
    path = (path or "/").split("?", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def resolve_route(path: str, is_authenticated: bool) -> RouteDecision:
    path = _normalize(path)
    if path == "/":
        return RouteDecision(REDIRECT, DASHBOARD_PATH if is_authenticated else LOGIN_PATH)
    if path in GUEST_PATHS:
        if is_authenticated:
            return RouteDecision(REDIRECT, DASHBOARD_PATH)
        return RouteDecision(RENDER, path)
    if path in AUTHENTICATED_PATHS:
        if not is_authenticated:
            return RouteDecision(REDIRECT, LOGIN_PATH)
        return RouteDecision(RENDER, path)
    return RouteDecision(NOT_FOUND)
