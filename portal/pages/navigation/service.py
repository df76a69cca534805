"""Navigation chrome. Derived from the session and the current path only; nothing is fetched."""

from typing import List, Tuple

from portal.auth.schemas import CurrentUser

from .schemas import HeaderUser, NavigationResponse, NavItem

# (name, path, icon)
SIDEBAR_ITEMS: List[Tuple[str, str, str]] = [
    ("Dashboard", "/dashboard", "bar-chart"),
    ("Documents", "/documents", "file-text"),
    ("Finances", "/finances", "credit-card"),
    ("Visa & Residency", "/visa", "compass"),
    ("Support", "/support", "help-circle"),
    ("Profile", "/profile", "user"),
]

MOBILE_ITEMS: List[Tuple[str, str, str]] = [
    ("Dashboard", "/dashboard", "home"),
    ("Services", "/services", "settings"),
    ("Profile", "/profile", "user"),
    ("Documents", "/documents", "file-text"),
    ("Finances", "/finances", "credit-card"),
    ("Visa", "/visa", "plane"),
    ("Support", "/support", "help-circle"),
]


def initials(name: str) -> str:
    parts = [p for p in name.split() if p]
    return "".join(p[0] for p in parts[:2]).upper()


def _items(entries: List[Tuple[str, str, str]], current_path: str) -> List[NavItem]:
    return [NavItem(name=n, path=p, icon=i, active=p == current_path) for n, p, i in entries]


def build_navigation(user: CurrentUser, current_path: str) -> NavigationResponse:
    path = current_path.split("?", 1)[0].rstrip("/") or "/"
    return NavigationResponse(
        current_path=path,
        sidebar=_items(SIDEBAR_ITEMS, path),
        mobile=_items(MOBILE_ITEMS, path),
        header=HeaderUser(
            name=user.name,
            application_number=user.application_number,
            profile_image=user.profile_image,
            initials=initials(user.name) or user.username[:1].upper(),
        ),
    )
