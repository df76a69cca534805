from typing import List, Optional

from pydantic import BaseModel


class NavItem(BaseModel):
    name: str
    path: str
    icon: str
    active: bool = False


class HeaderUser(BaseModel):
    name: str
    application_number: str
    profile_image: Optional[str] = None
    initials: str


class NavigationResponse(BaseModel):
    current_path: str
    sidebar: List[NavItem]
    mobile: List[NavItem]
    header: HeaderUser
    logout_path: str = "/logout"
