"""Role-based access to terminal screens"""

from typing import Optional

from ..models.user import Role
from .errors import Forbidden, NotAuthenticated
from .session import TerminalSession

ALL_ROLES = (Role.ADMIN.value, Role.MANAGER.value, Role.CASHIER.value)

# screen -> roles allowed to open it
SCREEN_ROLES: dict[str, tuple[str, ...]] = {
    "dashboard": (Role.ADMIN.value,),
    "products": (Role.ADMIN.value, Role.MANAGER.value),
    "pos": ALL_ROLES,
    "sales": (Role.ADMIN.value, Role.MANAGER.value),
    "reports": (Role.ADMIN.value,),
    "users": (Role.ADMIN.value,),
    # product create/edit/delete/stock buttons
    "manage_products": (Role.ADMIN.value,),
}

NAV_ITEMS = [
    {"label": "Dashboard", "screen": "dashboard", "path": "/dashboard"},
    {"label": "Products", "screen": "products", "path": "/products"},
    {"label": "POS", "screen": "pos", "path": "/pos"},
    {"label": "Sales", "screen": "sales", "path": "/sales"},
    {"label": "Reports", "screen": "reports", "path": "/reports"},
    {"label": "Users", "screen": "users", "path": "/users"},
]

LANDING_SCREENS = {
    Role.ADMIN.value: "dashboard",
    Role.MANAGER.value: "products",
    Role.CASHIER.value: "pos",
}


def can_access(screen: str, role: Optional[str]) -> bool:
    return role in SCREEN_ROLES.get(screen, ())


def check_access(session: TerminalSession, screen: Optional[str] = None) -> None:
    """Raise unless the signed-in user may open the screen"""
    if not session.is_authenticated:
        raise NotAuthenticated()
    if screen is not None and not can_access(screen, session.role):
        raise Forbidden(session.role)


def nav_items_for(role: Optional[str]) -> list[dict]:
    return [item for item in NAV_ITEMS if can_access(item["screen"], role)]


def landing_screen(role: Optional[str]) -> str:
    return LANDING_SCREENS.get(role, "pos")


def user_initials(name: Optional[str]) -> str:
    if not name:
        return "?"
    return "".join(part[0] for part in name.split() if part).upper()
