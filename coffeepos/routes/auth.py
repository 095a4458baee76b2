"""Authentication routes"""

from fastapi import APIRouter, Depends, HTTPException

from ..core.errors import BackendError, NotAuthenticated
from ..core.security import landing_screen, nav_items_for, user_initials
from ..core.session import TerminalSession
from ..models.user import Credentials, User
from ..services.auth import AuthService
from .deps import get_auth_service, get_session, http_error, require_screen

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _identity(user: User) -> dict:
    return {
        "user": user,
        "initials": user_initials(user.name),
        "landing": landing_screen(user.role),
        "nav_items": nav_items_for(user.role),
    }


@router.post("/login")
async def login(
    credentials: Credentials,
    auth: AuthService = Depends(get_auth_service),
    session: TerminalSession = Depends(get_session),
):
    """Sign in and land on the screen for the user's role"""
    try:
        data = await auth.login(credentials)
    except BackendError as e:
        raise http_error(session, e)

    if not data.token or data.user is None:
        raise HTTPException(status_code=401, detail=data.error or data.message or "Login failed")

    return _identity(data.user)


@router.post("/register")
async def register(
    user_data: dict,
    auth: AuthService = Depends(get_auth_service),
    session: TerminalSession = Depends(get_session),
):
    try:
        return await auth.register(user_data)
    except BackendError as e:
        raise http_error(session, e)


@router.post("/logout")
async def logout(auth: AuthService = Depends(get_auth_service)):
    auth.logout()
    return {"message": "Signed out"}


@router.get("/me")
async def me(session: TerminalSession = Depends(require_screen())):
    """Current user, their initials, landing screen and navigation"""
    return _identity(session.user)


@router.post("/refresh")
async def refresh(
    auth: AuthService = Depends(get_auth_service),
    session: TerminalSession = Depends(get_session),
):
    """Re-check the token with the backend"""
    user = await auth.refresh_profile()
    if user is None:
        raise http_error(session, NotAuthenticated())
    return _identity(user)
