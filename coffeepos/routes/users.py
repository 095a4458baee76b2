"""User administration routes"""

from fastapi import APIRouter, Depends

from ..core.errors import PosError
from ..core.notices import Notice
from ..core.session import TerminalSession
from ..models.user import User, UserInput
from ..services.backend_client import PosBackendClient
from .deps import get_backend_client, http_error, require_screen

router = APIRouter(prefix="/api/users", tags=["Users"])

screen = require_screen("users")


async def _reload(session: TerminalSession, client: PosBackendClient) -> list[User]:
    session.users = await client.list_users()
    return session.users


@router.get("", response_model=list[User])
async def list_users(
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
):
    try:
        return await _reload(session, client)
    except PosError as e:
        raise http_error(session, e)


@router.post("", response_model=list[User])
async def create_user(
    user: UserInput,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
):
    try:
        await client.create_user(user)
        session.notify(Notice.success("User created successfully!"))
        return await _reload(session, client)
    except PosError as e:
        raise http_error(session, e)


@router.put("/{user_id}", response_model=list[User])
async def update_user(
    user_id: int,
    user: UserInput,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
):
    try:
        await client.update_user(user_id, user)
        session.notify(Notice.success("User updated successfully!"))
        return await _reload(session, client)
    except PosError as e:
        raise http_error(session, e)


@router.delete("/{user_id}", response_model=list[User])
async def delete_user(
    user_id: int,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
):
    try:
        await client.delete_user(user_id)
        session.notify(Notice.success("User deleted successfully!"))
        return await _reload(session, client)
    except PosError as e:
        raise http_error(session, e)
