"""
Authentication Service

Signs the cashier in and out, persists the bearer token between terminal
restarts, and refreshes the user's identity from the backend.
"""

import os
import logging
from datetime import datetime, timezone
from typing import Optional

import jwt

from ..core.errors import BackendError
from ..core.notices import Notice
from ..core.session import TerminalSession
from ..models.user import Credentials, LoginResponse, User
from .backend_client import PosBackendClient

logger = logging.getLogger(__name__)


class TokenStore:
    """Bearer token persisted in a file"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r") as f:
            token = f.read().strip()
        return token or None

    def save(self, token: str) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w") as f:
            f.write(token)

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)


def token_expired(token: str, now: Optional[datetime] = None) -> bool:
    """
    Check the ``exp`` claim of a JWT bearer token.

    The signature is not verified here; the backend does that. Tokens that
    are not JWTs, or carry no ``exp``, are never considered expired.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return False

    exp = claims.get("exp")
    if exp is None:
        return False
    now = now or datetime.now(timezone.utc)
    return now.timestamp() >= float(exp)


class AuthService:
    """Keeps the terminal session, the client and the token file in step"""

    def __init__(
        self,
        client: PosBackendClient,
        session: TerminalSession,
        token_store: TokenStore,
    ):
        self.client = client
        self.session = session
        self.token_store = token_store

    def _set_token(self, token: Optional[str]) -> None:
        self.session.token = token
        self.client.token = token

    async def restore(self) -> Optional[User]:
        """Pick up the persisted token, if any, and ask the backend who it belongs to"""
        token = self.token_store.load()
        if not token:
            return None

        if token_expired(token):
            logger.info("Persisted token has expired, signing out")
            self.logout()
            return None

        self._set_token(token)
        return await self.refresh_profile()

    async def refresh_profile(self) -> Optional[User]:
        """Refresh the user's identity; any failure signs the terminal out"""
        if not self.session.token:
            return None

        try:
            user = await self.client.get_profile()
        except BackendError as e:
            logger.warning(f"Profile refresh failed, signing out: {e}")
            self.logout()
            return None

        self.session.user = user
        self.session.touch()
        return user

    async def login(self, credentials: Credentials) -> LoginResponse:
        data = await self.client.login(credentials)
        # a token without its user is not a usable sign-in; keep nothing
        if data.token and data.user is not None:
            self.token_store.save(data.token)
            self._set_token(data.token)
            self.session.user = data.user
            self.session.touch()
            logger.info(f"User {credentials.username} signed in")
        return data

    async def register(self, user_data: dict) -> dict:
        return await self.client.register(user_data)

    def logout(self) -> None:
        self.token_store.clear()
        self.client.token = None
        self.session.sign_out()
        self.session.notify(Notice.success("Signed out"))
