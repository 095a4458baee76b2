"""Terminal-wide routes: notices and backend connectivity"""

from fastapi import APIRouter, Depends

from ..core.config import settings
from ..core.errors import BackendError
from ..core.session import TerminalSession
from ..services.backend_client import PosBackendClient
from .deps import get_backend_client, get_session

router = APIRouter(prefix="/api", tags=["Terminal"])


@router.get("/notices")
async def get_notices(session: TerminalSession = Depends(get_session)):
    """Notices that have not yet auto-dismissed"""
    return {"notices": [n.to_dict() for n in session.notices.active()]}


@router.get("/connection")
async def connection_test(client: PosBackendClient = Depends(get_backend_client)):
    """Report whether the backend answers its health check"""
    try:
        info = await client.health()
    except BackendError as e:
        return {
            "status": "error",
            "backend_url": settings.backend_base_url,
            "error": str(e),
        }
    return {
        "status": "connected",
        "backend_url": settings.backend_base_url,
        "message": (info or {}).get("message"),
        "environment": (info or {}).get("environment"),
    }
