"""
POS Terminal Application

Cash-register side of CoffeePOS: order entry, sales, reports and
administration screens over the shop's REST backend.
"""

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .core.config import settings
from .core.errors import BackendError
from .core.notices import Notice
from .core.security import can_access, nav_items_for
from .core.session import TerminalSession
from .routes import (
    auth_router,
    pos_router,
    products_router,
    sales_router,
    reports_router,
    dashboard_router,
    users_router,
    terminal_router,
)
from .routes.deps import get_auth_service, get_backend_client, get_order_entry, get_session
from .routes.pos import cart_view
from .services.dashboard import DashboardPoller
from .services.formatting import money
from .services.order_entry import OrderEntry

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("POS Terminal starting up...")
    logger.info(f"Backend URL: {settings.backend_base_url}")

    session = get_session()
    client = get_backend_client()
    auth = get_auth_service(session, client)
    user = await auth.restore()
    if user:
        logger.info(f"Restored session for {user.username} ({user.role})")

    poller = DashboardPoller(
        session,
        client,
        interval=settings.dashboard_refresh_seconds,
        threshold=settings.low_stock_threshold,
    )
    poller.start()

    yield

    logger.info("POS Terminal shutting down...")
    await poller.stop()
    await client.close()


# Create FastAPI app
app = FastAPI(
    title="CoffeePOS Terminal",
    description="Point-of-sale terminal for the CoffeePOS backend",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Static files and templates
static_dir = os.path.join(os.path.dirname(__file__), "static")
templates_dir = os.path.join(os.path.dirname(__file__), "templates")

if os.path.exists(static_dir):
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

templates = Jinja2Templates(directory=templates_dir) if os.path.exists(templates_dir) else None
if templates:
    templates.env.filters["money"] = money

# Include routers
app.include_router(auth_router)
app.include_router(pos_router)
app.include_router(products_router)
app.include_router(sales_router)
app.include_router(reports_router)
app.include_router(dashboard_router)
app.include_router(users_router)
app.include_router(terminal_router)


@app.get("/")
async def home(
    request: Request,
    category: Optional[str] = Query(None),
    session: TerminalSession = Depends(get_session),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    """Order-entry screen"""
    if session.is_authenticated and can_access("pos", session.role) and not session.products:
        try:
            await order_entry.fetch_products()
        except BackendError as e:
            session.notify(Notice.error(str(e)))

    products = order_entry.visible_products(category)

    if templates:
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": settings.app_name,
                "user": session.user,
                "nav_items": nav_items_for(session.role),
                "categories": order_entry.categories(),
                "active_category": session.active_category,
                "products": products,
                "cart": cart_view(session),
                "notices": session.notices.active(),
                "threshold": settings.low_stock_threshold,
            },
        )
    return {
        "message": "CoffeePOS Terminal API",
        "docs": "/docs",
        "endpoints": {
            "auth": "/api/auth",
            "pos": "/api/pos",
            "products": "/api/products",
            "sales": "/api/sales",
            "reports": "/api/reports",
            "dashboard": "/api/dashboard",
            "users": "/api/users",
        },
    }


@app.get("/health")
async def health_check(session: TerminalSession = Depends(get_session)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "pos-terminal",
        "backend_configured": bool(settings.backend_base_url),
        "authenticated": session.is_authenticated,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "coffeepos.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
