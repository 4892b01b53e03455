"""
fm-auth-state - Main Application

Client-side authentication state holder:
- Startup session probe that settles is_loading exactly once
- Sign-in, sign-up and sign-out through a pluggable identity provider
- Observable in-memory state exposed over HTTP

The HTTP surface serves a single user: every caller shares one AuthContext
and the routes carry no authentication of their own. Bind it to loopback
(the default) and keep it in front of exactly one local client.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .core.context import AuthContext, create_auth_context
from .api.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager: owns the AuthContext"""
    # Startup
    settings: Settings = app.state.settings
    logger.info("Starting fm-auth-state v1.0.0")
    logger.info(f"Identity provider: {settings.identity_provider}")

    context: Optional[AuthContext] = getattr(app.state, "auth_context", None)
    if context is None:
        context = create_auth_context(settings)
        app.state.auth_context = context

    await context.connect_flag_store()

    # Probe in the background so /health/ready can report loading
    init_task = asyncio.create_task(context.start())

    yield

    # Shutdown
    logger.info("Shutting down fm-auth-state")
    if not init_task.done():
        init_task.cancel()
    await asyncio.gather(init_task, return_exceptions=True)
    await context.close()


def create_app(
    settings: Optional[Settings] = None,
    auth_context: Optional[AuthContext] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings (defaults to environment)
        auth_context: Pre-built context (defaults to one built from settings
            when the application starts)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    # LOG_LEVEL holds however the app is served
    logging.getLogger().setLevel(settings.log_level.upper())

    app = FastAPI(
        title="fm-auth-state",
        description="Client-side authentication state holder",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.auth_context = auth_context

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "auth_state.main:app",
        host=settings.service_host,
        port=settings.service_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
