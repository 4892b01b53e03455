"""API routes for health checks and authentication state"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..core.context import AuthContext
from ..core.errors import InvalidCredentialsError, SignUpFailedError

logger = logging.getLogger(__name__)

router = APIRouter()


class SignInRequest(BaseModel):
    email: str
    password: str


class SignUpRequest(BaseModel):
    email: str
    name: str
    password: str


def get_auth_context(request: Request) -> AuthContext:
    """Return the AuthContext created in the application lifespan."""
    return request.app.state.auth_context


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Liveness check.

    Only verifies the process is running and responsive. Use /health/ready
    to find out whether the startup session probe has finished.
    """
    return {
        "status": "healthy",
        "service": "fm-auth-state",
        "version": "1.0.0",
    }


@router.get("/health/ready")
async def readiness_probe(
    context: AuthContext = Depends(get_auth_context),
) -> Response:
    """
    Readiness probe.

    Returns:
        200 once the startup session probe has reported, 503 while loading
    """
    ready = not context.is_loading
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": ready,
            "identity_provider": context.provider.get_provider_name(),
        },
    )


@router.get("/api/v1/auth/state")
async def get_state(context: AuthContext = Depends(get_auth_context)) -> Dict[str, Any]:
    """Current authentication state: is_authenticated, is_loading, user."""
    return context.state.to_dict()


@router.post("/api/v1/auth/sign-in", status_code=status.HTTP_204_NO_CONTENT)
async def sign_in(
    body: SignInRequest,
    context: AuthContext = Depends(get_auth_context),
) -> Response:
    try:
        await context.sign_in(body.email, body.password)
    except InvalidCredentialsError as e:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "invalid_credentials", "message": e.message},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/api/v1/auth/sign-up", status_code=status.HTTP_204_NO_CONTENT)
async def sign_up(
    body: SignUpRequest,
    context: AuthContext = Depends(get_auth_context),
) -> Response:
    try:
        await context.sign_up(body.email, body.name, body.password)
    except SignUpFailedError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "sign_up_failed", "message": e.message},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/api/v1/auth/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(context: AuthContext = Depends(get_auth_context)) -> Response:
    """Sign out. Always succeeds locally."""
    await context.sign_out()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
