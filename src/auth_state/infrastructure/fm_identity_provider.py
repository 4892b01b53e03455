"""fm-auth-service identity provider implementation"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..core.errors import IdentityProviderError, SessionNotFoundError
from ..core.identity_provider import IIdentityProvider, SignUpResult
from ..core.user_context import UserContext

logger = logging.getLogger(__name__)


class FMIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by the fm-auth-service REST API.

    Endpoints:
    - GET  /api/v1/auth/session   current session owner
    - POST /api/v1/auth/login     create session
    - POST /api/v1/auth/register  create user
    - POST /api/v1/auth/logout    end session

    The session itself travels in the client's cookie jar and is never
    inspected here.
    """

    def __init__(
        self,
        service_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize fm-auth-service provider.

        Args:
            service_url: Base URL of fm-auth-service (e.g., http://127.0.0.1:8001)
            timeout: Per-request timeout in seconds
            client: Pre-built httpx client (tests inject one with a MockTransport)
        """
        self.service_url = service_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(
            base_url=self.service_url,
            timeout=timeout,
        )

        logger.info(
            f"Initialized FMIdentityProvider for {self.service_url} "
            f"(timeout: {timeout}s)"
        )

    async def current_session(self) -> UserContext:
        response = await self._request("GET", "/api/v1/auth/session")

        if response.status_code in (401, 404):
            raise SessionNotFoundError("No active session", response.status_code)

        return self._parse_user(self._json_or_raise(response, "session lookup"))

    async def sign_in(self, email: str, password: str) -> UserContext:
        response = await self._request(
            "POST",
            "/api/v1/auth/login",
            json={"email": email, "password": password},
        )
        return self._parse_user(self._json_or_raise(response, "sign-in"))

    async def sign_up(
        self, username: str, password: str, attributes: Dict[str, Any]
    ) -> SignUpResult:
        response = await self._request(
            "POST",
            "/api/v1/auth/register",
            json={
                "username": username,
                "password": password,
                "attributes": attributes,
            },
        )
        data = self._json_or_raise(response, "sign-up")
        return SignUpResult(user=self._parse_user(data))

    async def sign_out(self) -> None:
        response = await self._request("POST", "/api/v1/auth/logout")
        if response.status_code >= 400:
            raise IdentityProviderError(
                f"Sign-out failed with HTTP {response.status_code}",
                response.status_code,
            )
        self._client.cookies.clear()

    def get_provider_name(self) -> str:
        """Return the name of this identity provider"""
        return "fm-auth-service"

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send one request; transport failures become IdentityProviderError."""
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"fm-auth-service timeout on {method} {path}: {e}")
            raise IdentityProviderError(f"Identity provider timeout: {e}")
        except httpx.HTTPError as e:
            logger.error(f"fm-auth-service request error on {method} {path}: {e}")
            raise IdentityProviderError(f"Identity provider unavailable: {e}")

    @staticmethod
    def _json_or_raise(response: httpx.Response, action: str) -> Dict[str, Any]:
        if response.status_code >= 400:
            raise IdentityProviderError(
                f"{action} failed with HTTP {response.status_code}: {response.text}",
                response.status_code,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise IdentityProviderError(f"{action} returned invalid JSON: {e}")
        if not isinstance(data, dict):
            raise IdentityProviderError(f"{action} returned unexpected payload")
        return data

    @staticmethod
    def _parse_user(data: Dict[str, Any]) -> UserContext:
        try:
            return UserContext.from_payload(data)
        except ValueError as e:
            raise IdentityProviderError(str(e))
