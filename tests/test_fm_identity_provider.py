"""
Tests for the fm-auth-service identity provider.
"""

import json

import httpx
import pytest

from auth_state.core.errors import IdentityProviderError, SessionNotFoundError
from auth_state.infrastructure.fm_identity_provider import FMIdentityProvider

BASE_URL = "http://auth.test"


def make_provider(handler):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return FMIdentityProvider(BASE_URL, client=client)


class TestFMIdentityProvider:
    """Test cases for FMIdentityProvider."""

    @pytest.mark.asyncio
    async def test_current_session(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/api/v1/auth/session"
            return httpx.Response(200, json={"user": {"id": "u1", "email": "a@b.com", "name": "Alice"}})

        provider = make_provider(handler)
        user = await provider.current_session()

        assert user.user_id == "u1"
        assert user.email == "a@b.com"
        assert user.name == "Alice"
        await provider.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 404])
    async def test_current_session_missing(self, status_code):
        provider = make_provider(lambda request: httpx.Response(status_code))

        with pytest.raises(SessionNotFoundError) as exc_info:
            await provider.current_session()

        assert exc_info.value.status_code == status_code

    @pytest.mark.asyncio
    async def test_current_session_server_error(self):
        provider = make_provider(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.current_session()

        assert not isinstance(exc_info.value, SessionNotFoundError)
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = make_provider(handler)

        with pytest.raises(IdentityProviderError, match="unavailable"):
            await provider.current_session()

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        provider = make_provider(handler)

        with pytest.raises(IdentityProviderError, match="timeout"):
            await provider.sign_out()

    @pytest.mark.asyncio
    async def test_sign_in(self):
        def handler(request):
            assert request.url.path == "/api/v1/auth/login"
            assert json.loads(request.content) == {"email": "a@b.com", "password": "pw"}
            return httpx.Response(200, json={"user_id": "u1", "email": "a@b.com"})

        user = await make_provider(handler).sign_in("a@b.com", "pw")

        assert user.user_id == "u1"

    @pytest.mark.asyncio
    async def test_sign_in_rejected(self):
        provider = make_provider(lambda request: httpx.Response(401, json={"detail": "bad"}))

        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.sign_in("a@b.com", "wrong")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_sign_in_payload_without_identifier(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"email": "a@b.com"}))

        with pytest.raises(IdentityProviderError):
            await provider.sign_in("a@b.com", "pw")

    @pytest.mark.asyncio
    async def test_sign_in_invalid_json(self):
        provider = make_provider(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(IdentityProviderError, match="invalid JSON"):
            await provider.sign_in("a@b.com", "pw")

    @pytest.mark.asyncio
    async def test_sign_up(self):
        def handler(request):
            assert request.url.path == "/api/v1/auth/register"
            assert json.loads(request.content) == {
                "username": "a@b.com",
                "password": "pw",
                "attributes": {"email": "a@b.com", "name": "Alice"},
            }
            return httpx.Response(
                201,
                json={
                    "user": {"username": "a@b.com", "attributes": {"email": "a@b.com", "name": "Alice"}},
                },
            )

        result = await make_provider(handler).sign_up(
            "a@b.com", "pw", {"email": "a@b.com", "name": "Alice"}
        )

        assert result.user.user_id == "a@b.com"
        assert result.user.name == "Alice"

    @pytest.mark.asyncio
    async def test_sign_up_conflict(self):
        provider = make_provider(lambda request: httpx.Response(409, json={"detail": "exists"}))

        with pytest.raises(IdentityProviderError):
            await provider.sign_up("a@b.com", "pw", {})

    @pytest.mark.asyncio
    async def test_sign_out(self):
        def handler(request):
            assert request.url.path == "/api/v1/auth/logout"
            return httpx.Response(204)

        await make_provider(handler).sign_out()

    @pytest.mark.asyncio
    async def test_sign_out_failure(self):
        provider = make_provider(lambda request: httpx.Response(503))

        with pytest.raises(IdentityProviderError):
            await provider.sign_out()

    def test_provider_name(self):
        provider = make_provider(lambda request: httpx.Response(200))
        assert provider.get_provider_name() == "fm-auth-service"
        assert provider.service_url == BASE_URL
