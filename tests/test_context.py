"""
Tests for AuthContext and its factory.
"""

from unittest.mock import MagicMock, patch

import pytest

from auth_state.config.settings import Settings
from auth_state.core.context import AuthContext, create_auth_context, create_identity_provider
from auth_state.core.errors import InvalidCredentialsError
from auth_state.infrastructure import FMIdentityProvider, InMemoryIdentityProvider


class TestAuthContext:
    """Test cases for AuthContext."""

    def test_construction_has_no_side_effects(self, provider):
        context = AuthContext(provider)

        assert context.is_loading is True
        assert context.is_authenticated is False
        assert context.user is None
        provider.current_session.assert_not_called()

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, provider, user):
        context = AuthContext(provider)

        await context.start()
        await context.start()

        assert provider.current_session.await_count == 1
        assert context.is_authenticated is True
        assert context.user == user
        assert (await context.wait_until_initialized()).is_loading is False

    @pytest.mark.asyncio
    async def test_full_session_lifecycle(self):
        context = AuthContext(InMemoryIdentityProvider())
        changes = []
        context.subscribe(changes.append)

        await context.start()
        assert context.state.is_loading is False
        assert context.is_authenticated is False

        await context.sign_up("a@b.com", "Alice", "pw")
        assert context.is_authenticated is True
        assert context.user.name == "Alice"

        await context.sign_out()
        assert context.is_authenticated is False

        with pytest.raises(InvalidCredentialsError):
            await context.sign_in("a@b.com", "wrong")
        assert context.is_authenticated is False

        await context.sign_in("a@b.com", "pw")
        assert context.is_authenticated is True

        assert [state.is_authenticated for state in changes] == [False, True, False, True]

        await context.close()

    @pytest.mark.asyncio
    async def test_sign_in_writes_namespaced_flag(self, provider, flag_store):
        context = AuthContext(provider, flag_store=flag_store, flag_key_prefix="app")

        await context.sign_in("a@b.com", "pw")

        flag_store.set.assert_called_once_with("app:authenticated", "true")

    @pytest.mark.asyncio
    async def test_connect_flag_store(self, provider, flag_store):
        flag_store.is_available.return_value = True
        context = AuthContext(provider, flag_store=flag_store)

        assert await context.connect_flag_store() is True
        flag_store.is_available.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_unreachable_flag_store(self, provider, flag_store):
        flag_store.is_available.return_value = False
        context = AuthContext(provider, flag_store=flag_store)

        assert await context.connect_flag_store() is False
        await context.sign_in("a@b.com", "pw")
        assert context.is_authenticated is True

    @pytest.mark.asyncio
    async def test_connect_without_flag_store(self, provider):
        assert await AuthContext(provider).connect_flag_store() is False

    @pytest.mark.asyncio
    async def test_close_closes_provider(self, provider):
        await AuthContext(provider).close()
        provider.close.assert_awaited_once()


class TestFactories:
    """Test cases for create_identity_provider and create_auth_context."""

    def test_memory_provider(self):
        settings = Settings(identity_provider="memory")
        assert isinstance(create_identity_provider(settings), InMemoryIdentityProvider)

    def test_fm_auth_service_provider(self):
        settings = Settings(
            identity_provider="fm-auth-service",
            fm_auth_service_url="http://auth.test/",
            request_timeout=3.0,
        )
        provider = create_identity_provider(settings)

        assert isinstance(provider, FMIdentityProvider)
        assert provider.service_url == "http://auth.test"
        assert provider.timeout == 3.0

    def test_unsupported_provider(self):
        settings = MagicMock(identity_provider="auth0")
        with pytest.raises(ValueError, match="Unsupported"):
            create_identity_provider(settings)

    def test_context_without_flag(self):
        settings = Settings(identity_provider="memory", persist_flag=False)
        context = create_auth_context(settings)

        assert context.operations.flag_store is None

    def test_context_with_redis_flag(self):
        settings = Settings(identity_provider="memory", flag_key_prefix="web")
        redis = MagicMock()

        with patch("auth_state.infrastructure.get_redis_client", return_value=redis):
            context = create_auth_context(settings)

        assert context.operations.flag_store is redis
        assert context.operations.flag_key == "web:authenticated"
