"""Shared fixtures for auth state tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from auth_state.core.identity_provider import IIdentityProvider, SignUpResult
from auth_state.core.store import AuthStore
from auth_state.core.user_context import UserContext


@pytest.fixture
def user():
    return UserContext(user_id="user-1", email="a@b.com", name="Alice")


@pytest.fixture
def other_user():
    return UserContext(user_id="user-2", email="c@d.com", name="Carol")


@pytest.fixture
def provider(user):
    """Identity provider mock where every call succeeds."""
    mock = MagicMock(spec=IIdentityProvider)
    mock.current_session = AsyncMock(return_value=user)
    mock.sign_in = AsyncMock(return_value=user)
    mock.sign_up = AsyncMock(return_value=SignUpResult(user=user))
    mock.sign_out = AsyncMock(return_value=None)
    mock.close = AsyncMock(return_value=None)
    mock.get_provider_name.return_value = "mock"
    return mock


@pytest.fixture
def store():
    return AuthStore()


@pytest.fixture
def flag_store():
    mock = MagicMock()
    mock.set.return_value = True
    return mock
