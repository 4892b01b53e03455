"""Infrastructure layer - Identity provider implementations and Redis client"""

from .fm_identity_provider import FMIdentityProvider
from .memory_provider import InMemoryIdentityProvider
from .redis_client import get_redis_client, RedisClient

__all__ = [
    "FMIdentityProvider",
    "InMemoryIdentityProvider",
    "get_redis_client",
    "RedisClient",
]
