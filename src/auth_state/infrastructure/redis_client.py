"""Redis-backed store for the best-effort "authenticated" flag.

The flag is a hint for other processes that a sign-in happened; the
in-memory AuthState never reads it back. Losing a write is acceptable, so
this client never raises: an unreachable Redis turns every write into a
logged no-op that returns False.

Connection settings come from REDIS_* environment variables:
- REDIS_MODE=standalone: REDIS_HOST, REDIS_PORT, REDIS_PASSWORD, REDIS_DB
- REDIS_MODE=sentinel: REDIS_SENTINEL_HOSTS ("host:port,..."), REDIS_MASTER_SET

The redis client blocks, so async callers go through asyncio.to_thread.
"""

import logging
import os
from typing import List, Optional, Tuple
from redis import Redis, Sentinel
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

SOCKET_TIMEOUT = 5


def _parse_sentinel_hosts(value: str) -> List[Tuple[str, int]]:
    hosts = []
    for entry in value.split(","):
        host, port = entry.strip().split(":")
        hosts.append((host, int(port)))
    return hosts


class RedisClient:
    """Flag store over standalone Redis or Sentinel, connected on first use."""

    def __init__(self):
        self.client: Optional[Redis] = None
        self._connected = False

    def _connect(self) -> Optional[Redis]:
        """Build and ping the client once; later calls reuse the outcome."""
        if self._connected:
            return self.client
        self._connected = True

        mode = os.getenv("REDIS_MODE", "standalone").lower()
        password = os.getenv("REDIS_PASSWORD")
        db = int(os.getenv("REDIS_DB", "0"))

        try:
            if mode == "sentinel":
                sentinel = Sentinel(
                    _parse_sentinel_hosts(os.getenv("REDIS_SENTINEL_HOSTS", "localhost:26379")),
                    socket_timeout=SOCKET_TIMEOUT,
                    password=password,
                )
                client = sentinel.master_for(
                    os.getenv("REDIS_MASTER_SET", "mymaster"),
                    db=db,
                    decode_responses=True,
                    socket_timeout=SOCKET_TIMEOUT,
                )
            else:
                client = Redis(
                    host=os.getenv("REDIS_HOST", "localhost"),
                    port=int(os.getenv("REDIS_PORT", "6379")),
                    password=password,
                    db=db,
                    decode_responses=True,
                    socket_connect_timeout=SOCKET_TIMEOUT,
                    socket_timeout=SOCKET_TIMEOUT,
                )
            client.ping()
        except RedisError as e:
            logger.warning(
                f"Flag store unreachable ({mode} mode): {e}. "
                "The authenticated flag will not be persisted."
            )
            return None

        self.client = client
        logger.info(f"Flag store connected in {mode} mode")
        return client

    def set(self, key: str, value: str) -> bool:
        """Write a flag. Returns False instead of raising on any Redis failure."""
        client = self._connect()
        if not client:
            return False

        try:
            client.set(key, value)
            return True
        except RedisError as e:
            logger.warning(f"Flag store write failed for {key}: {e}")
            return False

    def is_available(self) -> bool:
        """Connect if needed and report whether writes can succeed."""
        return self._connect() is not None


# Singleton instance
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get or create the flag store singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
