from __future__ import annotations

from dataclasses import dataclass

from redis import Redis


@dataclass(frozen=True, slots=True)
class RedisVerificationStoreConfig:
    """
    RedisVerificationStoreConfig — connection and key namespace settings for the
    verification store.

    Related:
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/
        otp_challenge_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/
        profile_mirror_store.py
      - apps/api/wiring/modules/verification.py
    """

    url: str
    key_prefix: str = "beachguard"
    socket_timeout_s: float = 2.0
    connect_timeout_s: float = 2.0

    def __post_init__(self) -> None:
        """
        Validate Redis config invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            URL follows redis-py `from_url` syntax.
        Raises:
            ValueError: If one of required config values is invalid.
        Side Effects:
            None.
        """
        if not self.url.strip():
            raise ValueError("Redis verification store url must be non-empty")
        if not self.key_prefix.strip():
            raise ValueError("Redis verification store key_prefix must be non-empty")
        if ":" in self.key_prefix:
            raise ValueError("Redis verification store key_prefix must not contain ':'")
        if self.socket_timeout_s <= 0:
            raise ValueError("Redis verification store socket_timeout_s must be > 0")
        if self.connect_timeout_s <= 0:
            raise ValueError("Redis verification store connect_timeout_s must be > 0")


def build_redis_client(*, config: RedisVerificationStoreConfig) -> Redis:
    """
    Build Redis client decoding responses to `str`.

    Args:
        config: Validated store config.
    Returns:
        Redis: Configured redis-py client.
    Assumptions:
        Connection is established lazily on first command.
    Raises:
        ValueError: If URL scheme is not supported by redis-py.
    Side Effects:
        Allocates Redis connection pool.
    """
    return Redis.from_url(
        config.url,
        socket_timeout=config.socket_timeout_s,
        socket_connect_timeout=config.connect_timeout_s,
        decode_responses=True,
    )
