from .in_memory import (
    InMemoryLeaderboardStore,
    InMemoryNgoStore,
    InMemoryOtpChallengeStore,
    InMemoryProfileMirrorStore,
    InMemoryProfileStore,
)
from .postgres import (
    PostgresLeaderboardStore,
    PostgresNgoStore,
    PostgresProfileStore,
    PsycopgVerificationPostgresGateway,
    VerificationPostgresGateway,
)
from .redis import (
    RedisNgoStore,
    RedisOtpChallengeStore,
    RedisProfileMirrorStore,
    RedisVerificationStoreConfig,
    build_redis_client,
)

__all__ = [
    "InMemoryLeaderboardStore",
    "InMemoryNgoStore",
    "InMemoryOtpChallengeStore",
    "InMemoryProfileMirrorStore",
    "InMemoryProfileStore",
    "PostgresLeaderboardStore",
    "PostgresNgoStore",
    "PostgresProfileStore",
    "PsycopgVerificationPostgresGateway",
    "RedisNgoStore",
    "RedisOtpChallengeStore",
    "RedisProfileMirrorStore",
    "RedisVerificationStoreConfig",
    "VerificationPostgresGateway",
    "build_redis_client",
]
