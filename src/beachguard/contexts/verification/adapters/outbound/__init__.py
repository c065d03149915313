from .messaging import (
    BrevoEmailNotifierConfig,
    BrevoEmailVerificationNotifier,
    LogOnlyVerificationNotifier,
)
from .persistence import (
    InMemoryLeaderboardStore,
    InMemoryNgoStore,
    InMemoryOtpChallengeStore,
    InMemoryProfileMirrorStore,
    InMemoryProfileStore,
    PostgresLeaderboardStore,
    PostgresNgoStore,
    PostgresProfileStore,
    PsycopgVerificationPostgresGateway,
    RedisNgoStore,
    RedisOtpChallengeStore,
    RedisProfileMirrorStore,
    RedisVerificationStoreConfig,
    VerificationPostgresGateway,
    build_redis_client,
)
from .time import SystemRetrySleeper, SystemVerificationClock

__all__ = [
    "BrevoEmailNotifierConfig",
    "BrevoEmailVerificationNotifier",
    "InMemoryLeaderboardStore",
    "InMemoryNgoStore",
    "InMemoryOtpChallengeStore",
    "InMemoryProfileMirrorStore",
    "InMemoryProfileStore",
    "LogOnlyVerificationNotifier",
    "PostgresLeaderboardStore",
    "PostgresNgoStore",
    "PostgresProfileStore",
    "PsycopgVerificationPostgresGateway",
    "RedisNgoStore",
    "RedisOtpChallengeStore",
    "RedisProfileMirrorStore",
    "RedisVerificationStoreConfig",
    "SystemRetrySleeper",
    "SystemVerificationClock",
    "VerificationPostgresGateway",
    "build_redis_client",
]
