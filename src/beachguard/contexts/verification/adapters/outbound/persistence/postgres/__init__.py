from .gateway import PsycopgVerificationPostgresGateway, VerificationPostgresGateway
from .leaderboard_store import PostgresLeaderboardStore
from .ngo_store import PostgresNgoStore
from .profile_store import PostgresProfileStore

__all__ = [
    "PostgresLeaderboardStore",
    "PostgresNgoStore",
    "PostgresProfileStore",
    "PsycopgVerificationPostgresGateway",
    "VerificationPostgresGateway",
]
