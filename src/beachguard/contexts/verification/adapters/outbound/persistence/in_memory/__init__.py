from .leaderboard_store import InMemoryLeaderboardStore
from .ngo_store import InMemoryNgoStore
from .otp_challenge_store import InMemoryOtpChallengeStore
from .profile_mirror_store import InMemoryProfileMirrorStore
from .profile_store import InMemoryProfileStore

__all__ = [
    "InMemoryLeaderboardStore",
    "InMemoryNgoStore",
    "InMemoryOtpChallengeStore",
    "InMemoryProfileMirrorStore",
    "InMemoryProfileStore",
]
