from .clock import VerificationClock
from .leaderboard_store import LeaderboardStore
from .ngo_store import NgoStore
from .otp_challenge_store import OtpChallengeStore
from .profile_mirror_store import ProfileMirrorStore
from .profile_store import ProfileStore
from .profile_write_target import ProfileWriteTarget
from .sleeper import RetrySleeper
from .verification_notifier import VerificationEmail, VerificationNotifier

__all__ = [
    "LeaderboardStore",
    "NgoStore",
    "OtpChallengeStore",
    "ProfileMirrorStore",
    "ProfileStore",
    "ProfileWriteTarget",
    "RetrySleeper",
    "VerificationClock",
    "VerificationEmail",
    "VerificationNotifier",
]
