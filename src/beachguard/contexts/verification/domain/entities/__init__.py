from .leaderboard_entry import LeaderboardEntry
from .ngo_entry import NgoEntry
from .otp_challenge import OTP_CODE_DIGITS, ChallengeMetadata, OtpChallenge
from .profile_mirror_record import ProfileMirrorRecord
from .user_profile import UserProfile

__all__ = [
    "OTP_CODE_DIGITS",
    "ChallengeMetadata",
    "LeaderboardEntry",
    "NgoEntry",
    "OtpChallenge",
    "ProfileMirrorRecord",
    "UserProfile",
]
