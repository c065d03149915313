from .ensure_profile import EnsureProfileResult, EnsureProfileUseCase
from .issue_otp_challenge import IssueOtpChallengeResult, IssueOtpChallengeUseCase
from .load_session_profile import LoadSessionProfileUseCase
from .mirror_ngo_entry import MirrorNgoEntryResult, MirrorNgoEntryUseCase
from .sync_leaderboard_entry import SyncLeaderboardEntryResult, SyncLeaderboardEntryUseCase
from .sync_verification_mirror import (
    NO_FIELDS_TO_SYNC,
    NO_MIRROR_RECORD,
    SyncVerificationMirrorResult,
    SyncVerificationMirrorUseCase,
)
from .verify_otp_challenge import VerifyOtpChallengeResult, VerifyOtpChallengeUseCase

__all__ = [
    "EnsureProfileResult",
    "EnsureProfileUseCase",
    "IssueOtpChallengeResult",
    "IssueOtpChallengeUseCase",
    "LoadSessionProfileUseCase",
    "MirrorNgoEntryResult",
    "MirrorNgoEntryUseCase",
    "NO_FIELDS_TO_SYNC",
    "NO_MIRROR_RECORD",
    "SyncLeaderboardEntryResult",
    "SyncLeaderboardEntryUseCase",
    "SyncVerificationMirrorResult",
    "SyncVerificationMirrorUseCase",
    "VerifyOtpChallengeResult",
    "VerifyOtpChallengeUseCase",
]
