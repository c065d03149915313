from .application import (
    ChallengeNotFoundError,
    DeliveryError,
    EnsureProfileUseCase,
    ExpiredError,
    IssueOtpChallengeUseCase,
    LoadSessionProfileUseCase,
    MismatchError,
    OtpChallengeStore,
    ProfileMirrorStore,
    ProfileStore,
    StoreUnavailableError,
    SubjectNotFoundError,
    SyncLeaderboardEntryUseCase,
    SyncVerificationMirrorUseCase,
    ValidationError,
    VerificationClock,
    VerificationNotifier,
    VerificationOperationError,
    VerifyOtpChallengeUseCase,
)
from .domain import (
    ChallengeSubject,
    OtpChallenge,
    ProfileMirrorRecord,
    ProfileRole,
    UserProfile,
    VerificationFlags,
)

__all__ = [
    "ChallengeNotFoundError",
    "ChallengeSubject",
    "DeliveryError",
    "EnsureProfileUseCase",
    "ExpiredError",
    "IssueOtpChallengeUseCase",
    "LoadSessionProfileUseCase",
    "MismatchError",
    "OtpChallenge",
    "OtpChallengeStore",
    "ProfileMirrorRecord",
    "ProfileMirrorStore",
    "ProfileRole",
    "ProfileStore",
    "StoreUnavailableError",
    "SubjectNotFoundError",
    "SyncLeaderboardEntryUseCase",
    "SyncVerificationMirrorUseCase",
    "UserProfile",
    "ValidationError",
    "VerificationClock",
    "VerificationFlags",
    "VerificationNotifier",
    "VerificationOperationError",
    "VerifyOtpChallengeUseCase",
]
