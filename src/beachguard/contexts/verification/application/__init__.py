from .errors import (
    AdminAccessDeniedError,
    ChallengeNotFoundError,
    DeliveryError,
    ExpiredError,
    MismatchError,
    NotFoundError,
    StoreUnavailableError,
    SubjectNotFoundError,
    ValidationError,
    VerificationOperationError,
)
from .ports import (
    LeaderboardStore,
    NgoStore,
    OtpChallengeStore,
    ProfileMirrorStore,
    ProfileStore,
    ProfileWriteTarget,
    RetrySleeper,
    VerificationClock,
    VerificationEmail,
    VerificationNotifier,
)
from .use_cases import (
    EnsureProfileUseCase,
    IssueOtpChallengeUseCase,
    LoadSessionProfileUseCase,
    MirrorNgoEntryUseCase,
    SyncLeaderboardEntryUseCase,
    SyncVerificationMirrorUseCase,
    VerifyOtpChallengeUseCase,
)

__all__ = [
    "AdminAccessDeniedError",
    "ChallengeNotFoundError",
    "DeliveryError",
    "EnsureProfileUseCase",
    "ExpiredError",
    "IssueOtpChallengeUseCase",
    "LeaderboardStore",
    "LoadSessionProfileUseCase",
    "MirrorNgoEntryUseCase",
    "MismatchError",
    "NgoStore",
    "NotFoundError",
    "OtpChallengeStore",
    "ProfileMirrorStore",
    "ProfileStore",
    "ProfileWriteTarget",
    "RetrySleeper",
    "StoreUnavailableError",
    "SubjectNotFoundError",
    "SyncLeaderboardEntryUseCase",
    "SyncVerificationMirrorUseCase",
    "ValidationError",
    "VerificationClock",
    "VerificationEmail",
    "VerificationNotifier",
    "VerificationOperationError",
    "VerifyOtpChallengeUseCase",
]
