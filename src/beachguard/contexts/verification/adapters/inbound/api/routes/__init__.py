from .leaderboard import LeaderboardSyncRequest, LeaderboardSyncResponse, build_leaderboard_router
from .ngo_directory import (
    MirrorNgoAdminRequest,
    MirrorNgoAdminResponse,
    build_ngo_directory_router,
)
from .otp_verification import (
    MessageResponse,
    SendVerificationOtpRequest,
    SendVolunteerOtpRequest,
    SuccessMessageResponse,
    VerifyOtpRequest,
    VerifyVolunteerOtpRequest,
    VolunteerVerifiedResponse,
    build_otp_verification_router,
)
from .profile_sync import (
    EnsureProfileRequest,
    EnsureProfileResponse,
    ProfileResponse,
    SessionProfileRequest,
    SessionProfileResponse,
    SyncVerificationRequest,
    SyncVerificationResponse,
    build_profile_sync_router,
)

__all__ = [
    "EnsureProfileRequest",
    "EnsureProfileResponse",
    "LeaderboardSyncRequest",
    "LeaderboardSyncResponse",
    "MessageResponse",
    "MirrorNgoAdminRequest",
    "MirrorNgoAdminResponse",
    "ProfileResponse",
    "SendVerificationOtpRequest",
    "SendVolunteerOtpRequest",
    "SessionProfileRequest",
    "SessionProfileResponse",
    "SuccessMessageResponse",
    "SyncVerificationRequest",
    "SyncVerificationResponse",
    "VerifyOtpRequest",
    "VerifyVolunteerOtpRequest",
    "VolunteerVerifiedResponse",
    "build_leaderboard_router",
    "build_ngo_directory_router",
    "build_otp_verification_router",
    "build_profile_sync_router",
]
