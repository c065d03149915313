from .entities import (
    OTP_CODE_DIGITS,
    ChallengeMetadata,
    LeaderboardEntry,
    NgoEntry,
    OtpChallenge,
    ProfileMirrorRecord,
    UserProfile,
)
from .value_objects import (
    ChallengeSubject,
    ProfileRole,
    SubjectClass,
    VerificationFlags,
    merge_roles,
    merged_field_names,
    sanitize_email_key,
)

__all__ = [
    "OTP_CODE_DIGITS",
    "ChallengeMetadata",
    "ChallengeSubject",
    "LeaderboardEntry",
    "NgoEntry",
    "OtpChallenge",
    "ProfileMirrorRecord",
    "ProfileRole",
    "SubjectClass",
    "UserProfile",
    "VerificationFlags",
    "merge_roles",
    "merged_field_names",
    "sanitize_email_key",
]
