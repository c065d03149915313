from .email_templates import (
    ADMIN_VERIFICATION_SUBJECT,
    VOLUNTEER_VERIFICATION_SUBJECT,
    render_admin_verification_email,
    render_volunteer_verification_email,
)
from .otp_code_generator import (
    DEFAULT_OTP_TTL,
    GeneratedOtpCode,
    OtpCodeGenerator,
    datetime_to_epoch_ms,
)
from .profile_replication_reader import ProfileReadRetryPolicy, ProfileReplicationReader
from .profile_write_targets import (
    MirrorWriteOutcome,
    PrimaryWithFallbackWriteTarget,
    ProfileMirrorWriteTarget,
    ProfileStoreWriteTarget,
)
from .verification_mirror import VerificationMirror

__all__ = [
    "ADMIN_VERIFICATION_SUBJECT",
    "DEFAULT_OTP_TTL",
    "GeneratedOtpCode",
    "MirrorWriteOutcome",
    "OtpCodeGenerator",
    "PrimaryWithFallbackWriteTarget",
    "ProfileMirrorWriteTarget",
    "ProfileReadRetryPolicy",
    "ProfileReplicationReader",
    "ProfileStoreWriteTarget",
    "VOLUNTEER_VERIFICATION_SUBJECT",
    "VerificationMirror",
    "datetime_to_epoch_ms",
    "render_admin_verification_email",
    "render_volunteer_verification_email",
]
