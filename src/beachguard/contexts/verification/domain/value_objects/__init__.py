from .challenge_subject import ChallengeSubject, SubjectClass, sanitize_email_key
from .verification_flags import ProfileRole, VerificationFlags, merge_roles, merged_field_names

__all__ = [
    "ChallengeSubject",
    "ProfileRole",
    "SubjectClass",
    "VerificationFlags",
    "merge_roles",
    "merged_field_names",
    "sanitize_email_key",
]
