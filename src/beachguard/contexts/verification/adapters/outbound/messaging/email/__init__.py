from .brevo_email_notifier import (
    BREVO_DEFAULT_API_URL,
    BrevoEmailNotifierConfig,
    BrevoEmailVerificationNotifier,
    BrevoHttpSession,
)
from .log_only_notifier import LogOnlyVerificationNotifier

__all__ = [
    "BREVO_DEFAULT_API_URL",
    "BrevoEmailNotifierConfig",
    "BrevoEmailVerificationNotifier",
    "BrevoHttpSession",
    "LogOnlyVerificationNotifier",
]
