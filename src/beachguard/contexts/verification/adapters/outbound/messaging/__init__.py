from .email import (
    BrevoEmailNotifierConfig,
    BrevoEmailVerificationNotifier,
    LogOnlyVerificationNotifier,
)

__all__ = [
    "BrevoEmailNotifierConfig",
    "BrevoEmailVerificationNotifier",
    "LogOnlyVerificationNotifier",
]
