from .system_clock import SystemVerificationClock
from .system_sleeper import SystemRetrySleeper

__all__ = [
    "SystemRetrySleeper",
    "SystemVerificationClock",
]
