from .errors import register_verification_exception_handler, verification_operation_error_handler
from .routes import (
    build_leaderboard_router,
    build_ngo_directory_router,
    build_otp_verification_router,
    build_profile_sync_router,
)

__all__ = [
    "build_leaderboard_router",
    "build_ngo_directory_router",
    "build_otp_verification_router",
    "build_profile_sync_router",
    "register_verification_exception_handler",
    "verification_operation_error_handler",
]
