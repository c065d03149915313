from .api import (
    build_leaderboard_router,
    build_ngo_directory_router,
    build_otp_verification_router,
    build_profile_sync_router,
    register_verification_exception_handler,
)

__all__ = [
    "build_leaderboard_router",
    "build_ngo_directory_router",
    "build_otp_verification_router",
    "build_profile_sync_router",
    "register_verification_exception_handler",
]
