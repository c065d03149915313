from .verification import build_verification_router

__all__ = [
    "build_verification_router",
]
