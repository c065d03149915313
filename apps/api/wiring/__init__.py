from .modules import (
    VerificationApiModule,
    VerificationRuntimeSettings,
    build_verification_api_module,
)

__all__ = [
    "VerificationApiModule",
    "VerificationRuntimeSettings",
    "build_verification_api_module",
]
