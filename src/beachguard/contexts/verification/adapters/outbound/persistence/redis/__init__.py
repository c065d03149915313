from .client import RedisVerificationStoreConfig, build_redis_client
from .ngo_store import RedisNgoStore
from .otp_challenge_store import RedisOtpChallengeStore
from .profile_mirror_store import RedisProfileMirrorStore

__all__ = [
    "RedisNgoStore",
    "RedisOtpChallengeStore",
    "RedisProfileMirrorStore",
    "RedisVerificationStoreConfig",
    "build_redis_client",
]
