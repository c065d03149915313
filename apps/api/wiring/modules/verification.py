"""
Composition helpers for verification API module.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping

from fastapi import APIRouter
from redis import Redis

from apps.api.routes import build_verification_router
from beachguard.contexts.verification.adapters.outbound import (
    BrevoEmailNotifierConfig,
    BrevoEmailVerificationNotifier,
    InMemoryLeaderboardStore,
    InMemoryNgoStore,
    InMemoryOtpChallengeStore,
    InMemoryProfileMirrorStore,
    InMemoryProfileStore,
    LogOnlyVerificationNotifier,
    PostgresLeaderboardStore,
    PostgresNgoStore,
    PostgresProfileStore,
    PsycopgVerificationPostgresGateway,
    RedisNgoStore,
    RedisOtpChallengeStore,
    RedisProfileMirrorStore,
    RedisVerificationStoreConfig,
    SystemRetrySleeper,
    SystemVerificationClock,
    build_redis_client,
)
from beachguard.contexts.verification.application import (
    LeaderboardStore,
    NgoStore,
    OtpChallengeStore,
    ProfileMirrorStore,
    ProfileStore,
    VerificationNotifier,
)
from beachguard.contexts.verification.application.services import (
    OtpCodeGenerator,
    PrimaryWithFallbackWriteTarget,
    ProfileMirrorWriteTarget,
    ProfileReadRetryPolicy,
    ProfileReplicationReader,
    ProfileStoreWriteTarget,
    VerificationMirror,
)
from beachguard.contexts.verification.application.use_cases import (
    EnsureProfileUseCase,
    IssueOtpChallengeUseCase,
    LoadSessionProfileUseCase,
    MirrorNgoEntryUseCase,
    SyncLeaderboardEntryUseCase,
    SyncVerificationMirrorUseCase,
    VerifyOtpChallengeUseCase,
)

_ENV_NAME_KEY = "BEACHGUARD_ENV"
_FAIL_FAST_KEY = "VERIFICATION_FAIL_FAST"
_REDIS_URL_KEY = "VERIFICATION_REDIS_URL"
_REDIS_KEY_PREFIX_KEY = "VERIFICATION_REDIS_KEY_PREFIX"
_PG_DSN_KEY = "VERIFICATION_PG_DSN"
_OTP_TTL_MINUTES_KEY = "VERIFICATION_OTP_TTL_MINUTES"
_EMAIL_MODE_KEY = "VERIFICATION_EMAIL_MODE"
_BREVO_API_KEY_KEY = "BREVO_API_KEY"
_EMAIL_SENDER_KEY = "VERIFICATION_EMAIL_SENDER"
_PROFILE_READ_ATTEMPTS_KEY = "VERIFICATION_PROFILE_READ_ATTEMPTS"
_PROFILE_READ_BASE_DELAY_MS_KEY = "VERIFICATION_PROFILE_READ_BASE_DELAY_MS"
_ALLOWED_ENVS = ("dev", "prod", "test")
_ALLOWED_EMAIL_MODES = ("log_only", "brevo")
_DEFAULT_EMAIL_SENDER = "no-reply@beachguardians.org"


@dataclass(frozen=True, slots=True)
class VerificationRuntimeSettings:
    """
    VerificationRuntimeSettings — runtime policy for verification wiring.

    Related:
      - apps/api/wiring/modules/verification.py
      - apps/api/main/app.py
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
    """

    env_name: str
    fail_fast: bool
    redis_url: str
    redis_key_prefix: str
    postgres_dsn: str
    otp_ttl_minutes: int
    email_mode: str
    brevo_api_key: str
    email_sender: str
    profile_read_attempts: int
    profile_read_base_delay_ms: int

    def __post_init__(self) -> None:
        """
        Validate verification runtime settings invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Values are normalized by resolver before dataclass construction.
        Raises:
            ValueError: If one of invariants is violated.
        Side Effects:
            None.
        """
        if self.env_name not in _ALLOWED_ENVS:
            raise ValueError(
                f"VerificationRuntimeSettings.env_name must be one of {_ALLOWED_ENVS}, "
                f"got {self.env_name!r}"
            )
        if not self.redis_key_prefix:
            raise ValueError("VerificationRuntimeSettings.redis_key_prefix must be non-empty")
        if self.otp_ttl_minutes <= 0:
            raise ValueError("VerificationRuntimeSettings.otp_ttl_minutes must be > 0")
        if self.email_mode not in _ALLOWED_EMAIL_MODES:
            raise ValueError(
                f"VerificationRuntimeSettings.email_mode must be one of {_ALLOWED_EMAIL_MODES}, "
                f"got {self.email_mode!r}"
            )
        if self.email_mode == "brevo" and not self.brevo_api_key:
            raise ValueError("VerificationRuntimeSettings.brevo_api_key is required for brevo")
        if not self.email_sender:
            raise ValueError("VerificationRuntimeSettings.email_sender must be non-empty")
        if self.profile_read_attempts <= 0:
            raise ValueError("VerificationRuntimeSettings.profile_read_attempts must be > 0")
        if self.profile_read_base_delay_ms < 0:
            raise ValueError(
                "VerificationRuntimeSettings.profile_read_base_delay_ms must be >= 0"
            )


@dataclass(frozen=True, slots=True)
class VerificationApiModule:
    """
    VerificationApiModule — wired router plus adapters the app composition may need.

    Related:
      - apps/api/main/app.py
      - tests/unit/apps/api/test_verification_api_flow.py
    """

    router: APIRouter
    settings: VerificationRuntimeSettings
    notifier: VerificationNotifier
    redis_client: Redis | None

    def close(self) -> None:
        if self.redis_client is not None:
            self.redis_client.close()


def build_verification_api_module(
    *,
    environ: Mapping[str, str],
    redis_client: Redis | None = None,
) -> VerificationApiModule:
    """
    Build fully wired verification router from environment settings.

    Args:
        environ: Runtime environment mapping.
        redis_client: Optional prebuilt Redis client, used instead of `VERIFICATION_REDIS_URL`.
    Returns:
        VerificationApiModule: Router and wired outbound adapters.
    Assumptions:
        Empty Redis URL or Postgres DSN selects in-memory adapters (dev/test only).
    Raises:
        ValueError: If fail-fast policy requires missing settings or values are invalid.
    Side Effects:
        Creates Redis connection pool when Redis URL is configured.
    """
    settings = _resolve_verification_runtime_settings(environ=environ)
    clock = SystemVerificationClock()

    effective_redis = redis_client
    if effective_redis is None and settings.redis_url:
        effective_redis = build_redis_client(
            config=RedisVerificationStoreConfig(
                url=settings.redis_url,
                key_prefix=settings.redis_key_prefix,
            )
        )
    challenge_store, mirror_store = _build_verification_stores(
        settings=settings,
        redis_client=effective_redis,
    )
    profile_store, leaderboard_store, ngo_store = _build_profile_stores(settings=settings)
    notifier = _build_notifier(settings=settings)

    code_generator = OtpCodeGenerator(
        clock=clock,
        ttl=timedelta(minutes=settings.otp_ttl_minutes),
    )
    mirror = VerificationMirror(
        write_target=PrimaryWithFallbackWriteTarget(
            primary=ProfileStoreWriteTarget(profile_store=profile_store, clock=clock),
            fallback=ProfileMirrorWriteTarget(mirror_store=mirror_store),
        )
    )
    reader = ProfileReplicationReader(
        profile_store=profile_store,
        sleeper=SystemRetrySleeper(),
        policy=ProfileReadRetryPolicy(
            max_attempts=settings.profile_read_attempts,
            base_delay_seconds=settings.profile_read_base_delay_ms / 1000.0,
        ),
    )

    sync_use_case = SyncVerificationMirrorUseCase(
        mirror_store=mirror_store,
        profile_store=profile_store,
        clock=clock,
    )
    ensure_use_case = EnsureProfileUseCase(
        profile_store=profile_store,
        mirror_store=mirror_store,
        clock=clock,
    )
    router = build_verification_router(
        issue_use_case=IssueOtpChallengeUseCase(
            challenge_store=challenge_store,
            code_generator=code_generator,
            notifier=notifier,
        ),
        verify_use_case=VerifyOtpChallengeUseCase(
            challenge_store=challenge_store,
            profile_store=profile_store,
            mirror=mirror,
            clock=clock,
        ),
        sync_use_case=sync_use_case,
        ensure_use_case=ensure_use_case,
        session_use_case=LoadSessionProfileUseCase(
            sync_use_case=sync_use_case,
            reader=reader,
            ensure_use_case=ensure_use_case,
        ),
        leaderboard_use_case=SyncLeaderboardEntryUseCase(
            profile_store=profile_store,
            leaderboard_store=leaderboard_store,
            clock=clock,
        ),
        ngo_mirror_use_case=MirrorNgoEntryUseCase(
            profile_store=profile_store,
            primary_store=ngo_store,
            fallback_store=_build_ngo_fallback_store(
                settings=settings,
                redis_client=effective_redis,
            ),
            clock=clock,
        ),
    )
    return VerificationApiModule(
        router=router,
        settings=settings,
        notifier=notifier,
        redis_client=effective_redis,
    )


def _build_verification_stores(
    *,
    settings: VerificationRuntimeSettings,
    redis_client: Redis | None,
) -> tuple[OtpChallengeStore, ProfileMirrorStore]:
    """
    Build challenge store and profile mirror store on the same backend.

    Args:
        settings: Resolved runtime settings.
        redis_client: Redis client or `None` for in-memory stores.
    Returns:
        tuple[OtpChallengeStore, ProfileMirrorStore]: Verification store adapters.
    Assumptions:
        In-memory stores are acceptable for local runs and tests.
    Raises:
        ValueError: If adapter construction fails.
    Side Effects:
        None.
    """
    if redis_client is not None:
        return (
            RedisOtpChallengeStore(
                redis_client=redis_client,
                key_prefix=settings.redis_key_prefix,
            ),
            RedisProfileMirrorStore(
                redis_client=redis_client,
                key_prefix=settings.redis_key_prefix,
            ),
        )
    return InMemoryOtpChallengeStore(), InMemoryProfileMirrorStore()


def _build_profile_stores(
    *,
    settings: VerificationRuntimeSettings,
) -> tuple[ProfileStore, LeaderboardStore, NgoStore]:
    """
    Build profile, leaderboard and NGO directory adapters based on runtime DSN availability.

    Args:
        settings: Resolved runtime settings.
    Returns:
        tuple[ProfileStore, LeaderboardStore, NgoStore]: Postgres or in-memory adapters.
    Assumptions:
        Postgres DSN is optional in dev/test.
    Raises:
        ValueError: If Postgres DSN is malformed for gateway construction.
    Side Effects:
        None.
    """
    if settings.postgres_dsn:
        gateway = PsycopgVerificationPostgresGateway(dsn=settings.postgres_dsn)
        return (
            PostgresProfileStore(gateway=gateway),
            PostgresLeaderboardStore(gateway=gateway),
            PostgresNgoStore(gateway=gateway),
        )
    return InMemoryProfileStore(), InMemoryLeaderboardStore(), InMemoryNgoStore()


def _build_ngo_fallback_store(
    *,
    settings: VerificationRuntimeSettings,
    redis_client: Redis | None,
) -> NgoStore:
    if redis_client is not None:
        return RedisNgoStore(redis_client=redis_client, key_prefix=settings.redis_key_prefix)
    return InMemoryNgoStore()


def _build_notifier(*, settings: VerificationRuntimeSettings) -> VerificationNotifier:
    if settings.email_mode == "brevo":
        return BrevoEmailVerificationNotifier(
            config=BrevoEmailNotifierConfig(
                api_key=settings.brevo_api_key,
                sender_email=settings.email_sender,
            )
        )
    return LogOnlyVerificationNotifier()


def _resolve_verification_runtime_settings(
    *,
    environ: Mapping[str, str],
) -> VerificationRuntimeSettings:
    """
    Resolve verification runtime settings with fail-fast policy and defaults.

    Args:
        environ: Runtime environment mapping.
    Returns:
        VerificationRuntimeSettings: Validated normalized settings.
    Assumptions:
        Missing `BEACHGUARD_ENV` defaults to `dev`.
    Raises:
        ValueError: If env values are invalid or fail-fast policy requires missing settings.
    Side Effects:
        None.
    """
    env_name = _resolve_env_name(environ=environ)
    fail_fast = _resolve_fail_fast(environ=environ, env_name=env_name)

    redis_url = environ.get(_REDIS_URL_KEY, "").strip()
    postgres_dsn = environ.get(_PG_DSN_KEY, "").strip()
    brevo_api_key = environ.get(_BREVO_API_KEY_KEY, "").strip()
    email_mode = environ.get(_EMAIL_MODE_KEY, "").strip().lower()
    if not email_mode:
        email_mode = "brevo" if brevo_api_key and env_name == "prod" else "log_only"

    if fail_fast:
        if not redis_url:
            raise ValueError(f"{_REDIS_URL_KEY} must be set when {_FAIL_FAST_KEY}=true")
        if not postgres_dsn:
            raise ValueError(f"{_PG_DSN_KEY} must be set when {_FAIL_FAST_KEY}=true")
        if email_mode != "brevo":
            raise ValueError(f"{_EMAIL_MODE_KEY} must be 'brevo' when {_FAIL_FAST_KEY}=true")
        if not brevo_api_key:
            raise ValueError(f"{_BREVO_API_KEY_KEY} must be set when {_FAIL_FAST_KEY}=true")

    return VerificationRuntimeSettings(
        env_name=env_name,
        fail_fast=fail_fast,
        redis_url=redis_url,
        redis_key_prefix=environ.get(_REDIS_KEY_PREFIX_KEY, "beachguard").strip(),
        postgres_dsn=postgres_dsn,
        otp_ttl_minutes=_resolve_positive_int(
            environ=environ,
            key=_OTP_TTL_MINUTES_KEY,
            default=10,
        ),
        email_mode=email_mode,
        brevo_api_key=brevo_api_key,
        email_sender=environ.get(_EMAIL_SENDER_KEY, _DEFAULT_EMAIL_SENDER).strip(),
        profile_read_attempts=_resolve_positive_int(
            environ=environ,
            key=_PROFILE_READ_ATTEMPTS_KEY,
            default=3,
        ),
        profile_read_base_delay_ms=_resolve_non_negative_int(
            environ=environ,
            key=_PROFILE_READ_BASE_DELAY_MS_KEY,
            default=300,
        ),
    )


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    """
    Resolve normalized runtime env name for verification wiring.

    Args:
        environ: Runtime environment mapping.
    Returns:
        str: One of `dev`, `prod`, or `test`.
    Assumptions:
        Missing value defaults to `dev`.
    Raises:
        ValueError: If value is outside allowed list.
    Side Effects:
        None.
    """
    raw_env_name = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env_name not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env_name!r}"
        )
    return raw_env_name


def _resolve_fail_fast(*, environ: Mapping[str, str], env_name: str) -> bool:
    """
    Resolve fail-fast policy for verification startup validation.

    Args:
        environ: Runtime environment mapping.
        env_name: Normalized environment name.
    Returns:
        bool: Effective fail-fast flag.
    Assumptions:
        Default is enabled for `prod` and disabled for `dev`/`test`.
    Raises:
        ValueError: If override value is not parseable as boolean.
    Side Effects:
        None.
    """
    default_fail_fast = env_name == "prod"
    raw_override = environ.get(_FAIL_FAST_KEY, "").strip()
    if not raw_override:
        return default_fail_fast
    return _parse_bool(raw_value=raw_override, key=_FAIL_FAST_KEY)


def _resolve_positive_int(*, environ: Mapping[str, str], key: str, default: int) -> int:
    """
    Resolve positive integer env setting with fallback default.

    Args:
        environ: Runtime environment mapping.
        key: Environment variable key.
        default: Fallback integer.
    Returns:
        int: Positive integer value.
    Assumptions:
        Empty env value means default should be used.
    Raises:
        ValueError: If value is not parseable or non-positive.
    Side Effects:
        None.
    """
    parsed = _resolve_int(environ=environ, key=key, default=default)
    if parsed <= 0:
        raise ValueError(f"{key} must be > 0, got {parsed}")
    return parsed


def _resolve_non_negative_int(*, environ: Mapping[str, str], key: str, default: int) -> int:
    parsed = _resolve_int(environ=environ, key=key, default=default)
    if parsed < 0:
        raise ValueError(f"{key} must be >= 0, got {parsed}")
    return parsed


def _resolve_int(*, environ: Mapping[str, str], key: str, default: int) -> int:
    raw_value = environ.get(key, "").strip()
    if not raw_value:
        return default
    try:
        return int(raw_value)
    except ValueError as error:
        raise ValueError(f"{key} must be integer, got {raw_value!r}") from error


def _parse_bool(*, raw_value: str, key: str) -> bool:
    """
    Parse strict boolean env value from known textual literals.

    Args:
        raw_value: Raw env string value.
        key: Env key used in error messages.
    Returns:
        bool: Parsed boolean value.
    Assumptions:
        Accepted true values: `1,true,yes,on`; false values: `0,false,no,off`.
    Raises:
        ValueError: If value is not recognized.
    Side Effects:
        None.
    """
    normalized = raw_value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(
        f"{key} must be a boolean literal (1/0/true/false/yes/no/on/off), got {raw_value!r}"
    )
