"""
FastAPI application factory for BeachGuardians verification API.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Mapping

from fastapi import FastAPI

from apps.api.common import register_api_error_handlers
from apps.api.wiring.modules import build_verification_api_module


def create_app(*, environ: Mapping[str, str] | None = None) -> FastAPI:
    """
    Build FastAPI app with verification module wired at startup.

    Related: apps.api.routes.verification,
      apps.api.wiring.modules.verification,
      beachguard.contexts.verification.adapters.inbound.api.errors

    Args:
        environ: Optional environment mapping override.
    Returns:
        FastAPI: Application instance with registered routers.
    Assumptions:
        Module wiring performs fail-fast validation before first request.
    Raises:
        ValueError: If verification runtime settings are invalid.
    Side Effects:
        Creates Redis connection pool when configured; closes it on shutdown.
    """
    effective_environ = os.environ if environ is None else environ
    verification_module = build_verification_api_module(environ=effective_environ)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            verification_module.close()

    app = FastAPI(
        title="BeachGuardians Verification API",
        version="1.0.0",
        lifespan=lifespan,
    )
    register_api_error_handlers(app=app)
    app.include_router(verification_module.router)
    return app


app = create_app()
