from __future__ import annotations

import logging
from typing import cast

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse

from beachguard.contexts.verification.application.errors import VerificationOperationError

log = logging.getLogger(__name__)


def verification_operation_error_handler(request: Request, error: Exception) -> JSONResponse:
    """
    Map `VerificationOperationError` to flat `{"error", "message"}` JSON payload.

    Args:
        request: Starlette request object.
        error: Raised verification operation error.
    Returns:
        JSONResponse: Response with error status code and payload.
    Assumptions:
        Status code carried by the error is final.
    Raises:
        None.
    Side Effects:
        Logs server-side failures (5xx) with request path.
    """
    typed_error = cast(VerificationOperationError, error)
    if typed_error.status_code >= 500:
        log.warning(
            "verification request failed path=%s error=%s message=%s",
            request.url.path,
            typed_error.code,
            typed_error.message,
        )
    return JSONResponse(
        status_code=typed_error.status_code,
        content=typed_error.payload(),
    )


def register_verification_exception_handler(*, app: FastAPI) -> None:
    """
    Register verification error handler on FastAPI app instance.

    Args:
        app: FastAPI application where the handler should be installed.
    Returns:
        None.
    Assumptions:
        Handler is registered once during app startup.
    Raises:
        ValueError: If app reference is missing.
    Side Effects:
        Updates app-level exception handler registry.
    """
    if app is None:  # type: ignore[truthy-bool]
        raise ValueError("register_verification_exception_handler requires app")
    app.add_exception_handler(
        VerificationOperationError,
        verification_operation_error_handler,
    )
