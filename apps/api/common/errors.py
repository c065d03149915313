"""
Shared API error handlers for verification error contract and malformed request payloads.
"""

from __future__ import annotations

from typing import Any, Sequence, cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from beachguard.contexts.verification.adapters.inbound.api import (
    register_verification_exception_handler,
)
from beachguard.contexts.verification.application.errors import ValidationError


def register_api_error_handlers(*, app: FastAPI) -> None:
    """
    Register global API handlers for verification errors and FastAPI validation errors.

    Args:
        app: FastAPI application instance.
    Returns:
        None.
    Assumptions:
        Handlers are installed once during application startup.
    Raises:
        ValueError: If `app` dependency is missing.
    Side Effects:
        Mutates FastAPI exception-handler registry.
    """
    if app is None:  # type: ignore[truthy-bool]
        raise ValueError("register_api_error_handlers requires app")

    register_verification_exception_handler(app=app)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)


def request_validation_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert FastAPI RequestValidationError to flat `invalid_request` payload with HTTP 400.

    Args:
        _request: Starlette request object (unused).
        error: Raised validation exception from FastAPI/Pydantic.
    Returns:
        JSONResponse: HTTP 400 payload `{"error": "invalid_request", "message": ...}`.
    Assumptions:
        First error by sorted path is reported; clients only branch on `error`.
    Raises:
        None.
    Side Effects:
        None.
    """
    validation_error = cast(RequestValidationError, error)
    paths = _sorted_error_paths(raw_errors=validation_error.errors())
    message = "Request payload is invalid."
    if paths:
        message = f"Request payload is invalid: {paths[0]}"
    payload_error = ValidationError(message)
    return JSONResponse(status_code=payload_error.status_code, content=payload_error.payload())


def _sorted_error_paths(*, raw_errors: Any) -> list[str]:
    """
    Convert raw validation errors into sorted dot-delimited paths.

    Args:
        raw_errors: Raw iterable from FastAPI validation subsystem.
    Returns:
        list[str]: Sorted paths, for example `body.email`.
    Assumptions:
        Unknown raw shapes are skipped.
    Raises:
        None.
    Side Effects:
        None.
    """
    if not isinstance(raw_errors, Sequence) or isinstance(raw_errors, (str, bytes, bytearray)):
        return []
    paths: list[str] = []
    for raw_error in raw_errors:
        if not isinstance(raw_error, dict):
            continue
        loc = raw_error.get("loc")
        if isinstance(loc, Sequence) and not isinstance(loc, (str, bytes, bytearray)) and loc:
            paths.append(".".join(str(part) for part in loc))
    return sorted(paths)
