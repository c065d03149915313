"""
BeachGuardians verification HTTP API.

`app` is resolved lazily: importing `apps.api.common` or `apps.api.wiring` from tests
must not build the module-level application from process environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .main import app, create_app

__all__ = ["app", "create_app"]

_LAZY_EXPORTS = frozenset(__all__)


def __getattr__(name: str) -> Any:
    """
    Resolve `app` / `create_app` on first access.

    Args:
        name: Requested attribute name.
    Returns:
        Any: Object exported by `apps.api.main`.
    Assumptions:
        Accessing `app` wires verification stores from `os.environ`.
    Raises:
        AttributeError: If `name` is not a lazy export.
    Side Effects:
        Imports `apps.api.main` on first lazy access.
    """
    if name not in _LAZY_EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from . import main as api_main

    return getattr(api_main, name)
