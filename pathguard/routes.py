"""Allowlist endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request

from pathguard.allowlist import PathAllowlist, canonicalize_path
from pathguard.errors import success_response
from pathguard.payload import _require_path
from pathguard.router import guard_router


def get_request_allowlist(request: Request) -> PathAllowlist:
    """Return the allowlist owned by the application handling ``request``."""
    return request.app.state.allowlist


@guard_router.get("/roots")
def list_roots(request: Request) -> dict[str, Any]:
    """Return the current allowed roots and enforcement mode."""
    allowlist = get_request_allowlist(request)
    return success_response(
        {"roots": allowlist.get_roots(), "mode": allowlist.mode.value}
    )


@guard_router.post("/tool:add_root")
def add_root(payload: dict[str, Any], request: Request) -> dict[str, Any]:
    """Register an additional allowed root."""
    raw_path = _require_path(payload)
    allowlist = get_request_allowlist(request)
    root = allowlist.add_root(raw_path)
    return success_response({"root": root, "roots": allowlist.get_roots()})


@guard_router.post("/tool:check_path")
def check_path(payload: dict[str, Any], request: Request) -> dict[str, Any]:
    """Report whether a path is allowed without failing on denial."""
    raw_path = _require_path(payload)
    allowlist = get_request_allowlist(request)
    canonical = canonicalize_path(raw_path)
    return success_response(
        {"path": canonical, "allowed": allowlist.is_allowed(canonical)}
    )


@guard_router.post("/tool:validate_path")
def validate_path(payload: dict[str, Any], request: Request) -> dict[str, Any]:
    """Canonicalize a path, failing with ACCESS_DENIED when it is not allowed."""
    raw_path = _require_path(payload)
    allowlist = get_request_allowlist(request)
    return success_response({"path": allowlist.validate_path(raw_path)})


def register_guard_handlers(app: FastAPI) -> None:
    """Attach allowlist routes to the FastAPI application."""
    app.include_router(guard_router)
