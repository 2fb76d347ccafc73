"""Payload validation helpers for path guard endpoints."""

from __future__ import annotations

from typing import Any

from pathguard.errors import GuardError


def _ensure_payload_dict(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise GuardError(
            "INVALID_TYPE",
            "Payload must be an object.",
            {"type": type(payload).__name__},
        )
    return payload


def _reject_unknown_fields(payload: dict[str, Any], allowed_fields: set[str]) -> None:
    unknown_fields = sorted(set(payload) - allowed_fields)
    if unknown_fields:
        raise GuardError(
            "UNKNOWN_FIELD",
            "Unknown fields are not allowed.",
            {"fields": unknown_fields},
        )


def _require_path(payload: Any) -> str:
    payload = _ensure_payload_dict(payload)
    _reject_unknown_fields(payload, {"path"})

    if "path" not in payload:
        raise GuardError(
            "MISSING_PATH",
            "Path is required.",
            {"fields": ["path"]},
        )

    raw_path = payload["path"]
    if not isinstance(raw_path, str):
        raise GuardError(
            "INVALID_TYPE",
            "Path must be a string.",
            {"path": str(raw_path), "type": type(raw_path).__name__},
        )
    return raw_path
