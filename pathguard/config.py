"""Configuration loading for the path guard service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ALLOWED_DIRS_KEY = "ALLOWED_PROJECT_DIRS"
DATA_DIR_KEY = "DATA_DIR"
ENFORCE_KEY = "PATHGUARD_ENFORCE_ALLOWLIST"
SERVICE_TOKEN_KEY = "PATHGUARD_SERVICE_TOKEN"


class ConfigError(RuntimeError):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class AppConfig:
    allowed_project_dirs: str
    data_dir: str
    enforce_allowlist: bool
    service_token: str | None


def _read_dotenv_value(dotenv_path: Path, key: str) -> str | None:
    """Read a single key from a .env file without mutating the environment."""
    if not dotenv_path.is_file():
        return None
    try:
        content = dotenv_path.read_text(encoding="utf-8")
    except OSError:
        return None

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].strip()
        if "=" not in stripped:
            continue
        name, value = stripped.split("=", 1)
        name = name.strip()
        if name != key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        return value or None
    return None


def _read_setting(dotenv_path: Path, key: str) -> str | None:
    value = os.environ.get(key)
    if value is None:
        value = _read_dotenv_value(dotenv_path, key)
    return value


def _read_bool(raw_value: str | None, *, default: bool, key: str) -> bool:
    if raw_value is None:
        return default
    normalized = raw_value.strip().lower()
    if not normalized:
        return default
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"{key} must be a boolean value.")


def load_config() -> AppConfig:
    """Load path guard configuration from the environment.

    Directory settings are passed through as raw strings; splitting and
    canonicalization belong to the allowlist.
    """
    dotenv_path = Path.cwd() / ".env"

    allowed_project_dirs = _read_setting(dotenv_path, ALLOWED_DIRS_KEY) or ""
    data_dir = _read_setting(dotenv_path, DATA_DIR_KEY) or ""

    enforce_allowlist = _read_bool(
        _read_setting(dotenv_path, ENFORCE_KEY), default=False, key=ENFORCE_KEY
    )

    service_token = _read_setting(dotenv_path, SERVICE_TOKEN_KEY)
    service_token = service_token.strip() if isinstance(service_token, str) else None
    if not service_token:
        service_token = None

    return AppConfig(
        allowed_project_dirs=allowed_project_dirs,
        data_dir=data_dir,
        enforce_allowlist=enforce_allowlist,
        service_token=service_token,
    )
