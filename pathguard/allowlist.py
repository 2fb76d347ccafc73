"""Allowlist of directory roots used to vet externally supplied paths."""

from __future__ import annotations

import logging
import os
import threading
from enum import Enum

from pathguard.config import AppConfig
from pathguard.errors import AccessDenied, InvalidPath

_log = logging.getLogger(__name__)


class EnforcementMode(str, Enum):
    PERMISSIVE = "permissive"
    ENFORCING = "enforcing"


def canonicalize_path(raw_path: str, base: str | None = None) -> str:
    """Return the absolute, normalized form of ``raw_path``.

    Relative paths resolve against ``base`` (the working directory when
    omitted). The filesystem is never consulted, so symlinks are kept as-is.
    """
    if not isinstance(raw_path, str):
        raise InvalidPath(
            "Path must be a string.",
            {"path": str(raw_path), "type": type(raw_path).__name__},
        )
    if "\x00" in raw_path:
        raise InvalidPath("Path must not contain NUL bytes.", {"path": raw_path})

    anchor = base if base is not None else os.getcwd()
    canonical = os.path.normpath(os.path.join(anchor, raw_path))
    # POSIX normpath keeps exactly two leading slashes.
    if os.sep == "/" and canonical.startswith("//"):
        canonical = "/" + canonical.lstrip("/")
    return canonical


def _ancestors(canonical: str):
    current = canonical
    while True:
        yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def _split_roots(raw_list: str | None) -> list[str]:
    if not raw_list:
        return []
    return [segment.strip() for segment in raw_list.split(",") if segment.strip()]


class PathAllowlist:
    """Set of canonical directory roots plus the policy that consults it.

    In permissive mode every path is allowed and the roots are kept only for
    inspection. In enforcing mode a path is allowed when it equals a root or
    sits below one.
    """

    def __init__(self, mode: EnforcementMode = EnforcementMode.PERMISSIVE) -> None:
        self.mode = EnforcementMode(mode)
        self._roots: set[str] = set()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AppConfig) -> "PathAllowlist":
        mode = (
            EnforcementMode.ENFORCING
            if config.enforce_allowlist
            else EnforcementMode.PERMISSIVE
        )
        allowlist = cls(mode)
        allowlist.initialize(config.allowed_project_dirs, config.data_dir)
        return allowlist

    @property
    def enforcing(self) -> bool:
        return self.mode is EnforcementMode.ENFORCING

    def initialize(self, raw_list: str | None, extra_root: str | None = "") -> None:
        """Replace the roots with those parsed from a comma-separated list."""
        roots = {canonicalize_path(segment) for segment in _split_roots(raw_list)}
        if extra_root and extra_root.strip():
            roots.add(canonicalize_path(extra_root.strip()))

        with self._lock:
            self._roots = roots
        _log.info(
            "path allowlist initialized with %d root(s) in %s mode",
            len(roots),
            self.mode.value,
        )

    def add_root(self, raw_path: str) -> str:
        """Register another root and return its canonical form."""
        if isinstance(raw_path, str) and not raw_path.strip():
            raise InvalidPath("Root path must not be empty.", {"path": raw_path})
        root = canonicalize_path(raw_path)
        with self._lock:
            added = root not in self._roots
            self._roots.add(root)
        if added:
            _log.debug("added allowed root %s", root)
        return root

    def is_allowed(self, raw_path: str) -> bool:
        if not self.enforcing:
            return True
        return self._contains(canonicalize_path(raw_path))

    def validate_path(self, raw_path: str) -> str:
        """Canonicalize a path, rejecting it when enforcement denies access."""
        candidate = canonicalize_path(raw_path)
        if self.enforcing and not self._contains(candidate):
            raise AccessDenied(candidate)
        return candidate

    def _contains(self, canonical: str) -> bool:
        with self._lock:
            return any(path in self._roots for path in _ancestors(canonical))

    def get_roots(self) -> list[str]:
        with self._lock:
            return sorted(self._roots)

    def __contains__(self, raw_path: object) -> bool:
        if not isinstance(raw_path, str):
            return False
        root = canonicalize_path(raw_path)
        with self._lock:
            return root in self._roots

    def __len__(self) -> int:
        with self._lock:
            return len(self._roots)
