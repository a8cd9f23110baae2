# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Protocol definitions for dependency injection.

These interfaces keep the resolver and kernel independent of the
filesystem, the terminal and process execution, so each can be
replaced by a fake in tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .executor import TTYResult  # pragma: no cover
    from .store import AliasTable  # pragma: no cover


class AliasStore(Protocol):
    """Protocol for persistent alias table storage."""

    path: Path

    def load(self) -> AliasTable:
        """Load the full alias table (empty if nothing is stored yet)."""
        ...

    def save(self, table: AliasTable) -> None:
        """Replace the stored table with ``table``."""
        ...

    def read_text(self) -> str:
        """Return the raw stored contents for display."""
        ...


class Executor(Protocol):
    """Protocol for command execution."""

    def run_tty(self, command: str) -> TTYResult:
        """Run a shell command attached to the terminal.

        Returns:
            TTYResult (exit_code, started_at, duration_ms)
        """
        ...


class UI(Protocol):
    """Protocol for terminal interaction."""

    def read(self, prompt: str) -> str:
        """Read one line of user input."""
        ...

    def write(self, text: str) -> None:
        """Write text exactly as given."""
        ...

    def confirm(self, prompt: str) -> bool:
        """Ask a y/n question until a valid answer is given."""
        ...


class ConfigModel(Protocol):
    """Protocol for configuration access."""

    def get_path(self, path: str, default: Any = None) -> Any:
        """Nested lookup using a dot-separated path."""
        ...
