# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Subprocess-backed executor implementation for easy-alias.

Resolved commands run as ``<shell> -c <command>`` attached to the
user's terminal. There is no output capture and no timeout: the call
blocks until the child exits.
"""

from __future__ import annotations

import os
import subprocess
import time
from dataclasses import dataclass
from datetime import datetime

from .errors import CommandSpawnError

DEFAULT_SHELL = "/bin/sh"


@dataclass(frozen=True)
class TTYResult:
    """Result from TTY/passthrough execution (no output capture)."""

    exit_code: int
    started_at: str
    duration_ms: int

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class SubprocessExecutor:
    """Subprocess implementation of Executor protocol."""

    def __init__(self, shell: str = DEFAULT_SHELL, force_color: bool = False):
        """Initialize executor with configuration.

        Args:
            shell: shell used as ``<shell> -c <command>``
            force_color: If True, set color-forcing env variables
        """
        self.shell = shell or DEFAULT_SHELL
        self.force_color = force_color

    def _build_env(self) -> dict:
        env = os.environ.copy()
        if self.force_color:
            env["PY_COLORS"] = "1"
            env["FORCE_COLOR"] = "1"
            env["CLICOLOR_FORCE"] = "1"
        return env

    def argv(self, command: str) -> list[str]:
        return [self.shell, "-c", command]

    def run_tty(self, command: str, cwd: str | None = None) -> TTYResult:
        """Run a command with full terminal control (no output capture).

        The command inherits stdin/stdout/stderr from the parent process.
        A non-zero exit status is a normal result, not an error.

        Args:
            command: shell command to execute
            cwd: working directory for the command (default: current directory)

        Returns:
            TTYResult (exit_code, started_at, duration_ms)

        Raises:
            CommandSpawnError: if the shell itself cannot be started
        """
        env = self._build_env()
        started_at = datetime.now().isoformat()
        start_ts = time.time()

        try:
            proc = subprocess.Popen(
                self.argv(command),
                stdin=None,  # inherit from parent
                stdout=None,  # inherit from parent
                stderr=None,  # inherit from parent
                env=env,
                cwd=cwd,
            )
        except OSError as e:
            raise CommandSpawnError(command, str(e)) from e

        while True:
            try:
                exit_code = proc.wait()
                break
            except KeyboardInterrupt:
                # The child got the same SIGINT; let it decide when to exit
                continue

        duration_ms = int((time.time() - start_ts) * 1000)

        return TTYResult(
            exit_code=exit_code,
            started_at=started_at,
            duration_ms=duration_ms,
        )
