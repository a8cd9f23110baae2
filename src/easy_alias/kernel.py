# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
easy-alias kernel.

Runs exactly one request per invocation:
- list the alias file
- add (or, after confirmation, replace) an alias
- remove an alias
- resolve an alias, fill its placeholders and run it through a shell

Important boundary:
- Kernel does not parse argv or load YAML.
- Kernel consumes the injected resolver, executor, config and UI, and
  turns every EasyAliasError into a message plus an exit code.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from . import config as cfg_module
from . import substitution
from .config import ANSI_COLORS, TAG_COLORS
from .errors import (
    EXIT_OK,
    AliasNotFound,
    EasyAliasError,
    InvalidUsage,
)
from .interfaces import UI, ConfigModel, Executor
from .resolver import AddOutcome, AliasResolver, RemoveOutcome
from .store import AliasTable, dump_table


def write_crash_log(
    error: Exception,
    alias: str = "",
    raw_command: str = "",
    resolved_command: str = "",
    store_path: Path | None = None,
) -> None:
    """Write an entry to the crash log.

    Logs unhandled exceptions or critical failures.
    Only creates the log directory when actually needed.
    Appends to crash.log (never overwrites).
    """
    try:
        crash_log = cfg_module.crash_log_path(cfg_module.get_data_root())

        # Create logs directory only when we need to write
        crash_log.parent.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().isoformat()
        lines = [f"{timestamp}"]

        if alias:
            lines.append(f"alias={alias}")
        if raw_command:
            lines.append(f"raw={raw_command}")
        if resolved_command:
            lines.append(f"resolved={resolved_command}")
        if store_path:
            lines.append(f"store={store_path}")

        lines.append(f"error={type(error).__name__}: {error}")
        lines.append("traceback:")
        lines.append(
            "".join(
                traceback.format_exception(
                    type(error), error, error.__traceback__
                )
            )
        )
        lines.append("----")

        with crash_log.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    except Exception:
        # If we can't write the crash log, fail silently
        # (we're already in an error state)
        pass


class Mode(Enum):
    LIST = "list"
    ADD = "add"
    REMOVE = "remove"
    RUN = "run"


@dataclass(frozen=True)
class Request:
    """One parsed invocation."""

    mode: Mode
    alias: str | None = None
    command: str | None = None
    substitutions: str | None = None


def _tag(tag: str) -> str:
    color = ANSI_COLORS[TAG_COLORS[tag]]
    return f"{color}[{tag}]{ANSI_COLORS['reset']}"


def report_error(ui: UI, message: str) -> None:
    ui.write(f"{_tag('ERROR')} {message}\n")


def _child_exit_status(code: int) -> int:
    # Popen reports death by signal N as -N
    if code < 0:
        return 128 + (-code)
    return code


@dataclass
class Kernel:
    """easy-alias request engine."""

    resolver: AliasResolver
    executor: Executor
    ui: UI
    config: ConfigModel | None = None

    def _cfg(self, path: str, default):
        if self.config is None:
            return default
        return self.config.get_path(path, default)

    @property
    def store_path(self) -> Path:
        return self.resolver.store.path

    def _out(self, text: str) -> None:
        if not text.endswith("\n"):
            text += "\n"
        self.ui.write(text)

    def _error(self, message: str) -> None:
        report_error(self.ui, message)

    def _warn(self, message: str) -> None:
        self._out(f"{_tag('WARN')} {message}")

    # -----------------------
    # Entry point
    # -----------------------

    def handle(self, request: Request) -> int:
        """Run ``request`` and return the process exit code."""
        try:
            if request.mode == Mode.LIST:
                return self.handle_list()
            if request.mode == Mode.ADD:
                return self.handle_add(
                    _required(request.alias, "an alias to add"),
                    _required(request.command, "a command to store"),
                    request.substitutions,
                )
            if request.mode == Mode.REMOVE:
                return self.handle_remove(
                    _required(request.alias, "an alias to remove")
                )
            if request.mode == Mode.RUN:
                return self.handle_run(
                    _required(request.alias, "an alias to run"),
                    request.substitutions,
                )
            raise InvalidUsage(f"Unknown mode: {request.mode!r}")
        except AliasNotFound as e:
            self._out(f"\n{_tag('ERROR')} {e}")
            self._out(self._format_listing(AliasTable(e.aliases)))
            return e.exit_code
        except EasyAliasError as e:
            self._error(str(e))
            return e.exit_code

    # -----------------------
    # Handlers
    # -----------------------

    def _format_listing(self, table: AliasTable) -> str:
        raw = dump_table(table)
        return f"Aliases stored at {self.store_path}:\n\n{raw}"

    def handle_list(self) -> int:
        raw = self.resolver.store.read_text()
        self._out(f"Aliases stored at {self.store_path}:\n\n{raw}")
        return EXIT_OK

    def handle_add(
        self, name: str, command: str, substitutions: str | None = None
    ) -> int:
        if substitutions is not None:
            self._warn("-s is ignored when adding an alias.")

        outcome = self.resolver.add(name, command)
        if outcome == AddOutcome.ADDED:
            self._out(f"Command added to config at {self.store_path}")
        elif outcome == AddOutcome.REPLACED:
            self._out(
                f"Alias '{name}' replaced in config at {self.store_path}"
            )
        else:
            self._out(f"Alias '{name}' left unchanged.")
        return EXIT_OK

    def handle_remove(self, name: str) -> int:
        outcome = self.resolver.remove(name)
        if outcome == RemoveOutcome.REMOVED:
            self._out(f"Alias '{name}' removed from config.")
        else:
            self._out(f"Alias '{name}' not found; nothing removed.")
        return EXIT_OK

    def handle_run(self, name: str, substitutions: str | None = None) -> int:
        subs = (
            substitution.parse_substitutions(substitutions)
            if substitutions is not None
            else None
        )
        strict = bool(self._cfg("substitution.strict_keys", False))
        entry, resolved = self.resolver.resolve_entry(
            name, subs, strict=strict
        )

        if subs is not None and self._cfg(
            "substitution.warn_unresolved", True
        ):
            missing = substitution.missing_keys(entry.command, subs)
            if missing:
                keys = ", ".join(f"**{k}" for k in missing)
                self._warn(f"Left in command without a substitution: {keys}")

        if self._cfg("ui.show_run", False):
            self._out(f"{_tag('RUN')} {name} => {resolved}")

        result = self.executor.run_tty(resolved)
        code = _child_exit_status(result.exit_code)

        if self._cfg("ui.show_exit", False):
            self._out(f"{_tag('EXIT')} {code}")
        if code != 0:
            self._error(f"{name} exited with status {code}")
        return code


def _required(value: str | None, what: str) -> str:
    if value is None:
        raise InvalidUsage(f"Please provide {what}.")
    return value
