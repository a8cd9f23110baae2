# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Error taxonomy and process exit codes for easy-alias.

Every error is terminal for the current invocation. The kernel turns each
one into a user-facing message and the matching exit code.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NOT_FOUND = 3
EXIT_UNRESOLVED = 4
EXIT_IO = 5
EXIT_SPAWN = 6
EXIT_INTERNAL = 70


class EasyAliasError(Exception):
    """Base class for all reportable easy-alias errors."""

    exit_code: int = EXIT_FAILURE


class InvalidUsage(EasyAliasError):
    """Missing or conflicting command-line arguments."""

    exit_code = EXIT_USAGE


class InvalidAlias(InvalidUsage):
    """Alias name or command cannot be stored in the flat file format."""


class MalformedSubstitution(InvalidUsage):
    """A ``-s`` field could not be read as ``key=value``."""

    def __init__(self, raw: str, field: str):
        self.raw = raw
        self.field = field
        super().__init__(
            f"Malformed substitution field {field!r} in {raw!r} "
            f"(expected k=value)"
        )


class AliasNotFound(EasyAliasError):
    """No alias with the requested name exists."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, name: str, aliases: Iterable[Any] = ()):
        self.name = name
        # Carried for the recovery listing shown to the user.
        self.aliases = list(aliases)
        super().__init__(f"Alias '{name}' not found.")


class UnresolvedPlaceholder(EasyAliasError):
    """A ``**x`` placeholder was left without a substitution."""

    exit_code = EXIT_UNRESOLVED

    def __init__(self, template: str, missing: Iterable[str] = ()):
        self.template = template
        self.missing = list(missing)
        if self.missing:
            keys = ", ".join(self.missing)
            msg = (
                f"Missing substitutions for: {keys}. "
                f"Command: {template}"
            )
        else:
            msg = (
                f"Command has placeholders but no substitutions were "
                f"given (use -s \"k=value\"). Command: {template}"
            )
        super().__init__(msg)


class StoreIOError(EasyAliasError):
    """The alias file could not be read or written."""

    exit_code = EXIT_IO

    def __init__(self, path: Path | None, reason: str):
        self.path = path
        self.reason = reason
        where = f" at {path}" if path is not None else ""
        super().__init__(f"Config file error{where}: {reason}")


class HomeDirectoryError(StoreIOError):
    """The invoking user's home directory could not be determined."""

    def __init__(self, reason: str):
        super().__init__(None, f"cannot determine home directory ({reason})")


class CommandSpawnError(EasyAliasError):
    """The shell for a resolved command could not be started."""

    exit_code = EXIT_SPAWN

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to execute command: {reason}")
