# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Flat-file storage implementation for easy-alias.

The alias table is a plain text file with one ``name::command`` record
per line. It is read in full at the start of every invocation and
rewritten in full whenever it changes. Lines that are not alias
records are written back as they were.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .config import StoreConfig
from .errors import StoreIOError

DELIMITER = "::"
RECORD_SEPARATOR = "\n"


@dataclass(frozen=True)
class AliasEntry:
    name: str
    command: str

    def to_record(self) -> str:
        return f"{self.name}{DELIMITER}{self.command}{RECORD_SEPARATOR}"


class AliasTable:
    """Ordered alias entries, at most one per (case-sensitive) name.

    Order is append order. Replacing an alias is remove-then-add, so
    the new entry moves to the end. Lines that are not records (notes,
    blank lines, later records of a repeated name) are kept at their
    position and written back unchanged.
    """

    def __init__(self, entries: Iterable[AliasEntry] = ()):
        self._records: list[AliasEntry | str] = []
        for entry in entries:
            self.add(entry)

    def _entries(self) -> list[AliasEntry]:
        return [r for r in self._records if isinstance(r, AliasEntry)]

    def __iter__(self) -> Iterator[AliasEntry]:
        return iter(self._entries())

    def __len__(self) -> int:
        return len(self._entries())

    def __contains__(self, name: object) -> bool:
        return self.find(name) is not None  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasTable):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"AliasTable({self._records!r})"

    def find(self, name: str) -> AliasEntry | None:
        for entry in self._entries():
            if entry.name == name:
                return entry
        return None

    def add(self, entry: AliasEntry) -> None:
        if self.find(entry.name) is not None:
            raise ValueError(f"duplicate alias name: {entry.name!r}")
        self._records.append(entry)

    def keep_line(self, line: str) -> None:
        """Carry a non-record line through to the next save."""
        self._records.append(line)

    def remove(self, name: str) -> bool:
        """Remove ``name`` and any repeated records of it.

        Returns False (table unchanged) if ``name`` is not an alias.
        """
        if self.find(name) is None:
            return False
        self._records = [
            r for r in self._records if _record_name(r) != name
        ]
        return True

    def names(self) -> list[str]:
        return [e.name for e in self._entries()]

    def lines(self) -> Iterator[str]:
        for r in self._records:
            if isinstance(r, AliasEntry):
                yield r.to_record()
            else:
                yield r + RECORD_SEPARATOR


def _record_name(record: AliasEntry | str) -> str | None:
    if isinstance(record, AliasEntry):
        return record.name
    name, sep, _command = record.partition(DELIMITER)
    return name if sep else None


# ----------------------------------------------------------------
# Serialization
# ----------------------------------------------------------------


def parse_table(text: str) -> AliasTable:
    """Parse alias file contents.

    Each record splits on the first ``::``; the command may itself
    contain ``::``. If a name repeats, the first record wins. Every
    other line is kept verbatim so a save does not drop it.
    """
    table = AliasTable()
    lines = text.split(RECORD_SEPARATOR)
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        name, sep, command = line.partition(DELIMITER)
        if sep and name and name not in table:
            table.add(AliasEntry(name=name, command=command))
        else:
            table.keep_line(line)
    return table


def dump_table(table: AliasTable) -> str:
    return "".join(table.lines())


# ----------------------------------------------------------------
# Store
# ----------------------------------------------------------------


class FlatFileStore:
    """Flat-file implementation of AliasStore protocol."""

    def __init__(self, store_config: StoreConfig):
        """Initialize store with its resolved location.

        Note:
            Nothing touches the filesystem here. The parent directory
            is created by save() when the first alias is written.
        """
        self.path = store_config.path

    def read_text(self) -> str:
        """Return the raw file contents ("" if the file does not exist)."""
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise StoreIOError(self.path, _reason(e)) from e

    def load(self) -> AliasTable:
        """Load the alias table; a missing file is an empty table."""
        return parse_table(self.read_text())

    def save(self, table: AliasTable) -> None:
        """Replace the alias file with ``table``.

        Writes to a temporary file next to the target and renames it
        into place, so readers see either the old or the new table.
        A symlinked alias file is written through: the link stays and
        the file it points to is replaced.
        """
        data = dump_table(table)
        tmp_name: str | None = None
        try:
            target = self.path.resolve()
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.",
                suffix=".tmp",
                dir=str(target.parent),
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates 0600; keep the mode of an existing file
            if target.exists():
                os.chmod(tmp_name, target.stat().st_mode & 0o7777)
            os.replace(tmp_name, target)
            tmp_name = None
        except (OSError, RuntimeError) as e:
            # RuntimeError: symlink loop in resolve() on older Pythons
            raise StoreIOError(self.path, _reason(e)) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass


def _reason(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error) or type(error).__name__
