# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Alias resolution and mutation.

Ties the store and the substitution engine together. The table is
loaded from the store on every call; nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from . import substitution
from .errors import AliasNotFound, InvalidAlias
from .interfaces import AliasStore
from .store import DELIMITER, AliasEntry, AliasTable

OVERWRITE_PROMPT = (
    "Alias already in config. Would you like to overwrite it (y/n)?"
)


class AddOutcome(Enum):
    ADDED = "added"
    REPLACED = "replaced"
    CANCELLED = "cancelled"


class RemoveOutcome(Enum):
    REMOVED = "removed"
    NOT_FOUND = "not_found"


def validate_alias(name: str, command: str) -> None:
    """Check that ``name``/``command`` survive the flat file format.

    Raises:
        InvalidAlias: describing the first problem found
    """
    if not name:
        raise InvalidAlias("Alias name must not be empty.")
    if DELIMITER in name:
        raise InvalidAlias(
            f"Alias name '{name}' must not contain '{DELIMITER}'."
        )
    if name.endswith(":"):
        # "a:" + "::" would read back as name "a"
        raise InvalidAlias(f"Alias name '{name}' must not end with ':'.")
    if name.startswith("-"):
        raise InvalidAlias(f"Alias name '{name}' must not start with '-'.")
    if any(ch in name for ch in "\r\n") or name != name.strip():
        raise InvalidAlias(
            "Alias name must not contain newlines or surrounding spaces."
        )
    if any(ch in command for ch in "\r\n"):
        raise InvalidAlias("Alias command must fit on a single line.")


@dataclass
class AliasResolver:
    """Alias operations over an injected store.

    ``confirm`` is asked before an existing alias is overwritten.
    """

    store: AliasStore
    confirm: Callable[[str], bool]
    overwrite_prompt: str = OVERWRITE_PROMPT

    def list(self) -> AliasTable:
        return self.store.load()

    def add(self, name: str, command: str) -> AddOutcome:
        """Store ``name -> command``, asking before an overwrite.

        A declined overwrite leaves the stored table untouched.
        """
        validate_alias(name, command)
        table = self.store.load()

        outcome = AddOutcome.ADDED
        if name in table:
            if not self.confirm(self.overwrite_prompt):
                return AddOutcome.CANCELLED
            table.remove(name)
            outcome = AddOutcome.REPLACED

        table.add(AliasEntry(name=name, command=command))
        self.store.save(table)
        return outcome

    def remove(self, name: str) -> RemoveOutcome:
        table = self.store.load()
        if not table.remove(name):
            return RemoveOutcome.NOT_FOUND
        self.store.save(table)
        return RemoveOutcome.REMOVED

    def resolve(
        self,
        name: str,
        subs: dict[str, str] | None = None,
        strict: bool = False,
    ) -> str:
        """Return the stored command for ``name`` with placeholders filled.

        Raises:
            AliasNotFound: carrying the current table for display
            UnresolvedPlaceholder: from substitution.expand()
        """
        _entry, resolved = self.resolve_entry(name, subs, strict=strict)
        return resolved

    def resolve_entry(
        self,
        name: str,
        subs: dict[str, str] | None = None,
        strict: bool = False,
    ) -> tuple[AliasEntry, str]:
        """Like resolve(), but also return the stored entry."""
        table = self.store.load()
        entry = table.find(name)
        if entry is None:
            raise AliasNotFound(name, table)
        return entry, substitution.expand(entry.command, subs, strict=strict)
