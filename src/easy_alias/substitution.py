# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Placeholder substitution for stored alias commands.

A stored command may contain ``**x`` placeholders: two asterisks followed
by exactly one key character. At run time they are filled from the ``-s``
argument, a ``key=value,key=value`` string in which ``\\,`` stands for a
literal comma.
"""

from __future__ import annotations

import re
from enum import Enum, auto

from .errors import MalformedSubstitution, UnresolvedPlaceholder

PLACEHOLDER_MARK = "**"
FIELD_SEPARATOR = ","
ESCAPE = "\\"

# Non-overlapping, left to right: "***x" is key "*" followed by "x".
_PLACEHOLDER_RE = re.compile(r"\*\*(.)", re.DOTALL)


class _SplitState(Enum):
    """States for the field splitter."""
    NORMAL = auto()
    ESCAPE = auto()


def split_fields(raw: str) -> list[str]:
    """Split a substitution string on unescaped commas.

    ``\\,`` decodes to ``,`` inside the current field. Any other
    backslash is kept verbatim, including a trailing one.

    Args:
        raw: Raw ``-s`` argument

    Returns:
        List of fields (possibly containing empty strings)
    """
    fields: list[str] = []
    current: list[str] = []
    state = _SplitState.NORMAL

    for ch in raw:
        if state == _SplitState.ESCAPE:
            if ch == FIELD_SEPARATOR:
                current.append(ch)
                state = _SplitState.NORMAL
                continue
            # Not an escaped separator: keep the backslash
            current.append(ESCAPE)
            state = _SplitState.NORMAL

        if ch == ESCAPE:
            state = _SplitState.ESCAPE
        elif ch == FIELD_SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)

    if state == _SplitState.ESCAPE:
        current.append(ESCAPE)
    fields.append("".join(current))
    return fields


def parse_substitutions(raw: str) -> dict[str, str]:
    """Parse ``k=v,k2=v2`` into a substitution map.

    The key is the first character of each field and the value is
    everything from the third character on, so ``ab=c`` yields key
    ``a`` and value ``=c``. Later fields override earlier ones.

    Raises:
        MalformedSubstitution: if a field is shorter than ``k=``
    """
    subs: dict[str, str] = {}
    for field in split_fields(raw):
        if len(field) < 2:
            raise MalformedSubstitution(raw, field)
        subs[field[0]] = field[2:]
    return subs


def find_placeholders(template: str) -> list[str]:
    """Return the key of every ``**x`` placeholder, in order."""
    return _PLACEHOLDER_RE.findall(template)


def missing_keys(template: str, subs: dict[str, str] | None) -> list[str]:
    """Placeholder keys in ``template`` with no entry in ``subs``.

    Each key is listed once, in order of first appearance.
    """
    provided = subs or {}
    missing: list[str] = []
    for key in find_placeholders(template):
        if key not in provided and key not in missing:
            missing.append(key)
    return missing


def expand(
    template: str,
    subs: dict[str, str] | None,
    strict: bool = False,
) -> str:
    """Fill ``**x`` placeholders in ``template`` from ``subs``.

    Without substitutions the template must not contain ``**`` at all.
    With substitutions, placeholders whose key is missing are left as
    literal text unless ``strict`` is set. Inserted values are not
    scanned again.

    Raises:
        UnresolvedPlaceholder: if ``subs`` is None and the template
            contains ``**``, or in strict mode when a key is missing
    """
    if subs is None:
        if PLACEHOLDER_MARK in template:
            raise UnresolvedPlaceholder(template)
        return template

    if strict:
        missing = missing_keys(template, subs)
        if missing:
            raise UnresolvedPlaceholder(template, missing)

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in subs:
            return subs[key]
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)
