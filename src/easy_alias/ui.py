# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

from __future__ import annotations

import re

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.shortcuts import print_formatted_text
from prompt_toolkit.styles import Style

from .config import YAMLConfig

DEFAULT_CONFIRM_RETRY = "Please input a valid option (y/n)."

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def _cfg_str(cfg: YAMLConfig | None, path: str, default: str) -> str:
    if cfg is None:
        return default
    val = cfg.get_path(path, default)
    return str(val) if val is not None else default


def _default_style_dict() -> dict[str, str]:
    return {
        "ea.prompt": "bold",
    }


class PromptToolkitUI:
    """
    Terminal UI for a single invocation:
      - write(): ANSI-aware output through print_formatted_text
      - read(): one line of input through a lazily created PromptSession
      - confirm(): y/n loop used before overwriting an alias
    """

    def __init__(
        self, config: YAMLConfig | None = None, color: bool = True
    ) -> None:
        self.config = config
        self.color = color
        self.session: PromptSession[str] | None = None
        self._style = Style.from_dict(_default_style_dict())
        self._retry_message = _cfg_str(
            config, "ui.confirm_retry", DEFAULT_CONFIRM_RETRY
        )

    def _ensure_session(self) -> None:
        if self.session is not None:
            return
        self.session = PromptSession(style=self._style)

    # ---------- public API ----------

    def read(self, prompt: str) -> str:
        self._ensure_session()
        assert self.session is not None
        return self.session.prompt(ANSI(prompt + " "))

    def write(self, text: str) -> None:
        """Write EXACTLY what we receive (no extra newline)."""
        if not text:
            return
        if not self.color:
            text = strip_ansi(text)
        print_formatted_text(ANSI(text), style=self._style, end="")

    def confirm(self, prompt: str) -> bool:
        """Ask ``prompt`` until the answer is y or n.

        Answers are case-insensitive and whitespace-trimmed. Ctrl-C or
        EOF at the prompt counts as "no".
        """
        self.write(prompt + "\n")
        while True:
            try:
                answer = self.read(">")
            except (KeyboardInterrupt, EOFError):
                self.write("\n")
                return False

            answer = (answer or "").strip().lower()
            if answer == "y":
                return True
            if answer == "n":
                return False
            self.write(self._retry_message + "\n")
