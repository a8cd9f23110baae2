# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
easy-alias CLI entry point.

Design:
- CLI owns argv parsing and alias file resolution.
- Kernel is the request engine (resolver+executor+ui+config injected).
- UI is a prompt_toolkit terminal wrapper (write + y/n confirmation).
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from . import __version__, config
from .errors import (
    EXIT_INTERNAL,
    EXIT_IO,
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_SPAWN,
    EXIT_UNRESOLVED,
    EXIT_USAGE,
    EasyAliasError,
    InvalidUsage,
)
from .executor import DEFAULT_SHELL, SubprocessExecutor
from .interfaces import UI, Executor
from .kernel import Kernel, Mode, Request, report_error, write_crash_log
from .resolver import OVERWRITE_PROMPT, AliasResolver
from .store import FlatFileStore
from .ui import PromptToolkitUI


EXIT_STATUS_HELP = f"""\
exit status:
  {EXIT_OK}   success
  {EXIT_USAGE}   invalid usage
  {EXIT_NOT_FOUND}   alias not found
  {EXIT_UNRESOLVED}   placeholder left without a substitution
  {EXIT_IO}   alias file could not be read or written
  {EXIT_SPAWN}   shell could not be started
  {EXIT_INTERNAL}  internal error (see crash log)

When an alias runs, ea exits with the command's own status (128+N if it
was killed by signal N). A command exiting 2-6 therefore looks the same
as one of the codes above; check the [ERROR] line to tell them apart.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ea",
        description=(
            "Store shell commands under short aliases and run them. "
            "Placeholders written as **x in a stored command are filled "
            "from -s \"x=value,y=other\" (use \\, for a literal comma)."
        ),
        epilog=EXIT_STATUS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "alias",
        nargs="?",
        help="Alias you want to use with easy-alias.",
    )
    parser.add_argument(
        "cmd",
        nargs="?",
        help=(
            "Shell command assigned to alias, enclosed in quotes "
            "if it contains spaces."
        ),
    )
    parser.add_argument(
        "-r", "--remove",
        action="store_true",
        help="Remove provided alias.",
    )
    parser.add_argument(
        "-l", "--list",
        action="store_true",
        help="List aliases.",
    )
    parser.add_argument(
        "-s", "--subs",
        metavar="SUBS",
        default=None,
        help="Substitutions for **x placeholders: \"k=value,k2=value2\".",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def request_from_args(ns: argparse.Namespace) -> Request:
    """Turn parsed arguments into a single request.

    Raises:
        InvalidUsage: for missing or conflicting arguments
    """
    if ns.remove and ns.list:
        raise InvalidUsage("Use either -r or -l, not both.")

    if ns.remove:
        if ns.alias is None:
            raise InvalidUsage("Please provide an alias to remove.")
        if ns.cmd is not None:
            raise InvalidUsage("-r takes an alias only, not a command.")
        return Request(Mode.REMOVE, alias=ns.alias)

    if ns.list:
        return Request(Mode.LIST)

    if ns.cmd is not None:
        return Request(
            Mode.ADD, alias=ns.alias, command=ns.cmd, substitutions=ns.subs
        )

    if ns.alias is not None:
        return Request(Mode.RUN, alias=ns.alias, substitutions=ns.subs)

    raise InvalidUsage("Invalid input. Try using the --help flag.")


def build_kernel(
    cfg: config.YAMLConfig,
    ui: UI,
    executor: Executor | None = None,
) -> Kernel:
    """Explicit wiring: store + resolver + executor + ui + config."""
    store = FlatFileStore(config.store_config(cfg))
    resolver = AliasResolver(
        store=store,
        confirm=ui.confirm,
        overwrite_prompt=str(
            cfg.get_path("ui.confirm_prompt", OVERWRITE_PROMPT)
        ),
    )
    if executor is None:
        executor = SubprocessExecutor(
            shell=str(cfg.get_path("execution.shell", DEFAULT_SHELL)),
            force_color=bool(cfg.get_path("execution.force_color", False)),
        )
    return Kernel(resolver=resolver, executor=executor, ui=ui, config=cfg)


def main(
    argv: Sequence[str] | None = None,
    ui: UI | None = None,
    executor: Executor | None = None,
) -> int:
    """Main entry point for the ea command. Returns the exit code."""
    ns = build_parser().parse_args(argv)

    cfg = config.load_system_config()
    if ui is None:
        ui = PromptToolkitUI(cfg, color=config.color_enabled(cfg))

    # Usage errors are reported before the alias file is looked at.
    try:
        request = request_from_args(ns)
        kernel = build_kernel(cfg, ui, executor)
    except EasyAliasError as e:
        report_error(ui, str(e))
        return e.exit_code

    try:
        return kernel.handle(request)
    except Exception as e:
        # Unhandled exception - write crash log
        write_crash_log(
            e,
            alias=request.alias or "",
            raw_command=request.command or "",
            store_path=kernel.store_path,
        )
        report_error(
            ui, f"Unhandled exception: {type(e).__name__}: {e}"
        )
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
