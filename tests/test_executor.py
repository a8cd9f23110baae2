"""
Tests for Subprocess implementation of Executor Protocol.
Covers command execution in isolation from Kernel.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from easy_alias.errors import CommandSpawnError
from easy_alias.executor import SubprocessExecutor, TTYResult


@pytest.fixture
def executor() -> SubprocessExecutor:
    """Create executor with default settings."""
    return SubprocessExecutor()


# ----------------------------------------------------------------
# Basic execution
# ----------------------------------------------------------------


def test_executor_runs_through_shell(executor: SubprocessExecutor, tmp_path: Path):
    """Resolved string is interpreted by the shell (redirects, &&)."""
    out = tmp_path / "out.txt"

    result = executor.run_tty(f"echo one > '{out}' && echo two >> '{out}'")

    assert isinstance(result, TTYResult)
    assert result.exit_code == 0
    assert result.success is True
    assert out.read_text() == "one\ntwo\n"
    assert result.started_at
    assert result.duration_ms >= 0


def test_executor_returns_non_zero_exit_code(executor: SubprocessExecutor):
    """A failing child is a normal result, not an exception."""
    result = executor.run_tty("exit 42")

    assert result.exit_code == 42
    assert result.success is False


def test_executor_reports_command_not_found_status(executor: SubprocessExecutor):
    result = executor.run_tty("definitely-not-a-real-command-xyz 2>/dev/null")
    assert result.exit_code == 127


def test_executor_uses_cwd(executor: SubprocessExecutor, tmp_path: Path):
    executor.run_tty("pwd > where.txt", cwd=str(tmp_path))
    assert (tmp_path / "where.txt").read_text().strip() == str(tmp_path.resolve())


def test_executor_argv_uses_configured_shell():
    ex = SubprocessExecutor(shell="/bin/bash")
    assert ex.argv("echo hi") == ["/bin/bash", "-c", "echo hi"]


def test_executor_empty_shell_falls_back_to_sh():
    assert SubprocessExecutor(shell="").shell == "/bin/sh"


# ----------------------------------------------------------------
# Spawn failure
# ----------------------------------------------------------------


def test_executor_missing_shell_raises_spawn_error(tmp_path: Path):
    ex = SubprocessExecutor(shell=str(tmp_path / "no-such-shell"))

    with pytest.raises(CommandSpawnError) as exc:
        ex.run_tty("echo hi")
    assert exc.value.command == "echo hi"
    assert exc.value.exit_code == 6


# ----------------------------------------------------------------
# Environment variables (force color)
# ----------------------------------------------------------------


def test_executor_sets_color_env_when_force_color_true(tmp_path: Path):
    ex = SubprocessExecutor(force_color=True)
    out = tmp_path / "env.txt"

    ex.run_tty(f"printf '%s' \"$FORCE_COLOR\" > '{out}'")

    assert out.read_text() == "1"


def test_executor_does_not_set_color_env_by_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    ex = SubprocessExecutor()
    out = tmp_path / "env.txt"

    ex.run_tty(f"printf '%s' \"${{FORCE_COLOR:-NONE}}\" > '{out}'")

    assert out.read_text() == "NONE"
