from __future__ import annotations

import errno
import subprocess

import pytest

from notary_entrypoint import launcher
from notary_entrypoint.environment import EnvironmentSnapshot
from notary_entrypoint.launcher import (
    EXIT_NOT_EXECUTABLE,
    EXIT_NOT_FOUND,
    LaunchError,
    exit_code_for,
    hand_off,
)
from notary_entrypoint.mode import plan_launch


class _Replaced(Exception):
    """Stands in for the process image being replaced."""


@pytest.fixture
def prod_plan():
    return plan_launch(EnvironmentSnapshot({"HOME": "/home/notary"}))


def test_exec_replaces_process_with_plan_argv(monkeypatch, prod_plan) -> None:
    calls = []

    def fake_execvp(file, args):
        calls.append((file, args))
        raise _Replaced()

    monkeypatch.setattr(launcher, "supports_exec", lambda: True)
    monkeypatch.setattr(launcher.os, "execvp", fake_execvp)

    with pytest.raises(_Replaced):
        hand_off(prod_plan)

    assert calls == [("notary-server", list(prod_plan.argv))]
    assert calls[0][1][1:] == [
        "--config-file",
        "/home/notary/.notary-server/config/config_prod.yml",
    ]


def test_exec_missing_executable_raises_launch_error(monkeypatch, prod_plan) -> None:
    def fake_execvp(file, args):
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", file)

    monkeypatch.setattr(launcher, "supports_exec", lambda: True)
    monkeypatch.setattr(launcher.os, "execvp", fake_execvp)

    with pytest.raises(LaunchError) as excinfo:
        hand_off(prod_plan)

    assert excinfo.value.exit_code == EXIT_NOT_FOUND
    assert excinfo.value.executable == "notary-server"
    assert "No such file or directory" in str(excinfo.value)


def test_exec_permission_denied_maps_to_126(monkeypatch, prod_plan) -> None:
    def fake_execvp(file, args):
        raise PermissionError(errno.EACCES, "Permission denied", file)

    monkeypatch.setattr(launcher, "supports_exec", lambda: True)
    monkeypatch.setattr(launcher.os, "execvp", fake_execvp)

    with pytest.raises(LaunchError) as excinfo:
        hand_off(prod_plan)

    assert excinfo.value.exit_code == EXIT_NOT_EXECUTABLE


def test_spawn_passes_child_exit_code_through(monkeypatch, prod_plan) -> None:
    calls = []

    def fake_run(args, check):
        calls.append(args)
        return subprocess.CompletedProcess(args, 5)

    monkeypatch.setattr(launcher, "supports_exec", lambda: False)
    monkeypatch.setattr(launcher.subprocess, "run", fake_run)

    with pytest.raises(SystemExit) as excinfo:
        hand_off(prod_plan)

    assert excinfo.value.code == 5
    assert calls == [list(prod_plan.argv)]


def test_spawn_missing_executable_raises_launch_error(monkeypatch, prod_plan) -> None:
    def fake_run(args, check):
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", args[0])

    monkeypatch.setattr(launcher, "supports_exec", lambda: False)
    monkeypatch.setattr(launcher.subprocess, "run", fake_run)

    with pytest.raises(LaunchError) as excinfo:
        hand_off(prod_plan)

    assert excinfo.value.exit_code == EXIT_NOT_FOUND


def test_hand_off_flushes_stdout_before_exec(monkeypatch, capsys, prod_plan) -> None:
    seen = []

    def fake_execvp(file, args):
        seen.append(capsys.readouterr().out)
        raise _Replaced()

    monkeypatch.setattr(launcher, "supports_exec", lambda: True)
    monkeypatch.setattr(launcher.os, "execvp", fake_execvp)

    print("status line", end="\n")
    with pytest.raises(_Replaced):
        hand_off(prod_plan)

    assert seen == ["status line\n"]


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (FileNotFoundError(errno.ENOENT, "missing"), EXIT_NOT_FOUND),
        (OSError(errno.ENOENT, "missing"), EXIT_NOT_FOUND),
        (PermissionError(errno.EACCES, "denied"), EXIT_NOT_EXECUTABLE),
        (OSError(errno.ENOEXEC, "Exec format error"), EXIT_NOT_EXECUTABLE),
    ],
)
def test_exit_code_for(exc: OSError, expected: int) -> None:
    assert exit_code_for(exc) == expected
