from __future__ import annotations

import io
import os
import subprocess
from pathlib import Path

import pytest

from gstat.git_ops import read_lines, status_lines, stdin_has_input
from gstat.parsers import parse_stats

GIT_AVAILABLE = subprocess.run(["git", "--version"], capture_output=True).returncode == 0


def test_stdin_has_input_pipe_ready() -> None:
    r, w = os.pipe()
    os.write(w, b"## main\n")
    os.close(w)
    with os.fdopen(r, "r") as stream:
        assert stdin_has_input(stream)


def test_stdin_has_input_pipe_empty() -> None:
    r, w = os.pipe()
    try:
        with os.fdopen(r, "r") as stream:
            assert not stdin_has_input(stream)
    finally:
        os.close(w)


def test_stdin_has_input_ignores_terminal_typeahead() -> None:
    master, slave = os.openpty()
    try:
        os.write(master, b"ls\n")
        with os.fdopen(slave, "r") as stream:
            assert not stdin_has_input(stream)
    finally:
        os.close(master)


def test_stdin_has_input_without_fileno() -> None:
    assert not stdin_has_input(io.StringIO("## main\n"))


def test_stdin_has_input_closed_stream() -> None:
    r, w = os.pipe()
    os.close(w)
    stream = os.fdopen(r, "r")
    stream.close()
    assert not stdin_has_input(stream)


def test_stdin_has_input_closed_descriptor() -> None:
    class _Stale:
        def __init__(self, fd: int) -> None:
            self._fd = fd

        def isatty(self) -> bool:
            return False

        def fileno(self) -> int:
            return self._fd

    r, w = os.pipe()
    os.close(r)
    os.close(w)
    assert not stdin_has_input(_Stale(r))  # type: ignore[arg-type]


def test_read_lines_keeps_undecodable_bytes() -> None:
    stream = io.TextIOWrapper(io.BytesIO(b"## main\n?? caf\xe9.txt\n M a.txt\n"))
    lines = read_lines(stream)
    assert lines[0] == "## main"
    assert parse_stats(lines[1:]).untracked == 1
    assert parse_stats(lines[1:]).changed == 1


@pytest.mark.skipif(not GIT_AVAILABLE, reason="git missing")
def test_status_lines_with_non_utf8_path(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", "-q"], cwd=repo, check=True)
    subprocess.run(["git", "config", "core.quotepath", "false"], cwd=repo, check=True)
    (repo / os.fsdecode(b"caf\xe9.txt")).write_text("x\n")

    lines = status_lines(cwd=repo)
    assert lines[0].startswith("## ")
    assert parse_stats(lines[1:]).untracked == 1
