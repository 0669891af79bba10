"""Git subprocess and stdin helpers."""

import logging
import select
import subprocess
from pathlib import Path
from typing import Sequence, TextIO

from gstat.errors import GstatError

logger = logging.getLogger(__name__)

STATUS_ARGS = ("status", "--porcelain", "--branch")


class GitError(GstatError):
    """Git command failed."""

    def __init__(self, cmd: Sequence[str], stderr: str) -> None:
        self.cmd = cmd
        self.stderr = stderr
        super().__init__(f"{' '.join(cmd)}: {stderr}")


def run(args: Sequence[str], cwd: Path | None = None, git: str = "git") -> str:
    """Run a git command and return stdout."""
    cmd = [git, *args]
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
        )
    except FileNotFoundError as exc:
        raise GitError(cmd, "executable not found") from exc
    except subprocess.CalledProcessError as exc:
        raise GitError(cmd, (exc.stderr or "").strip() or f"exit status {exc.returncode}") from exc
    return result.stdout


def status_lines(cwd: Path | None = None, git: str = "git") -> list[str]:
    """Porcelain status with the branch header as the first line."""
    return run(STATUS_ARGS, cwd=cwd, git=git).splitlines()


def stdin_has_input(stream: TextIO) -> bool:
    """Check without blocking whether piped data is ready on `stream`.

    Terminals never count: keystrokes typed ahead at a prompt are not status
    output, and reading them would block until EOF.
    """
    try:
        if stream.isatty():
            return False
        fd = stream.fileno()
        ready, _, _ = select.select([fd], [], [], 0)
    except (AttributeError, OSError, ValueError):
        return False
    return bool(ready)


def read_lines(stream: TextIO) -> list[str]:
    """Read every line from `stream`, without line terminators.

    Undecodable bytes (e.g. file names with core.quotepath=false) are kept as
    surrogate escapes; only the status codes matter.
    """
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        text = buffer.read().decode("utf-8", errors="surrogateescape")
    else:
        text = stream.read()
    lines = text.splitlines()
    logger.debug("read %d lines from stdin", len(lines))
    return lines
