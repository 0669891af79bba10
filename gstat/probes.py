"""Repository state that `git status` does not report.

Missing stash logs and rebase files are normal repository states, so these
probes read them through `read_optional_text` and fall back to documented
defaults instead of failing.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ParseError
from .models import NO_REBASE, RebaseProgress

logger = logging.getLogger(__name__)


def read_optional_text(path: Path) -> str | None:
    """Return the file's text, or None if it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return None


def _first_token(path: Path) -> str | None:
    text = read_optional_text(path)
    if text is None:
        return None
    tokens = text.split()
    return tokens[0] if tokens else None


def stash_count(stash_file: Path) -> int:
    """Number of stash entries; 0 when the stash log is absent."""
    text = read_optional_text(stash_file)
    if text is None:
        return 0
    return sum(1 for line in text.splitlines() if line)


def merge_in_progress(merge_file: Path) -> bool:
    return merge_file.exists()


def _step_pair(directory: Path, current_name: str, total_name: str) -> RebaseProgress | None:
    current = _first_token(directory / current_name)
    total = _first_token(directory / total_name)
    if current is None or total is None:
        return None
    try:
        return RebaseProgress(current=int(current), total=int(total))
    except ValueError as exc:
        raise ParseError(f"Invalid rebase progress in {directory}: {current}/{total}") from exc


def rebase_progress(rebase_apply: Path, rebase_merge: Path | None = None) -> RebaseProgress:
    """Current rebase step, or NO_REBASE.

    `git am` style rebases keep `next`/`last` in rebase-apply; the merge
    backend keeps `msgnum`/`end` in rebase-merge.
    """
    progress = _step_pair(rebase_apply, "next", "last")
    if progress is None and rebase_merge is not None:
        progress = _step_pair(rebase_merge, "msgnum", "end")
    if progress is None:
        return NO_REBASE
    logger.debug("rebase in progress: %s", progress)
    return progress
