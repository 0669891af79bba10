"""Assemble the one-line prompt summary."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .errors import ParseError
from .models import BranchInfo, FileStatusCounts, RebaseProgress, TrackingDelta
from .parsers import parse_branch, parse_remote, parse_stats
from .paths import RepoPaths
from .probes import merge_in_progress, rebase_progress, stash_count

logger = logging.getLogger(__name__)


def format_status_line(
    info: BranchInfo,
    remote: TrackingDelta,
    stats: FileStatusCounts,
    stashes: int,
    merge: bool,
    rebase: RebaseProgress,
) -> str:
    """Serialize in the field order prompt scripts expect:

    branch ahead behind staged conflicts changed untracked stashes local
    upstream merge rebase
    """
    fields = [
        info.branch,
        remote.ahead,
        remote.behind,
        stats.staged,
        stats.conflicts,
        stats.changed,
        stats.untracked,
        stashes,
        int(info.is_local_only),
        info.upstream,
        int(merge),
        rebase,
    ]
    return " ".join(str(field) for field in fields)


def current_gitstatus(lines: Sequence[str], start: Path | None = None) -> str:
    """Summarize porcelain status `lines` for the repository containing `start`."""
    if not lines:
        raise ParseError("No status output to parse")

    paths = RepoPaths.discover(start)
    header = lines[0]
    info = parse_branch(header, paths.head)
    remote = parse_remote(header)
    stats = parse_stats(lines[1:])
    stashes = stash_count(paths.stash)
    merge = merge_in_progress(paths.merge)
    rebase = rebase_progress(paths.rebase, paths.rebase_merge)
    logger.debug("branch=%s remote=%s stats=%s", info, remote, stats)

    return format_status_line(info, remote, stats, stashes, merge, rebase)
