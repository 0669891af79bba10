"""Parsers for `git status --porcelain --branch` output."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .errors import IoError, ParseError
from .models import BranchInfo, FileStatusCounts, TrackingDelta

logger = logging.getLogger(__name__)

HEADER_PREFIX = "## "
UPSTREAM_SEP = "..."
TRACKING_OPEN = " ["
DETACHED = "(no branch)"
UNBORN = ("Initial commit", "No commits yet")

# Unmerged index/worktree pairs, see git-status(1) "Short Format".
CONFLICT_CODES = frozenset({"AA", "AU", "DD", "DU", "UA", "UD", "UU"})
STAGED_CODES = frozenset("ACDMR")
CHANGED_CODES = frozenset("CDMR")


def _read_head(head_file: Path) -> str:
    try:
        tokens = head_file.read_text(encoding="utf-8").split()
    except OSError as exc:
        raise IoError(f"Failed to read HEAD: {head_file}") from exc
    if not tokens:
        raise IoError(f"Empty HEAD file: {head_file}")
    return tokens[0]


def parse_branch(branch_line: str, head_file: Path) -> BranchInfo:
    """Parse branch and upstream from the header line.

    Header forms produced by git:
      ## main
      ## main...origin/main [ahead 1]
      ## HEAD (no branch)
      ## No commits yet on main
    """
    text = branch_line[len(HEADER_PREFIX) :]

    if text.endswith("]") and TRACKING_OPEN in text:
        text = text[: text.rfind(TRACKING_OPEN)]

    if UPSTREAM_SEP in text:
        branch, _, upstream = text.partition(UPSTREAM_SEP)
        return BranchInfo(branch=branch, upstream=upstream, is_local_only=False)

    if DETACHED in text:
        commit = _read_head(head_file)
        logger.debug("detached HEAD at %s", commit)
        return BranchInfo(branch=commit)

    if any(marker in text for marker in UNBORN):
        return BranchInfo(branch=text[text.rfind(" ") + 1 :])

    return BranchInfo(branch=text)


def _tracking_section(branch_line: str) -> str | None:
    if not branch_line.endswith("]"):
        return None
    _, sep, section = branch_line.rpartition(TRACKING_OPEN)
    if not sep:
        return None
    return section[:-1]


def _parse_count(word: str, token: str) -> int:
    try:
        return int(word)
    except ValueError as exc:
        raise ParseError(f"Invalid count in tracking info: {token!r}") from exc


def parse_remote(branch_line: str) -> TrackingDelta:
    """Parse the `[ahead N, behind M]` annotation of the header line."""
    section = _tracking_section(branch_line)
    if section is None:
        return TrackingDelta()

    ahead = 0
    behind = 0
    for token in section.split(","):
        words = token.split()
        if not words:
            continue
        key, rest = words[0], words[1:]
        if key not in ("ahead", "behind"):
            # e.g. "gone" when the upstream branch was deleted
            continue
        if len(rest) != 1:
            raise ParseError(f"Invalid count in tracking info: {token.strip()!r}")
        if key == "ahead":
            ahead = _parse_count(rest[0], token.strip())
        else:
            behind = _parse_count(rest[0], token.strip())

    return TrackingDelta(ahead=ahead, behind=behind)


def parse_stats(lines: Iterable[str]) -> FileStatusCounts:
    """Count status entries by bucket. `lines` must not include the header."""
    stats = FileStatusCounts()
    for line in lines:
        if len(line) < 2:
            raise ParseError(f"Malformed status line: {line!r}")

        if line[0] == "?":
            stats.untracked += 1
            continue

        if line[:2] in CONFLICT_CODES:
            stats.conflicts += 1
            continue

        if line[0] in STAGED_CODES:
            stats.staged += 1
        if line[1] in CHANGED_CODES:
            stats.changed += 1

    return stats
