"""Locate the git metadata directory and the files gstat probes inside it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import IoError, NotFoundError

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"


def find_git_root(start: Path) -> Path:
    """Return the first `.git` entry (directory or file) at or above `start`."""
    start = start.absolute()
    for candidate in (start, *start.parents):
        entry = candidate / GIT_DIR_NAME
        if entry.exists():
            logger.debug("found git entry %s", entry)
            return entry
    raise NotFoundError(f"Could not find a git directory above {start}")


def _read_gitdir_file(entry: Path) -> Path:
    # Worktree and submodule checkouts carry a one-line file:
    #   gitdir: /tmp/g/.git/worktrees/wg
    try:
        text = entry.read_text(encoding="utf-8")
    except OSError as exc:
        raise IoError(f"Could not open worktree file: {entry}") from exc

    _, sep, value = text.strip().partition(":")
    target = value.strip()
    if not sep or not target:
        raise IoError(f"Malformed worktree file: {entry}")

    tree = Path(target)
    if not tree.is_absolute():
        tree = entry.parent / tree
    return tree


def _enclosing_git_dir(tree: Path) -> Path:
    for candidate in (tree, *tree.parents):
        if candidate.name == GIT_DIR_NAME:
            return candidate
    raise NotFoundError(f"No {GIT_DIR_NAME} directory above worktree {tree}")


@dataclass(frozen=True)
class RepoPaths:
    """Resolved metadata locations.

    `tree` is the per-checkout metadata directory and differs from `root` in a
    linked worktree. The stash log is shared, so it hangs off `root`.
    """

    root: Path
    tree: Path

    @classmethod
    def from_git_entry(cls, entry: Path) -> RepoPaths:
        if entry.is_dir():
            return cls(root=entry, tree=entry)

        tree = _read_gitdir_file(entry)
        root = _enclosing_git_dir(tree)
        logger.debug("worktree tree=%s root=%s", tree, root)
        return cls(root=root, tree=tree)

    @classmethod
    def discover(cls, start: Path | None = None) -> RepoPaths:
        return cls.from_git_entry(find_git_root(start or Path.cwd()))

    @property
    def head(self) -> Path:
        return self.tree / "HEAD"

    @property
    def merge(self) -> Path:
        return self.tree / "MERGE_HEAD"

    @property
    def rebase(self) -> Path:
        return self.tree / "rebase-apply"

    @property
    def rebase_merge(self) -> Path:
        return self.tree / "rebase-merge"

    @property
    def stash(self) -> Path:
        return self.root / "logs" / "refs" / "stash"
