"""Data models for gstat."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BranchInfo:
    """Branch and upstream recovered from the status header line."""

    branch: str
    upstream: str = ""
    is_local_only: bool = True


@dataclass(frozen=True)
class TrackingDelta:
    """Commit counts ahead/behind the upstream."""

    ahead: int = 0
    behind: int = 0


@dataclass
class FileStatusCounts:
    """Per-bucket counts of status entries."""

    staged: int = 0
    conflicts: int = 0
    changed: int = 0
    untracked: int = 0


@dataclass(frozen=True)
class RebaseProgress:
    """Rebase step counter; both fields are None when no rebase is active."""

    current: int | None = None
    total: int | None = None

    @property
    def active(self) -> bool:
        return self.current is not None and self.total is not None

    def __str__(self) -> str:
        if not self.active:
            return "0"
        return f"{self.current}/{self.total}"


NO_REBASE = RebaseProgress()
