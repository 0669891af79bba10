from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def git_dir(tmp_path: Path) -> Path:
    """A bare-bones `.git` directory inside `tmp_path / "repo"`."""
    repo = tmp_path / "repo"
    git = repo / ".git"
    git.mkdir(parents=True)
    (git / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    return git
