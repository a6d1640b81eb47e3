"""Pytest fixtures for ghq-palette tests"""
import os
import stat
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from ghq_palette.constants import PATH_ADDITIONS
from ghq_palette.models.repository import GitRepo
from ghq_palette.services.command_runner import CommandRunner


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def git_identity(monkeypatch):
    """Give git commits an author through the environment."""
    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "Test User")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "test@example.com")


@pytest.fixture
def runner(git_identity):
    """A real command runner with a short timeout."""
    return CommandRunner(timeout=10)


@pytest.fixture
def mock_runner():
    """A command runner whose run() is a Mock returning empty output."""
    fake = Mock(spec=CommandRunner)
    fake.run = Mock(return_value="")
    return fake


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository on main with one commit."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with plain branches: feature/test-feature and topic."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.git.checkout('-b', 'feature/test-feature')
    feature_file = repo_path / "feature.txt"
    feature_file.write_text("Feature content\n")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature")

    repo.git.checkout('main')
    repo.git.branch('topic')

    yield repo


@pytest.fixture
def worktree_root(temp_dir):
    """Directory sibling worktrees are created in."""
    path = temp_dir / "worktrees"
    path.mkdir()
    return path


@pytest.fixture
def git_repo_with_worktrees(git_repo_with_branches, worktree_root):
    """Repository where feature/wt lives in a linked worktree and one worktree is detached."""
    repo = git_repo_with_branches
    repo.git.worktree('add', '-b', 'feature/wt', str(worktree_root / "feature-wt"), 'main')
    repo.git.worktree('add', '--detach', str(worktree_root / "detached"), 'main')
    yield repo


@pytest.fixture
def repo_model(git_repo):
    """GitRepo model pointing at the git_repo fixture."""
    return GitRepo(name="test_repo", full_path=git_repo.working_dir)


@pytest.fixture
def fake_gwt(temp_dir, worktree_root):
    """Install a stand-in for the gwt helper and return a runner that finds it.

    `gwt path <branch>` prints <worktree_root>/<branch with / replaced by ->;
    `gwt create <branch> --from <base>` adds that worktree and prints its path last.
    """
    bin_dir = temp_dir / "bin"
    bin_dir.mkdir()
    script = bin_dir / "gwt"
    script.write_text(
        "#!/bin/sh\n"
        f'ROOT="{worktree_root}"\n'
        'DIR="$ROOT/$(echo "$2" | tr / -)"\n'
        'case "$1" in\n'
        '  path) echo "$DIR" ;;\n'
        '  create)\n'
        '    git worktree add -b "$2" "$DIR" "$4" >/dev/null 2>&1 || exit 1\n'
        '    echo "Preparing worktree"\n'
        '    echo "$DIR" ;;\n'
        '  *) echo "unknown command: $1" >&2; exit 2 ;;\n'
        'esac\n'
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return CommandRunner(timeout=10, path_additions=[str(bin_dir)] + PATH_ADDITIONS)


@pytest.fixture
def ghq_root(temp_dir):
    """A ghq-style tree: <root>/<hostname>/<org>/<repo>."""
    root = temp_dir / "ghq"
    layout = {
        "github.com": {"zeta": ["app"], "acme": ["api", "web"], "alpha": []},
        "gitlab.com": {"team": ["tool"]},
        "example.org": {},
    }
    for hostname, orgs in layout.items():
        (root / hostname).mkdir(parents=True)
        for org, repos in orgs.items():
            (root / hostname / org).mkdir()
            for name in repos:
                (root / hostname / org / name).mkdir()
    (root / ".cache").mkdir()
    (root / "notes.txt").write_text("not a hostname\n")
    return root
