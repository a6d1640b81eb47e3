"""Tests for RepoInitializer"""
import os

import git
import pytest

from ghq_palette.exceptions import CommandError, DirectoryExistsError
from ghq_palette.services.command_runner import CommandRunner, build_command_env
from ghq_palette.services.repo_initializer import RepoInitializer

IDENTITY_VARS = (
    "GIT_AUTHOR_NAME",
    "GIT_AUTHOR_EMAIL",
    "GIT_COMMITTER_NAME",
    "GIT_COMMITTER_EMAIL",
    "EMAIL",
)


def _fail_on_commit(args, cwd=None):
    if list(args[:2]) == ["git", "commit"]:
        raise CommandError(args, 128, "Author identity unknown")
    return ""


class TestInitRepo:
    """Test creating repositories."""

    def test_creates_repository_with_commit(self, temp_dir, runner):
        """Test the full scaffold with a real git."""
        repo_dir = temp_dir / "github.com" / "acme" / "sample-repo"
        result = RepoInitializer(runner).init_repo(str(repo_dir), "sample-repo")

        assert result.repo_dir == str(repo_dir)
        assert result.commit_failed is False
        assert result.commit_error is None
        assert (repo_dir / "README.md").read_text() == "# sample-repo\n"
        assert (repo_dir / ".gitignore").read_text() == ".DS_Store\n.idea/\n.vscode/\n"

        repo = git.Repo(repo_dir)
        try:
            assert repo.active_branch.name == "main"
            assert repo.head.commit.message.strip() == "Initial commit"
            assert not repo.is_dirty(untracked_files=True)
        finally:
            repo.close()

    def test_without_initial_commit(self, temp_dir, runner):
        """Test that skipping the commit leaves an unborn main branch."""
        repo_dir = temp_dir / "no-commit"
        result = RepoInitializer(runner).init_repo(str(repo_dir), "no-commit", initial_commit=False)

        assert result.commit_failed is False
        repo = git.Repo(repo_dir)
        try:
            assert (repo_dir / ".git" / "HEAD").read_text().strip() == "ref: refs/heads/main"
            assert not repo.head.is_valid()
            assert "README.md" in repo.untracked_files
        finally:
            repo.close()

    def test_custom_default_branch(self, temp_dir, runner):
        """Test naming the initial branch."""
        repo_dir = temp_dir / "trunk-repo"
        RepoInitializer(runner, default_branch="trunk").init_repo(str(repo_dir), "trunk-repo")
        repo = git.Repo(repo_dir)
        try:
            assert repo.active_branch.name == "trunk"
        finally:
            repo.close()

    def test_existing_directory_untouched(self, temp_dir, runner):
        """Test that a second create fails and leaves the first one alone."""
        repo_dir = temp_dir / "twice"
        initializer = RepoInitializer(runner)
        initializer.init_repo(str(repo_dir), "twice")
        (repo_dir / "notes.txt").write_text("keep me\n")
        before = sorted(p.name for p in repo_dir.iterdir())

        with pytest.raises(DirectoryExistsError, match="Directory already exists"):
            initializer.init_repo(str(repo_dir), "twice")

        assert sorted(p.name for p in repo_dir.iterdir()) == before
        assert (repo_dir / "notes.txt").read_text() == "keep me\n"
        assert (repo_dir / "README.md").read_text() == "# twice\n"

    def test_commit_failure_reported(self, temp_dir, mock_runner):
        """Test that a failing commit still leaves the scaffold in place."""
        mock_runner.run.side_effect = _fail_on_commit
        repo_dir = temp_dir / "broken-commit"

        result = RepoInitializer(mock_runner).init_repo(str(repo_dir), "broken-commit")

        assert result.commit_failed is True
        assert "Author identity unknown" in result.commit_error
        assert (repo_dir / "README.md").exists()
        assert (repo_dir / ".gitignore").exists()

    def test_commit_failure_without_identity(self, temp_dir, monkeypatch):
        """Test that real git refusing to commit without an identity leaves the scaffold."""
        for var in IDENTITY_VARS:
            monkeypatch.delenv(var, raising=False)
        empty_home = temp_dir / "empty-home"
        empty_home.mkdir()
        env = build_command_env(home=str(empty_home))
        env.update(
            {
                "GIT_CONFIG_GLOBAL": os.devnull,
                "GIT_CONFIG_NOSYSTEM": "1",
                "GIT_CONFIG_COUNT": "1",
                "GIT_CONFIG_KEY_0": "user.useConfigOnly",
                "GIT_CONFIG_VALUE_0": "true",
            }
        )
        repo_dir = temp_dir / "anonymous"

        result = RepoInitializer(CommandRunner(timeout=10, env=env)).init_repo(str(repo_dir), "anonymous")

        assert result.commit_failed is True
        assert result.commit_error
        assert (repo_dir / "README.md").read_text() == "# anonymous\n"
        assert (repo_dir / ".gitignore").exists()
        assert (repo_dir / ".git").is_dir()

    def test_command_sequence(self, temp_dir, mock_runner):
        """Test the git commands run, in order, inside the new directory."""
        repo_dir = str(temp_dir / "seq")
        RepoInitializer(mock_runner).init_repo(repo_dir, "seq")

        calls = [(c.args[0], c.kwargs.get("cwd")) for c in mock_runner.run.call_args_list]
        assert calls == [
            (["git", "init"], repo_dir),
            (["git", "branch", "-M", "main"], repo_dir),
            (["git", "add", "-A"], repo_dir),
            (["git", "commit", "-m", "Initial commit"], repo_dir),
        ]

    def test_init_failure_propagates(self, temp_dir, mock_runner):
        """Test that a failing `git init` is raised, not reported."""
        mock_runner.run.side_effect = CommandError(["git", "init"], 1, "boom")
        with pytest.raises(CommandError, match="boom"):
            RepoInitializer(mock_runner).init_repo(str(temp_dir / "x"), "x")
