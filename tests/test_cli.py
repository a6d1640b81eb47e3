"""Tests for the command-line interface"""
import locale
import logging
import os
from unittest.mock import patch

import git
import pytest
from rich.logging import RichHandler

from ghq_palette.cli.args import parse_args
from ghq_palette.cli.main import main


@pytest.fixture
def home(temp_dir, monkeypatch, git_identity):
    """Isolate HOME and point ghq at <home>/ghq."""
    monkeypatch.setenv("HOME", str(temp_dir))
    monkeypatch.setenv("GHQ_ROOT", str(temp_dir / "ghq"))

    # main() reconfigures the root logger
    root_logger = logging.getLogger()
    level = root_logger.level
    yield temp_dir
    for handler in root_logger.handlers[:]:
        if isinstance(handler, (logging.FileHandler, RichHandler)):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


class TestParseArgs:
    """Test argument parsing."""

    def test_no_command(self):
        args = parse_args([])
        assert args.command is None
        assert args.interactive is False

    def test_branches_path(self):
        args = parse_args(["--no-interactive", "branches", "/src/repo"])
        assert args.command == "branches"
        assert args.path == "/src/repo"
        assert args.no_interactive is True

    def test_create_flags(self):
        args = parse_args(["create", "--name", "x", "--no-commit", "--open-after", "finder"])
        assert (args.name, args.no_commit, args.open_after) == ("x", True, "finder")

    def test_create_rejects_unknown_open_after(self):
        with pytest.raises(SystemExit):
            parse_args(["create", "--open-after", "emacs"])


class TestMain:
    """Test non-interactive runs of main()."""

    def test_branches_table(self, home, git_repo_with_worktrees, capsys):
        """Test listing branches of a repository."""
        code = main(["--no-interactive", "branches", git_repo_with_worktrees.working_dir])
        out = capsys.readouterr().out

        assert code == 0
        assert "main *" in out
        assert "feature/wt" in out
        assert "worktree" in out
        assert "Total branches: 4 (2 in worktrees)" in out

    def test_branches_from_subdirectory(self, home, git_repo, capsys):
        """Test that a path inside the working tree resolves to its root."""
        sub = os.path.join(git_repo.working_dir, "docs")
        os.makedirs(sub)
        assert main(["--no-interactive", "branches", sub]) == 0
        assert "Branches: test_repo" in capsys.readouterr().out

    def test_branches_not_a_repository(self, home, capsys):
        """Test the error for a directory outside any repository."""
        plain = home / "plain"
        plain.mkdir()
        assert main(["--no-interactive", "branches", str(plain)]) == 1
        assert "Not a git repository" in capsys.readouterr().out

    def test_repos_table(self, home, ghq_root, capsys):
        """Test listing repositories under the ghq root."""
        assert main(["--no-interactive", "repos"]) == 0
        out = capsys.readouterr().out
        assert "Total repositories: 4" in out

    def test_collation_follows_system_locale(self, home, ghq_root):
        """Test that name ordering uses the user's collation locale."""
        with patch("ghq_palette.cli.main.locale.setlocale") as setlocale:
            assert main(["--no-interactive", "repos"]) == 0
        setlocale.assert_called_once_with(locale.LC_COLLATE, "")

    def test_unavailable_locale_not_fatal(self, home, ghq_root, capsys):
        """Test that a broken locale setting still lists repositories."""
        with patch("ghq_palette.cli.main.locale.setlocale", side_effect=locale.Error("unsupported locale setting")):
            assert main(["--no-interactive", "repos"]) == 0
        assert "Total repositories: 4" in capsys.readouterr().out

    def test_create(self, home, ghq_root, capsys):
        """Test creating a repository from flags."""
        code = main(["create", "--hostname", "gitlab.com", "--org", "team", "--name", "new-tool"])
        out = capsys.readouterr().out

        assert code == 0
        repo_dir = ghq_root / "gitlab.com" / "team" / "new-tool"
        assert "Repository created" in out
        repo = git.Repo(repo_dir)
        try:
            assert repo.head.commit.message.strip() == "Initial commit"
        finally:
            repo.close()

    def test_create_defaults_to_first_hostname_and_org(self, home, ghq_root, capsys):
        """Test that omitted hostname and org use the first listed directory."""
        # example.org sorts first and has no orgs
        assert main(["create", "--name", "scratch", "--no-commit"]) == 1
        assert "No org directories found under example.org" in capsys.readouterr().out

        assert main(["create", "--hostname", "github.com", "--name", "scratch", "--no-commit"]) == 0
        assert (ghq_root / "github.com" / "acme" / "scratch" / "README.md").exists()

    def test_create_invalid_name(self, home, ghq_root, capsys):
        """Test that an invalid name is reported without creating anything."""
        assert main(["create", "--hostname", "github.com", "--org", "acme", "--name", "bad name"]) == 1
        assert "Only alphanumeric" in capsys.readouterr().out
        assert not (ghq_root / "github.com" / "acme" / "bad name").exists()

    def test_create_existing(self, home, ghq_root, capsys):
        """Test that an existing repository is refused."""
        assert main(["create", "--hostname", "github.com", "--org", "acme", "--name", "api"]) == 1
        assert "Directory already exists" in capsys.readouterr().out

    def test_missing_config_file(self, home, capsys):
        """Test that an explicit missing config file is an error."""
        assert main(["--no-interactive", "--config", str(home / "nope.toml"), "repos"]) == 1
        assert "Config file not found" in capsys.readouterr().out


class TestTuiApp:
    """Test TUI construction."""

    def test_unknown_mode(self):
        from ghq_palette.core import GhqPalette
        from ghq_palette.tui import GhqPaletteApp

        with pytest.raises(ValueError, match="mode must be one of"):
            GhqPaletteApp(GhqPalette(), mode="settings")

    def test_branches_mode_needs_repo(self):
        from ghq_palette.core import GhqPalette
        from ghq_palette.tui import GhqPaletteApp

        with pytest.raises(ValueError, match="needs a repository"):
            GhqPaletteApp(GhqPalette(), mode="branches")
