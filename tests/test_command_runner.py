"""Tests for CommandRunner"""
import os
import time

import pytest

from ghq_palette.exceptions import CommandError, CommandNotFoundError, CommandTimeoutError
from ghq_palette.services.command_runner import CommandRunner, build_command_env


class TestBuildCommandEnv:
    """Test the environment external commands run with."""

    def test_home_set_explicitly(self):
        """Test that HOME is always set."""
        env = build_command_env(base={}, home="/home/someone", path_additions=[])
        assert env["HOME"] == "/home/someone"

    def test_path_additions_prepended(self):
        """Test that extra directories come before the inherited PATH."""
        env = build_command_env(
            base={"PATH": "/custom/bin"},
            home="/home/someone",
            path_additions=["~/.local/bin", "/opt/homebrew/bin"],
        )
        assert env["PATH"].split(os.pathsep) == [
            "/home/someone/.local/bin",
            "/opt/homebrew/bin",
            "/custom/bin",
        ]

    def test_no_inherited_path(self):
        """Test a base environment without PATH."""
        env = build_command_env(base={}, home="/h", path_additions=["/usr/bin", "/bin"])
        assert env["PATH"] == os.pathsep.join(["/usr/bin", "/bin"])

    def test_base_not_mutated(self):
        """Test that the base mapping is copied."""
        base = {"PATH": "/x", "LANG": "C"}
        env = build_command_env(base=base, home="/h", path_additions=["/y"])
        assert base == {"PATH": "/x", "LANG": "C"}
        assert env["LANG"] == "C"


class TestCommandRunner:
    """Test running commands."""

    def test_stdout_trimmed(self):
        """Test that surrounding whitespace is removed from stdout."""
        assert CommandRunner().run(["sh", "-c", "printf '  hello  \\n\\n'"]) == "hello"

    def test_string_command_split(self):
        """Test that a command line string is split like a shell would."""
        assert CommandRunner().run("echo 'a  b'") == "a  b"

    def test_cwd(self, temp_dir):
        """Test running in a given directory."""
        assert os.path.realpath(CommandRunner().run(["pwd"], cwd=temp_dir)) == str(temp_dir)

    def test_env_visible_to_command(self):
        """Test that the command sees the built environment."""
        runner = CommandRunner(env={"HOME": "/tmp/home-for-test", "PATH": os.environ.get("PATH", "/usr/bin:/bin")})
        assert runner.run(["sh", "-c", "echo $HOME"]) == "/tmp/home-for-test"

    def test_nonzero_exit_includes_stderr(self):
        """Test that a failing command reports its stderr."""
        with pytest.raises(CommandError) as exc_info:
            CommandRunner().run(["sh", "-c", "echo oops >&2; exit 3"])
        error = exc_info.value
        assert error.returncode == 3
        assert error.stderr == "oops"
        assert "oops" in str(error)
        assert "exit 3" in str(error)

    def test_nonzero_exit_falls_back_to_stdout(self):
        """Test that stdout is reported when stderr is empty."""
        with pytest.raises(CommandError, match="only stdout"):
            CommandRunner().run(["sh", "-c", "echo only stdout; exit 1"])

    def test_timeout(self):
        """Test that a hung command is killed."""
        start = time.monotonic()
        with pytest.raises(CommandTimeoutError) as exc_info:
            CommandRunner(timeout=0.5).run(["sleep", "5"])
        assert time.monotonic() - start < 4
        assert exc_info.value.timeout == 0.5
        assert "timed out" in str(exc_info.value)

    def test_timeout_is_a_command_error(self):
        """Test that callers catching CommandError also see timeouts."""
        with pytest.raises(CommandError):
            CommandRunner(timeout=0.2).run(["sleep", "2"])

    def test_command_not_found(self):
        """Test a missing executable."""
        with pytest.raises(CommandNotFoundError, match="command not found"):
            CommandRunner().run(["ghq-palette-no-such-command"])

    def test_missing_cwd(self, temp_dir):
        """Test that a missing working directory is not reported as a missing command."""
        with pytest.raises(CommandError) as exc_info:
            CommandRunner().run(["pwd"], cwd=temp_dir / "missing")
        assert not isinstance(exc_info.value, CommandNotFoundError)
        assert "no such directory" in str(exc_info.value)
