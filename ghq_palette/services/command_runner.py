"""External command execution for ghq-palette."""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

from ghq_palette.constants import COMMAND_TIMEOUT, PATH_ADDITIONS
from ghq_palette.exceptions import CommandError, CommandNotFoundError, CommandTimeoutError
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


def build_command_env(
    base: Optional[Mapping[str, str]] = None,
    home: Optional[str] = None,
    path_additions: Sequence[str] = PATH_ADDITIONS,
) -> Dict[str, str]:
    """Build the environment external commands run with.

    HOME is always set explicitly and the common binary directories are
    prepended to PATH, so tools installed by the user are found even when
    the inherited PATH is minimal.

    Args:
        base: Environment to start from (defaults to os.environ)
        home: Home directory (defaults to the current user's home)
        path_additions: Directories placed in front of the inherited PATH

    Returns:
        New environment mapping
    """
    env = dict(os.environ if base is None else base)
    home = home or str(Path.home())
    env["HOME"] = home

    additions = [
        os.path.join(home, p[2:]) if p.startswith("~/") else p
        for p in path_additions
    ]
    inherited = env.get("PATH")
    env["PATH"] = os.pathsep.join(additions + ([inherited] if inherited else []))
    return env


class CommandRunner:
    """Runs external commands with the augmented environment and a hard timeout."""

    def __init__(
        self,
        timeout: float = COMMAND_TIMEOUT,
        path_additions: Sequence[str] = PATH_ADDITIONS,
        env: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the runner.

        Args:
            timeout: Seconds a command may run before it is killed
            path_additions: Directories prepended to PATH
            env: Explicit environment; built with build_command_env() when omitted
        """
        self.timeout = timeout
        self.env = dict(env) if env is not None else build_command_env(path_additions=path_additions)

    def run(self, args: Union[str, Sequence[str]], cwd: Optional[Union[str, os.PathLike]] = None) -> str:
        """Run a command and return its trimmed stdout.

        Args:
            args: Argument vector, or a command line split with shlex
            cwd: Working directory (defaults to the current one)

        Returns:
            stdout with surrounding whitespace removed

        Raises:
            CommandTimeoutError: If the command exceeds the timeout
            CommandNotFoundError: If the executable does not exist
            CommandError: If the command exits with a non-zero status
        """
        command = shlex.split(args) if isinstance(args, str) else list(args)
        logger.debug(f"Running: {shlex.join(command)} (cwd={cwd or os.getcwd()})")

        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                env=self.env,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(f"Command timed out after {self.timeout:g}s: {shlex.join(command)}")
            raise CommandTimeoutError(command, self.timeout) from e
        except FileNotFoundError as e:
            # Raised for a missing executable and for a missing cwd alike
            if cwd is not None and not os.path.isdir(cwd):
                raise CommandError(command, stderr=f"no such directory: {cwd}") from e
            raise CommandNotFoundError(command) from e

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            stdout = (completed.stdout or "").strip()
            logger.debug(f"Command failed (exit {completed.returncode}): {stderr or stdout}")
            raise CommandError(command, completed.returncode, stderr, stdout)

        return (completed.stdout or "").strip()
