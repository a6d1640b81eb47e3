"""Services for ghq-palette."""

from .command_runner import CommandRunner, build_command_env
from .ghq import GhqService
from .repo_initializer import RepoInitializer
from .validation_service import ValidationService

__all__ = [
    "CommandRunner",
    "build_command_env",
    "GhqService",
    "RepoInitializer",
    "ValidationService",
]
