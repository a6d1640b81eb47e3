"""Input validation for ghq-palette forms."""

import re
from typing import Optional

from ghq_palette.constants import REPO_NAME_PATTERN
from ghq_palette.exceptions import ValidationError

_REPO_NAME_RE = re.compile(REPO_NAME_PATTERN)


class ValidationService:
    """Validates user input before any command runs."""

    @staticmethod
    def validate_repo_name(value: Optional[str]) -> Optional[str]:
        """
        Check a new repository name.

        Args:
            value: Name typed by the user

        Returns:
            Error message, or None if the name is acceptable
        """
        if not value or not value.strip():
            return "Repository name is required"
        if not _REPO_NAME_RE.match(value):
            return "Only alphanumeric, dot, hyphen, underscore allowed"
        return None

    @staticmethod
    def validate_branch_name(value: Optional[str]) -> Optional[str]:
        """Check a new branch name; git itself rejects malformed refs."""
        if not value or not value.strip():
            return "Branch name is required"
        return None

    @staticmethod
    def require_fields(**fields: Optional[str]) -> None:
        """Raise ValidationError naming the first empty field."""
        for name, value in fields.items():
            if not value or not str(value).strip():
                raise ValidationError(name, "All fields are required")

    @classmethod
    def ensure_repo_name(cls, value: Optional[str]) -> str:
        error = cls.validate_repo_name(value)
        if error:
            raise ValidationError("repo_name", error)
        return value  # type: ignore[return-value]

    @classmethod
    def ensure_branch_name(cls, value: Optional[str]) -> str:
        error = cls.validate_branch_name(value)
        if error:
            raise ValidationError("branch_name", error)
        return value.strip()  # type: ignore[union-attr]
