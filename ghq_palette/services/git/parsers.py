"""Parsers for line-oriented git output.

Each parser documents the exact output format it expects and carries a
FORMAT_VERSION, so a different strategy (e.g. ``--format`` based output) can be
swapped in without touching the aggregation logic.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, TypeVar

from ghq_palette.models.worktree import WorktreeRecord

T_co = TypeVar("T_co", covariant=True)

CURRENT_BRANCH_MARKER = "*"
LINKED_WORKTREE_MARKER = "+"
BRANCH_NAME_COLUMN = 2
BRANCH_REF_PREFIX = "refs/heads/"
PSEUDO_BRANCH_PREFIXES = ("(HEAD detached", "(no branch")


class OutputParser(Protocol[T_co]):
    """Turns the stdout of one git command into records."""

    FORMAT_VERSION: str

    def parse(self, output: str) -> List[T_co]:
        ...


@dataclass(frozen=True)
class ListedBranch:
    """One entry of `git branch`."""

    name: str
    is_current: bool = False
    in_linked_worktree: bool = False


class BranchListParser:
    """Parser for `git branch --no-color`.

    Format, one branch per line::

        * main
        + feature/in-worktree
          topic

    Column 0 holds the marker: ``*`` for the branch checked out in the primary
    working directory, ``+`` for a branch checked out in a linked worktree, a
    space otherwise. Column 1 is a space and the name starts at column 2.
    Pseudo-entries such as ``(HEAD detached at 1a2b3c4)`` or ``(no branch,
    rebasing topic)`` are not branches and are skipped; any other name, even
    one starting with a parenthesis, is kept.
    """

    FORMAT_VERSION = "git-branch/plain-v1"

    def parse(self, output: str) -> List[ListedBranch]:
        branches = []
        for raw_line in output.splitlines():
            line = raw_line.rstrip()
            if not line.strip():
                continue

            if len(line) > 1 and line[1] == " " and line[0] in (
                CURRENT_BRANCH_MARKER,
                LINKED_WORKTREE_MARKER,
                " ",
            ):
                marker = line[0]
                name = line[BRANCH_NAME_COLUMN:].strip()
            else:
                # Leading whitespace already trimmed by the caller
                marker = " "
                name = line.strip()

            if not name or name.startswith(PSEUDO_BRANCH_PREFIXES):
                continue

            branches.append(
                ListedBranch(
                    name=name,
                    is_current=marker == CURRENT_BRANCH_MARKER,
                    in_linked_worktree=marker == LINKED_WORKTREE_MARKER,
                )
            )
        return branches


class WorktreeListParser:
    """Parser for `git worktree list --porcelain`.

    Format, one record per worktree separated by blank lines::

        worktree /path/to/main
        HEAD 3f1c...
        branch refs/heads/main

        worktree /path/to/linked
        HEAD 9a0b...
        detached

    Recognised attribute lines: ``worktree``, ``HEAD``, ``branch``, ``bare``,
    ``detached``, ``locked`` and ``prunable``; anything else is ignored. The
    first record is always the main working tree.
    """

    FORMAT_VERSION = "git-worktree/porcelain-v1"

    def parse(self, output: str) -> List[WorktreeRecord]:
        records: List[WorktreeRecord] = []
        current: Dict[str, object] = {}

        for raw_line in output.splitlines():
            line = raw_line.strip()

            if not line:
                self._flush(current, records)
                current = {}
                continue

            key, _, value = line.partition(" ")
            if key == "worktree":
                # A new record without a separating blank line
                self._flush(current, records)
                current = {"path": value}
            elif key == "HEAD":
                current["head"] = value
            elif key == "branch":
                current["branch"] = self._branch_name(value)
            elif key == "detached":
                current["detached"] = True
            elif key == "bare":
                current["bare"] = True
            elif key == "locked":
                current["locked"] = True
            elif key == "prunable":
                current["prunable"] = True

        self._flush(current, records)
        return records

    @staticmethod
    def _branch_name(ref: str) -> Optional[str]:
        """Extract the branch name from ``refs/heads/<name>``."""
        if ref.startswith(BRANCH_REF_PREFIX):
            return ref[len(BRANCH_REF_PREFIX):] or None
        return None

    @staticmethod
    def _flush(current: Dict[str, object], records: List[WorktreeRecord]) -> None:
        path = current.get("path")
        if not path:
            return
        records.append(
            WorktreeRecord(
                path=str(path),
                branch_name=current.get("branch"),  # type: ignore[arg-type]
                head=current.get("head"),  # type: ignore[arg-type]
                is_main=not records,
                is_bare=bool(current.get("bare")),
                is_detached=bool(current.get("detached")),
                is_locked=bool(current.get("locked")),
                is_prunable=bool(current.get("prunable")),
            )
        )
