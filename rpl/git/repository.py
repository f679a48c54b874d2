"""Git repository operations used by the release pipeline.

All operations return Result types:

    repo = Repository(Path("/path/to/checkout"))
    match repo.current_ref():
        case Ok(ref):
            print(f"On {ref}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rpl.core.result import Err, Ok, Result
from rpl.platform.process import ProcessError
from rpl.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "Repository",
    "StatusEntry",
    "parse_porcelain",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single line of ``git status --porcelain``.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str


def parse_porcelain(output: str) -> tuple[StatusEntry, ...]:
    """Parse ``git status --porcelain`` output into entries."""
    entries: list[StatusEntry] = []
    for line in output.splitlines():
        if len(line) < 4:
            continue
        entries.append(StatusEntry(xy=line[:2], path=line[3:]))
    return tuple(entries)


class Repository:
    """A git checkout.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def list_tags(self) -> Result[list[str], GitError]:
        """List all tags, in the order git prints them."""
        result = self._run(["tag", "--list"])
        match result:
            case Err(e):
                return Err(_git_error("tag --list", e, "git tag failed"))
            case Ok(stdout):
                return Ok(stdout.split())

    def pending_changes(self) -> Result[tuple[StatusEntry, ...], GitError]:
        """Uncommitted changes, including untracked files.

        An empty tuple means the working tree is clean.
        """
        result = self._run(["status", "--porcelain"])
        match result:
            case Err(e):
                return Err(_git_error("status --porcelain", e, "git status failed"))
            case Ok(stdout):
                return Ok(parse_porcelain(stdout))

    def current_ref(self) -> Result[str, GitError]:
        """Name of the checked out branch, or of the tag when HEAD is detached on one."""
        branch = self._run(["symbolic-ref", "-q", "--short", "HEAD"])
        if isinstance(branch, Ok):
            return Ok(branch.value.strip())

        tag = self._run(["describe", "--tags", "--exact-match"])
        match tag:
            case Err(e):
                return Err(_git_error("describe --tags --exact-match", e, "no branch or tag at HEAD"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def checkout(self, ref: str) -> Result[None, GitError]:
        """Quietly check out a tag or branch."""
        result = self._run(["checkout", "-q", ref])
        match result:
            case Err(e):
                return Err(_git_error(f"checkout {ref}", e, "checkout failed"))
            case Ok(_):
                return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )


def _git_error(command: str, e: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=e.stderr.strip() or e.stdout.strip() or fallback,
        returncode=e.returncode,
    )
