"""Error types for the release pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PackFailure:
    """A usage, git or packaging error, reported with its own message."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class TaskFailed:
    """A test, lint or build task exited non-zero."""

    task: str
    returncode: int


type PackError = PackFailure | TaskFailed


def format_pack_error(error: PackError) -> str:
    match error:
        case TaskFailed(task=task):
            return f"Error: Task '{task}' failed."
        case PackFailure(message=message, hint=hint):
            if hint:
                return f"{message}\n{hint}"
            return message
