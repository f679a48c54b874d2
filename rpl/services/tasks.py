"""Sub-tool tasks run by the release pipeline.

A task either succeeds or fails with a process exit code. The pipeline only
needs that code to attribute the failure; the tool's own output has already
been streamed to the terminal.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from rpl.core.result import Err, Ok, Result
from rpl.platform.process import run_streaming

__all__ = ["Task", "CommandTask", "PackTasks"]


class Task(Protocol):
    def run(self) -> Result[None, int]: ...


@dataclass(frozen=True, slots=True)
class CommandTask:
    """Runs one external command in the project root."""

    command: Sequence[str]
    cwd: Path

    def run(self) -> Result[None, int]:
        result = run_streaming(self.command, cwd=self.cwd)
        if isinstance(result, Err):
            # -1 means the command never ran (missing binary); still a failure.
            return Err(result.error.returncode if result.error.returncode > 0 else 1)
        return Ok(None)


@dataclass(frozen=True, slots=True)
class PackTasks:
    """The three skippable tasks of the release pipeline."""

    test: Task
    lint: Task
    build: Task
