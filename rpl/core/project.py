"""Project root detection.

The project is the checkout being packaged. Its root is found, in order, from
an explicit path, the ``RPL_ROOT`` environment variable, or the nearest
ancestor of the current directory holding ``rpl.toml``, ``package.json`` or
``.git``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILE_NAME
from .result import Err, Ok, Result

__all__ = [
    "Project",
    "ProjectError",
    "ROOT_ENV_VAR",
    "detect_project",
    "find_project_upward",
    "is_project_root",
]

ROOT_ENV_VAR = "RPL_ROOT"

_ROOT_MARKERS = (CONFIG_FILE_NAME, "package.json", ".git")


@dataclass(frozen=True)
class ProjectError:
    """Error when the project root cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A detected project checkout."""

    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE_NAME


def is_project_root(path: Path) -> bool:
    """Check if path holds one of the root markers."""
    return any((path / marker).exists() for marker in _ROOT_MARKERS)


def find_project_upward(start: Path) -> Path | None:
    """Walk up from start and return the first directory that is a project root."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if is_project_root(candidate):
            return candidate
    return None


def detect_project(
    explicit: Path | None = None,
    *,
    cwd: Path | None = None,
) -> Result[Project, ProjectError]:
    """Detect the project root.

    Args:
        explicit: Root given on the command line; must be a directory.
        cwd: Directory to search upward from (defaults to the current one).

    Returns:
        Ok(Project) on success, Err(ProjectError) if nothing matches.
    """
    if explicit is not None:
        root = explicit.expanduser().resolve()
        if not root.is_dir():
            return Err(ProjectError(f"not a directory: {root}", searched_from=root))
        return Ok(Project(root=root))

    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        root = Path(env_root).expanduser().resolve()
        if not root.is_dir():
            return Err(
                ProjectError(f"{ROOT_ENV_VAR} is not a directory: {root}", searched_from=root)
            )
        return Ok(Project(root=root))

    start = cwd if cwd is not None else Path.cwd()
    found = find_project_upward(start)
    if found is None:
        return Err(
            ProjectError(
                f"no project found (looked for {', '.join(_ROOT_MARKERS)})",
                searched_from=start,
            )
        )
    return Ok(Project(root=found))
