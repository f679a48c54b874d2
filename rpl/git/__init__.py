"""Git operations.

Usage:
    from rpl.git import Repository

    repo = Repository(Path("/path/to/checkout"))
    tags = repo.list_tags()
"""

from rpl.git.repository import (
    GitError,
    Repository,
    StatusEntry,
    parse_porcelain,
)

__all__ = [
    "GitError",
    "Repository",
    "StatusEntry",
    "parse_porcelain",
]
