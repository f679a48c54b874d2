"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from rpl.core.errors import ErrorCode


def exit_with(success: bool) -> NoReturn:
    """Exit 0 on success, 1 otherwise."""
    raise typer.Exit(code=int(ErrorCode.OK if success else ErrorCode.FAILURE))
