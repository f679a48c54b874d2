"""Build command - clean, pack and build the hosted target."""

from __future__ import annotations

import typer

from rpl.cli.commands._helpers import exit_with
from rpl.cli.context import build_context
from rpl.core.result import Ok
from rpl.services.build import BuildService


def build(
    compress: bool = typer.Option(
        False,
        "--compress",
        help="Run the compress stage",
    ),
    no_compress: bool = typer.Option(
        False,
        "--no-compress",
        help="Skip the compress stage even if build.compress_by_default is set",
    ),
) -> None:
    """Build the project: clean, pack, hosted target, then optional compress."""
    ctx = build_context()
    if compress and no_compress:
        ctx.console.error("Error: --compress and --no-compress cannot be combined.")
        exit_with(False)

    # None falls back to build.compress_by_default
    wanted: bool | None = None
    if compress:
        wanted = True
    elif no_compress:
        wanted = False

    service = BuildService(project=ctx.project, config=ctx.config.build, console=ctx.console)
    result = service.build(compress=wanted)
    exit_with(isinstance(result, Ok))
