"""Pack command - create an npm package for a tag or branch."""

from __future__ import annotations

import typer

from rpl.cli.commands._helpers import exit_with
from rpl.cli.context import build_context
from rpl.core.result import Err
from rpl.git.repository import Repository
from rpl.output.console import ConsoleProtocol, RichConsole
from rpl.services.build import BuildService, BuildTask
from rpl.services.pack import PackService, is_help_request, parse_options
from rpl.services.pack.errors import format_pack_error
from rpl.services.pack.options import USAGE, USAGE_INTRO
from rpl.services.tasks import CommandTask, PackTasks


def print_usage(console: ConsoleProtocol, *, include_intro: bool) -> None:
    if include_intro:
        console.newline()
        console.print(USAGE_INTRO)
    console.newline()
    console.print(USAGE)


def pack(
    tokens: list[str] | None = typer.Argument(
        None,
        help="Flags (allow-pending, no-test, no-lint, no-build) and an optional tag name, "
        "or 'help'.",
        show_default=False,
    ),
) -> None:
    """Run tests, lint and build, check out a tag and create an npm package."""
    args = tokens or []
    if is_help_request(args):
        print_usage(RichConsole(), include_intro=True)
        return

    ctx = build_context()

    options = parse_options(args)
    if isinstance(options, Err):
        ctx.console.error(format_pack_error(options.error))
        print_usage(ctx.console, include_intro=False)
        exit_with(False)

    root = ctx.project.root
    tasks = PackTasks(
        test=CommandTask(ctx.config.tasks.test, cwd=root),
        lint=CommandTask(ctx.config.tasks.lint, cwd=root),
        build=BuildTask(
            BuildService(project=ctx.project, config=ctx.config.build, console=ctx.console)
        ),
    )
    service = PackService(
        root=root,
        repo=Repository(root),
        tasks=tasks,
        package_command=ctx.config.tasks.package,
        console=ctx.console,
    )
    exit_with(service.report(service.run(options.value)))
