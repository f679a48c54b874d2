from __future__ import annotations

from dataclasses import dataclass

import typer

from rpl.core.config import Config, load_config_or_default
from rpl.core.errors import ErrorCode
from rpl.core.project import Project, detect_project
from rpl.core.result import Err
from rpl.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole()

    project_result = detect_project()
    if isinstance(project_result, Err):
        console.error(f"error: {project_result.error.message}")
        raise typer.Exit(code=int(ErrorCode.FAILURE))
    project = project_result.value

    config_result = load_config_or_default(project.config_path)
    if isinstance(config_result, Err):
        console.error(f"error: {config_result.error.message}")
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(project=project, config=config_result.value, console=console)
