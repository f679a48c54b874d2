"""Build orchestrator.

Runs clean → pack → hosted, then compress when asked, stopping at the first
stage that fails. Clean is done in-process; the other stages are configured
commands.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rpl.core.config import BuildConfig
from rpl.core.project import Project
from rpl.core.result import Err, Ok, Result
from rpl.output.console import ConsoleProtocol
from rpl.platform.process import run_streaming

__all__ = ["BuildError", "BuildService", "BuildStage", "BuildTask"]


@dataclass(frozen=True, slots=True)
class BuildError:
    stage: str
    message: str


@dataclass(frozen=True, slots=True)
class BuildStage:
    name: str
    run: Callable[[], Result[None, BuildError]]


def _remove_readonly(_func: Callable[[str], object], path: str, exc: BaseException) -> None:
    """Handle read-only files on Windows."""
    if isinstance(exc, PermissionError):
        os.chmod(path, stat.S_IWRITE)
        os.unlink(path)
    else:
        raise exc


class BuildService:
    def __init__(
        self,
        *,
        project: Project,
        config: BuildConfig,
        console: ConsoleProtocol,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console

    @property
    def output_dir(self) -> Path:
        return self._project.root / self._config.output

    def stages(self, *, compress: bool) -> list[BuildStage]:
        stages = [
            BuildStage("clean", self._clean),
            BuildStage("pack", lambda: self._command("pack", self._config.pack)),
            BuildStage("hosted", lambda: self._command("hosted", self._config.hosted)),
        ]
        if compress:
            stages.append(
                BuildStage("compress", lambda: self._command("compress", self._config.compress))
            )
        return stages

    def build(self, *, compress: bool | None = None) -> Result[None, BuildError]:
        """Run every stage in order.

        Args:
            compress: Add the compress stage; None uses the configured default.
        """
        if compress is None:
            compress = self._config.compress_by_default

        for stage in self.stages(compress=compress):
            self._console.step(f"Build stage '{stage.name}'...")
            result = stage.run()
            if isinstance(result, Err):
                self._console.error(f"Build failed: {result.error.stage} ({result.error.message})")
                return result

        self._console.success("Build succeeded.")
        return Ok(None)

    def _clean(self) -> Result[None, BuildError]:
        root = self._project.root.resolve()
        target = self.output_dir.resolve()
        if target == root or not target.is_relative_to(root):
            return Err(BuildError("clean", f"refusing to remove {target} (outside {root})"))
        if not target.exists():
            return Ok(None)
        try:
            shutil.rmtree(target, onexc=_remove_readonly)
        except OSError as e:
            return Err(BuildError("clean", str(e)))
        return Ok(None)

    def _command(self, stage: str, command: tuple[str, ...]) -> Result[None, BuildError]:
        result = run_streaming(command, cwd=self._project.root)
        if isinstance(result, Err):
            e = result.error
            return Err(BuildError(stage, e.stderr.strip() or str(e)))
        return Ok(None)


@dataclass(frozen=True, slots=True)
class BuildTask:
    """Adapts the build orchestrator to the release pipeline's task shape."""

    service: BuildService

    def run(self) -> Result[None, int]:
        if isinstance(self.service.build(), Err):
            return Err(1)
        return Ok(None)
