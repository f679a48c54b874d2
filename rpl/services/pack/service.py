"""Release packaging: build an npm tarball from a tag.

Stages, in order:

    resolve-tag → check-pending → checkout → test → lint → build → package

Test, lint and build can each be skipped; a skipped task and a few other
shortcuts leave a warning saying the package is only fit for testing.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from rpl.core.result import Err, Ok, Result
from rpl.git.repository import GitError, StatusEntry
from rpl.output.console import ConsoleProtocol, Style
from rpl.platform.process import run as run_process
from rpl.services.pack.errors import PackError, PackFailure, TaskFailed, format_pack_error
from rpl.services.pack.options import CURRENT_TAG, PackOptions
from rpl.services.pack.pipeline import PackContext, Stage, run_stages
from rpl.services.pack.semver import latest_tag
from rpl.services.tasks import PackTasks, Task

__all__ = ["PackRepository", "PackService"]

_PENDING_PREVIEW = 10

_NO_TAG_MESSAGE = (
    "Error: Couldn't find the most recent tag name - please specify a tag or branch explicitly."
)


class PackRepository(Protocol):
    def list_tags(self) -> Result[list[str], GitError]: ...

    def pending_changes(self) -> Result[tuple[StatusEntry, ...], GitError]: ...

    def current_ref(self) -> Result[str, GitError]: ...

    def checkout(self, ref: str) -> Result[None, GitError]: ...


def _git_failure(error: GitError) -> PackFailure:
    return PackFailure(f"Error: git {error.command} failed: {error.message}")


class PackService:
    def __init__(
        self,
        *,
        root: Path,
        repo: PackRepository,
        tasks: PackTasks,
        package_command: Sequence[str],
        console: ConsoleProtocol,
    ) -> None:
        self._root = root
        self._repo = repo
        self._tasks = tasks
        self._package_command = tuple(package_command)
        self._console = console

    def stages(self) -> list[Stage]:
        return [
            Stage("resolve-tag", self._resolve_tag),
            Stage("check-pending", self._check_pending),
            Stage("checkout", self._checkout),
            self._task_stage("Test", self._tasks.test, lambda o: o.no_test),
            self._task_stage("Lint", self._tasks.lint, lambda o: o.no_lint),
            self._task_stage("Build", self._tasks.build, lambda o: o.no_build),
            Stage("package", self._build_package),
        ]

    def _task_stage(
        self,
        task_name: str,
        task: Task,
        skip: Callable[[PackOptions], bool],
    ) -> Stage:
        return Stage(
            task_name.lower(),
            lambda ctx: self._run_task(ctx, task, task_name, skip(ctx.options)),
        )

    def run(self, options: PackOptions) -> Result[PackContext, PackError]:
        """Run the whole pipeline; the returned context names the created package."""
        return run_stages(self.stages(), PackContext.from_options(options))

    def report(self, result: Result[PackContext, PackError]) -> bool:
        """Print the outcome. Returns True on success."""
        match result:
            case Err(error):
                self._console.error(format_pack_error(error))
                return False
            case Ok(ctx):
                self._console.print(f"Package created: {ctx.package}")
                if ctx.warnings:
                    lines = "\n  ".join(ctx.warnings)
                    self._console.warning(f"Warning: Use this package for testing only.\n  {lines}")
                self._console.newline()
                return True

    # Stages

    def _resolve_tag(self, ctx: PackContext) -> Result[None, PackError]:
        if ctx.tag_name:
            return Ok(None)

        self._console.step("Looking for most recent tag...")
        match self._repo.list_tags():
            case Err(e):
                return Err(_git_failure(e))
            case Ok(tags):
                found = latest_tag(tags)

        if found is None:
            return Err(PackFailure(_NO_TAG_MESSAGE))

        ctx.tag_name = found
        self._console.print(f"- found: {found}")
        return Ok(None)

    def _check_pending(self, ctx: PackContext) -> Result[None, PackError]:
        self._console.step("Checking for pending local changes...")
        match self._repo.pending_changes():
            case Err(e):
                return Err(_git_failure(e))
            case Ok(entries):
                pass

        if not entries:
            return Ok(None)
        if ctx.options.allow_pending:
            ctx.warn("There are pending local changes.")
            return Ok(None)

        preview = [f"  {e.xy} {e.path}" for e in entries[:_PENDING_PREVIEW]]
        if len(entries) > _PENDING_PREVIEW:
            preview.append(f"  ... and {len(entries) - _PENDING_PREVIEW} more")
        for line in preview:
            self._console.print(line, Style.DIM)
        return Err(PackFailure("Error: Aborting because there are pending changes."))

    def _checkout(self, ctx: PackContext) -> Result[None, PackError]:
        tag = ctx.tag_name
        if not tag:
            return Err(PackFailure(_NO_TAG_MESSAGE))

        if tag == CURRENT_TAG:
            ctx.warn(
                "The package was built from currently checked out files, "
                "which may not correctly reflect the package version."
            )
            return Ok(None)

        self._console.step(f"Checking out tag {tag}...")
        match self._repo.current_ref():
            case Ok(current) if current == tag:
                self._console.print("- tag is already checked out.")
                return Ok(None)
            case _:
                pass

        match self._repo.checkout(tag):
            case Err(e):
                return Err(_git_failure(e))
            case Ok(_):
                self._console.print("- success.")
                return Ok(None)

    def _run_task(
        self,
        ctx: PackContext,
        task: Task,
        task_name: str,
        skip: bool,
    ) -> Result[None, PackError]:
        if skip:
            ctx.warn(f"Didn't run task '{task_name}'")
            return Ok(None)

        self._console.step(f"Running task '{task_name}'...")
        ctx.current_task = task_name
        result = task.run()
        if isinstance(result, Err):
            return Err(TaskFailed(task=ctx.current_task, returncode=result.error))
        return Ok(None)

    def _build_package(self, ctx: PackContext) -> Result[None, PackError]:
        self._console.step("Creating package...")
        result = run_process(self._package_command, cwd=self._root)
        if isinstance(result, Err):
            e = result.error
            return Err(PackFailure(f"Error: {e}", hint=e.stderr.strip() or None))

        lines = [ln.strip() for ln in result.value.splitlines() if ln.strip()]
        if not lines:
            return Err(PackFailure("Error: package command did not report a file name."))
        ctx.package = lines[-1]
        return Ok(None)
