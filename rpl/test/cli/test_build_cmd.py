from __future__ import annotations

from pathlib import Path

import pytest
import typer

from rpl.cli.context import CLIContext
from rpl.core.config import Config
from rpl.core.project import Project
from rpl.core.result import Err, Ok, Result
from rpl.output.console import MockConsole
from rpl.services.build import BuildError


def _patch(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    result: Result[None, BuildError],
    console: MockConsole | None = None,
) -> list[bool | None]:
    import rpl.cli.commands.build_cmd as build_cmd

    seen: list[bool | None] = []

    class FakeBuildService:
        def __init__(self, **_: object) -> None:
            pass

        def build(self, *, compress: bool | None = None) -> Result[None, BuildError]:
            seen.append(compress)
            return result

    ctx = CLIContext(
        project=Project(root=tmp_path),
        config=Config(),
        console=console or MockConsole(),
    )
    monkeypatch.setattr(build_cmd, "build_context", lambda: ctx)
    monkeypatch.setattr(build_cmd, "BuildService", FakeBuildService)
    return seen


def test_build_success(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rpl.cli.commands.build_cmd as build_cmd

    seen = _patch(monkeypatch, tmp_path, Ok(None))

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(compress=False, no_compress=False)

    assert exc.value.exit_code == 0
    assert seen == [None]


def test_build_failure_with_compress(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rpl.cli.commands.build_cmd as build_cmd

    seen = _patch(monkeypatch, tmp_path, Err(BuildError("compress", "boom")))

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(compress=True, no_compress=False)

    assert exc.value.exit_code == 1
    assert seen == [True]


def test_no_compress_turns_compression_off(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import rpl.cli.commands.build_cmd as build_cmd

    seen = _patch(monkeypatch, tmp_path, Ok(None))

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(compress=False, no_compress=True)

    assert exc.value.exit_code == 0
    assert seen == [False]


def test_conflicting_flags_are_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rpl.cli.commands.build_cmd as build_cmd

    console = MockConsole()
    seen = _patch(monkeypatch, tmp_path, Ok(None), console=console)

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(compress=True, no_compress=True)

    assert exc.value.exit_code == 1
    assert seen == []
    assert console.has_error()
