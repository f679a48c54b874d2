from __future__ import annotations

from rpl.core.result import Err, Ok, Result
from rpl.services.pack.errors import (
    PackError,
    PackFailure,
    TaskFailed,
    format_pack_error,
)
from rpl.services.pack.options import PackOptions
from rpl.services.pack.pipeline import PackContext, Stage, run_stages


def _recording(name: str, log: list[str], result: Result[None, PackError] = Ok(None)) -> Stage:
    def run(ctx: PackContext) -> Result[None, PackError]:
        log.append(name)
        return result

    return Stage(name, run)


def test_runs_stages_in_order() -> None:
    log: list[str] = []
    ctx = PackContext.from_options(PackOptions())

    result = run_stages([_recording("a", log), _recording("b", log)], ctx)

    assert result == Ok(ctx)
    assert log == ["a", "b"]


def test_stops_at_first_error() -> None:
    log: list[str] = []
    failure = Err(PackFailure("Error: nope"))

    result = run_stages(
        [_recording("a", log), _recording("b", log, failure), _recording("c", log)],
        PackContext.from_options(PackOptions()),
    )

    assert result == failure
    assert log == ["a", "b"]


def test_context_starts_from_options() -> None:
    ctx = PackContext.from_options(PackOptions(tag_name="v1.0.0"))
    assert ctx.tag_name == "v1.0.0"
    assert ctx.warnings == []
    assert ctx.current_task is None


def test_warnings_accumulate_in_order() -> None:
    ctx = PackContext.from_options(PackOptions())
    ctx.warn("first")
    ctx.warn("second")
    assert ctx.warnings == ["first", "second"]


def test_contexts_do_not_share_warnings() -> None:
    a = PackContext.from_options(PackOptions())
    b = PackContext.from_options(PackOptions())
    a.warn("only a")
    assert b.warnings == []


def test_format_task_failed() -> None:
    assert format_pack_error(TaskFailed("Lint", 3)) == "Error: Task 'Lint' failed."


def test_format_failure_with_hint() -> None:
    error = PackFailure("Error: npm pack failed (exit 1)", hint="npm ERR! missing script")
    assert format_pack_error(error) == "Error: npm pack failed (exit 1)\nnpm ERR! missing script"
