"""Sequential stage driver for the release pipeline.

Stages run in list order. The first ``Err`` stops the run; later stages never
start. Stages share a ``PackContext`` holding the immutable options plus the
state that accumulates along the way.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from rpl.core.result import Err, Ok, Result
from rpl.services.pack.errors import PackError
from rpl.services.pack.options import PackOptions


def _no_warnings() -> list[str]:
    return []


@dataclass(slots=True)
class PackContext:
    """Per-invocation pipeline state.

    Attributes:
        options: Parsed command tokens; never modified.
        tag_name: Tag or branch to package, once known.
        warnings: Reasons the package is only fit for testing, in order.
        current_task: Name of the task that last started, for error attribution.
        package: File name reported by the package command.
    """

    options: PackOptions
    tag_name: str | None = None
    warnings: list[str] = field(default_factory=_no_warnings)
    current_task: str | None = None
    package: str | None = None

    @classmethod
    def from_options(cls, options: PackOptions) -> PackContext:
        return cls(options=options, tag_name=options.tag_name)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


@dataclass(frozen=True, slots=True)
class Stage:
    name: str
    run: Callable[[PackContext], Result[None, PackError]]


def run_stages(stages: Sequence[Stage], ctx: PackContext) -> Result[PackContext, PackError]:
    for stage in stages:
        result = stage.run(ctx)
        if isinstance(result, Err):
            return result
    return Ok(ctx)
