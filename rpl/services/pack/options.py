"""Parsing of ``rpl pack`` tokens.

Tokens are the flags ``allow-pending``, ``no-test``, ``no-lint`` and
``no-build`` (any case), plus at most one tag or branch name. The special
tag name ``current`` packages the working tree as it is.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from rpl.core.result import Err, Ok, Result
from rpl.services.pack.errors import PackFailure

CURRENT_TAG = "current"

_FLAGS = {
    "allow-pending": "allow_pending",
    "no-test": "no_test",
    "no-lint": "no_lint",
    "no-build": "no_build",
}

USAGE = """\
Usage:

rpl pack [allow-pending] [no-test] [no-lint] [no-build] [<tagname>]

  allow-pending: If specified, allow uncommitted changes to exist when
                 packaging.
  no-test:       If specified, don't run tests before packaging.
  no-lint:       If specified, don't run lint before packaging.
  no-build:      If specified, don't run build before packaging (use currently
                 built files).
  <tagname>:     If specified, an existing tag or branch to package. Otherwise
                 defaults to the most recent tag. Specify 'current' to use
                 whatever is currently on your local machine (only use this for
                 testing)."""

USAGE_INTRO = "Creates an npm package (tgz file) for a tag or branch."


@dataclass(frozen=True, slots=True)
class PackOptions:
    allow_pending: bool = False
    no_test: bool = False
    no_lint: bool = False
    no_build: bool = False
    tag_name: str | None = None


def is_help_request(tokens: Sequence[str]) -> bool:
    """True when ``help`` is the only token."""
    return len(tokens) == 1 and tokens[0].lower() == "help"


def parse_options(tokens: Sequence[str]) -> Result[PackOptions, PackFailure]:
    options = PackOptions()
    for raw in tokens:
        token = raw.strip()
        if not token:
            continue

        flag = _FLAGS.get(token.lower())
        if flag is not None:
            options = replace(options, **{flag: True})
            continue

        if options.tag_name:
            return Err(
                PackFailure(
                    f"Error: Can't set tag name to '{token}' "
                    f"when it is already set to '{options.tag_name}'."
                )
            )
        options = replace(options, tag_name=token)

    return Ok(options)
