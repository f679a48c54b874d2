"""Release packaging pipeline (``rpl pack``)."""

from rpl.services.pack.errors import PackError, PackFailure, TaskFailed, format_pack_error
from rpl.services.pack.options import PackOptions, is_help_request, parse_options
from rpl.services.pack.pipeline import PackContext, Stage, run_stages
from rpl.services.pack.semver import SemVer, latest_tag, parse_version
from rpl.services.pack.service import PackRepository, PackService

__all__ = [
    "PackContext",
    "PackError",
    "PackFailure",
    "PackOptions",
    "PackRepository",
    "PackService",
    "SemVer",
    "Stage",
    "TaskFailed",
    "format_pack_error",
    "is_help_request",
    "latest_tag",
    "parse_options",
    "parse_version",
    "run_stages",
]
