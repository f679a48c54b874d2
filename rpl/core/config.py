"""Typed configuration loading for ``rpl.toml``.

The file is optional; every field has a default matching an npm-based
project layout.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_command, get_str, get_table

__all__ = [
    "BuildConfig",
    "Config",
    "ConfigError",
    "TasksConfig",
    "CONFIG_FILE_NAME",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "rpl.toml"

DEFAULT_TEST_COMMAND = ("npm", "test")
DEFAULT_LINT_COMMAND = ("npm", "run", "lint")
DEFAULT_PACKAGE_COMMAND = ("npm", "pack")
DEFAULT_BUILD_OUTPUT = "pkg"
DEFAULT_PACK_COMMAND = ("npm", "run", "pack-files")
DEFAULT_HOSTED_COMMAND = ("npm", "run", "target:hosted")
DEFAULT_COMPRESS_COMMAND = ("npm", "run", "compress")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class TasksConfig:
    """Commands run by the release pipeline."""

    test: tuple[str, ...] = DEFAULT_TEST_COMMAND
    lint: tuple[str, ...] = DEFAULT_LINT_COMMAND
    package: tuple[str, ...] = DEFAULT_PACKAGE_COMMAND


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Build orchestrator stages.

    ``output`` is relative to the project root and is removed by the clean
    stage.
    """

    output: str = DEFAULT_BUILD_OUTPUT
    pack: tuple[str, ...] = DEFAULT_PACK_COMMAND
    hosted: tuple[str, ...] = DEFAULT_HOSTED_COMMAND
    compress: tuple[str, ...] = DEFAULT_COMPRESS_COMMAND
    compress_by_default: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    tasks: TasksConfig = field(default_factory=TasksConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        tasks: StrDict = get_table(data, "tasks") or {}
        build: StrDict = get_table(data, "build") or {}

        compress_by_default = get_bool(build, "compress_by_default")

        return cls(
            tasks=TasksConfig(
                test=get_command(tasks, "test") or DEFAULT_TEST_COMMAND,
                lint=get_command(tasks, "lint") or DEFAULT_LINT_COMMAND,
                package=get_command(tasks, "package") or DEFAULT_PACKAGE_COMMAND,
            ),
            build=BuildConfig(
                output=get_str(build, "output") or DEFAULT_BUILD_OUTPUT,
                pack=get_command(build, "pack") or DEFAULT_PACK_COMMAND,
                hosted=get_command(build, "hosted") or DEFAULT_HOSTED_COMMAND,
                compress=get_command(build, "compress") or DEFAULT_COMPRESS_COMMAND,
                compress_by_default=bool(compress_by_default),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to rpl.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, otherwise return the defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
