"""Tests for rpl.core.project module."""

from __future__ import annotations

from pathlib import Path

import pytest

from rpl.core.project import (
    ROOT_ENV_VAR,
    Project,
    detect_project,
    find_project_upward,
    is_project_root,
)
from rpl.core.result import Err, Ok


@pytest.fixture(autouse=True)
def _no_root_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)


class TestProject:
    def test_paths(self, tmp_path: Path) -> None:
        project = Project(root=tmp_path)
        assert project.config_path == tmp_path / "rpl.toml"


class TestMarkers:
    @pytest.mark.parametrize("marker", ["rpl.toml", "package.json", ".git"])
    def test_each_marker_identifies_root(self, tmp_path: Path, marker: str) -> None:
        (tmp_path / marker).write_text("", encoding="utf-8")
        assert is_project_root(tmp_path) is True

    def test_empty_dir_is_not_root(self, tmp_path: Path) -> None:
        assert is_project_root(tmp_path) is False

    def test_find_upward(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")
        nested = tmp_path / "lib" / "client"
        nested.mkdir(parents=True)

        assert find_project_upward(nested) == tmp_path.resolve()


class TestDetectProject:
    def test_explicit_root(self, tmp_path: Path) -> None:
        result = detect_project(tmp_path)
        assert result == Ok(Project(root=tmp_path.resolve()))

    def test_explicit_root_must_exist(self, tmp_path: Path) -> None:
        result = detect_project(tmp_path / "missing")
        assert isinstance(result, Err)

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))
        result = detect_project(cwd=Path("/"))
        assert result == Ok(Project(root=tmp_path.resolve()))

    def test_search_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "rpl.toml").write_text("", encoding="utf-8")
        sub = tmp_path / "build"
        sub.mkdir()

        result = detect_project(cwd=sub)

        assert isinstance(result, Ok)
        assert result.value.root == tmp_path.resolve()
