"""Tests for ProjectManager path resolution."""

import os

import pytest

from gemedit.exceptions import ConfigError, ProjectNotFoundError
from gemedit.projects import ProjectManager, parse_project_spec


class TestParseProjectSpec:

    def test_name_and_path(self):
        assert parse_project_spec("api:/srv/api") == ("api", "/srv/api")

    def test_bare_path(self, tmp_path):
        target = tmp_path / "storefront"
        assert parse_project_spec(str(target)) == ("storefront", str(target))

    def test_windows_drive_is_a_path(self):
        name, path = parse_project_spec("C:\\work\\shop")
        assert path == "C:\\work\\shop"


class TestProjectManager:

    def test_default_is_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        manager = ProjectManager()
        assert manager.get_project_path() == tmp_path.resolve()

    def test_relative_path_joins_project_root(self, tmp_path):
        manager = ProjectManager({"shop": tmp_path})
        assert manager.resolve_file_path("Gemfile", "shop") == tmp_path.resolve() / "Gemfile"

    def test_absolute_path_unchanged(self, tmp_path):
        manager = ProjectManager({"shop": tmp_path})
        absolute = tmp_path / "other" / "Gemfile"
        assert manager.resolve_file_path(str(absolute), "shop") == absolute

    def test_unknown_project(self, tmp_path):
        manager = ProjectManager({"shop": tmp_path}, default_path=tmp_path)
        with pytest.raises(ProjectNotFoundError) as exc_info:
            manager.resolve_file_path("Gemfile", "blog")
        assert str(exc_info.value) == "Project not found: blog. Available projects: default, shop"

    def test_validate_projects(self, tmp_path):
        missing = tmp_path / "missing"
        a_file = tmp_path / "file.txt"
        a_file.write_text("")
        manager = ProjectManager({"gone": missing, "file": a_file}, default_path=tmp_path)

        with pytest.raises(ConfigError) as exc_info:
            manager.validate_projects()
        assert "gone" in str(exc_info.value)
        assert "file" in str(exc_info.value)

    def test_from_specs(self, tmp_path):
        manager = ProjectManager.from_specs([f"shop:{tmp_path}"], default_path=tmp_path)
        assert manager.list_projects()["shop"] == str(tmp_path.resolve())
        manager.validate_projects()
