"""Tests for configuration management."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from prreport.config import (
    ActionsContext,
    ReportConfig,
    find_project_root,
    load_config,
    save_config,
    set_config_value,
)
from prreport.reports.path_rules import PathRule


class TestConfig:
    def test_default_config(self):
        config = ReportConfig()
        assert config.github.token_env == "GITHUB_TOKEN"
        assert config.build_size.threshold_kb == 20
        assert config.path_rules == []
        assert len(config.change_notes.doc_patterns) > 0

    def test_save_and_load(self, tmp_path: Path):
        config = ReportConfig(name="test-project")
        config.github.repo = "octo/repo"
        config.path_rules.append(PathRule(name="core", patterns=["core/*"], message="hi"))

        save_config(tmp_path, config)
        loaded = load_config(tmp_path)

        assert loaded.name == "test-project"
        assert loaded.github.repo == "octo/repo"
        assert loaded.path_rules[0].patterns == ["core/*"]

    def test_load_without_file(self, tmp_path: Path):
        assert load_config(tmp_path).name == tmp_path.name

    def test_find_project_root(self, tmp_path: Path):
        # No .prreport dir - should return None
        assert find_project_root(tmp_path) is None

        (tmp_path / ".prreport").mkdir()
        assert find_project_root(tmp_path) == tmp_path

        # Should find from subdirectory
        sub = tmp_path / "src" / "module"
        sub.mkdir(parents=True)
        assert find_project_root(sub) == tmp_path

    def test_set_config_value(self):
        config = ReportConfig()
        updated = set_config_value(config, "github.repo", "octo/repo")
        assert updated.github.repo == "octo/repo"

    def test_set_config_nested(self):
        config = ReportConfig()
        updated = set_config_value(config, "build_size.threshold_kb", 50)
        assert updated.build_size.threshold_kb == 50

    def test_set_config_invalid_key(self):
        config = ReportConfig()
        with pytest.raises(KeyError):
            set_config_value(config, "nonexistent.key", "value")

    def test_token_from_env(self, monkeypatch):
        monkeypatch.setenv("MY_TOKEN", "abc")
        config = ReportConfig()
        config.github.token_env = "MY_TOKEN"
        assert config.github.token == "abc"


class TestActionsContext:
    def test_from_environment(self, tmp_path: Path):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"pull_request": {"number": 42}}))
        ctx = ActionsContext.from_environment({
            "GITHUB_REPOSITORY": "octo/repo",
            "GITHUB_EVENT_PATH": str(event),
            "GITHUB_BASE_REF": "main",
        })
        assert ctx.repo == "octo/repo"
        assert ctx.pr_number == 42
        assert ctx.base_ref == "main"

    def test_outside_actions(self):
        ctx = ActionsContext.from_environment({})
        assert ctx.repo == ""
        assert ctx.pr_number is None
