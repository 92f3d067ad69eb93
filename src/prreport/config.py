"""Configuration management for prreport."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from prreport.reports.path_rules import PathRule

PRREPORT_DIR = ".prreport"
CONFIG_FILE = "config.json"


class GitHubConfig(BaseModel):
    """Where and how to reach GitHub."""

    repo: str = ""  # "owner/name"; falls back to GITHUB_REPOSITORY
    token_env: str = "GITHUB_TOKEN"
    timeout: int = 15

    @property
    def token(self) -> str | None:
        return os.environ.get(self.token_env) if self.token_env else None


class BuildSizeConfig(BaseModel):
    """Build size report settings."""

    artifact: str = "empty.html"
    threshold_kb: int = 20


class ChangeNoteConfig(BaseModel):
    """Which changed files count as change notes or documentation."""

    note_patterns: list[str] = Field(
        default_factory=lambda: ["*releasenotes/*", "changelog.d/*"]
    )
    doc_patterns: list[str] = Field(
        default_factory=lambda: [
            "docs/*",
            "*.md",
            "*.txt",
            ".github/*",
            "LICENSE*",
        ]
    )
    docs_url: str = ""


class ReportConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    build_size: BuildSizeConfig = Field(default_factory=BuildSizeConfig)
    change_notes: ChangeNoteConfig = Field(default_factory=ChangeNoteConfig)
    path_rules: list[PathRule] = Field(default_factory=list)


class ActionsContext(BaseModel):
    """Pull request coordinates taken from a GitHub Actions run."""

    repo: str = ""
    pr_number: int | None = None
    base_ref: str = ""

    @classmethod
    def from_environment(cls, environ: dict[str, str] | None = None) -> ActionsContext:
        env = os.environ if environ is None else environ
        pr_number = None
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).exists():
            event = json.loads(Path(event_path).read_text())
            pr_number = (event.get("pull_request") or {}).get("number") or event.get("number")
        return cls(
            repo=env.get("GITHUB_REPOSITORY", ""),
            pr_number=pr_number,
            base_ref=env.get("GITHUB_BASE_REF", ""),
        )


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .prreport directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / PRREPORT_DIR).is_dir():
            return current
        current = current.parent
    if (current / PRREPORT_DIR).is_dir():
        return current
    return None


def get_prreport_dir(root: Path) -> Path:
    """Get the .prreport directory for a project root."""
    return root / PRREPORT_DIR


def load_config(root: Path) -> ReportConfig:
    """Load configuration from .prreport/config.json."""
    config_path = get_prreport_dir(root) / CONFIG_FILE
    if config_path.exists():
        data = json.loads(config_path.read_text())
        return ReportConfig(**data)
    return ReportConfig(name=root.name)


def save_config(root: Path, config: ReportConfig) -> None:
    """Save configuration to .prreport/config.json."""
    cfg_dir = get_prreport_dir(root)
    cfg_dir.mkdir(parents=True, exist_ok=True)
    config_path = cfg_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ReportConfig, key: str, value: Any) -> ReportConfig:
    """Set a nested config value using dot notation (e.g., 'github.repo')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    return ReportConfig(**data)
