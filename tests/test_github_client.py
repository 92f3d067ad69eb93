"""Tests for the gh-backed comment store."""

from __future__ import annotations

import json
import subprocess

import pytest

from prreport.comment.sections import create_comment
from prreport.exceptions import GitHubError
from prreport.github.client import GitHubClient


class FakeGh:
    """Stands in for subprocess.run, answering gh api calls."""

    def __init__(self, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.commands: list[list[str]] = []
        self.envs: list[dict | None] = []

    def __call__(self, cmd, **kwargs):
        self.commands.append(cmd)
        self.envs.append(kwargs.get("env"))
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def fake_gh(monkeypatch) -> FakeGh:
    gh = FakeGh()
    monkeypatch.setattr(subprocess, "run", gh)
    return gh


class TestGitHubClient:
    def test_invalid_repo(self):
        with pytest.raises(GitHubError):
            GitHubClient("not-a-repo")

    def test_list_comments(self, fake_gh: FakeGh):
        body = create_comment("BUILD_SIZE", "Size: +1KB")
        fake_gh.stdout = "\n".join([
            json.dumps({"id": 11, "body": "LGTM", "author": "alice"}),
            json.dumps({"id": 12, "body": body, "author": "github-actions[bot]"}),
        ]) + "\n"

        client = GitHubClient("octo/repo")
        comments = client.list_comments(5)
        assert [c.id for c in comments] == [11, 12]
        assert fake_gh.commands[0][:4] == ["gh", "api", "--paginate", "repos/octo/repo/issues/5/comments"]
        assert client.find_owned_comment(5).id == 12

    def test_create_comment(self, fake_gh: FakeGh):
        fake_gh.stdout = json.dumps({"id": 99, "body": "hello", "author": "bot"})
        comment = GitHubClient("octo/repo").create_comment(5, "hello")
        assert comment.id == 99
        assert "POST" in fake_gh.commands[0]
        assert "body=hello" in fake_gh.commands[0]

    def test_update_and_delete(self, fake_gh: FakeGh):
        client = GitHubClient("octo/repo")
        client.update_comment(5, 99, "new body")
        client.delete_comment(5, 99)
        assert "PATCH" in fake_gh.commands[0]
        assert "repos/octo/repo/issues/comments/99" in fake_gh.commands[0]
        assert "DELETE" in fake_gh.commands[1]

    def test_list_changed_files(self, fake_gh: FakeGh):
        fake_gh.stdout = "core/boot.js\nREADME.md\n"
        assert GitHubClient("octo/repo").list_changed_files(5) == ["core/boot.js", "README.md"]

    def test_token_is_passed_as_gh_token(self, fake_gh: FakeGh):
        GitHubClient("octo/repo", token="s3cret").delete_comment(5, 1)
        assert fake_gh.envs[0]["GH_TOKEN"] == "s3cret"

    def test_failure_raises(self, fake_gh: FakeGh):
        fake_gh.returncode = 1
        fake_gh.stderr = "HTTP 404: Not Found"
        with pytest.raises(GitHubError, match="404"):
            GitHubClient("octo/repo").list_comments(5)

    def test_bad_json_raises(self, fake_gh: FakeGh):
        fake_gh.stdout = "not json\n"
        with pytest.raises(GitHubError):
            GitHubClient("octo/repo").list_comments(5)

    def test_missing_gh(self, monkeypatch):
        def boom(cmd, **kwargs):
            raise FileNotFoundError("gh")

        monkeypatch.setattr(subprocess, "run", boom)
        with pytest.raises(GitHubError, match="not installed"):
            GitHubClient("octo/repo").list_comments(5)
