"""GitHub comment store backed by the `gh` CLI.

Runs the same way locally and inside GitHub Actions, where `gh` is
preinstalled and authenticates from GH_TOKEN.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess

from prreport.exceptions import GitHubError
from prreport.github.store import CommentStore, PRComment

logger = logging.getLogger("prreport.github")


class GitHubClient(CommentStore):
    """Comment store for a single repository ("owner/name")."""

    def __init__(self, repo: str, token: str | None = None, timeout: int = 15) -> None:
        if not repo or "/" not in repo:
            raise GitHubError(f"Invalid repository: {repo!r} (expected 'owner/name')")
        self.repo = repo
        self.token = token
        self.timeout = timeout

    def _api(self, args: list[str]) -> str:
        cmd = ["gh", "api", *args]
        env = None
        if self.token:
            env = {**os.environ, "GH_TOKEN": self.token}

        logger.debug("Running %s", " ".join(cmd[:4]))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except FileNotFoundError:
            raise GitHubError("The 'gh' CLI is not installed", cmd) from None
        except subprocess.TimeoutExpired:
            raise GitHubError(f"gh api timed out after {self.timeout}s", cmd) from None

        if proc.returncode != 0:
            raise GitHubError("gh api failed", cmd, proc.stderr.strip())
        return proc.stdout

    def _json_lines(self, output: str) -> list[dict]:
        try:
            return [json.loads(line) for line in output.splitlines() if line.strip()]
        except json.JSONDecodeError as e:
            raise GitHubError(f"Unexpected gh api output: {e}") from e

    def list_comments(self, pr_number: int) -> list[PRComment]:
        output = self._api([
            "--paginate",
            f"repos/{self.repo}/issues/{pr_number}/comments",
            "--jq", ".[] | {id, body, author: .user.login}",
        ])
        return [
            PRComment(id=item["id"], body=item.get("body") or "", author=item.get("author") or "")
            for item in self._json_lines(output)
        ]

    def create_comment(self, pr_number: int, body: str) -> PRComment:
        output = self._api([
            "--method", "POST",
            f"repos/{self.repo}/issues/{pr_number}/comments",
            "-f", f"body={body}",
            "--jq", "{id, body, author: .user.login}",
        ])
        items = self._json_lines(output)
        if not items:
            raise GitHubError("gh api returned no comment")
        item = items[0]
        logger.info("Created comment %s on %s#%s", item["id"], self.repo, pr_number)
        return PRComment(id=item["id"], body=item.get("body") or "", author=item.get("author") or "")

    def update_comment(self, pr_number: int, comment_id: int, body: str) -> None:
        self._api([
            "--method", "PATCH",
            f"repos/{self.repo}/issues/comments/{comment_id}",
            "-f", f"body={body}",
            "--silent",
        ])
        logger.info("Updated comment %s on %s#%s", comment_id, self.repo, pr_number)

    def delete_comment(self, pr_number: int, comment_id: int) -> None:
        self._api([
            "--method", "DELETE",
            f"repos/{self.repo}/issues/comments/{comment_id}",
            "--silent",
        ])
        logger.info("Deleted comment %s on %s#%s", comment_id, self.repo, pr_number)

    def list_changed_files(self, pr_number: int) -> list[str]:
        """Paths of the files a pull request changes."""
        output = self._api([
            "--paginate",
            f"repos/{self.repo}/pulls/{pr_number}/files",
            "--jq", ".[].filename",
        ])
        return [line.strip() for line in output.splitlines() if line.strip()]
