"""Shared test fixtures for prreport."""

from __future__ import annotations

import pytest

from prreport.github.store import CommentStore, PRComment


class FakeCommentStore(CommentStore):
    """In-memory comment store recording every write."""

    def __init__(self, comments: list[PRComment] | None = None) -> None:
        self.comments: list[PRComment] = list(comments or [])
        self.calls: list[tuple] = []
        self._next_id = 1000

    def list_comments(self, pr_number: int) -> list[PRComment]:
        return list(self.comments)

    def create_comment(self, pr_number: int, body: str) -> PRComment:
        self._next_id += 1
        comment = PRComment(id=self._next_id, body=body, author="prreport-bot")
        self.comments.append(comment)
        self.calls.append(("create", pr_number, body))
        return comment

    def update_comment(self, pr_number: int, comment_id: int, body: str) -> None:
        self.comments = [
            c.model_copy(update={"body": body}) if c.id == comment_id else c
            for c in self.comments
        ]
        self.calls.append(("update", pr_number, comment_id, body))

    def delete_comment(self, pr_number: int, comment_id: int) -> None:
        self.comments = [c for c in self.comments if c.id != comment_id]
        self.calls.append(("delete", pr_number, comment_id))

    def list_changed_files(self, pr_number: int) -> list[str]:
        return ["src/app.js", "docs/intro.md"]


@pytest.fixture
def store() -> FakeCommentStore:
    """An empty PR with one unrelated human comment."""
    return FakeCommentStore([PRComment(id=1, body="LGTM, thanks!", author="alice")])


@pytest.fixture
def two_section_body() -> str:
    return "\n".join([
        "<!-- prreport: PR status report -->",
        "",
        "<!-- Build Size Section -->",
        "",
        "Size: +1KB",
        "",
        "<!-- End Build Size Section -->",
        "",
        "---",
        "",
        "<!-- Change Note Section -->",
        "",
        "All good",
        "",
        "<!-- End Change Note Section -->",
    ])
