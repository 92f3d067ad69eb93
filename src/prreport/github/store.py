"""Comment store interface used by the publisher."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from prreport.comment.sections import GUARD_MARKER


class PRComment(BaseModel):
    """An issue comment on a pull request."""

    id: int
    body: str = ""
    author: str = ""


class CommentStore(ABC):
    """Abstract access to the comments of one repository's pull requests."""

    @abstractmethod
    def list_comments(self, pr_number: int) -> list[PRComment]:
        """All comments on the PR, oldest first."""
        ...

    @abstractmethod
    def create_comment(self, pr_number: int, body: str) -> PRComment:
        ...

    @abstractmethod
    def update_comment(self, pr_number: int, comment_id: int, body: str) -> None:
        ...

    @abstractmethod
    def delete_comment(self, pr_number: int, comment_id: int) -> None:
        ...

    def find_owned_comment(self, pr_number: int, marker: str = GUARD_MARKER) -> PRComment | None:
        """Return the oldest comment carrying the marker, if any.

        Later duplicates (e.g. left by a racing job) are ignored.
        """
        for comment in self.list_comments(pr_number):
            if marker in comment.body:
                return comment
        return None
