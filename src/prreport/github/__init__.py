"""GitHub integration: the comment store and the section publisher."""

from prreport.github.client import GitHubClient
from prreport.github.publisher import (
    PublishAction,
    PublishResult,
    publish_section,
    retract_section,
)
from prreport.github.store import CommentStore, PRComment

__all__ = [
    "CommentStore",
    "GitHubClient",
    "PRComment",
    "PublishAction",
    "PublishResult",
    "publish_section",
    "retract_section",
]
