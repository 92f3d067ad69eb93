"""Publish one section of the status comment to a pull request.

Each job fetches the bot's comment, swaps its own section in or out and
writes the result back. The fetch/compose/write cycle is not atomic: two
jobs running at once against the same PR can each read the old body, and
the last writer wins. Serialize jobs per PR (e.g. a workflow concurrency
group) if that matters.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel

from prreport.comment.sections import (
    SectionId,
    create_comment,
    get_descriptor,
    remove_section,
    upsert_section,
)
from prreport.github.store import CommentStore

logger = logging.getLogger("prreport.publisher")


class PublishAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DELETED = "deleted"
    SKIPPED = "skipped"


class PublishResult(BaseModel):
    """What a publish call did (or would do, in dry-run mode)."""

    action: PublishAction
    section: SectionId
    body: str | None = None
    comment_id: int | None = None
    dry_run: bool = False


def publish_section(
    store: CommentStore,
    pr_number: int,
    key: SectionId | str,
    content: str,
    dry_run: bool = False,
) -> PublishResult:
    """Create or update the status comment with new content for one section."""
    section = get_descriptor(key).identifier
    existing = store.find_owned_comment(pr_number)

    if existing is None:
        body = create_comment(section, content)
        if dry_run:
            logger.info("[dry-run] Would create comment:\n%s", body)
            return PublishResult(action=PublishAction.CREATED, section=section, body=body, dry_run=True)
        created = store.create_comment(pr_number, body)
        return PublishResult(
            action=PublishAction.CREATED, section=section, body=body, comment_id=created.id
        )

    body = upsert_section(existing.body, section, content)
    if body == existing.body:
        logger.info("Section %s already up to date", section.value)
        return PublishResult(
            action=PublishAction.UNCHANGED, section=section, body=body,
            comment_id=existing.id, dry_run=dry_run,
        )

    if dry_run:
        logger.info("[dry-run] Would update comment %s:\n%s", existing.id, body)
    else:
        store.update_comment(pr_number, existing.id, body)
    return PublishResult(
        action=PublishAction.UPDATED, section=section, body=body,
        comment_id=existing.id, dry_run=dry_run,
    )


def retract_section(
    store: CommentStore,
    pr_number: int,
    key: SectionId | str,
    dry_run: bool = False,
) -> PublishResult:
    """Remove one section; delete the comment once nothing is left in it."""
    section = get_descriptor(key).identifier
    existing = store.find_owned_comment(pr_number)

    if existing is None:
        logger.info("No status comment on PR #%s, nothing to remove", pr_number)
        return PublishResult(action=PublishAction.SKIPPED, section=section, dry_run=dry_run)

    body = remove_section(existing.body, section)
    if body is None:
        if dry_run:
            logger.info("[dry-run] Would delete comment %s", existing.id)
        else:
            store.delete_comment(pr_number, existing.id)
        return PublishResult(
            action=PublishAction.DELETED, section=section,
            comment_id=existing.id, dry_run=dry_run,
        )

    if body == existing.body:
        return PublishResult(
            action=PublishAction.UNCHANGED, section=section, body=body,
            comment_id=existing.id, dry_run=dry_run,
        )

    if dry_run:
        logger.info("[dry-run] Would update comment %s:\n%s", existing.id, body)
    else:
        store.update_comment(pr_number, existing.id, body)
    return PublishResult(
        action=PublishAction.UPDATED, section=section, body=body,
        comment_id=existing.id, dry_run=dry_run,
    )
