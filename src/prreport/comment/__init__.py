"""Composition of the aggregated PR status comment.

Usage:
    from prreport.comment import SectionId, create_comment, upsert_section

    body = create_comment(SectionId.BUILD_SIZE, "Size: +1KB")
    body = upsert_section(body, SectionId.CHANGE_NOTE, "All good")
"""

from prreport.comment.sections import (
    GUARD_MARKER,
    SECTIONS,
    Section,
    SectionDescriptor,
    SectionId,
    create_comment,
    get_descriptor,
    is_owned_comment,
    parse_sections,
    remove_section,
    render_comment,
    upsert_section,
)

__all__ = [
    "GUARD_MARKER",
    "SECTIONS",
    "Section",
    "SectionDescriptor",
    "SectionId",
    "create_comment",
    "get_descriptor",
    "is_owned_comment",
    "parse_sections",
    "remove_section",
    "render_comment",
    "upsert_section",
]
