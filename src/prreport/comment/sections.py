"""Section management for the aggregated PR status comment.

A status comment is a small ordered document of named sections. Each section
is written by a different validation job and delimited by a pair of HTML
comment markers, which are invisible once GitHub renders the Markdown:

    <!-- prreport: PR status report -->

    <!-- Build Size Section -->

    ...content...

    <!-- End Build Size Section -->

    ---

    <!-- Change Note Section -->
    ...

Every operation is a pure string transformation: parse the current body,
apply one change, and re-render the canonical form. Render order comes from
the registry priority only, so repeated runs produce byte-identical output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from prreport.exceptions import ConfigurationError

GUARD_MARKER = "<!-- prreport: PR status report -->"
SEPARATOR = "---"


class SectionId(str, Enum):
    """Sections that may appear in the status comment."""

    BUILD_SIZE = "BUILD_SIZE"
    PATH_VALIDATION = "PATH_VALIDATION"
    CHANGE_NOTE = "CHANGE_NOTE"


@dataclass(frozen=True)
class SectionDescriptor:
    """Registry entry: render priority (lower first) and delimiters."""

    identifier: SectionId
    priority: int
    start_marker: str
    end_marker: str


@dataclass(frozen=True)
class Section:
    """A section instance found in, or destined for, a comment body."""

    identifier: SectionId
    content: str
    priority: int
    start_marker: str
    end_marker: str

    @classmethod
    def from_descriptor(cls, descriptor: SectionDescriptor, content: str) -> Section:
        return cls(
            identifier=descriptor.identifier,
            content=content.strip(),
            priority=descriptor.priority,
            start_marker=descriptor.start_marker,
            end_marker=descriptor.end_marker,
        )


def _build_registry(descriptors: list[SectionDescriptor]) -> Mapping[SectionId, SectionDescriptor]:
    """Index descriptors by identifier, rejecting ambiguous entries."""
    registry: dict[SectionId, SectionDescriptor] = {}
    priorities: set[int] = set()
    markers: set[str] = {GUARD_MARKER}

    for desc in descriptors:
        if desc.identifier in registry:
            raise ConfigurationError(f"Duplicate section: {desc.identifier.value}")
        if desc.priority in priorities:
            raise ConfigurationError(
                f"Section {desc.identifier.value} reuses priority {desc.priority}"
            )
        for marker in (desc.start_marker, desc.end_marker):
            if not marker or marker in markers:
                raise ConfigurationError(
                    f"Section {desc.identifier.value} has an empty or duplicate marker: {marker!r}"
                )
            markers.add(marker)
        priorities.add(desc.priority)
        registry[desc.identifier] = desc

    return MappingProxyType(registry)


SECTIONS: Mapping[SectionId, SectionDescriptor] = _build_registry([
    SectionDescriptor(
        SectionId.BUILD_SIZE,
        priority=1,
        start_marker="<!-- Build Size Section -->",
        end_marker="<!-- End Build Size Section -->",
    ),
    SectionDescriptor(
        SectionId.PATH_VALIDATION,
        priority=2,
        start_marker="<!-- Path Validation Section -->",
        end_marker="<!-- End Path Validation Section -->",
    ),
    SectionDescriptor(
        SectionId.CHANGE_NOTE,
        priority=3,
        start_marker="<!-- Change Note Section -->",
        end_marker="<!-- End Change Note Section -->",
    ),
])


def get_descriptor(key: SectionId | str) -> SectionDescriptor:
    """Look up a registry entry by identifier or name.

    Raises:
        ConfigurationError: if the key is not a registered section.
    """
    try:
        section_id = SectionId(key)
    except ValueError:
        raise ConfigurationError(f"Unknown section key: {key}") from None
    return SECTIONS[section_id]


def is_owned_comment(body: str | None) -> bool:
    """Whether a comment body was written by this bot."""
    return bool(body) and GUARD_MARKER in body


def parse_sections(body: str | None) -> dict[SectionId, Section]:
    """Extract the registered sections present in a comment body.

    A section whose start marker is missing, or has no end marker after it,
    is treated as absent. The returned mapping carries no ordering meaning.
    """
    sections: dict[SectionId, Section] = {}
    if not body:
        return sections

    for section_id, desc in SECTIONS.items():
        start = body.find(desc.start_marker)
        if start == -1:
            continue
        inner_start = start + len(desc.start_marker)
        end = body.find(desc.end_marker, inner_start)
        if end == -1:
            continue
        sections[section_id] = Section.from_descriptor(desc, body[inner_start:end])

    return sections


def render_comment(sections: Mapping[SectionId, Section]) -> str | None:
    """Serialize sections into the canonical comment body.

    Returns None when there are no sections, meaning the comment should be
    deleted rather than posted empty.
    """
    if not sections:
        return None

    ordered = sorted(sections.values(), key=lambda s: s.priority)
    lines = [GUARD_MARKER]

    for i, section in enumerate(ordered):
        lines.extend(["", section.start_marker, "", section.content, "", section.end_marker])
        if i < len(ordered) - 1:
            lines.extend(["", SEPARATOR])

    return "\n".join(lines)


def upsert_section(body: str | None, key: SectionId | str, content: str) -> str:
    """Add a section to a comment body, or replace its content."""
    desc = get_descriptor(key)
    sections = parse_sections(body)
    sections[desc.identifier] = Section.from_descriptor(desc, content)
    return render_comment(sections)


def remove_section(body: str | None, key: SectionId | str) -> str | None:
    """Drop a section from a comment body.

    Returns None if no sections remain.
    """
    desc = get_descriptor(key)
    sections = parse_sections(body)
    sections.pop(desc.identifier, None)
    return render_comment(sections)


def create_comment(key: SectionId | str, content: str) -> str:
    """Build a fresh comment body holding a single section."""
    desc = get_descriptor(key)
    return render_comment({desc.identifier: Section.from_descriptor(desc, content)})
