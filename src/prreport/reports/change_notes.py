"""Change note status section.

Decides, from the list of files a PR touches, whether the PR ships a change
note, needs one, or only touches documentation. Validating the contents of
note files is left to the project's own tooling.
"""

from __future__ import annotations

import fnmatch
from enum import Enum


class ChangeNoteStatus(str, Enum):
    """Outcome of the change note check."""

    PRESENT = "present"
    MISSING = "missing"
    DOC_ONLY = "doc_only"
    DOC_ONLY_WITH_NOTES = "doc_only_with_notes"

    @property
    def passed(self) -> bool:
        return self is not ChangeNoteStatus.MISSING


def _matches_any(path: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(path, p) for p in patterns)


def note_files(changed_files: list[str], note_patterns: list[str]) -> list[str]:
    """Changed files that are change notes."""
    return [f for f in changed_files if _matches_any(f, note_patterns)]


def assess_change_notes(
    changed_files: list[str],
    note_patterns: list[str],
    doc_patterns: list[str],
) -> ChangeNoteStatus:
    """Classify a PR by the files it changes."""
    notes = note_files(changed_files, note_patterns)
    code = [
        f for f in changed_files
        if f not in notes and not _matches_any(f, doc_patterns)
    ]

    if code:
        return ChangeNoteStatus.PRESENT if notes else ChangeNoteStatus.MISSING
    if notes:
        return ChangeNoteStatus.DOC_ONLY_WITH_NOTES
    return ChangeNoteStatus.DOC_ONLY


def render_change_note_status(
    status: ChangeNoteStatus,
    notes: list[str] | None = None,
    docs_url: str = "",
) -> str:
    """Render the change note status as GitHub markdown."""
    docs = f"📚 **Documentation**: [Change notes]({docs_url})" if docs_url else ""

    if status is ChangeNoteStatus.PRESENT:
        lines = [
            "## ✅ Change Note Status",
            "",
            "This PR includes a change note.",
        ]
        if notes:
            lines.append("")
            lines.extend(f"- `{f}`" for f in sorted(notes))
    elif status is ChangeNoteStatus.MISSING:
        lines = [
            "## ⚠️ Change Note Status",
            "",
            "This PR appears to contain code changes but doesn't include a change note.",
            "",
            "💡 **Note**: If this is a documentation-only change, you can ignore this message.",
        ]
        if docs:
            lines.extend(["", docs])
    elif status is ChangeNoteStatus.DOC_ONLY_WITH_NOTES:
        lines = [
            "## ✅ Change Note Status",
            "",
            "This PR contains documentation or configuration changes "
            "(including changes to release notes) that typically don't require a change note.",
        ]
    else:
        lines = [
            "## ✅ Change Note Status",
            "",
            "This PR contains documentation or configuration changes "
            "that typically don't require a change note.",
        ]

    return "\n".join(lines)
