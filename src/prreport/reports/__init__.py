"""Renderers for the individual sections of the status comment."""

from prreport.reports.build_size import render_build_size, validate_sizes
from prreport.reports.change_notes import (
    ChangeNoteStatus,
    assess_change_notes,
    note_files,
    render_change_note_status,
)
from prreport.reports.path_rules import PathRule, evaluate_rules

__all__ = [
    "ChangeNoteStatus",
    "PathRule",
    "assess_change_notes",
    "evaluate_rules",
    "note_files",
    "render_build_size",
    "render_change_note_status",
    "validate_sizes",
]
