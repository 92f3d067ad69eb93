#!/usr/bin/env python3
"""Demo: Using prreport as a Python library.

Shows several jobs sharing one status comment without any GitHub access.
"""

from prreport.comment import SectionId, create_comment, parse_sections, remove_section, upsert_section
from prreport.reports import ChangeNoteStatus, render_build_size, render_change_note_status


def main():
    # 1. The build job runs first and starts the comment
    print("--- Build job ---")
    body = create_comment(
        SectionId.BUILD_SIZE,
        render_build_size(pr_size=130 * 1024, base_size=100 * 1024, base_ref="main"),
    )
    print(body)

    # 2. The change note job adds its own section
    print("\n--- Change note job ---")
    body = upsert_section(
        body,
        SectionId.CHANGE_NOTE,
        render_change_note_status(ChangeNoteStatus.DOC_ONLY),
    )
    print(body)

    # 3. Sections always render in priority order
    print("\n--- Sections ---")
    for section in sorted(parse_sections(body).values(), key=lambda s: s.priority):
        print(f"  {section.priority}. {section.identifier.value}")

    # 4. Removing every section means the comment should be deleted
    body = remove_section(body, SectionId.BUILD_SIZE)
    body = remove_section(body, SectionId.CHANGE_NOTE)
    print(f"\nAfter removing all sections: {body!r}")


if __name__ == "__main__":
    main()
