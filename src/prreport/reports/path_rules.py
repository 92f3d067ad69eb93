"""Path validation rules.

Each rule matches changed file paths against fnmatch-style globs, optionally
restricted to certain base branches. Matching rules contribute their message
to the Path Validation section. A matching rule with ``stop_processing`` set
suppresses the whole section.
"""

from __future__ import annotations

import fnmatch
import logging

from pydantic import BaseModel, Field

logger = logging.getLogger("prreport.rules")


class PathRule(BaseModel):
    """A single path validation rule."""

    name: str
    patterns: list[str] = Field(default_factory=list)
    base_refs: list[str] = Field(default_factory=list)  # empty = any base
    message: str = ""
    stop_processing: bool = False

    def matches(self, base_ref: str, changed_files: list[str]) -> bool:
        if self.base_refs and base_ref not in self.base_refs:
            return False
        return any(
            fnmatch.fnmatch(path, pattern)
            for path in changed_files
            for pattern in self.patterns
        )


def evaluate_rules(
    rules: list[PathRule], base_ref: str, changed_files: list[str]
) -> str | None:
    """Run rules in order and return the section content.

    Returns None when no rule contributed a message, or when a matched rule
    stopped processing; in both cases the section should be removed.
    """
    messages: list[str] = []
    for rule in rules:
        matched = rule.matches(base_ref, changed_files)
        logger.debug("Rule %r matched: %s", rule.name, matched)
        if not matched:
            continue
        if rule.stop_processing:
            logger.info("Rule %r stopped processing", rule.name)
            return None
        if rule.message.strip():
            messages.append(rule.message.strip())

    if not messages:
        return None
    return "\n\n".join(messages)
