"""Build size comparison section.

Compares the size of a build artifact on the PR branch against the base
branch and flags large swings with a badge.
"""

from __future__ import annotations

import re

from prreport.exceptions import ValidationError

_UNSAFE_REF_CHARS = re.compile(r"[^\w./:-]")


def _humanize(size_bytes: float) -> str:
    return f"{size_bytes / 1024:.1f} KB"


def validate_sizes(pr_size: float, base_size: float, base_ref: str) -> str:
    """Check renderer inputs and return the sanitized base ref.

    Raises:
        ValidationError: on a negative PR size, a non-positive base size, or
            a base ref with no usable characters.
    """
    if pr_size < 0:
        raise ValidationError(f"Invalid PR size: {pr_size}")
    if base_size <= 0:
        raise ValidationError(f"Invalid base size: {base_size}")
    clean_ref = _UNSAFE_REF_CHARS.sub("", base_ref or "")
    if not clean_ref:
        raise ValidationError(f"Invalid base ref: {base_ref!r}")
    return clean_ref


def render_build_size(
    pr_size: float,
    base_size: float,
    base_ref: str,
    artifact: str = "empty.html",
    threshold_kb: int = 20,
) -> str:
    """Render the build size comparison as GitHub markdown."""
    base_ref = validate_sizes(pr_size, base_size, base_ref)

    diff = pr_size - base_size
    sign = "+" if diff >= 0 else "-"
    if diff > 0:
        direction = "⬆️ Increase"
    elif diff < 0:
        direction = "⬇️ Decrease"
    else:
        direction = "➖ No change"

    threshold = threshold_kb * 1024
    badge = ""
    alert = ""
    if diff > threshold:
        badge = "![🔴 Significant Increase](https://img.shields.io/badge/Size-Increase-red)"
        alert = "⚠️ **Warning:** Size increased significantly."
    elif diff < -threshold:
        badge = "![🟢 Significant Decrease](https://img.shields.io/badge/Size-Decrease-brightgreen)"
        alert = "✅ **Great job!** Size decreased significantly."

    lines = [
        f"### 📊 Build Size Comparison: `{artifact}`",
        "",
        "| Branch | Size |",
        "|--------|------|",
        f"| Base ({base_ref}) | {_humanize(base_size)} |",
        f"| PR | {_humanize(pr_size)} |",
        "",
        f"**Diff:** **{direction}: `{sign}{_humanize(abs(diff))}`**",
    ]
    if badge:
        lines.extend(["", badge, "", alert])
    return "\n".join(lines)
