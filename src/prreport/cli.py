"""Command-line interface for prreport."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from prreport import __version__
from prreport.comment.sections import (
    SECTIONS,
    is_owned_comment,
    parse_sections,
    remove_section,
    upsert_section,
)
from prreport.config import (
    ActionsContext,
    ReportConfig,
    find_project_root,
    load_config,
    save_config,
    set_config_value,
)
from prreport.exceptions import PRReportError
from prreport.ui.console import Console, setup_logging

console = Console()

SECTION_NAMES = [s.value for s in SECTIONS]


def _get_project_root(path: str | None = None) -> Path:
    """Resolve the project root; config defaults apply when none exists."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root
    return find_project_root() or Path.cwd()


def _connect(config: ReportConfig, repo: str | None, pr: int | None):
    """Build the GitHub client and find the PR number to report on."""
    from prreport.github.client import GitHubClient

    ctx = ActionsContext.from_environment()
    repo = repo or config.github.repo or ctx.repo
    pr_number = pr or ctx.pr_number
    if not repo or not pr_number:
        console.error(
            "No pull request to report on. Pass --repo and --pr, "
            "or run inside a pull_request workflow."
        )
        sys.exit(1)
    client = GitHubClient(repo, token=config.github.token, timeout=config.github.timeout)
    return client, pr_number, ctx


def _changed_files(client, pr_number: int, files: tuple[str, ...]) -> list[str]:
    if files:
        return list(files)
    return client.list_changed_files(pr_number)


def pr_options(func):
    """Options shared by every command that writes to a pull request."""
    func = click.option("--dry-run", is_flag=True, help="Show the comment instead of posting it.")(func)
    func = click.option("--pr", type=int, default=None, help="Pull request number.")(func)
    func = click.option("--repo", "-r", default=None, help="Repository as owner/name.")(func)
    func = click.option("--path", "-p", default=None, help="Path to the project root.")(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="prreport")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """prreport - one aggregated status comment per pull request."""
    setup_logging(verbose)


# =========================================================================
# Section reports
# =========================================================================

@main.command("build-size")
@click.option("--pr-size", type=int, required=True, help="Artifact size on the PR branch, in bytes.")
@click.option("--base-size", type=int, required=True, help="Artifact size on the base branch, in bytes.")
@click.option("--base-ref", default=None, help="Base branch name (default: GITHUB_BASE_REF).")
@pr_options
def build_size(
    pr_size: int, base_size: int, base_ref: str | None,
    path: str | None, repo: str | None, pr: int | None, dry_run: bool,
):
    """Report the build size delta in the Build Size section."""
    from prreport.github.publisher import publish_section
    from prreport.reports.build_size import render_build_size

    config = load_config(_get_project_root(path))
    try:
        client, pr_number, ctx = _connect(config, repo, pr)
        content = render_build_size(
            pr_size,
            base_size,
            base_ref or ctx.base_ref,
            artifact=config.build_size.artifact,
            threshold_kb=config.build_size.threshold_kb,
        )
        result = publish_section(client, pr_number, "BUILD_SIZE", content, dry_run=dry_run)
    except PRReportError as e:
        console.error(str(e))
        sys.exit(1)
    console.show_publish_result(result)


@main.command("path-rules")
@click.option("--base-ref", default=None, help="Base branch name (default: GITHUB_BASE_REF).")
@click.option("--file", "-f", "files", multiple=True, help="Changed file (default: ask GitHub).")
@pr_options
def path_rules(
    base_ref: str | None, files: tuple[str, ...],
    path: str | None, repo: str | None, pr: int | None, dry_run: bool,
):
    """Apply the configured path rules to the PR's changed files.

    Adds the Path Validation section when a rule matches and removes it
    otherwise.
    """
    from prreport.github.publisher import publish_section, retract_section
    from prreport.reports.path_rules import evaluate_rules

    config = load_config(_get_project_root(path))
    try:
        client, pr_number, ctx = _connect(config, repo, pr)
        changed = _changed_files(client, pr_number, files)
        content = evaluate_rules(config.path_rules, base_ref or ctx.base_ref, changed)
        if content is None:
            result = retract_section(client, pr_number, "PATH_VALIDATION", dry_run=dry_run)
        else:
            result = publish_section(client, pr_number, "PATH_VALIDATION", content, dry_run=dry_run)
    except PRReportError as e:
        console.error(str(e))
        sys.exit(1)
    console.show_publish_result(result)


@main.command("change-notes")
@click.option("--file", "-f", "files", multiple=True, help="Changed file (default: ask GitHub).")
@pr_options
def change_notes(
    files: tuple[str, ...],
    path: str | None, repo: str | None, pr: int | None, dry_run: bool,
):
    """Report whether the PR carries a change note. Fails when one is missing."""
    from prreport.github.publisher import publish_section
    from prreport.reports.change_notes import (
        assess_change_notes,
        note_files,
        render_change_note_status,
    )

    config = load_config(_get_project_root(path))
    cfg = config.change_notes
    try:
        client, pr_number, _ = _connect(config, repo, pr)
        changed = _changed_files(client, pr_number, files)
        status = assess_change_notes(changed, cfg.note_patterns, cfg.doc_patterns)
        content = render_change_note_status(
            status,
            notes=note_files(changed, cfg.note_patterns),
            docs_url=cfg.docs_url,
        )
        result = publish_section(client, pr_number, "CHANGE_NOTE", content, dry_run=dry_run)
    except PRReportError as e:
        console.error(str(e))
        sys.exit(1)
    console.show_publish_result(result)

    if not status.passed:
        console.error("Change note validation failed")
        sys.exit(1)


# =========================================================================
# Raw section access
# =========================================================================

@main.group()
def section():
    """Write or remove a section with caller-supplied content."""


@section.command("set")
@click.argument("key", type=click.Choice(SECTION_NAMES))
@click.option("--content", "-c", default=None, help="Section markdown (default: read stdin).")
@pr_options
def section_set(
    key: str, content: str | None,
    path: str | None, repo: str | None, pr: int | None, dry_run: bool,
):
    """Set the content of one section of the status comment."""
    from prreport.github.publisher import publish_section

    if content is None:
        content = click.get_text_stream("stdin").read()

    config = load_config(_get_project_root(path))
    try:
        client, pr_number, _ = _connect(config, repo, pr)
        result = publish_section(client, pr_number, key, content, dry_run=dry_run)
    except PRReportError as e:
        console.error(str(e))
        sys.exit(1)
    console.show_publish_result(result)


@section.command("remove")
@click.argument("key", type=click.Choice(SECTION_NAMES))
@pr_options
def section_remove(
    key: str,
    path: str | None, repo: str | None, pr: int | None, dry_run: bool,
):
    """Remove one section; the comment is deleted when it becomes empty."""
    from prreport.github.publisher import retract_section

    config = load_config(_get_project_root(path))
    try:
        client, pr_number, _ = _connect(config, repo, pr)
        result = retract_section(client, pr_number, key, dry_run=dry_run)
    except PRReportError as e:
        console.error(str(e))
        sys.exit(1)
    console.show_publish_result(result)


@main.command()
@click.argument("key", type=click.Choice(SECTION_NAMES))
@click.option("--body-file", type=click.File("r"), default=None,
              help="Existing comment body (default: start a fresh comment).")
@click.option("--content", "-c", default=None, help="Section markdown (default: read stdin).")
@click.option("--remove", is_flag=True, help="Remove the section instead of setting it.")
def render(key: str, body_file, content: str | None, remove: bool):
    """Compose a comment body locally and print it. No GitHub access.

    Examples:

        echo "Size: +1KB" | prreport render BUILD_SIZE

        prreport render CHANGE_NOTE --body-file old.md -c "All good"
    """
    body = body_file.read() if body_file else ""
    if body and not is_owned_comment(body):
        console.warning("Existing body has no status marker; only registered sections are kept")

    if remove:
        new_body = remove_section(body, key)
        if new_body is None:
            console.info("No sections left: the comment should be deleted")
            return
    else:
        if content is None:
            content = click.get_text_stream("stdin").read()
        new_body = upsert_section(body, key, content)

    click.echo(new_body)
    console.show_sections(list(parse_sections(new_body).values()))


# =========================================================================
# Config Management
# =========================================================================

@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage prreport configuration."""
    root = _get_project_root(path)
    config = load_config(root)

    if action == "show":
        click.echo(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: prreport config get <key>")
            sys.exit(1)
        data = config.model_dump()
        for part in key.split("."):
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                console.error(f"Unknown key: {key}")
                sys.exit(1)
        click.echo(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: prreport config set <key> <value>")
            sys.exit(1)
        try:
            # Try to parse as JSON for non-string values
            try:
                parsed_value = json.loads(value)
            except json.JSONDecodeError:
                parsed_value = value

            config = set_config_value(config, key, parsed_value)
            save_config(root, config)
            console.success(f"Set {key} = {parsed_value}")
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(1)


if __name__ == "__main__":
    main()
