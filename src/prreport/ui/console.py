"""Rich-powered console output for prreport."""

from __future__ import annotations

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from prreport.comment.sections import Section
from prreport.github.publisher import PublishAction, PublishResult


class Console:
    """Terminal output for prreport using Rich. Diagnostics go to stderr."""

    def __init__(self) -> None:
        self.console = RichConsole(stderr=True)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def markdown(self, text: str) -> None:
        """Render markdown text."""
        self.console.print(Markdown(text))

    def show_sections(self, sections: list[Section]) -> None:
        """Display the sections of a status comment in render order."""
        table = Table(title="Status Comment Sections", border_style="cyan")
        table.add_column("Priority", justify="right", style="cyan")
        table.add_column("Section", style="bold")
        table.add_column("Lines", justify="right")

        for section in sorted(sections, key=lambda s: s.priority):
            table.add_row(
                str(section.priority),
                section.identifier.value,
                str(len(section.content.splitlines())),
            )

        self.console.print(table)

    def show_publish_result(self, result: PublishResult) -> None:
        """Summarize what happened to the status comment."""
        prefix = "[dry-run] Would have " if result.dry_run else ""
        target = f"comment {result.comment_id}" if result.comment_id else "status comment"
        section = result.section.value

        if result.action is PublishAction.CREATED:
            self.success(f"{prefix}created {target} with section {section}")
        elif result.action is PublishAction.UPDATED:
            self.success(f"{prefix}updated section {section} in {target}")
        elif result.action is PublishAction.DELETED:
            self.success(f"{prefix}deleted {target} (no sections left)")
        elif result.action is PublishAction.UNCHANGED:
            self.info(f"Section {section} in {target} is already up to date")
        else:
            self.info(f"No status comment found, nothing to do for {section}")

        if result.dry_run and result.body:
            self.console.print(Panel(result.body, title="Comment body", border_style="dim"))


def setup_logging(verbose: bool = False) -> None:
    """Route prreport's loggers through Rich."""
    logger = logging.getLogger("prreport")
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        return

    handler = RichHandler(
        console=RichConsole(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
