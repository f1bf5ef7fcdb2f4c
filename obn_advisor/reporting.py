"""Rendering of compliance reports for human review."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.console import Console
from rich.table import Table

from .catalog import PatternEntry
from .engine import ComplianceReport

logger = logging.getLogger(__name__)

_env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(['html', 'xml']),
)


@dataclass(frozen=True)
class ProposedAction:
    """A change the operator must approve before anything is applied."""
    type: str
    description: str
    diff: Optional[str] = None
    requires_approval: bool = True


def proposed_actions(report: ComplianceReport) -> List[ProposedAction]:
    """Turn recommended updates into approval-gated config actions."""
    return [
        ProposedAction(
            type='update_config',
            description=f"{update.pattern_title}: {update.reason}",
            diff=update.config_diff,
        )
        for update in report.updates
    ]


def render_status(report: ComplianceReport, catalog: Sequence[PatternEntry], version: str) -> str:
    """Markdown summary: version, applied count and available updates."""
    template = _env.get_template("status.md.j2")
    return template.render(
        version=version,
        applied_count=len(report.applied),
        total=len(catalog),
        updates=report.updates,
    ).strip()


def render_updates(report: ComplianceReport) -> str:
    """Markdown listing of each update with its diff."""
    template = _env.get_template("updates.md.j2")
    return template.render(updates=report.updates).strip()


def print_report(report: ComplianceReport, console: Optional[Console] = None) -> None:
    """Print applied patterns and updates as rich tables."""
    console = console or Console()

    applied_table = Table(title="Applied Patterns")
    applied_table.add_column("Pattern", style="green")
    applied_table.add_column("Slug")
    applied_table.add_column("Detected via", style="dim")
    for pattern in report.applied:
        applied_table.add_row(pattern.title, pattern.slug, pattern.detected_via)
    console.print(applied_table)

    if not report.updates:
        console.print("[green]All applicable patterns are up to date.[/green]")
        return

    updates_table = Table(title="Available Updates")
    updates_table.add_column("Pattern", style="yellow")
    updates_table.add_column("Reason")
    for update in report.updates:
        updates_table.add_row(update.pattern_title, update.reason)
    console.print(updates_table)
