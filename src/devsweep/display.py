"""Terminal rendering of scan, clean and summary results."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from devsweep.models.clean_result import CleanResult
from devsweep.models.scan_result import ScannedProject, ScanSummary
from devsweep.utils import bytes_to_human, format_age, shorten_path, truncate

_HEADERS = ("#", "Project", "Type", "Cleanable", "Targets", "Last Modified", "Path")
_MAX_TARGETS_WIDTH = 50
_MAX_PATH_WIDTH = 45


def project_label(project: ScannedProject) -> str:
    """One-line description used by the interactive selection prompt."""
    targets = ", ".join(t.name for t in project.clean_targets)
    return f"{project.name} ({project.kind}), {bytes_to_human(project.total_cleanable_bytes)} [{targets}]"


def _rows(projects: list[ScannedProject], now: datetime) -> list[tuple[str, ...]]:
    rows = []
    for i, p in enumerate(projects, 1):
        targets = ", ".join(f"{t.name} ({bytes_to_human(t.size_bytes)})" for t in p.clean_targets)
        rows.append((
            str(i),
            p.name,
            str(p.kind),
            bytes_to_human(p.total_cleanable_bytes),
            truncate(targets, _MAX_TARGETS_WIDTH),
            format_age(now - p.last_modified),
            truncate(shorten_path(p.path), _MAX_PATH_WIDTH),
        ))
    return rows


def print_results_table(projects: list[ScannedProject]) -> None:
    """Print a table of scanned projects, numbered for selection."""
    if not projects:
        click.echo(f"\n  {click.style('ℹ', fg='blue')} No projects with cleanable artifacts found.\n")
        return

    total = sum(p.total_cleanable_bytes for p in projects)
    click.echo(
        f"\n  {click.style('✓', fg='green', bold=True)} Found "
        f"{click.style(str(len(projects)), fg='cyan', bold=True)} projects with "
        f"{click.style(bytes_to_human(total), fg='yellow', bold=True)} of reclaimable space\n"
    )

    rows = _rows(projects, datetime.now(timezone.utc))
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(_HEADERS)]

    def _line(cells: tuple[str, ...]) -> str:
        return "  " + "  ".join(c.ljust(w) if i != 3 else c.rjust(w) for i, (c, w) in enumerate(zip(cells, widths)))

    click.echo(click.style(_line(_HEADERS), bold=True))
    click.echo("  " + "  ".join("─" * w for w in widths))
    for row in rows:
        click.echo(_line(row))
    click.echo()


def print_clean_summary(results: list[CleanResult], dry_run: bool) -> None:
    """Print the outcome of a clean run, listing every failed target."""
    total = sum(r.bytes_freed for r in results)
    targets = sum(r.targets_cleaned for r in results)
    size = click.style(bytes_to_human(total), fg="green" if not dry_run else "yellow", bold=True)

    if dry_run:
        click.echo(
            f"\n  🔍 Dry run complete. {size} would be freed from {targets} targets "
            f"across {len(results)} projects."
        )
        click.echo(f"  → Run without {click.style('--dry-run', fg='green')} to actually clean.")
    else:
        click.echo(f"\n  🧹 Cleaned! {size} freed from {targets} targets across {len(results)} projects.")

    errors = [(r.project_name, e) for r in results for e in r.errors]
    if errors:
        click.echo(f"  {click.style('⚠', fg='yellow')} {len(errors)} errors occurred:")
        for name, error in errors:
            click.echo(f"    {click.style('✗', fg='red')} {name}: {error}")
    click.echo()


def print_summary(summary: ScanSummary) -> None:
    """Print totals and the per-kind breakdown."""
    click.echo(f"\n  📊 devsweep summary for {shorten_path(summary.root)}\n")
    click.echo(f"  Total projects:     {click.style(str(summary.total_projects), fg='cyan')}")
    click.echo(
        f"  Reclaimable space:  "
        f"{click.style(bytes_to_human(summary.total_reclaimable_bytes), fg='yellow', bold=True)}\n"
    )
    if summary.by_kind:
        click.echo(click.style("  By project type:", dim=True))
        for entry in summary.by_kind:
            click.echo(
                f"    {str(entry.kind):>12}  {click.style(str(entry.projects), fg='cyan')} projects, "
                f"{click.style(bytes_to_human(entry.reclaimable_bytes), fg='yellow', bold=True)}"
            )
        click.echo()
