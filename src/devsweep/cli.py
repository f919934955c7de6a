"""CLI interface for devsweep."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Callable

import click

from devsweep import __version__
from devsweep.config import DevSweepConfig, config_path, load_config, save_config
from devsweep.core.engine import DevSweepEngine
from devsweep.display import print_clean_summary, print_results_table, print_summary, project_label
from devsweep.errors import DevSweepError
from devsweep.models.scan_result import ScannedProject
from devsweep.utils import bytes_to_human, parse_selection


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _load_config() -> DevSweepConfig:
    try:
        return load_config()
    except DevSweepError as e:
        raise click.ClickException(str(e)) from e


def _scan_root(path: str | None, config: DevSweepConfig) -> Path:
    if path:
        return Path(path).expanduser()
    if config.default_roots:
        return config.default_roots[0]
    return Path.cwd()


def _scan_options(func: Callable) -> Callable:
    """Options shared by every command that scans a tree."""

    @click.argument("path", required=False, type=click.Path(file_okay=False))
    @click.option("-d", "--max-depth", type=click.IntRange(min=0), default=None, help="Maximum directory depth to scan")
    @click.option("-o", "--older-than", default=None, help="Only projects untouched for this long (e.g. 30d, 3m, 1y)")
    @click.option("--json", "as_json", is_flag=True, help="Output as JSON")
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DevSweepError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def _run_scan(path: str | None, max_depth: int | None, older_than: str | None) -> tuple[Path, list[ScannedProject], DevSweepEngine]:
    config = _load_config()
    root = _scan_root(path, config)
    engine = DevSweepEngine(config)
    return root, engine.scan(root, max_depth=max_depth, older_than=older_than), engine


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.version_option(__version__, prog_name="devsweep")
@click.pass_context
def main(ctx: click.Context, verbose: int) -> None:
    """devsweep: find and clean build artifacts across your dev projects."""
    _setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(scan)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@_scan_options
def scan(path: str | None = None, max_depth: int | None = None, older_than: str | None = None, as_json: bool = False) -> None:
    """Scan for projects and show what can be cleaned (never deletes)."""
    _, projects, _ = _run_scan(path, max_depth, older_than)
    if as_json:
        click.echo(json.dumps([p.to_dict() for p in projects], indent=2))
        return
    print_results_table(projects)


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@_scan_options
@click.option("-a", "--all", "clean_all", is_flag=True, help="Clean every project found")
@click.option("-s", "--select", "selection", default=None, help="Projects to clean by number, e.g. '1,3-5'")
@click.option("--dry-run", is_flag=True, help="Show what would be cleaned without deleting anything")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def clean(
    path: str | None,
    max_depth: int | None,
    older_than: str | None,
    as_json: bool,
    clean_all: bool,
    selection: str | None,
    dry_run: bool,
    yes: bool,
) -> None:
    """Select projects and delete their build artifacts."""
    if as_json and not (clean_all or selection):
        raise click.UsageError("--json needs --all or --select")
    if as_json and not (dry_run or yes):
        raise click.UsageError("--json needs --yes or --dry-run")

    _, projects, engine = _run_scan(path, max_depth, older_than)

    if not projects:
        if as_json:
            click.echo(json.dumps(_clean_payload([], dry_run), indent=2))
        else:
            print_results_table(projects)
        return

    if not as_json:
        print_results_table(projects)

    if clean_all:
        selected = projects
    else:
        if selection is None:
            selection = _prompt_selection(projects)
        selected = [projects[i] for i in parse_selection(selection, len(projects))]
        if not selected:
            if as_json:
                click.echo(json.dumps(_clean_payload([], dry_run), indent=2))
            else:
                click.echo("  Nothing selected.\n")
            return

    if not dry_run and not yes:
        total = sum(p.total_cleanable_bytes for p in selected)
        if not click.confirm(
            f"  Clean {len(selected)} projects? This will free {bytes_to_human(total)} and cannot be undone!",
            default=False,
        ):
            click.echo("  Aborted.\n")
            return

    if not as_json:
        action = "Would clean" if dry_run else "Cleaning"
        click.echo(f"\n  → {action} {len(selected)} projects...")

    results = engine.clean(selected, dry_run=dry_run)

    if as_json:
        click.echo(json.dumps(_clean_payload(results, dry_run), indent=2))
        return
    print_clean_summary(results, dry_run)


def _prompt_selection(projects: list[ScannedProject]) -> str:
    """Let the user pick which projects to clean."""
    click.echo(click.style("  Select projects to clean:", bold=True))
    click.echo("  Enter numbers separated by commas/spaces, ranges with dash (e.g. 1,3,5-8), or 'all'\n")
    for i, project in enumerate(projects, 1):
        click.echo(f"    {click.style(f'{i:>3}', fg='cyan', bold=True)}  {project_label(project)}")
    click.echo()
    return click.prompt("  ❯", default="", show_default=False)


def _clean_payload(results: list, dry_run: bool) -> dict:
    return {
        "dry_run": dry_run,
        "projects_cleaned": len(results),
        "total_bytes_freed": sum(r.bytes_freed for r in results),
        "results": [r.to_dict() for r in results],
        "errors": [e for r in results for e in r.errors],
    }


# ── summary ──────────────────────────────────────────────────────────────

@main.command()
@_scan_options
def summary(path: str | None, max_depth: int | None, older_than: str | None, as_json: bool) -> None:
    """Show a quick summary of reclaimable space by project type."""
    config = _load_config()
    engine = DevSweepEngine(config)
    data = engine.summary(_scan_root(path, config), max_depth=max_depth, older_than=older_than)

    if as_json:
        click.echo(json.dumps({
            "total_projects": data.total_projects,
            "total_reclaimable_bytes": data.total_reclaimable_bytes,
            "total_reclaimable_human": bytes_to_human(data.total_reclaimable_bytes),
            "by_kind": [
                {
                    "kind": str(k.kind),
                    "projects": k.projects,
                    "reclaimable_bytes": k.reclaimable_bytes,
                    "reclaimable_human": bytes_to_human(k.reclaimable_bytes),
                }
                for k in data.by_kind
            ],
        }, indent=2))
        return
    print_summary(data)


# ── config ───────────────────────────────────────────────────────────────

@main.command("config")
@click.option("--show", is_flag=True, help="Print the current config as JSON")
@click.option("--reset", is_flag=True, help="Reset config to defaults")
def config_cmd(show: bool, reset: bool) -> None:
    """Show or reset the devsweep configuration."""
    path = config_path()
    if reset:
        save_config(DevSweepConfig(), path)
        click.echo(f"  {click.style('✓', fg='green')} Config reset to defaults.")
        click.echo(f"  → {path}")
        return

    config = _load_config()
    if show:
        click.echo(json.dumps(config.to_dict(), indent=2))
        return

    exists = click.style("yes", fg="green") if path.exists() else click.style("no (using defaults)", dim=True)
    click.echo("\n  ⚙ devsweep configuration\n")
    click.echo(f"  Config file: {path}")
    click.echo(f"  Exists:      {exists}")
    click.echo(f"\n{json.dumps(config.to_dict(), indent=2)}")
    click.echo(f"\n  → Use {click.style('--show', fg='green')} or {click.style('--reset', fg='green')} to manage.\n")
