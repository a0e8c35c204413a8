"""todoissue CLI — Typer application with scan, plan, sync, and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from todoissue import __version__

app = typer.Typer(
    name="todoissue",
    help="Turn TODO comments in a diff into GitHub issues.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_FORMATS = ("terminal", "json")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)


def _mask(secret: str) -> str:
    """``abcdef`` → ``a****f``."""
    if len(secret) <= 2:
        return "*" * len(secret)
    return f"{secret[0]}{'*' * (len(secret) - 2)}{secret[-1]}"


def _config_root() -> Path:
    """Repo root when inside a git checkout, else the working directory."""
    from todoissue.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError:
        return Path.cwd()


def _load(config: Optional[str]):
    from todoissue.config.loader import ConfigError, load_config

    try:
        return load_config(_config_root(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _check_format(format: str) -> None:
    if format not in _FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
        raise typer.Exit(code=2)


def _read_diff_file(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] cannot read diff {escape(path)}: {exc}")
        raise typer.Exit(code=2) from exc


def _local_diff(diff: Optional[str], from_ref: Optional[str], to_ref: Optional[str]) -> str:
    """Diff from a file/stdin, a commit range, or the staged changes."""
    from todoissue.git.adapter import GitError, get_range_diff, get_repo_root, get_staged_diff

    if diff:
        return _read_diff_file(diff)
    try:
        repo_root = get_repo_root()
        if from_ref:
            return get_range_diff(repo_root, from_ref, to_ref or "HEAD")
        return get_staged_diff(repo_root)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _extract(diff_text: str, cfg):
    from todoissue.git.diff_parser import DiffParseError
    from todoissue.scanner.engine import Extractor

    try:
        return Extractor(cfg.to_filter_config()).run(diff_text)
    except DiffParseError as exc:
        console.print(f"[bold red]Diff error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .todoissue.toml"),
    diff: Optional[str] = typer.Option(None, "--diff", "-d", help="Read the diff from a file ('-' for stdin)"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (default HEAD)"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """List TODO markers added and removed by a diff (staged changes by default)."""
    from todoissue.output import json_report, terminal

    _configure_logging(verbose)
    _check_format(format)
    cfg = _load(config)

    diff_text = _local_diff(diff, from_ref, to_ref)
    result = _extract(diff_text, cfg)

    if format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, console=console)


# ── plan ──────────────────────────────────────────────────────────────────────


@app.command()
def plan(
    issues: str = typer.Option(..., "--issues", "-i", help="Open-issue snapshot (YAML or JSON)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .todoissue.toml"),
    diff: Optional[str] = typer.Option(None, "--diff", "-d", help="Read the diff from a file ('-' for stdin)"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (default HEAD)"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
) -> None:
    """Show which issues a diff would create and close, without calling GitHub."""
    from todoissue.output import json_report, terminal
    from todoissue.reconcile.planner import plan_reconciliation
    from todoissue.reconcile.snapshot import SnapshotError, load_issue_snapshot

    _check_format(format)
    cfg = _load(config)

    try:
        open_issues = load_issue_snapshot(Path(issues))
    except SnapshotError as exc:
        console.print(f"[bold red]Snapshot error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    result = _extract(_local_diff(diff, from_ref, to_ref), cfg)
    planned = plan_reconciliation(result.items, open_issues)

    if format == "json":
        print(json_report.render(result, planned))
    else:
        terminal.render(result, console=console, show_summary=False)
        terminal.render_plan(planned, console=console)


# ── sync ──────────────────────────────────────────────────────────────────────


@app.command()
def sync(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .todoissue.toml"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="owner/name (default: INPUT_REPOSITORY / GITHUB_REPOSITORY)"),
    base: Optional[str] = typer.Option(None, "--base", help="Base commit sha (default: INPUT_BASE_SHA)"),
    head: Optional[str] = typer.Option(None, "--head", help="Head commit sha (default: INPUT_SHA / GITHUB_SHA)"),
    token: Optional[str] = typer.Option(None, "--token", help="GitHub token (default: INPUT_TOKEN / GITHUB_TOKEN)"),
    diff: Optional[str] = typer.Option(None, "--diff", "-d", help="Use this diff instead of the GitHub compare API"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Parse and report, do not touch issues"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Create issues for new TODOs and close issues whose TODOs were removed."""
    from todoissue.config.loader import ConfigError, require_sync_options
    from todoissue.output import terminal
    from todoissue.reconcile.planner import plan_reconciliation
    from todoissue.tracker.github import GitHubTracker, TrackerError
    from todoissue.tracker.rate_limit import RateLimiter
    from todoissue.tracker.sync import SyncError, apply_plan

    _configure_logging(verbose)
    cfg = _load(config)

    # --- CLI overrides ---
    if repo:
        cfg.github.repository = repo
    if base:
        cfg.github.base_sha = base
    if head:
        cfg.github.sha = head
    if token:
        cfg.github.token = token
    no_publish = dry_run or cfg.github.no_publish

    try:
        require_sync_options(cfg, need_base=diff is None)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        console.print("Aborting.")
        raise typer.Exit(code=2) from exc

    gh = cfg.github
    console.print(f"[dim]Repository:[/dim] {escape(gh.repository)}")
    console.print(f"[dim]Base SHA:[/dim]   {escape(gh.base_sha or '-')}")
    console.print(f"[dim]Head SHA:[/dim]   {escape(gh.sha)}")
    console.print(f"[dim]Token:[/dim]      {_mask(gh.token)}")
    console.print(f"[dim]Signatures:[/dim] {escape(', '.join(cfg.markers.signatures))}")
    console.print(f"[dim]Comments:[/dim]   {escape(', '.join(cfg.markers.comments))}")
    console.print(f"[dim]Label:[/dim]      {escape(cfg.labels.issue_label)}")
    console.print(f"[dim]Delay:[/dim]      {gh.delay_ms}ms")
    if no_publish:
        console.print("[yellow]No publishing result mode.[/yellow]")

    limiter = RateLimiter(gh.delay_ms / 1000)
    with GitHubTracker(gh.repository, gh.token, api_url=gh.api_url, limiter=limiter) as tracker:
        if diff:
            diff_text = _read_diff_file(diff)
        else:
            try:
                diff_text = tracker.get_diff(gh.base_sha, gh.sha)
            except TrackerError as exc:
                console.print(f"[bold red]Failed to get diff:[/bold red] {escape(str(exc))}")
                raise typer.Exit(code=1) from exc

        result = _extract(diff_text, cfg)
        terminal.render(result, console=console)

        if no_publish:
            raise typer.Exit(code=0)

        try:
            open_issues = tracker.list_open_issues()
        except TrackerError as exc:
            console.print(f"[bold red]Failed to get open issues:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=1) from exc

        planned = plan_reconciliation(result.items, open_issues)
        terminal.render_plan(planned, console=console)

        try:
            report = apply_plan(planned, tracker, gh.sha)
        except SyncError as exc:
            console.print(f"[bold red]{escape(str(exc))}[/bold red]")
            if exc.remaining:
                console.print(f"[dim]Not processed ({len(exc.remaining)}):[/dim]")
                for action in exc.remaining:
                    console.print(f"  {escape(action.describe())}")
            terminal.render_report(exc.report, console=console)
            raise typer.Exit(code=1) from exc

    terminal.render_report(report, console=console)
    console.print("[green]Finished updating issues.[/green]")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .todoissue.toml in the repo root."""
    from todoissue.config.defaults import DEFAULT_TOML
    from todoissue.config.loader import CONFIG_FILENAME

    config_path = _config_root() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"todoissue {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """todoissue — Turn TODO comments in a diff into GitHub issues."""
