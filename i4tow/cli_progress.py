"""Console rendering and progress helpers for the i4tow CLI."""
from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table

from .models import AlbumRequest, AlbumResult, ProgressEvent

console = Console()
err_console = Console(stderr=True)


def render_configuration_summary(config: Dict[str, Any], dry_run: bool = False) -> None:
    """Render startup configuration summary."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else escape(str(value))
        table.add_row(key, rendered)

    panel = Panel(
        table,
        title="[bold green]i4tow[/bold green]",
        subtitle="[dim]Photo Album Creator[/dim]",
        border_style="blue",
    )
    console.print(panel)
    if dry_run:
        console.print("[yellow]DRY RUN - no changes will be made[/yellow]")
    console.print()


def render_error(message: str, hint: Optional[str] = None) -> None:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    if hint:
        err_console.print(f"[dim]  {hint}[/dim]")


class AlbumProgressDisplay:
    """Event-based console display for album publishing."""

    def __init__(self, show_steps: bool = True):
        self._show_steps = show_steps
        self._status: Optional[Status] = None

    def _emit_timeline(self, status: str, label: str, detail: Optional[str] = None) -> None:
        stamp = time.strftime("%H:%M:%S")
        palette = {
            "DONE": "green",
            "FAIL": "red",
            "STEP": "cyan",
            "WARN": "yellow",
        }
        color = palette.get(status, "white")
        detail_label = f" [dim]{escape(str(detail))}[/dim]" if detail else ""
        console.print(f"[dim]{stamp}[/dim] [{color}]{status:<4}[/{color}] {escape(label)}{detail_label}")

    def on_album_start(self, request: AlbumRequest) -> None:
        if self._status is None:
            self._status = console.status(f"Processing {request.source_dir}...")
            self._status.start()
        else:
            self._status.update(f"Processing {request.source_dir}...")

    def on_progress(self, event: ProgressEvent) -> None:
        if self._status is not None:
            self._status.update(str(event))
        if not self._show_steps:
            return
        kind = "WARN" if event.step == "Warning" else "STEP"
        self._emit_timeline(kind, event.step, event.detail)

    def on_album_complete(self, result: AlbumResult) -> None:
        if not self._show_steps:
            return
        if result.success:
            self._emit_timeline("DONE", result.name, result.repo_url)
        else:
            self._emit_timeline("FAIL", result.name, result.error)

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


def render_results(results: Sequence[AlbumResult], dry_run: bool = False) -> None:
    """Print the per-album summary and next steps."""
    if not results:
        console.print(
            "[yellow]No albums created. Make sure the directory contains photos "
            "or subdirs with photos.[/yellow]"
        )
        return

    succeeded = [result for result in results if result.success]
    verb = "Would create" if dry_run else "Created"
    console.print(f"\n[green]{verb} {len(succeeded)} of {len(results)} album(s):[/green]\n")
    for result in results:
        if result.success:
            console.print(f"[green]  ✓ {result.name}[/green] [dim]({result.photo_count} photos)[/dim]")
            console.print(f"[dim]    {result.repo_url}[/dim]")
            console.print(f"[dim]    {result.album_url}[/dim]")
            for warning in result.warnings:
                console.print(f"[yellow]    ! {escape(warning)}[/yellow]")
        else:
            console.print(f"[red]  ✗ {result.name}: {escape(result.error or '')}[/red]")

    if not dry_run and succeeded:
        for line in next_steps():
            console.print(line)


def next_steps() -> List[str]:
    return [
        "\n[blue]Next steps:[/blue]",
        "[dim]  1. Wait for GitHub Actions to optimize photos (~2-5 min)[/dim]",
        "[dim]  2. Open the album URL listed above[/dim]",
    ]
