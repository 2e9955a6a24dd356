"""CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from httpstreaming.core.config import Settings, get_settings
from httpstreaming.core.exceptions import HttpStreamingError
from httpstreaming.http.client import StreamingClient
from httpstreaming.reporter.console import ConsoleProgressRenderer
from httpstreaming.reporter.rich import RichProgressRenderer
from httpstreaming.streams.progress import ProgressStream

app = typer.Typer(
    name="httpstreaming",
    help="Stream HTTP uploads and downloads with progress and bandwidth limits",
    no_args_is_help=True,
)
console = Console(stderr=True)


def _configure(limit: int | None, progress: bool | None, debug: bool) -> Settings:
    overrides: dict[str, object] = {}
    if limit is not None:
        overrides["bandwidth_limit"] = limit
    if progress is not None:
        overrides["show_progress"] = progress
    if debug:
        overrides["debug"] = True
        overrides["log_level"] = "DEBUG"
    settings = get_settings(**overrides)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    return settings


def _renderer(settings: Settings, fancy: bool, description: str) -> RichProgressRenderer | None:
    if fancy and settings.show_progress:
        return RichProgressRenderer(console=console, description=description)
    return None


@app.command()
def version() -> None:
    """Show version."""
    from httpstreaming import __version__

    typer.echo(f"httpstreaming {__version__}")


@app.command()
def download(
    url: str = typer.Argument(..., help="URL to fetch"),
    dest: str = typer.Argument(..., help="Destination file, '-' for stdout"),
    limit: int | None = typer.Option(None, "--limit", "-l", min=0, help="Bytes per second"),
    progress: bool | None = typer.Option(None, "--progress/--no-progress", help="Show progress"),
    fancy: bool = typer.Option(False, "--fancy", help="Rich progress bar instead of a plain line"),
    debug: bool = typer.Option(False, "--debug", help="Log streaming notices"),
) -> None:
    """Download URL into DEST without buffering the body in memory."""
    settings = _configure(limit, progress, debug)
    renderer = _renderer(settings, fancy, Path(url).name or "download")
    try:
        with StreamingClient(settings=settings, renderer=renderer) as client:
            if dest == "-":
                # progress must not end up in the downloaded bytes
                sink = client.wrap(
                    sys.stdout.buffer,
                    renderer=renderer or ConsoleProgressRenderer(sys.stderr),
                )
                try:
                    response = client.get(url, sink=sink)
                finally:
                    sink.flush()
                    if isinstance(sink, ProgressStream):
                        sink.finish()
                if response.is_error:
                    console.print(f"[red]HTTP {response.status_code}[/red]")
                    raise typer.Exit(code=1)
            else:
                path = client.download(url, dest)
                console.print(f"[green]Saved[/green] {path}")
    except HttpStreamingError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def upload(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to send"),
    url: str = typer.Argument(..., help="Target URL"),
    method: str = typer.Option("PUT", "--method", "-X", help="HTTP method"),
    limit: int | None = typer.Option(None, "--limit", "-l", min=0, help="Bytes per second"),
    progress: bool | None = typer.Option(None, "--progress/--no-progress", help="Show progress"),
    fancy: bool = typer.Option(False, "--fancy", help="Rich progress bar instead of a plain line"),
    debug: bool = typer.Option(False, "--debug", help="Log streaming notices"),
) -> None:
    """Upload SOURCE to URL as a streamed request body."""
    settings = _configure(limit, progress, debug)
    renderer = _renderer(settings, fancy, source.name)
    try:
        with StreamingClient(settings=settings, renderer=renderer) as client:
            response = client.upload(source, url, method=method.upper())
    except HttpStreamingError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]HTTP {response.status_code}[/green] {url}")


if __name__ == "__main__":
    app()
