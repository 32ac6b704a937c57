"""CLI de Keyoku (Typer + Rich).

Por qué una CLI:
- Permite probar el servicio (guardar, buscar, esperar jobs, exportar) sin
  escribir código.
- Usa exactamente el mismo cliente que la librería: ningún atajo HTTP propio.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable
from pathlib import Path
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from keyoku.cli import doctor
from keyoku.cli.ui_components import build_job_panel, build_memories_table, build_stats_table
from keyoku.client import Keyoku
from keyoku.core.config import KeyokuSettings
from keyoku.core.domain.models import Job, SearchMode
from keyoku.core.errors import KeyokuError

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Keyoku memory service client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_client(settings: KeyokuSettings | None = None) -> Keyoku:
    return Keyoku(settings=settings or KeyokuSettings())


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx loguea cada request en INFO; el dispatcher ya lo hace en DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _run(coro: Awaitable[T]) -> T:
    """Ejecuta la corrutina y traduce `KeyokuError`/config a salida de CLI."""

    try:
        return asyncio.run(coro)  # type: ignore[arg-type]
    except KeyokuError as exc:
        _console.print(f"[red]{exc.kind.value}:[/red] {exc.message}")
        if exc.retry_after is not None:
            _console.print(f"[yellow]Retry after {exc.retry_after}s[/yellow]")
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        _console.print(f"[red]config:[/red] {exc}")
        raise typer.Exit(code=2) from exc


def _print_update(job: Job) -> None:
    _console.log(f"job {job.id}: {job.status.value}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    _configure_logging(verbose)


@app.command()
def remember(
    content: str = typer.Argument(..., help="Memory content to store."),
    session_id: Optional[str] = typer.Option(None, "--session-id"),
    agent_id: Optional[str] = typer.Option(None, "--agent-id"),
    wait: bool = typer.Option(False, "--wait", help="Wait until the job finishes."),
    poll_interval: float = typer.Option(0.5, "--poll-interval", min=0.0),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.0, help="Max seconds to wait."),
) -> None:
    """Store a memory (asynchronous job)."""

    async def _remember() -> None:
        async with build_client() as client:
            handle = await client.remember(content, session_id=session_id, agent_id=agent_id)
            _console.print(f"[green]Submitted job[/green] {handle.job_id}")
            if wait:
                job = await handle.wait(poll_interval=poll_interval, timeout=timeout, on_update=_print_update)
                _console.print(build_job_panel(job))

    _run(_remember())


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query."),
    limit: int = typer.Option(10, "--limit", min=1),
    mode: SearchMode = typer.Option(SearchMode.HYBRID, "--mode"),
    agent_id: Optional[str] = typer.Option(None, "--agent-id"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """Search memories."""

    async def _search() -> None:
        async with build_client() as client:
            memories = await client.search(query, limit=limit, mode=mode, agent_id=agent_id)
        if as_json:
            payload = [m.model_dump(mode="json", by_alias=True) for m in memories]
            typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
            return
        if not memories:
            _console.print("[yellow]No memories found.[/yellow]")
            return
        _console.print(build_memories_table(memories))

    _run(_search())


@app.command()
def stats() -> None:
    """Show memory statistics."""

    async def _stats() -> None:
        async with build_client() as client:
            result = await client.stats()
        _console.print(build_stats_table(result))

    _run(_stats())


@app.command()
def job(
    job_id: str = typer.Argument(..., help="Job identifier."),
    wait: bool = typer.Option(False, "--wait", help="Wait until the job finishes."),
    poll_interval: float = typer.Option(0.5, "--poll-interval", min=0.0),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.0),
) -> None:
    """Show (or wait for) a job."""

    async def _job() -> None:
        async with build_client() as client:
            handle = client.job(job_id)
            if wait:
                record = await handle.wait(poll_interval=poll_interval, timeout=timeout, on_update=_print_update)
            else:
                record = await handle.get()
        _console.print(build_job_panel(record))

    _run(_job())


@app.command()
def export(
    output: Path = typer.Option(Path("."), "--output", "-o", help="File or directory for the export."),
    poll_interval: float = typer.Option(1.0, "--poll-interval", min=0.0),
    timeout: Optional[float] = typer.Option(300.0, "--timeout", min=0.0),
) -> None:
    """Export all data (GDPR), wait for the job and download the file."""

    async def _export() -> Path:
        async with build_client() as client:
            started = await client.data.export()
            _console.print(f"[green]Export job[/green] {started.job_id} ({started.status})")
            await client.job(started.job_id).wait(
                poll_interval=poll_interval,
                timeout=timeout,
                on_update=_print_update,
            )
            return await client.data.download_to(started.job_id, output)

    path = _run(_export())
    _console.print(f"[green]Saved export to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
