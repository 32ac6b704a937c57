"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from keyoku.core.domain.models import Job, JobStatus, MemorySearchResult, Stats

_STATUS_STYLES = {
    JobStatus.PENDING: "yellow",
    JobStatus.PROCESSING: "cyan",
    JobStatus.COMPLETED: "green",
    JobStatus.FAILED: "red",
}


def build_memories_table(memories: Iterable[MemorySearchResult]) -> Table:
    """Tabla de resultados de búsqueda."""

    table = Table(title="Memories")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Content", style="white")
    table.add_column("Created", style="dim")
    for memory in memories:
        table.add_row(
            memory.id,
            memory.type or "-",
            f"{memory.score:.2f}" if memory.score is not None else "-",
            memory.content,
            memory.created_at.isoformat(),
        )
    return table


def build_stats_table(stats: Stats) -> Table:
    table = Table(title=f"Total memories: {stats.total_memories}")
    table.add_column("Type", style="cyan")
    table.add_column("Count", style="white", justify="right")
    for memory_type, count in sorted(stats.by_type.items()):
        table.add_row(memory_type, str(count))
    return table


def build_job_panel(job: Job) -> Panel:
    """Panel con el estado de un job."""

    style = _STATUS_STYLES.get(job.status, "white")
    body = Text()
    body.append("Status: ", style="bold")
    body.append(job.status.value + "\n", style=style)
    body.append(f"Created: {job.created_at.isoformat()}\n")
    if job.completed_at:
        body.append(f"Completed: {job.completed_at.isoformat()}\n")
    if job.error:
        body.append(f"Error: {job.error}\n", style="red")
    if job.result:
        body.append("Result:\n", style="bold")
        for key, value in job.result.items():
            body.append(f"- {key}: {value}\n")
    return Panel(body, title=Text(f"Job {job.id}", style="bold"), border_style=style)
