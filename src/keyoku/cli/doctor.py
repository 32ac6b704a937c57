"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from keyoku.client import Keyoku
from keyoku.core.config import KeyokuSettings, get_user_env_file, read_user_env_vars, write_user_env_vars
from keyoku.core.errors import KeyokuError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: KeyokuSettings) -> tuple[bool, str]:
    """Authenticated round trip against /v1/stats."""

    try:
        async with Keyoku(settings=settings) as client:
            stats = await client.stats()
        return True, f"{stats.total_memories} memories stored"
    except KeyokuError as exc:
        return False, f"{exc.kind.value}: {exc.message}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = KeyokuSettings()

    table = Table(title="Keyoku Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    has_key = bool(settings.api_key)
    table.add_row("API key", "OK" if has_key else "MISSING", "Set" if has_key else "Run `keyoku doctor setup`")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.timeout_seconds:g}s")
    table.add_row("Entity ID", "OK" if settings.entity_id else "OPTIONAL", settings.entity_id or "-")
    stored = read_user_env_vars()
    table.add_row(
        "User config",
        "OK" if stored else "OPTIONAL",
        f"{get_user_env_file()} ({len(stored)} keys)",
    )

    # Connectivity (solo si hay credencial)
    ok_api = False
    if has_key:
        ok_api, detail_api = asyncio.run(_check_api(settings))
        table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API connectivity", "SKIPPED", "No API key")

    _console.print(table)

    if not (has_key and ok_api):
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = KeyokuSettings()

    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    base_url = typer.prompt("Base URL", default=current.base_url, show_default=True).strip()
    entity_id = typer.prompt("Entity ID (optional)", default=current.entity_id or "", show_default=False).strip()

    if not api_key or not base_url:
        raise typer.BadParameter("api_key and base_url are required")

    env_path = write_user_env_vars(
        {
            "KEYOKU_API_KEY": api_key,
            "KEYOKU_BASE_URL": base_url,
            "KEYOKU_ENTITY_ID": entity_id or None,
        }
    )

    _console.print(f"[green]Saved Keyoku config to:[/green] {env_path}")
