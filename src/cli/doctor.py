"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


async def _check_services(settings: AppSettings) -> list[tuple[str, bool, str]]:
    targets = {
        "Daum dictionary": settings.daumdic_base_url,
        "Kakao Local API": settings.daummap_base_url,
        "AirKorea": settings.airkorea_base_url,
        "How-to search": settings.howto_search_url,
    }
    results = await asyncio.gather(*(_check_http(url, settings) for url in targets.values()))
    return [(name, ok, detail) for name, (ok, detail) in zip(targets, results)]


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="chat-router doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.daummap_app_key:
        table.add_row("Kakao app key", "OK", "Air-quality commands enabled")
    else:
        table.add_row("Kakao app key", "MISSING", "Run `chat-router doctor setup-key`")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    # Connectivity (best-effort)
    for name, ok, detail in asyncio.run(_check_services(settings)):
        table.add_row(name, "OK" if ok else "FAIL", detail)

    _console.print(table)


@app.command(name="setup-key")
def setup_key() -> None:
    """Prompt for the Kakao REST API key and store it in the user config .env."""

    app_key = typer.prompt("Kakao REST API key", hide_input=True, confirmation_prompt=False).strip()
    if not app_key:
        raise typer.BadParameter("the app key cannot be empty")

    env_path = write_user_env_vars({"CHAT_ROUTER_DAUMMAP_APP_KEY": app_key})
    _console.print(f"[green]Saved app key to:[/green] {env_path}")
