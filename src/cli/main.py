"""CLI principal (Typer).

Comandos:
- `parse`: clasifica una línea y muestra la petición tipada.
- `ask`: clasifica, resuelve y muestra la respuesta (opcionalmente en JSON).
- `chat`: bucle interactivo línea a línea.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_client import LookupServiceError
from adapters.json_exporter import export_response_json
from cli import doctor
from cli.ui_components import build_request_table, render_response
from core.config import AppSettings, MissingCredentialError
from core.domain.errors import RequestError
from core.domain.models import AirPollutionRequest, Config, Request, Response
from core.services.dispatcher import RequestDispatcher, build_dispatcher
from core.services.intent_parser import parse_request

app = typer.Typer(
    no_args_is_help=True,
    help="Route chat commands to dictionary, air-quality and how-to lookups.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

EXIT_REQUEST_ERROR = 1
EXIT_SERVICE_ERROR = 2
EXIT_MISSING_CREDENTIAL = 3


def configure_logging(settings: AppSettings, *, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _config_for(request: Request, settings: AppSettings) -> Config | None:
    if isinstance(request, AirPollutionRequest):
        return settings.to_config()
    return None


async def _resolve_line(dispatcher: RequestDispatcher, text: str, settings: AppSettings) -> Response:
    request = parse_request(text)
    return await dispatcher.resolve(request, _config_for(request, settings))


def _answer(dispatcher: RequestDispatcher, text: str, settings: AppSettings, *, verbose: bool) -> Response:
    """Resuelve una línea; traduce los errores a mensajes y códigos de salida."""

    try:
        return asyncio.run(_resolve_line(dispatcher, text, settings))
    except RequestError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_REQUEST_ERROR) from exc
    except MissingCredentialError as exc:
        _err_console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(code=EXIT_MISSING_CREDENTIAL) from exc
    except (httpx.HTTPError, LookupServiceError) as exc:
        if verbose:
            logging.getLogger(__name__).exception("lookup failed")
        _err_console.print(f"[red]lookup failed:[/red] {exc}")
        raise typer.Exit(code=EXIT_SERVICE_ERROR) from exc


@app.command()
def parse(text: str = typer.Argument(..., help="Chat line, e.g. 'pm10 Busan'.")) -> None:
    """Classify TEXT and print the typed request."""

    try:
        request = parse_request(text)
    except RequestError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_REQUEST_ERROR) from exc
    _console.print(build_request_table(request))


@app.command()
def ask(
    text: str = typer.Argument(..., help="Chat line, e.g. 'd hello' or 'air Seoul'."),
    json_path: Path | None = typer.Option(None, "--json", help="Also write the response as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Resolve TEXT against the matching service and render the answer."""

    settings = AppSettings()
    configure_logging(settings, verbose=verbose)

    response = _answer(build_dispatcher(settings), text, settings, verbose=verbose)
    _console.print(render_response(response))

    if json_path is not None:
        out = export_response_json(response=response, output_path=json_path)
        _console.print(f"[green]Saved JSON to:[/green] {out}")


@app.command()
def chat(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging.")) -> None:
    """Answer lines interactively until an empty line or EOF."""

    settings = AppSettings()
    configure_logging(settings, verbose=verbose)
    dispatcher = build_dispatcher(settings)

    while True:
        try:
            text = _console.input("[bold cyan]> [/bold cyan]")
        except EOFError:
            break
        if not text.strip():
            break
        try:
            response = _answer(dispatcher, text, settings, verbose=verbose)
        except typer.Exit:
            continue
        _console.print(render_response(response))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
