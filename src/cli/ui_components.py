"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Cada variante de `Response` tiene su propio renderizado.
"""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.models import (
    AirPollutionResponse,
    AirStatus,
    DictionaryResponse,
    DictionarySearch,
    HowtoAnswer,
    HowToResponse,
    Request,
    Response,
)


def build_request_table(request: Request) -> Table:
    table = Table(title="Parsed request", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in request.model_dump().items():
        table.add_row(key, str(value))
    return table


def build_dictionary_table(result: DictionarySearch) -> RenderableType:
    if not result.words:
        body = Text("No exact match. Did you mean: ", style="yellow")
        body.append(", ".join(result.alternatives), style="bold")
        return Panel(body, title="Dictionary", border_style="yellow")

    table = Table(title="Dictionary")
    table.add_column("Word", style="cyan", no_wrap=True)
    table.add_column("Lang", style="dim")
    table.add_column("Pronounce", style="magenta")
    table.add_column("Meaning", style="white")
    for word in result.words:
        table.add_row(word.word, word.lang or "", word.pronounce or "", "; ".join(word.meaning))
    return table


def build_air_table(status: AirStatus) -> Table:
    table = Table(title=f"Air quality · {status.station_address}")
    table.add_column("Pollutant", style="cyan", no_wrap=True)
    table.add_column("Latest", style="green", justify="right")
    table.add_column("Unit", style="dim")
    for pollutant in status.pollutants:
        latest = pollutant.latest
        table.add_row(pollutant.name, "-" if latest is None else f"{latest:g}", pollutant.unit)
    return table


def build_howto_panel(answer: HowtoAnswer) -> Panel:
    body = Syntax(answer.instruction, "text", word_wrap=True)
    return Panel(body, title="How to", subtitle=answer.link, border_style="green")


def render_response(response: Response) -> RenderableType:
    if isinstance(response, DictionaryResponse):
        return build_dictionary_table(response.result)
    if isinstance(response, AirPollutionResponse):
        return build_air_table(response.status)
    if isinstance(response, HowToResponse):
        return build_howto_panel(response.answer)
    raise TypeError(f"unsupported response type: {type(response).__name__}")
