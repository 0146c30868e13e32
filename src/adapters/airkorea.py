"""Cliente AirKorea (web móvil).

Implementación:
- GET `<base>/main?lng=<lon>&lat=<lat>`: la página muestra la estación de
  medición más cercana y las lecturas horarias de cada contaminante.
- Se extrae la dirección de la estación y, por cada bloque de contaminante,
  nombre, unidad y serie horaria (`-` = sin dato).

Notas:
- La página siempre trae el conjunto completo de contaminantes; el filtrado
  por comando lo hace el Core.
"""

from __future__ import annotations

import logging

import httpx
from bs4 import BeautifulSoup

from adapters.http_client import LookupServiceError, build_async_client, node_text, parse_html
from core.config import AppSettings
from core.domain.models import AirStatus, Pollutant

logger = logging.getLogger(__name__)


class StationNotFound(LookupServiceError):
    """No hay estación de medición para la coordenada."""


def _to_reading(text: str) -> float | None:
    value = text.strip().replace(",", "")
    if not value or value == "-":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_station_page(soup: BeautifulSoup) -> AirStatus:
    station_address = node_text(soup.select_one("#mStationAddr"))
    if not station_address:
        raise StationNotFound("station address missing from AirKorea page")

    pollutants: list[Pollutant] = []
    for item in soup.select("div.detail_item"):
        name = node_text(item.select_one(".name"))
        if not name:
            continue
        unit = node_text(item.select_one(".unit"))
        data = [_to_reading(node_text(td)) for td in item.select("table td")]
        pollutants.append(Pollutant(name=name, unit=unit, data=data))

    return AirStatus(station_address=station_address, pollutants=pollutants)


class AirKoreaClient:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def search(self, longitude: float, latitude: float) -> AirStatus:
        url = f"{self._settings.airkorea_base_url.rstrip('/')}/main"
        params = {"lng": f"{longitude:.6f}", "lat": f"{latitude:.6f}"}

        async with build_async_client(self._settings, transport=self._transport) as client:
            resp = await client.get(url, params=params)
        resp.raise_for_status()

        status = parse_station_page(parse_html(resp.text))
        logger.debug("station %r for (%s, %s)", status.station_address, longitude, latitude)
        return status
