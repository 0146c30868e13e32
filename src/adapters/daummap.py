"""Cliente Kakao/Daum Map (Local API).

Implementación:
- `/v2/local/search/address.json`: geocodificación por dirección.
- `/v2/local/search/keyword.json`: búsqueda de lugares por palabra clave.
- Autenticación con header `Authorization: KakaoAK <app_key>`.

Notas:
- Ambos métodos son generadores asíncronos: piden la siguiente página solo
  cuando el consumidor agota la anterior, hasta `meta.is_end` o
  `geocoding_max_pages`.
- La API devuelve `x`/`y` como strings; se convierten a float o `None`.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

import httpx

from adapters.http_client import LookupServiceError, build_async_client
from core.config import AppSettings
from core.domain.models import Address, LandLotAddress, Place, RoadAddress

logger = logging.getLogger(__name__)

# Kakao Local caps `size` per endpoint.
_ADDRESS_PAGE_SIZE = 30
_KEYWORD_PAGE_SIZE = 15


def _to_float(value: object) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def parse_address(document: dict[str, Any]) -> Address:
    land_lot = None
    raw_land_lot = document.get("address")
    if isinstance(raw_land_lot, dict):
        land_lot = LandLotAddress(
            address_name=raw_land_lot.get("address_name") or "",
            longitude=_to_float(raw_land_lot.get("x")),
            latitude=_to_float(raw_land_lot.get("y")),
        )

    road_address = None
    raw_road = document.get("road_address")
    if isinstance(raw_road, dict):
        road_address = RoadAddress(
            address_name=raw_road.get("address_name") or "",
            building_name=raw_road.get("building_name") or None,
            zone_no=raw_road.get("zone_no") or None,
        )

    return Address(
        address_name=document.get("address_name") or "",
        land_lot=land_lot,
        road_address=road_address,
    )


def parse_place(document: dict[str, Any]) -> Place:
    return Place(
        name=document.get("place_name") or "",
        address_name=document.get("address_name") or "",
        road_address_name=document.get("road_address_name") or None,
        category_name=document.get("category_name") or None,
        phone=document.get("phone") or None,
        url=document.get("place_url") or None,
        longitude=_to_float(document.get("x")),
        latitude=_to_float(document.get("y")),
    )


class DaumMapClient:
    """Geocodificador por dirección y por palabra clave."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def _documents(
        self, path: str, app_key: str, query: str, *, page_size: int
    ) -> AsyncIterator[dict[str, Any]]:
        url = f"{self._settings.daummap_base_url.rstrip('/')}{path}"
        headers = {"Authorization": f"KakaoAK {app_key}", "Accept": "application/json"}

        async with build_async_client(
            self._settings, extra_headers=headers, transport=self._transport
        ) as client:
            for page in range(1, self._settings.geocoding_max_pages + 1):
                resp = await client.get(url, params={"query": query, "page": page, "size": page_size})
                resp.raise_for_status()

                data = resp.json()
                documents = data.get("documents") if isinstance(data, dict) else None
                if not isinstance(documents, list):
                    raise LookupServiceError(f"unexpected payload from {path}")
                logger.debug("%s page %d: %d documents", path, page, len(documents))

                for document in documents:
                    if isinstance(document, dict):
                        yield document

                meta = data.get("meta")
                if meta is None:
                    return
                if not isinstance(meta, dict):
                    raise LookupServiceError(f"unexpected meta from {path}")
                if meta.get("is_end", True):
                    return

    async def search_address(self, app_key: str, query: str) -> AsyncIterator[Address]:
        documents = self._documents(
            "/v2/local/search/address.json", app_key, query, page_size=_ADDRESS_PAGE_SIZE
        )
        try:
            async for document in documents:
                yield parse_address(document)
        finally:
            await documents.aclose()

    async def search_keyword(self, app_key: str, query: str) -> AsyncIterator[Place]:
        documents = self._documents(
            "/v2/local/search/keyword.json", app_key, query, page_size=_KEYWORD_PAGE_SIZE
        )
        try:
            async for document in documents:
                yield parse_place(document)
        finally:
            await documents.aclose()
